"""
Dashboard endpoints for user administration and the caller's profile.
"""

from typing import Any

from django.contrib.auth import update_session_auth_hash
from django.http import HttpRequest
from ninja import Query, Router

from apps.accounts.schemas import AddUserInput, ListUsersInput, UpdatePasswordInput, UpdateProfileInput
from apps.accounts.services import (
    add_user_to_organization,
    delete_user,
    list_users,
    toggle_user_admin,
    update_password,
    update_profile,
)
from apps.core.actions import to_response
from apps.core.schemas import ACTION_RESPONSES
from apps.core.security import AdminSessionAuth, DashboardSessionAuth, get_auth_context

admin_router = Router(tags=["admin"], auth=AdminSessionAuth())
profile_router = Router(tags=["profile"], auth=DashboardSessionAuth())

Response = tuple[int, dict[str, Any]]


# --- Admin ---


@admin_router.get(
    "/",
    response=ACTION_RESPONSES,
    operation_id="listUsers",
    summary="List users",
)
def list_users_endpoint(request: HttpRequest, filters: Query[ListUsersInput]) -> Response:
    return to_response(list_users(filters.model_dump(), auth=get_auth_context(request)))


@admin_router.post(
    "/",
    response=ACTION_RESPONSES,
    operation_id="addUser",
    summary="Add user to organization",
)
def add_user_endpoint(request: HttpRequest, payload: AddUserInput) -> Response:
    result = add_user_to_organization(payload.model_dump(), auth=get_auth_context(request))
    return to_response(result)


@admin_router.delete(
    "/{user_id}",
    response=ACTION_RESPONSES,
    operation_id="deleteUser",
    summary="Delete user",
)
def delete_user_endpoint(request: HttpRequest, user_id: int) -> Response:
    return to_response(delete_user({"user_id": user_id}, auth=get_auth_context(request)))


@admin_router.put(
    "/{user_id}/admin",
    response=ACTION_RESPONSES,
    operation_id="setUserAdmin",
    summary="Grant or revoke admin",
)
def toggle_user_admin_endpoint(request: HttpRequest, user_id: int, is_admin: bool) -> Response:
    result = toggle_user_admin(
        {"user_id": user_id, "is_admin": is_admin}, auth=get_auth_context(request)
    )
    return to_response(result)


# --- Profile ---


@profile_router.put(
    "/",
    response=ACTION_RESPONSES,
    operation_id="updateProfile",
    summary="Update profile",
)
def update_profile_endpoint(request: HttpRequest, payload: UpdateProfileInput) -> Response:
    return to_response(update_profile(payload.model_dump(), auth=get_auth_context(request)))


@profile_router.put(
    "/password",
    response=ACTION_RESPONSES,
    operation_id="updatePassword",
    summary="Change password",
)
def update_password_endpoint(request: HttpRequest, payload: UpdatePasswordInput) -> Response:
    """Change the caller's password and keep the current session valid."""
    result = update_password(payload.model_dump(), auth=get_auth_context(request))
    if result.success:
        request.user.refresh_from_db()
        update_session_auth_hash(request, request.user)
    return to_response(result)
