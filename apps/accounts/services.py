"""
Account services - user administration and self-service profile updates.
"""

from typing import Any

from apps.accounts.models import User
from apps.accounts.schemas import (
    AddUserInput,
    ListUsersInput,
    ToggleUserAdminInput,
    UpdatePasswordInput,
    UpdateProfileInput,
    UserIdInput,
    UserOut,
)
from apps.core.actions import admin_action, user_action
from apps.core.auth import AuthContext
from apps.core.errors import ActionError, ErrorCode, ErrorMessages
from apps.core.logging import get_logger
from apps.organizations.models import Organization

logger = get_logger(__name__)

EMAIL_IN_USE = "Email is already in use"


def _get_user(user_id: int) -> User:
    user = User.objects.filter(pk=user_id).first()
    if user is None:
        raise ActionError(ErrorMessages.not_found("User"), ErrorCode.NOT_FOUND)
    return user


# --- Admin ---


@admin_action(AddUserInput)
def add_user_to_organization(data: AddUserInput, auth: AuthContext) -> dict[str, int]:
    if not Organization.objects.filter(pk=data.organization_id).exists():
        raise ActionError(ErrorMessages.not_found("Organization"), ErrorCode.NOT_FOUND)
    if User.objects.filter(email__iexact=data.email).exists():
        raise ActionError(EMAIL_IN_USE, ErrorCode.ALREADY_EXISTS)

    user = User.objects.create_user(
        email=data.email,
        password=data.password,
        name=data.name,
        is_admin=data.is_admin,
        organization_id=data.organization_id,
    )

    logger.info(
        "user_added_to_organization",
        user_id=user.id,
        organization_id=data.organization_id,
        is_admin=data.is_admin,
        admin_id=auth.user_id,
    )
    return {"id": user.id}


@admin_action(UserIdInput)
def delete_user(data: UserIdInput, auth: AuthContext) -> None:
    if data.user_id == auth.user_id:
        raise ActionError("You cannot delete your own account", ErrorCode.CONSTRAINT_VIOLATION)
    user = _get_user(data.user_id)
    user.delete()
    logger.info("user_deleted", user_id=data.user_id, admin_id=auth.user_id)


@admin_action(ToggleUserAdminInput)
def toggle_user_admin(data: ToggleUserAdminInput, auth: AuthContext) -> None:
    user = _get_user(data.user_id)
    user.is_admin = data.is_admin
    user.save(update_fields=["is_admin", "updated_at"])
    logger.info("user_admin_toggled", user_id=user.id, is_admin=data.is_admin, admin_id=auth.user_id)


@admin_action(ListUsersInput)
def list_users(data: ListUsersInput, auth: AuthContext) -> list[dict[str, Any]]:
    """All users, optionally restricted to one organization."""
    users = User.objects.all()
    if data.organization_id is not None:
        users = users.filter(organization_id=data.organization_id)
    return [UserOut.from_orm(user).model_dump() for user in users]


# --- Profile ---


@user_action(UpdateProfileInput)
def update_profile(data: UpdateProfileInput, auth: AuthContext) -> None:
    if data.email != auth.user_email and User.objects.filter(email__iexact=data.email).exclude(
        pk=auth.user_id
    ).exists():
        raise ActionError(EMAIL_IN_USE, ErrorCode.ALREADY_EXISTS)

    user = _get_user(auth.user_id)
    user.name = data.name or None
    user.email = data.email
    user.save(update_fields=["name", "email", "updated_at"])
    logger.info("profile_updated", user_id=auth.user_id)


@user_action(UpdatePasswordInput)
def update_password(data: UpdatePasswordInput, auth: AuthContext) -> None:
    user = User.objects.filter(pk=auth.user_id).first()
    if user is None or not user.has_usable_password():
        raise ActionError("User not found!", ErrorCode.NOT_FOUND)

    if not user.check_password(data.current_password):
        raise ActionError("Current password is incorrect!", ErrorCode.INVALID_CREDENTIALS)

    user.set_password(data.new_password)
    user.save(update_fields=["password", "updated_at"])
    logger.info("password_updated", user_id=user.id)
