"""
Dashboard endpoints for organizations, content types and site settings.

``admin_router`` is mounted at ``/admin/organizations`` and requires a
platform admin. ``settings_router`` is mounted at ``/settings`` and works on
the caller's own organization.
"""

from typing import Any

from django.http import HttpRequest
from ninja import Router

from apps.core.actions import to_response
from apps.core.schemas import ACTION_RESPONSES
from apps.core.security import AdminSessionAuth, DashboardSessionAuth, get_auth_context
from apps.organizations.schemas import (
    ContentTypeDefinition,
    CreateOrganizationInput,
    UpdateSettingsInput,
)
from apps.organizations.services import (
    add_content_type,
    create_organization,
    delete_content_type,
    delete_organization,
    get_settings,
    list_organizations,
    update_content_type,
    update_organization,
    update_settings,
)

admin_router = Router(tags=["admin"], auth=AdminSessionAuth())
settings_router = Router(tags=["settings"], auth=DashboardSessionAuth())

Response = tuple[int, dict[str, Any]]


@admin_router.get(
    "/",
    response=ACTION_RESPONSES,
    operation_id="listOrganizations",
    summary="List organizations",
)
def list_organizations_endpoint(request: HttpRequest) -> Response:
    return to_response(list_organizations(auth=get_auth_context(request)))


@admin_router.post(
    "/",
    response=ACTION_RESPONSES,
    operation_id="createOrganization",
    summary="Create organization",
)
def create_organization_endpoint(request: HttpRequest, payload: CreateOrganizationInput) -> Response:
    """Create an organization with default site settings."""
    result = create_organization(payload.model_dump(), auth=get_auth_context(request))
    return to_response(result)


@admin_router.put(
    "/{organization_id}",
    response=ACTION_RESPONSES,
    operation_id="updateOrganization",
    summary="Update organization",
)
def update_organization_endpoint(
    request: HttpRequest, organization_id: int, payload: CreateOrganizationInput
) -> Response:
    result = update_organization(
        {**payload.model_dump(), "organization_id": organization_id},
        auth=get_auth_context(request),
    )
    return to_response(result)


@admin_router.delete(
    "/{organization_id}",
    response=ACTION_RESPONSES,
    operation_id="deleteOrganization",
    summary="Delete organization",
)
def delete_organization_endpoint(request: HttpRequest, organization_id: int) -> Response:
    result = delete_organization({"organization_id": organization_id}, auth=get_auth_context(request))
    return to_response(result)


@admin_router.post(
    "/{organization_id}/content-types",
    response=ACTION_RESPONSES,
    operation_id="addContentType",
    summary="Add content type",
)
def add_content_type_endpoint(
    request: HttpRequest, organization_id: int, payload: ContentTypeDefinition
) -> Response:
    result = add_content_type(
        {"organization_id": organization_id, "content_type": payload.model_dump()},
        auth=get_auth_context(request),
    )
    return to_response(result)


@admin_router.put(
    "/{organization_id}/content-types/{type_value}",
    response=ACTION_RESPONSES,
    operation_id="updateContentType",
    summary="Update content type",
)
def update_content_type_endpoint(
    request: HttpRequest, organization_id: int, type_value: str, payload: ContentTypeDefinition
) -> Response:
    result = update_content_type(
        {
            "organization_id": organization_id,
            "original_value": type_value,
            "content_type": payload.model_dump(),
        },
        auth=get_auth_context(request),
    )
    return to_response(result)


@admin_router.delete(
    "/{organization_id}/content-types/{type_value}",
    response=ACTION_RESPONSES,
    operation_id="deleteContentType",
    summary="Delete content type",
)
def delete_content_type_endpoint(
    request: HttpRequest, organization_id: int, type_value: str
) -> Response:
    result = delete_content_type(
        {"organization_id": organization_id, "type_value": type_value},
        auth=get_auth_context(request),
    )
    return to_response(result)


@settings_router.get(
    "/",
    response=ACTION_RESPONSES,
    operation_id="getSettings",
    summary="Get site settings",
)
def get_settings_endpoint(request: HttpRequest) -> Response:
    return to_response(get_settings(auth=get_auth_context(request)))


@settings_router.put(
    "/",
    response=ACTION_RESPONSES,
    operation_id="updateSettings",
    summary="Update site settings",
)
def update_settings_endpoint(request: HttpRequest, payload: UpdateSettingsInput) -> Response:
    result = update_settings(payload.model_dump(), auth=get_auth_context(request))
    return to_response(result)
