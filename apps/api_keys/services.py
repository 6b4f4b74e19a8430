"""
API key services - list, create and revoke keys for the caller's organization.
"""

from typing import Any

from apps.api_keys.models import ApiKey
from apps.api_keys.schemas import ApiKeyIdInput, ApiKeyOut, CreateApiKeyInput, CreatedApiKeyOut
from apps.core.actions import authenticated_action
from apps.core.auth import AuthContext
from apps.core.errors import ActionError, ErrorCode, ErrorMessages
from apps.core.logging import get_logger

logger = get_logger(__name__)


@authenticated_action()
def list_api_keys(data: None, auth: AuthContext) -> list[dict[str, Any]]:
    keys = ApiKey.objects.filter(organization_id=auth.organization_id).order_by("-created_at")
    return [ApiKeyOut.from_orm(key).model_dump() for key in keys]


@authenticated_action(CreateApiKeyInput)
def create_api_key(data: CreateApiKeyInput, auth: AuthContext) -> dict[str, Any]:
    """
    Create a key for the caller's organization.

    The response carries the full key; later listings only show it masked.
    """
    api_key = ApiKey.objects.create(organization_id=auth.organization_id, name=data.name)

    logger.info(
        "api_key_created",
        api_key_id=api_key.id,
        organization_id=auth.organization_id,
        user_id=auth.user_id,
    )
    return CreatedApiKeyOut.from_orm(api_key).model_dump()


@authenticated_action(ApiKeyIdInput)
def delete_api_key(data: ApiKeyIdInput, auth: AuthContext) -> None:
    deleted, _ = ApiKey.objects.filter(
        pk=data.api_key_id, organization_id=auth.organization_id
    ).delete()
    if not deleted:
        raise ActionError(ErrorMessages.not_found("API key"), ErrorCode.NOT_FOUND)

    logger.info(
        "api_key_deleted",
        api_key_id=data.api_key_id,
        organization_id=auth.organization_id,
        user_id=auth.user_id,
    )
