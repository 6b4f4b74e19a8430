"""
Dashboard endpoints for managing the organization's API keys.
"""

from typing import Any

from django.http import HttpRequest
from ninja import Router

from apps.api_keys.schemas import CreateApiKeyInput
from apps.api_keys.services import create_api_key, delete_api_key, list_api_keys
from apps.core.actions import to_response
from apps.core.schemas import ACTION_RESPONSES
from apps.core.security import DashboardSessionAuth, get_auth_context

router = Router(tags=["api-keys"], auth=DashboardSessionAuth())


@router.get(
    "/",
    response=ACTION_RESPONSES,
    operation_id="listApiKeys",
    summary="List API keys",
)
def list_api_keys_endpoint(request: HttpRequest) -> tuple[int, dict[str, Any]]:
    return to_response(list_api_keys(auth=get_auth_context(request)))


@router.post(
    "/",
    response=ACTION_RESPONSES,
    operation_id="createApiKey",
    summary="Create API key",
)
def create_api_key_endpoint(
    request: HttpRequest, payload: CreateApiKeyInput
) -> tuple[int, dict[str, Any]]:
    """Create a key. The full key is only returned here."""
    return to_response(create_api_key(payload.model_dump(), auth=get_auth_context(request)))


@router.delete(
    "/{api_key_id}",
    response=ACTION_RESPONSES,
    operation_id="deleteApiKey",
    summary="Revoke API key",
)
def delete_api_key_endpoint(request: HttpRequest, api_key_id: int) -> tuple[int, dict[str, Any]]:
    return to_response(delete_api_key({"api_key_id": api_key_id}, auth=get_auth_context(request)))
