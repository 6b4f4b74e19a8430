"""
Core schemas - shared Pydantic models for API responses.
"""

import re
from typing import Any

from ninja.responses import codes_2xx, codes_4xx, codes_5xx
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error body returned by the public API."""

    error: str = Field(..., description="Human-readable error message")

    model_config = {"json_schema_extra": {"example": {"error": "Invalid API key"}}}


class PaginationMeta(BaseModel):
    """Pagination block attached to list responses."""

    total: int = Field(..., description="Number of matching rows before pagination")
    limit: int
    offset: int


class ActionResponse(BaseModel):
    """
    Envelope for dashboard action results.

    Mirrors ``ActionResult.to_dict()``: ``data`` on success, ``error`` and
    ``code`` (plus optional ``errors`` / ``field_errors``) on failure.
    """

    success: bool
    data: Any = None
    error: str | None = None
    code: str | None = None
    errors: list[str] | None = None
    field_errors: dict[str, str] | None = None


SLUG_PATTERN = re.compile(r"[a-z0-9-]+")
SLUG_MESSAGE = "Slug must only contain lowercase letters, numbers, and hyphens"


def check_slug(value: str, message: str = SLUG_MESSAGE) -> str:
    """Validator body shared by every schema with a slug field."""
    if not SLUG_PATTERN.fullmatch(value):
        raise ValueError(message)
    return value


# Every dashboard endpoint answers with an ActionResponse, whatever the status
ACTION_RESPONSES = {
    codes_2xx: ActionResponse,
    codes_4xx: ActionResponse,
    codes_5xx: ActionResponse,
}
