"""
Pydantic schemas for API key management.
"""

from datetime import datetime

from ninja import Schema
from pydantic import Field


class CreateApiKeyInput(Schema):
    name: str = Field(min_length=1, max_length=255, description="Label for the key")


class ApiKeyIdInput(Schema):
    api_key_id: int


class ApiKeyOut(Schema):
    """Listed key. Only the masked form of the key is exposed."""

    id: int
    name: str
    masked_key: str
    created_at: datetime
    last_used_at: datetime | None


class CreatedApiKeyOut(Schema):
    """Newly created key. The full key is shown this one time."""

    id: int
    name: str
    key: str
    created_at: datetime
