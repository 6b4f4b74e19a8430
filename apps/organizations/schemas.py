"""
Pydantic schemas for organization, content type and settings endpoints.
"""

from datetime import datetime

from ninja import Schema
from pydantic import Field, HttpUrl, TypeAdapter, ValidationError, field_validator

from apps.core.cors import validate_allowed_origins
from apps.core.schemas import check_slug

_http_url = TypeAdapter(HttpUrl)

CONTENT_TYPE_VALUE_MESSAGE = "Value must only contain lowercase letters, numbers, and hyphens"


# Organizations


class CreateOrganizationInput(Schema):
    name: str = Field(min_length=1, max_length=255, description="Organization name")
    slug: str = Field(min_length=1, max_length=255, description="URL-safe identifier")

    @field_validator("slug")
    @classmethod
    def check_slug_format(cls, v: str) -> str:
        return check_slug(v)


class UpdateOrganizationInput(CreateOrganizationInput):
    organization_id: int


class OrganizationIdInput(Schema):
    organization_id: int


class OrganizationOut(Schema):
    id: int
    name: str
    slug: str
    created_at: datetime
    user_count: int = 0
    post_count: int = 0


# Content types


class ContentTypeDefinition(Schema):
    """One entry of ``Organization.content_type_config``."""

    value: str = Field(min_length=1, max_length=50)
    label: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    icon: str | None = Field(default=None, max_length=10)
    color: str | None = Field(default=None, max_length=50)

    @field_validator("value")
    @classmethod
    def check_value(cls, v: str) -> str:
        return check_slug(v, CONTENT_TYPE_VALUE_MESSAGE)


class AddContentTypeInput(Schema):
    organization_id: int
    content_type: ContentTypeDefinition


class UpdateContentTypeInput(Schema):
    organization_id: int
    original_value: str = Field(min_length=1)
    content_type: ContentTypeDefinition


class DeleteContentTypeInput(Schema):
    organization_id: int
    type_value: str = Field(min_length=1)


# Site settings


def _optional_url(value: str | None, message: str) -> str | None:
    if not value:
        return value
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError(message) from None
    return value


class UpdateSettingsInput(Schema):
    """
    Dashboard settings form.

    Optional fields accept ``""``; blanks are stored as NULL.
    """

    site_title: str = Field(min_length=1, max_length=255)
    favicon_url: str | None = None
    logo_url: str | None = None
    seo_title_template: str = Field(min_length=1, max_length=255)
    seo_default_description: str | None = None
    og_image_url: str | None = None
    allowed_origins: str | None = None

    @field_validator("favicon_url")
    @classmethod
    def check_favicon_url(cls, v: str | None) -> str | None:
        return _optional_url(v, "Invalid favicon URL")

    @field_validator("logo_url")
    @classmethod
    def check_logo_url(cls, v: str | None) -> str | None:
        return _optional_url(v, "Invalid logo URL")

    @field_validator("og_image_url")
    @classmethod
    def check_og_image_url(cls, v: str | None) -> str | None:
        return _optional_url(v, "Invalid OG image URL")

    @field_validator("allowed_origins")
    @classmethod
    def check_allowed_origins(cls, v: str | None) -> str | None:
        if v and not validate_allowed_origins(v):
            raise ValueError("Allowed origins must be comma-separated origins like https://example.com")
        return v


class PublicSiteSettingsOut(Schema):
    """Settings fields exposed through the public API."""

    site_title: str | None
    favicon_url: str | None
    logo_url: str | None
    seo_title_template: str | None
    seo_default_description: str | None
    og_image_url: str | None


class SiteSettingsOut(PublicSiteSettingsOut):
    """Dashboard view of settings, including the CORS allow-list."""

    id: int
    allowed_origins: str | None
