"""
Organization services - tenant administration, content types and site settings.

Organization and content type actions are restricted to platform admins.
Settings actions operate on the caller's own organization.
"""

from typing import Any

from django.db.models import Count

from apps.core.actions import admin_action, authenticated_action
from apps.core.auth import AuthContext
from apps.core.errors import ActionError, ErrorCode, ErrorMessages
from apps.core.logging import get_logger
from apps.organizations.content_types import (
    ContentTypeConfig,
    get_content_type_cache,
    parse_content_type_config,
)
from apps.organizations.models import Organization, SiteSettings
from apps.organizations.schemas import (
    AddContentTypeInput,
    CreateOrganizationInput,
    DeleteContentTypeInput,
    OrganizationIdInput,
    OrganizationOut,
    SiteSettingsOut,
    UpdateContentTypeInput,
    UpdateOrganizationInput,
    UpdateSettingsInput,
)

logger = get_logger(__name__)

SLUG_IN_USE = "Slug is already in use"


def _get_organization(organization_id: int) -> Organization:
    organization = Organization.objects.filter(pk=organization_id).first()
    if organization is None:
        raise ActionError(ErrorMessages.not_found("Organization"), ErrorCode.NOT_FOUND)
    return organization


def _ensure_slug_available(slug: str, exclude_id: int | None = None) -> None:
    existing = Organization.objects.filter(slug=slug)
    if exclude_id is not None:
        existing = existing.exclude(pk=exclude_id)
    if existing.exists():
        raise ActionError(SLUG_IN_USE, ErrorCode.ALREADY_EXISTS)


# Organizations


@admin_action(CreateOrganizationInput)
def create_organization(data: CreateOrganizationInput, auth: AuthContext) -> dict[str, int]:
    """
    Create an organization together with its default site settings.

    The settings row makes ``GET /api/v1/settings`` work immediately.
    """
    _ensure_slug_available(data.slug)

    organization = Organization.objects.create(name=data.name, slug=data.slug)
    SiteSettings.objects.create(
        organization=organization,
        site_title=data.name,
        seo_title_template=f"%s | {data.name}",
    )

    logger.info(
        "organization_created",
        organization_id=organization.id,
        slug=organization.slug,
        admin_id=auth.user_id,
    )
    return {"id": organization.id}


@admin_action(UpdateOrganizationInput)
def update_organization(data: UpdateOrganizationInput, auth: AuthContext) -> None:
    organization = _get_organization(data.organization_id)
    _ensure_slug_available(data.slug, exclude_id=organization.id)

    organization.name = data.name
    organization.slug = data.slug
    organization.save(update_fields=["name", "slug", "updated_at"])

    logger.info("organization_updated", organization_id=organization.id, admin_id=auth.user_id)


@admin_action(OrganizationIdInput)
def delete_organization(data: OrganizationIdInput, auth: AuthContext) -> None:
    """Delete an organization. Users, content and API keys cascade."""
    organization = _get_organization(data.organization_id)
    organization.delete()
    get_content_type_cache().invalidate(data.organization_id)

    logger.info("organization_deleted", organization_id=data.organization_id, admin_id=auth.user_id)


@admin_action()
def list_organizations(data: None, auth: AuthContext) -> list[dict[str, Any]]:
    organizations = Organization.objects.annotate(
        user_count=Count("users", distinct=True),
        post_count=Count("post_set", distinct=True),
    ).order_by("-created_at")
    return [OrganizationOut.from_orm(org).model_dump() for org in organizations]


# Content types


def _get_config(organization: Organization) -> ContentTypeConfig:
    return parse_content_type_config(organization.content_type_config)


def _save_config(organization: Organization, config: ContentTypeConfig) -> None:
    organization.content_type_config = config
    organization.save(update_fields=["content_type_config", "updated_at"])
    get_content_type_cache().invalidate(organization.id)


def _type_exists(config: ContentTypeConfig, value: str) -> bool:
    return any(definition["value"] == value for definition in config)


@admin_action(AddContentTypeInput)
def add_content_type(data: AddContentTypeInput, auth: AuthContext) -> None:
    organization = _get_organization(data.organization_id)
    config = _get_config(organization)

    new_type = data.content_type.model_dump(exclude_none=True)
    if _type_exists(config, new_type["value"]):
        raise ActionError(
            f'Content type "{new_type["value"]}" already exists', ErrorCode.ALREADY_EXISTS
        )

    _save_config(organization, [*config, new_type])
    logger.info("content_type_added", organization_id=organization.id, value=new_type["value"])


@admin_action(UpdateContentTypeInput)
def update_content_type(data: UpdateContentTypeInput, auth: AuthContext) -> None:
    """
    Replace a content type definition.

    Renaming the value rewrites every post of the old type so no post is
    left with a type its organization no longer allows.
    """
    from apps.content.models import Post

    organization = _get_organization(data.organization_id)
    config = _get_config(organization)

    if not _type_exists(config, data.original_value):
        raise ActionError(f'Content type "{data.original_value}" not found', ErrorCode.NOT_FOUND)

    updated = data.content_type.model_dump(exclude_none=True)
    if updated["value"] != data.original_value:
        if _type_exists(config, updated["value"]):
            raise ActionError(
                f'Content type "{updated["value"]}" already exists', ErrorCode.ALREADY_EXISTS
            )
        renamed = Post.objects.filter(organization=organization, type=data.original_value).update(
            type=updated["value"]
        )
        logger.info(
            "content_type_renamed",
            organization_id=organization.id,
            old_value=data.original_value,
            new_value=updated["value"],
            posts_updated=renamed,
        )

    new_config = [
        updated if definition["value"] == data.original_value else definition
        for definition in config
    ]
    _save_config(organization, new_config)


@admin_action(DeleteContentTypeInput)
def delete_content_type(data: DeleteContentTypeInput, auth: AuthContext) -> None:
    from apps.content.models import Post

    organization = _get_organization(data.organization_id)
    config = _get_config(organization)

    if len(config) <= 1:
        raise ActionError(
            "Cannot delete the last content type. "
            "Organizations must have at least one content type.",
            ErrorCode.CONSTRAINT_VIOLATION,
        )

    posts_using_type = Post.objects.filter(organization=organization, type=data.type_value).count()
    if posts_using_type > 0:
        raise ActionError(
            f"Cannot delete: {posts_using_type} post(s) are using this content type. "
            "Please change their type first.",
            ErrorCode.CONSTRAINT_VIOLATION,
        )

    _save_config(
        organization,
        [definition for definition in config if definition["value"] != data.type_value],
    )
    logger.info("content_type_deleted", organization_id=organization.id, value=data.type_value)


# Site settings


@authenticated_action(UpdateSettingsInput)
def update_settings(data: UpdateSettingsInput, auth: AuthContext) -> dict[str, int]:
    """
    Create or update the caller's site settings.

    Blank optional fields are stored as NULL; a blank ``allowed_origins``
    therefore denies all cross-origin reads.
    """
    site_settings, created = SiteSettings.objects.update_or_create(
        organization_id=auth.organization_id,
        defaults={
            "site_title": data.site_title,
            "favicon_url": data.favicon_url or None,
            "logo_url": data.logo_url or None,
            "seo_title_template": data.seo_title_template,
            "seo_default_description": data.seo_default_description or None,
            "og_image_url": data.og_image_url or None,
            "allowed_origins": (data.allowed_origins or "").strip() or None,
        },
    )

    logger.info(
        "site_settings_saved",
        organization_id=auth.organization_id,
        created=created,
        cors_configured=site_settings.allowed_origins is not None,
    )
    return {"id": site_settings.id}


@authenticated_action()
def get_settings(data: None, auth: AuthContext) -> dict[str, Any] | None:
    site_settings = SiteSettings.objects.filter(organization_id=auth.organization_id).first()
    if site_settings is None:
        return None
    return SiteSettingsOut.from_orm(site_settings).model_dump()


def format_title(page_title: str, template: str | None) -> str:
    """
    Apply an SEO title template.

    The first ``%s`` is replaced by the page title; templates without a
    placeholder leave the title unchanged.

    >>> format_title("About", "%s | Acme")
    'About | Acme'
    """
    if not template or "%s" not in template:
        return page_title
    return template.replace("%s", page_title, 1)
