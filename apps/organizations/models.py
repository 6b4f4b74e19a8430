"""
Organizations models - tenants and their public site settings.
"""

from django.db import models

from apps.core.models import TimestampedModel


class Organization(TimestampedModel):
    """
    Tenant owning users, content, API keys and site settings.

    ``content_type_config`` holds the list of content types posts may use,
    each ``{"value", "label", "description", "icon"}``. An empty list means
    the built-in defaults apply.
    """

    name = models.CharField(max_length=255)
    slug = models.SlugField(
        max_length=255,
        unique=True,
        help_text="URL-safe identifier, e.g. 'acme-corp'",
    )
    content_type_config = models.JSONField(
        default=list,
        blank=True,
        help_text="Content type definitions; empty means defaults",
    )

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.name


class SiteSettings(TimestampedModel):
    """
    Public site configuration for one organization.

    Exposed read-only through ``GET /api/v1/settings``. ``allowed_origins``
    drives per-tenant CORS and is deliberately absent from that response.
    """

    organization = models.OneToOneField(
        Organization,
        on_delete=models.CASCADE,
        related_name="settings",
    )
    site_title = models.CharField(max_length=255, null=True, blank=True)
    favicon_url = models.URLField(max_length=2048, null=True, blank=True)
    logo_url = models.URLField(max_length=2048, null=True, blank=True)
    seo_title_template = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text="Page title template, '%s' is replaced by the page title",
    )
    seo_default_description = models.TextField(null=True, blank=True)
    og_image_url = models.URLField(max_length=2048, null=True, blank=True)
    allowed_origins = models.TextField(
        null=True,
        blank=True,
        help_text="Comma-separated origins allowed to call the public API, or '*'. Empty denies all.",
    )

    class Meta:
        verbose_name_plural = "site settings"

    def __str__(self) -> str:
        return f"Settings for {self.organization}"
