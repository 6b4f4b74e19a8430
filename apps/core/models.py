"""
Core models - shared abstract bases.
"""

from django.db import models


class TimestampedModel(models.Model):
    """Abstract base model with created_at/updated_at timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class TenantScopedModel(TimestampedModel):
    """
    Abstract base for content owned by one organization.

    Every query against a subclass must filter on ``organization``; the
    public API and the dashboard actions both take the organization id
    from the authenticated caller, never from request input.

    Usage:
        class Tag(TenantScopedModel):
            name = models.CharField(max_length=255)
    """

    organization = models.ForeignKey(
        "organizations.Organization",
        on_delete=models.CASCADE,
        related_name="%(class)s_set",
        help_text="Owning organization (tenant)",
    )

    class Meta:
        abstract = True
