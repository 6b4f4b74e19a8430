"""
API key model - per-organization credentials for the public API.
"""

import secrets

from django.db import models

from apps.core.models import TenantScopedModel

KEY_PREFIX = "org_"


def generate_api_key() -> str:
    """Generate a new key: ``org_`` followed by 64 hex characters."""
    return f"{KEY_PREFIX}{secrets.token_hex(32)}"


class ApiKey(TenantScopedModel):
    """
    Bearer credential that resolves a public API request to its organization.

    Keys are stored in plaintext and matched exactly.
    """

    name = models.CharField(max_length=255, help_text="Label shown in the dashboard")
    key = models.CharField(max_length=255, unique=True, db_index=True, default=generate_api_key)
    last_used_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Time of the most recent authenticated request, best effort",
    )

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "API key"
        verbose_name_plural = "API keys"

    def __str__(self) -> str:
        return f"{self.name} ({self.organization_id})"

    @property
    def masked_key(self) -> str:
        """Key with everything but the prefix and last four characters hidden."""
        return f"{self.key[: len(KEY_PREFIX)]}...{self.key[-4:]}"
