"""API keys app configuration."""

from django.apps import AppConfig


class ApiKeysConfig(AppConfig):
    """Configuration for api_keys app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.api_keys"
    verbose_name = "API keys"
