"""Content app configuration."""

from django.apps import AppConfig


class ContentConfig(AppConfig):
    """Configuration for content app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.content"
