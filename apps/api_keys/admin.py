"""Admin configuration for api_keys app."""

from django.contrib import admin

from apps.api_keys.models import ApiKey


@admin.register(ApiKey)
class ApiKeyAdmin(admin.ModelAdmin):
    """Admin for ApiKey model. The key itself is never listed."""

    list_display = ["name", "organization", "masked_key", "last_used_at", "created_at"]
    list_filter = ["organization"]
    search_fields = ["name", "organization__name"]
    readonly_fields = ["key", "last_used_at", "created_at", "updated_at"]
