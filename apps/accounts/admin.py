"""Admin configuration for accounts app."""

from django.contrib import admin

from apps.accounts.models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    """Admin for User model. Passwords are managed through the dashboard."""

    list_display = ["email", "name", "organization", "is_admin", "is_active", "created_at"]
    list_filter = ["is_admin", "is_active", "organization"]
    search_fields = ["email", "name", "organization__name"]
    readonly_fields = ["password", "last_login", "created_at", "updated_at"]
    exclude = ["groups", "user_permissions"]
    ordering = ["-created_at"]
