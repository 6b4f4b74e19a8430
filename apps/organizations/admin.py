"""Admin configuration for organizations app."""

from django.contrib import admin

from apps.organizations.models import Organization, SiteSettings


class SiteSettingsInline(admin.StackedInline):
    model = SiteSettings
    can_delete = False
    extra = 0


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    """Admin for Organization model."""

    list_display = ["name", "slug", "created_at"]
    search_fields = ["name", "slug"]
    readonly_fields = ["created_at", "updated_at"]
    ordering = ["-created_at"]
    inlines = [SiteSettingsInline]
