"""Admin configuration for content app."""

from django.contrib import admin

from apps.content.models import Category, Post, Tag


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    """Admin for Post model."""

    list_display = ["title", "slug", "organization", "type", "published", "published_at", "created_at"]
    list_filter = ["published", "type", "organization"]
    search_fields = ["title", "slug", "organization__name"]
    readonly_fields = ["published_at", "created_at", "updated_at"]
    raw_id_fields = ["author", "category"]
    filter_horizontal = ["tags"]
    ordering = ["-created_at"]


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["name", "slug", "organization", "parent"]
    list_filter = ["organization"]
    search_fields = ["name", "slug"]
    raw_id_fields = ["parent"]


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    list_display = ["name", "slug", "organization"]
    list_filter = ["organization"]
    search_fields = ["name", "slug"]
