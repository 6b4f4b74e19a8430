"""
Content services - dashboard actions for posts, categories and tags.

Every action is scoped to the caller's organization: rows from other
organizations are reported as "not found", never touched.
"""

from typing import Any

from django.db.models import Count, QuerySet
from django.utils import timezone

from apps.content.filters import ContentFilterOptions, build_category_filter, build_post_filter
from apps.content.models import Category, Post, Tag
from apps.content.schemas import (
    CategoryIdInput,
    CategoryInput,
    CategoryOut,
    ListPostsInput,
    PostIdInput,
    PostInput,
    PostOut,
    TagIdInput,
    TagInput,
    TagWithCountOut,
    UpdateCategoryInput,
    UpdatePostInput,
    UpdateTagInput,
)
from apps.core.actions import authenticated_action
from apps.core.auth import AuthContext
from apps.core.errors import ActionError, ActionValidationError, ErrorCode, ErrorMessages
from apps.core.logging import get_logger
from apps.core.utils import generate_slug
from apps.organizations.content_types import get_allowed_types

logger = get_logger(__name__)


def _resolve_slug(slug: str | None, source: str) -> str:
    resolved = slug or generate_slug(source)
    if not resolved:
        raise ActionValidationError({"slug": "Slug is required"})
    return resolved


def _not_found(resource: str) -> ActionError:
    return ActionError(ErrorMessages.not_found(resource), ErrorCode.NOT_FOUND)


# --- Posts ---


def post_queryset(organization_id: int) -> QuerySet[Post]:
    """Posts of one organization with everything ``PostOut`` reads."""
    return (
        Post.objects.filter(organization_id=organization_id)
        .select_related("author", "category")
        .prefetch_related("tags")
    )


def serialize_post(post: Post) -> dict[str, Any]:
    return PostOut.from_orm(post).model_dump()


def _check_type(organization_id: int, post_type: str) -> None:
    allowed = get_allowed_types(organization_id)
    if post_type not in allowed:
        raise ActionValidationError(
            {"type": f"Invalid content type. Allowed types: {', '.join(allowed)}"}
        )


def _resolve_category(organization_id: int, category_id: int | None) -> Category | None:
    if category_id is None:
        return None
    category = Category.objects.filter(pk=category_id, organization_id=organization_id).first()
    if category is None:
        raise _not_found("Category")
    return category


def _resolve_tags(organization_id: int, tag_ids: list[int]) -> list[Tag]:
    unique_ids = set(tag_ids)
    tags = list(Tag.objects.filter(pk__in=unique_ids, organization_id=organization_id))
    if len(tags) != len(unique_ids):
        raise _not_found("Tag")
    return tags


def _ensure_post_slug_available(organization_id: int, slug: str, exclude_id: int | None = None) -> None:
    existing = Post.objects.filter(organization_id=organization_id, slug=slug)
    if exclude_id is not None:
        existing = existing.exclude(pk=exclude_id)
    if existing.exists():
        raise ActionError("A post with this slug already exists", ErrorCode.ALREADY_EXISTS)


@authenticated_action(ListPostsInput)
def list_posts(data: ListPostsInput, auth: AuthContext) -> dict[str, Any]:
    """Filtered, paginated post listing for the dashboard."""
    options = ContentFilterOptions(
        type=data.type,
        published=data.published,
        search=data.search,
        category_slug=data.category,
        tag_slugs=tuple(data.tag),
    )
    posts = post_queryset(auth.organization_id).filter(
        build_post_filter(auth.organization_id, options)
    )
    total = posts.count()
    page = posts[data.offset : data.offset + data.limit]
    return {
        "items": [serialize_post(post) for post in page],
        "meta": {"total": total, "limit": data.limit, "offset": data.offset},
    }


@authenticated_action(PostIdInput)
def get_post(data: PostIdInput, auth: AuthContext) -> dict[str, Any]:
    post = post_queryset(auth.organization_id).filter(pk=data.post_id).first()
    if post is None:
        raise _not_found("Post")
    return serialize_post(post)


@authenticated_action(PostInput)
def create_post(data: PostInput, auth: AuthContext) -> dict[str, int]:
    """
    Create a post authored by the caller.

    The type must be one of the organization's content types;
    ``published_at`` is stamped when the post is created published.
    """
    organization_id = auth.organization_id
    _check_type(organization_id, data.type)
    slug = _resolve_slug(data.slug, data.title)
    _ensure_post_slug_available(organization_id, slug)
    category = _resolve_category(organization_id, data.category_id)
    tags = _resolve_tags(organization_id, data.tag_ids)

    post = Post.objects.create(
        organization_id=organization_id,
        author_id=auth.user_id,
        category=category,
        title=data.title,
        slug=slug,
        content=data.content,
        excerpt=data.excerpt or None,
        type=data.type,
        published=data.published,
        published_at=timezone.now() if data.published else None,
    )
    post.tags.set(tags)

    logger.info(
        "post_created",
        post_id=post.id,
        organization_id=organization_id,
        type=post.type,
        published=post.published,
    )
    return {"id": post.id}


@authenticated_action(UpdatePostInput)
def update_post(data: UpdatePostInput, auth: AuthContext) -> None:
    """
    Update a post.

    ``published_at`` is stamped whenever a draft becomes published and is
    kept when a post is unpublished.
    """
    organization_id = auth.organization_id
    post = Post.objects.filter(pk=data.post_id, organization_id=organization_id).first()
    if post is None:
        raise _not_found("Post")

    _check_type(organization_id, data.type)
    slug = _resolve_slug(data.slug, data.title)
    _ensure_post_slug_available(organization_id, slug, exclude_id=post.id)
    category = _resolve_category(organization_id, data.category_id)
    tags = _resolve_tags(organization_id, data.tag_ids)

    if data.published and not post.published:
        post.published_at = timezone.now()

    post.title = data.title
    post.slug = slug
    post.content = data.content
    post.excerpt = data.excerpt or None
    post.type = data.type
    post.published = data.published
    post.category = category
    post.save()
    post.tags.set(tags)

    logger.info("post_updated", post_id=post.id, organization_id=organization_id)


@authenticated_action(PostIdInput)
def delete_post(data: PostIdInput, auth: AuthContext) -> None:
    deleted, _ = Post.objects.filter(pk=data.post_id, organization_id=auth.organization_id).delete()
    if not deleted:
        raise _not_found("Post")
    logger.info("post_deleted", post_id=data.post_id, organization_id=auth.organization_id)


# --- Categories ---


def category_queryset(organization_id: int) -> QuerySet[Category]:
    """Categories of one organization with everything ``CategoryOut`` reads."""
    return (
        Category.objects.filter(organization_id=organization_id)
        .select_related("parent")
        .prefetch_related("children")
        .annotate(post_count=Count("posts", distinct=True))
    )


def serialize_category(category: Category) -> dict[str, Any]:
    return CategoryOut.from_orm(category).model_dump()


def _ensure_category_slug_available(
    organization_id: int, slug: str, exclude_id: int | None = None
) -> None:
    existing = Category.objects.filter(organization_id=organization_id, slug=slug)
    if exclude_id is not None:
        existing = existing.exclude(pk=exclude_id)
    if existing.exists():
        raise ActionError("A category with this slug already exists", ErrorCode.ALREADY_EXISTS)


def _resolve_parent(organization_id: int, parent_id: int | None) -> Category | None:
    if parent_id is None:
        return None
    parent = Category.objects.filter(pk=parent_id, organization_id=organization_id).first()
    if parent is None:
        raise ActionError("Parent category not found", ErrorCode.NOT_FOUND)
    return parent


def is_descendant(candidate: Category, ancestor_id: int) -> bool:
    """
    True if ``ancestor_id`` appears on ``candidate``'s parent chain.

    The walk stops at a repeated id so corrupted data cannot loop forever.
    """
    seen: set[int] = set()
    parent_id = candidate.parent_id
    while parent_id is not None and parent_id not in seen:
        if parent_id == ancestor_id:
            return True
        seen.add(parent_id)
        parent_id = (
            Category.objects.filter(pk=parent_id).values_list("parent_id", flat=True).first()
        )
    return False


@authenticated_action()
def list_categories(data: None, auth: AuthContext) -> list[dict[str, Any]]:
    categories = category_queryset(auth.organization_id).filter(
        build_category_filter(auth.organization_id, ContentFilterOptions())
    )
    return [serialize_category(category) for category in categories]


@authenticated_action(CategoryInput)
def create_category(data: CategoryInput, auth: AuthContext) -> dict[str, int]:
    organization_id = auth.organization_id
    slug = _resolve_slug(data.slug, data.name)
    _ensure_category_slug_available(organization_id, slug)
    parent = _resolve_parent(organization_id, data.parent_id)

    category = Category.objects.create(
        organization_id=organization_id,
        name=data.name,
        slug=slug,
        description=data.description or None,
        parent=parent,
    )
    logger.info("category_created", category_id=category.id, organization_id=organization_id)
    return {"id": category.id}


@authenticated_action(UpdateCategoryInput)
def update_category(data: UpdateCategoryInput, auth: AuthContext) -> None:
    """Update a category, refusing parents that would create a cycle."""
    organization_id = auth.organization_id
    category = Category.objects.filter(pk=data.category_id, organization_id=organization_id).first()
    if category is None:
        raise _not_found("Category")

    slug = _resolve_slug(data.slug, data.name)
    if slug != category.slug:
        _ensure_category_slug_available(organization_id, slug, exclude_id=category.id)

    parent = None
    if data.parent_id is not None:
        if data.parent_id == category.id:
            raise ActionError("A category cannot be its own parent", ErrorCode.CONSTRAINT_VIOLATION)
        parent = _resolve_parent(organization_id, data.parent_id)
        if is_descendant(parent, category.id):
            raise ActionError("Cannot set a child category as parent", ErrorCode.CONSTRAINT_VIOLATION)

    category.name = data.name
    category.slug = slug
    category.description = data.description or None
    category.parent = parent
    category.save()
    logger.info("category_updated", category_id=category.id, organization_id=organization_id)


@authenticated_action(CategoryIdInput)
def delete_category(data: CategoryIdInput, auth: AuthContext) -> None:
    """Delete a category; its children move to the root and its posts lose the category."""
    organization_id = auth.organization_id
    category = Category.objects.filter(pk=data.category_id, organization_id=organization_id).first()
    if category is None:
        raise _not_found("Category")

    moved = Category.objects.filter(parent=category).update(parent=None)
    detached = Post.objects.filter(category=category).update(category=None)
    category.delete()

    logger.info(
        "category_deleted",
        category_id=data.category_id,
        organization_id=organization_id,
        children_moved=moved,
        posts_detached=detached,
    )


# --- Tags ---


def _ensure_tag_slug_available(organization_id: int, slug: str, exclude_id: int | None = None) -> None:
    existing = Tag.objects.filter(organization_id=organization_id, slug=slug)
    if exclude_id is not None:
        existing = existing.exclude(pk=exclude_id)
    if existing.exists():
        raise ActionError("A tag with this slug already exists", ErrorCode.ALREADY_EXISTS)


@authenticated_action()
def list_tags(data: None, auth: AuthContext) -> list[dict[str, Any]]:
    tags = Tag.objects.filter(organization_id=auth.organization_id).annotate(
        post_count=Count("posts", distinct=True)
    )
    return [TagWithCountOut.from_orm(tag).model_dump() for tag in tags]


@authenticated_action(TagInput)
def create_tag(data: TagInput, auth: AuthContext) -> dict[str, int]:
    slug = _resolve_slug(data.slug, data.name)
    _ensure_tag_slug_available(auth.organization_id, slug)
    tag = Tag.objects.create(organization_id=auth.organization_id, name=data.name, slug=slug)
    logger.info("tag_created", tag_id=tag.id, organization_id=auth.organization_id)
    return {"id": tag.id}


@authenticated_action(UpdateTagInput)
def update_tag(data: UpdateTagInput, auth: AuthContext) -> None:
    tag = Tag.objects.filter(pk=data.tag_id, organization_id=auth.organization_id).first()
    if tag is None:
        raise _not_found("Tag")

    slug = _resolve_slug(data.slug, data.name)
    if slug != tag.slug:
        _ensure_tag_slug_available(auth.organization_id, slug, exclude_id=tag.id)

    tag.name = data.name
    tag.slug = slug
    tag.save(update_fields=["name", "slug", "updated_at"])
    logger.info("tag_updated", tag_id=tag.id, organization_id=auth.organization_id)


@authenticated_action(TagIdInput)
def delete_tag(data: TagIdInput, auth: AuthContext) -> None:
    """Delete a tag. Posts keep existing; only the association goes."""
    deleted, _ = Tag.objects.filter(pk=data.tag_id, organization_id=auth.organization_id).delete()
    if not deleted:
        raise _not_found("Tag")
    logger.info("tag_deleted", tag_id=data.tag_id, organization_id=auth.organization_id)
