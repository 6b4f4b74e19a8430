"""
Public read API - posts, categories and site settings for one organization.

Every endpoint is authenticated by ``ApiKeyAuth`` on the API instance and
scoped to ``request.auth.organization``. Query parameters are read leniently:
unparsable or negative pagination values fall back to their defaults.

Success bodies are ``{"data": ...}`` (plus ``"meta"`` for listings); errors
are ``{"error": message}``.
"""

from typing import Any

from ninja import Router
from ninja.errors import HttpError

from apps.content.filters import ContentFilterOptions, build_category_filter, build_post_filter
from apps.content.models import Post
from apps.content.schemas import CategoryOut, PostOut, PostSummaryOut
from apps.content.services import category_queryset, post_queryset
from apps.core.types import ApiKeyHttpRequest
from apps.core.utils import parse_non_negative_int
from apps.organizations.schemas import PublicSiteSettingsOut
from apps.public_api.schemas import (
    ERROR_RESPONSES,
    NOT_FOUND_RESPONSES,
    CategoryListResponse,
    CategoryResponse,
    PostListResponse,
    PostResponse,
    PublicOrganizationOut,
    PublicSettingsOut,
    SettingsResponse,
)

router = Router()

DEFAULT_POSTS_LIMIT = 10
DEFAULT_CATEGORIES_LIMIT = 50
DEFAULT_CATEGORY_POSTS_LIMIT = 10


def _page(request: ApiKeyHttpRequest, default_limit: int) -> tuple[int, int]:
    limit = parse_non_negative_int(request.GET.get("limit"), default_limit)
    offset = parse_non_negative_int(request.GET.get("offset"), 0)
    return limit, offset


def _meta(total: int, limit: int, offset: int) -> dict[str, int]:
    return {"total": total, "limit": limit, "offset": offset}


@router.get(
    "/posts",
    response={200: PostListResponse, **ERROR_RESPONSES},
    tags=["posts"],
    operation_id="publicListPosts",
    summary="List posts",
)
def list_posts(request: ApiKeyHttpRequest) -> dict[str, Any]:
    """
    List the organization's posts, newest first.

    ``published`` only filters when present: ``true`` selects published
    posts, any other value selects drafts. ``tag`` may repeat and matches
    posts carrying any of the given tags.
    """
    params = request.GET
    published = params.get("published")
    options = ContentFilterOptions(
        type=params.get("type") or None,
        published=None if published is None else published == "true",
        category_slug=params.get("category") or None,
        tag_slugs=tuple(params.getlist("tag")),
    )
    limit, offset = _page(request, DEFAULT_POSTS_LIMIT)

    organization_id = request.auth.organization.id
    posts = post_queryset(organization_id).filter(build_post_filter(organization_id, options))
    total = posts.count()
    page = posts.order_by("-created_at", "-id")[offset : offset + limit]

    return {
        "data": [PostOut.from_orm(post).model_dump() for post in page],
        "meta": _meta(total, limit, offset),
    }


@router.get(
    "/posts/{slug}",
    response={200: PostResponse, **NOT_FOUND_RESPONSES},
    tags=["posts"],
    operation_id="publicGetPost",
    summary="Get post",
)
def get_post(request: ApiKeyHttpRequest, slug: str) -> dict[str, Any]:
    post = post_queryset(request.auth.organization.id).filter(slug=slug).first()
    if post is None:
        raise HttpError(404, "Post not found")
    return {"data": PostOut.from_orm(post).model_dump()}


@router.get(
    "/categories",
    response={200: CategoryListResponse, **ERROR_RESPONSES},
    tags=["categories"],
    operation_id="publicListCategories",
    summary="List categories",
)
def list_categories(request: ApiKeyHttpRequest) -> dict[str, Any]:
    """List categories by name. ``parent=root`` selects top-level categories."""
    options = ContentFilterOptions(parent_slug=request.GET.get("parent") or None)
    limit, offset = _page(request, DEFAULT_CATEGORIES_LIMIT)

    organization_id = request.auth.organization.id
    categories = category_queryset(organization_id).filter(
        build_category_filter(organization_id, options)
    )
    total = categories.count()
    page = categories.order_by("name")[offset : offset + limit]

    return {
        "data": [CategoryOut.from_orm(category).model_dump() for category in page],
        "meta": _meta(total, limit, offset),
    }


@router.get(
    "/categories/{slug}",
    response={200: CategoryResponse, **NOT_FOUND_RESPONSES},
    exclude_unset=True,
    tags=["categories"],
    operation_id="publicGetCategory",
    summary="Get category",
)
def get_category(request: ApiKeyHttpRequest, slug: str) -> dict[str, Any]:
    """
    Get one category.

    With ``include_posts=true`` the newest posts of the category are
    embedded (``posts_limit``, default 10). Only published posts are embedded
    unless ``posts_published=false``.
    """
    organization_id = request.auth.organization.id
    category = category_queryset(organization_id).filter(slug=slug).first()
    if category is None:
        raise HttpError(404, "Category not found")

    data = CategoryOut.from_orm(category).model_dump()

    if request.GET.get("include_posts") == "true":
        posts_limit = parse_non_negative_int(
            request.GET.get("posts_limit"), DEFAULT_CATEGORY_POSTS_LIMIT
        )
        posts = Post.objects.filter(organization_id=organization_id, category=category)
        if request.GET.get("posts_published") != "false":
            posts = posts.filter(published=True)
        posts = posts.order_by("-created_at", "-id")[:posts_limit]
        data["posts"] = [PostSummaryOut.from_orm(post).model_dump() for post in posts]

    return {"data": data}


@router.get(
    "/settings",
    response={200: SettingsResponse, **NOT_FOUND_RESPONSES},
    tags=["settings"],
    operation_id="publicGetSettings",
    summary="Get site settings",
)
def get_settings(request: ApiKeyHttpRequest) -> dict[str, Any]:
    """Site settings with the owning organization's public identity."""
    context = request.auth
    if context.settings is None:
        raise HttpError(404, "Settings not found")

    body = PublicSettingsOut(
        organization=PublicOrganizationOut.from_orm(context.organization),
        settings=PublicSiteSettingsOut.from_orm(context.settings),
    )
    return {"data": body.model_dump()}
