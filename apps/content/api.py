"""
Dashboard endpoints for posts, categories and tags.

All routes act on the logged-in user's organization.
"""

from typing import Any

from django.http import HttpRequest
from ninja import Query, Router

from apps.content.schemas import CategoryInput, ListPostsInput, PostInput, TagInput
from apps.content.services import (
    create_category,
    create_post,
    create_tag,
    delete_category,
    delete_post,
    delete_tag,
    get_post,
    list_categories,
    list_posts,
    list_tags,
    update_category,
    update_post,
    update_tag,
)
from apps.core.actions import to_response
from apps.core.schemas import ACTION_RESPONSES
from apps.core.security import DashboardSessionAuth, get_auth_context

posts_router = Router(tags=["posts"], auth=DashboardSessionAuth())
categories_router = Router(tags=["categories"], auth=DashboardSessionAuth())
tags_router = Router(tags=["tags"], auth=DashboardSessionAuth())

Response = tuple[int, dict[str, Any]]


# --- Posts ---


@posts_router.get("/", response=ACTION_RESPONSES, operation_id="listPosts", summary="List posts")
def list_posts_endpoint(request: HttpRequest, filters: Query[ListPostsInput]) -> Response:
    """List posts with optional type, status, category, tag and text filters."""
    return to_response(list_posts(filters.model_dump(), auth=get_auth_context(request)))


@posts_router.get(
    "/{post_id}", response=ACTION_RESPONSES, operation_id="getPost", summary="Get post"
)
def get_post_endpoint(request: HttpRequest, post_id: int) -> Response:
    return to_response(get_post({"post_id": post_id}, auth=get_auth_context(request)))


@posts_router.post("/", response=ACTION_RESPONSES, operation_id="createPost", summary="Create post")
def create_post_endpoint(request: HttpRequest, payload: PostInput) -> Response:
    return to_response(create_post(payload.model_dump(), auth=get_auth_context(request)))


@posts_router.put(
    "/{post_id}", response=ACTION_RESPONSES, operation_id="updatePost", summary="Update post"
)
def update_post_endpoint(request: HttpRequest, post_id: int, payload: PostInput) -> Response:
    result = update_post({**payload.model_dump(), "post_id": post_id}, auth=get_auth_context(request))
    return to_response(result)


@posts_router.delete(
    "/{post_id}", response=ACTION_RESPONSES, operation_id="deletePost", summary="Delete post"
)
def delete_post_endpoint(request: HttpRequest, post_id: int) -> Response:
    return to_response(delete_post({"post_id": post_id}, auth=get_auth_context(request)))


# --- Categories ---


@categories_router.get(
    "/", response=ACTION_RESPONSES, operation_id="listCategories", summary="List categories"
)
def list_categories_endpoint(request: HttpRequest) -> Response:
    return to_response(list_categories(auth=get_auth_context(request)))


@categories_router.post(
    "/", response=ACTION_RESPONSES, operation_id="createCategory", summary="Create category"
)
def create_category_endpoint(request: HttpRequest, payload: CategoryInput) -> Response:
    return to_response(create_category(payload.model_dump(), auth=get_auth_context(request)))


@categories_router.put(
    "/{category_id}",
    response=ACTION_RESPONSES,
    operation_id="updateCategory",
    summary="Update category",
)
def update_category_endpoint(
    request: HttpRequest, category_id: int, payload: CategoryInput
) -> Response:
    result = update_category(
        {**payload.model_dump(), "category_id": category_id}, auth=get_auth_context(request)
    )
    return to_response(result)


@categories_router.delete(
    "/{category_id}",
    response=ACTION_RESPONSES,
    operation_id="deleteCategory",
    summary="Delete category",
)
def delete_category_endpoint(request: HttpRequest, category_id: int) -> Response:
    """Delete a category. Child categories move to the top level."""
    result = delete_category({"category_id": category_id}, auth=get_auth_context(request))
    return to_response(result)


# --- Tags ---


@tags_router.get("/", response=ACTION_RESPONSES, operation_id="listTags", summary="List tags")
def list_tags_endpoint(request: HttpRequest) -> Response:
    return to_response(list_tags(auth=get_auth_context(request)))


@tags_router.post("/", response=ACTION_RESPONSES, operation_id="createTag", summary="Create tag")
def create_tag_endpoint(request: HttpRequest, payload: TagInput) -> Response:
    return to_response(create_tag(payload.model_dump(), auth=get_auth_context(request)))


@tags_router.put(
    "/{tag_id}", response=ACTION_RESPONSES, operation_id="updateTag", summary="Update tag"
)
def update_tag_endpoint(request: HttpRequest, tag_id: int, payload: TagInput) -> Response:
    result = update_tag({**payload.model_dump(), "tag_id": tag_id}, auth=get_auth_context(request))
    return to_response(result)


@tags_router.delete(
    "/{tag_id}", response=ACTION_RESPONSES, operation_id="deleteTag", summary="Delete tag"
)
def delete_tag_endpoint(request: HttpRequest, tag_id: int) -> Response:
    return to_response(delete_tag({"tag_id": tag_id}, auth=get_auth_context(request)))
