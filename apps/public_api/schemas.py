"""
Response shapes for the public API that have no dashboard counterpart.
"""

from ninja import Schema

from apps.content.schemas import CategoryOut, PostOut, PostSummaryOut
from apps.core.schemas import ErrorResponse, PaginationMeta
from apps.organizations.schemas import PublicSiteSettingsOut


class PublicOrganizationOut(Schema):
    id: int
    name: str
    slug: str


class PublicSettingsOut(Schema):
    organization: PublicOrganizationOut
    settings: PublicSiteSettingsOut


class CategoryDetailOut(CategoryOut):
    """Category with its newest posts, present only when ``include_posts=true``."""

    posts: list[PostSummaryOut] | None = None


class PostListResponse(Schema):
    data: list[PostOut]
    meta: PaginationMeta


class PostResponse(Schema):
    data: PostOut


class CategoryListResponse(Schema):
    data: list[CategoryOut]
    meta: PaginationMeta


class CategoryResponse(Schema):
    data: CategoryDetailOut


class SettingsResponse(Schema):
    data: PublicSettingsOut


ERROR_RESPONSES = {401: ErrorResponse}
NOT_FOUND_RESPONSES = {401: ErrorResponse, 404: ErrorResponse}
