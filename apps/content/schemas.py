"""
Pydantic schemas for content - dashboard inputs and the shared output shapes.

The output schemas are used by both the dashboard and the public API, so a
post looks the same wherever it is read.
"""

from datetime import datetime

from ninja import Schema
from pydantic import Field, field_validator

from apps.core.schemas import check_slug


def _optional_slug(value: str | None) -> str | None:
    """Blank slugs mean "derive from the title/name"."""
    if value is None or not value.strip():
        return None
    return check_slug(value.strip())


# --- Outputs ---


class AuthorOut(Schema):
    id: int
    name: str | None


class CategoryRefOut(Schema):
    id: int
    name: str
    slug: str


class TagOut(Schema):
    id: int
    name: str
    slug: str


class PostOut(Schema):
    """Full post as returned by list and detail endpoints."""

    id: int
    title: str
    slug: str
    excerpt: str | None
    content: str
    type: str
    published: bool
    published_at: datetime | None
    created_at: datetime
    updated_at: datetime
    author: AuthorOut | None
    category: CategoryRefOut | None
    tags: list[TagOut]


class PostSummaryOut(Schema):
    """Post without body, embedded in category detail."""

    id: int
    title: str
    slug: str
    excerpt: str | None
    type: str
    published: bool
    published_at: datetime | None
    created_at: datetime


class CategoryOut(Schema):
    id: int
    name: str
    slug: str
    description: str | None
    created_at: datetime
    parent: CategoryRefOut | None
    children: list[CategoryRefOut]
    post_count: int = 0


class TagWithCountOut(TagOut):
    created_at: datetime
    post_count: int = 0


# --- Post inputs ---


class ListPostsInput(Schema):
    type: str | None = None
    published: bool | None = None
    search: str | None = None
    category: str | None = Field(default=None, description="Category slug")
    tag: list[str] = Field(default_factory=list, description="Tag slugs, any match")
    limit: int = Field(default=20, ge=0, le=100)
    offset: int = Field(default=0, ge=0)


class PostInput(Schema):
    title: str = Field(min_length=1, max_length=255)
    slug: str | None = Field(default=None, max_length=255, description="Derived from title when blank")
    content: str = Field(min_length=1, description="Markdown source")
    excerpt: str | None = None
    type: str = Field(default="post", min_length=1)
    published: bool = False
    category_id: int | None = None
    tag_ids: list[int] = Field(default_factory=list)

    @field_validator("slug")
    @classmethod
    def check_slug_format(cls, v: str | None) -> str | None:
        return _optional_slug(v)


class UpdatePostInput(PostInput):
    post_id: int


class PostIdInput(Schema):
    post_id: int


# --- Category inputs ---


class CategoryInput(Schema):
    name: str = Field(min_length=1, max_length=100)
    slug: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    parent_id: int | None = None

    @field_validator("slug")
    @classmethod
    def check_slug_format(cls, v: str | None) -> str | None:
        return _optional_slug(v)


class UpdateCategoryInput(CategoryInput):
    category_id: int


class CategoryIdInput(Schema):
    category_id: int


# --- Tag inputs ---


class TagInput(Schema):
    name: str = Field(min_length=1, max_length=50)
    slug: str | None = Field(default=None, max_length=50)

    @field_validator("slug")
    @classmethod
    def check_slug_format(cls, v: str | None) -> str | None:
        return _optional_slug(v)


class UpdateTagInput(TagInput):
    tag_id: int


class TagIdInput(Schema):
    tag_id: int
