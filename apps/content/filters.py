"""
Query filter builders for posts and categories.

Both the public API and the dashboard translate their optional query
parameters into a ``ContentFilterOptions`` and let these builders produce
the ``Q`` predicate. Each option that is ``None`` (or empty) adds no clause;
the organization clause is always present.

Usage::

    options = ContentFilterOptions(type="page", published=True)
    posts = Post.objects.filter(build_post_filter(org.id, options))
"""

from collections.abc import Sequence
from dataclasses import dataclass

from django.db.models import Q

from apps.content.models import Post

ROOT_PARENT = "root"


@dataclass(frozen=True)
class ContentFilterOptions:
    """Optional filters shared by the post and category listings."""

    type: str | None = None
    published: bool | None = None
    search: str | None = None
    parent_slug: str | None = None
    category_slug: str | None = None
    tag_slugs: Sequence[str] = ()


def build_post_filter(organization_id: int, options: ContentFilterOptions) -> Q:
    """
    Build the predicate for a post listing.

    Tag filtering matches posts carrying any of the given tag slugs and is
    expressed as a subquery so the result needs no ``distinct()``.
    """
    predicate = Q(organization_id=organization_id)

    if options.type:
        predicate &= Q(type=options.type)
    if options.published is not None:
        predicate &= Q(published=options.published)
    if options.category_slug:
        predicate &= Q(category__slug=options.category_slug)
    if options.tag_slugs:
        tagged = Post.tags.through.objects.filter(
            tag__organization_id=organization_id,
            tag__slug__in=list(options.tag_slugs),
        ).values("post_id")
        predicate &= Q(pk__in=tagged)
    if options.search:
        predicate &= (
            Q(title__icontains=options.search)
            | Q(content__icontains=options.search)
            | Q(excerpt__icontains=options.search)
        )

    return predicate


def build_category_filter(organization_id: int, options: ContentFilterOptions) -> Q:
    """
    Build the predicate for a category listing.

    ``parent_slug="root"`` selects top-level categories; any other slug
    selects the direct children of that category.
    """
    predicate = Q(organization_id=organization_id)

    if options.parent_slug == ROOT_PARENT:
        predicate &= Q(parent__isnull=True)
    elif options.parent_slug:
        predicate &= Q(parent__slug=options.parent_slug)
    if options.search:
        predicate &= Q(name__icontains=options.search) | Q(description__icontains=options.search)

    return predicate
