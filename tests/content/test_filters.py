"""
Tests for post and category filter builders.
"""

import pytest

from apps.content.filters import ContentFilterOptions, build_category_filter, build_post_filter
from apps.content.models import Category, Post
from tests.content.factories import CategoryFactory, PostFactory, TagFactory
from tests.organizations.factories import OrganizationFactory


def post_slugs(organization_id: int, **options) -> set[str]:
    predicate = build_post_filter(organization_id, ContentFilterOptions(**options))
    return set(Post.objects.filter(predicate).values_list("slug", flat=True))


def category_slugs(organization_id: int, **options) -> set[str]:
    predicate = build_category_filter(organization_id, ContentFilterOptions(**options))
    return set(Category.objects.filter(predicate).values_list("slug", flat=True))


@pytest.mark.django_db
class TestBuildPostFilter:
    """Tests for build_post_filter."""

    @pytest.fixture
    def org(self):
        return OrganizationFactory.create()

    def test_no_options_scopes_to_organization(self, org) -> None:
        PostFactory.create(organization=org, slug="mine")
        PostFactory.create(slug="theirs")

        assert post_slugs(org.id) == {"mine"}

    def test_type_and_published(self, org) -> None:
        PostFactory.create(organization=org, slug="draft-page", type="page")
        PostFactory.create(organization=org, slug="live-page", type="page", published=True)
        PostFactory.create(organization=org, slug="live-post", published=True)

        assert post_slugs(org.id, type="page") == {"draft-page", "live-page"}
        assert post_slugs(org.id, type="page", published=True) == {"live-page"}
        assert post_slugs(org.id, published=False) == {"draft-page"}

    def test_category_slug(self, org) -> None:
        news = CategoryFactory.create(organization=org, slug="news")
        PostFactory.create(organization=org, slug="in-news", category=news)
        PostFactory.create(organization=org, slug="uncategorized")

        assert post_slugs(org.id, category_slug="news") == {"in-news"}

    def test_tags_match_any(self, org) -> None:
        python = TagFactory.create(organization=org, slug="python")
        django = TagFactory.create(organization=org, slug="django")
        rust = TagFactory.create(organization=org, slug="rust")
        PostFactory.create(organization=org, slug="both", tags=[python, django])
        PostFactory.create(organization=org, slug="just-python", tags=[python])
        PostFactory.create(organization=org, slug="rusty", tags=[rust])

        assert post_slugs(org.id, tag_slugs=["python", "django"]) == {"both", "just-python"}

    def test_tags_from_other_organization_do_not_match(self, org) -> None:
        foreign_tag = TagFactory.create(slug="python")
        PostFactory.create(organization=foreign_tag.organization, slug="foreign", tags=[foreign_tag])
        PostFactory.create(organization=org, slug="untagged")

        assert post_slugs(org.id, tag_slugs=["python"]) == set()

    def test_search_is_case_insensitive_over_text_fields(self, org) -> None:
        PostFactory.create(organization=org, slug="in-title", title="Django Tips")
        PostFactory.create(organization=org, slug="in-content", content="all about django")
        PostFactory.create(organization=org, slug="in-excerpt", excerpt="DJANGO inside")
        PostFactory.create(organization=org, slug="unrelated", title="Flask", content="flask")

        assert post_slugs(org.id, search="django") == {"in-title", "in-content", "in-excerpt"}


@pytest.mark.django_db
class TestBuildCategoryFilter:
    """Tests for build_category_filter."""

    def test_root_and_children(self) -> None:
        org = OrganizationFactory.create()
        parent = CategoryFactory.create(organization=org, slug="guides")
        CategoryFactory.create(organization=org, slug="beginner", parent=parent)
        CategoryFactory.create(organization=org, slug="news")

        assert category_slugs(org.id, parent_slug="root") == {"guides", "news"}
        assert category_slugs(org.id, parent_slug="guides") == {"beginner"}
        assert category_slugs(org.id) == {"guides", "beginner", "news"}

    def test_search(self) -> None:
        org = OrganizationFactory.create()
        CategoryFactory.create(organization=org, slug="a", name="Tutorials")
        CategoryFactory.create(organization=org, slug="b", name="Other", description="tutorial series")
        CategoryFactory.create(organization=org, slug="c", name="Misc")

        assert category_slugs(org.id, search="TUTORIAL") == {"a", "b"}
