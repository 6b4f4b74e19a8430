"""
Content models - markdown posts, categories and tags.

All three are tenant-scoped; slugs are unique per organization, not
globally, so two tenants can both publish ``/posts/hello-world``.
"""

from django.db import models

from apps.core.models import TenantScopedModel


class Category(TenantScopedModel):
    """Hierarchical grouping for posts. Deleting a parent moves children to the root."""

    name = models.CharField(max_length=100)
    slug = models.CharField(max_length=100)
    description = models.TextField(null=True, blank=True)
    parent = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="children",
    )

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "categories"
        constraints = [
            models.UniqueConstraint(
                fields=["organization", "slug"], name="unique_category_slug_per_org"
            ),
        ]

    def __str__(self) -> str:
        return self.name


class Tag(TenantScopedModel):
    name = models.CharField(max_length=50)
    slug = models.CharField(max_length=50)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(fields=["organization", "slug"], name="unique_tag_slug_per_org"),
        ]

    def __str__(self) -> str:
        return self.name


class Post(TenantScopedModel):
    """
    A piece of markdown content.

    ``type`` is one of the organization's configured content types
    (``post``, ``page``, ``service`` by default). Content is stored and
    served as raw markdown; rendering is up to the consumer.
    """

    author = models.ForeignKey(
        "accounts.User",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="posts",
    )
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="posts",
    )
    tags = models.ManyToManyField(Tag, blank=True, related_name="posts")

    title = models.CharField(max_length=255)
    slug = models.CharField(max_length=255)
    content = models.TextField(help_text="Markdown source")
    excerpt = models.TextField(null=True, blank=True)
    type = models.CharField(
        max_length=50,
        default="post",
        help_text="Content type value from the organization's configuration",
    )
    published = models.BooleanField(default=False)
    published_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Set when the post becomes published, kept when unpublished",
    )

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(fields=["organization", "slug"], name="unique_post_slug_per_org"),
        ]
        indexes = [
            models.Index(fields=["organization", "type"], name="post_org_type_idx"),
            models.Index(fields=["organization", "published"], name="post_org_published_idx"),
        ]

    def __str__(self) -> str:
        return self.title
