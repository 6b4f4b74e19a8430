import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("organizations", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Category",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=100)),
                ("slug", models.CharField(max_length=100)),
                ("description", models.TextField(blank=True, null=True)),
                (
                    "organization",
                    models.ForeignKey(
                        help_text="Owning organization (tenant)",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="category_set",
                        to="organizations.organization",
                    ),
                ),
                (
                    "parent",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="children",
                        to="content.category",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "categories",
                "ordering": ["name"],
                "constraints": [
                    models.UniqueConstraint(fields=("organization", "slug"), name="unique_category_slug_per_org")
                ],
            },
        ),
        migrations.CreateModel(
            name="Tag",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=50)),
                ("slug", models.CharField(max_length=50)),
                (
                    "organization",
                    models.ForeignKey(
                        help_text="Owning organization (tenant)",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="tag_set",
                        to="organizations.organization",
                    ),
                ),
            ],
            options={
                "ordering": ["name"],
                "constraints": [
                    models.UniqueConstraint(fields=("organization", "slug"), name="unique_tag_slug_per_org")
                ],
            },
        ),
        migrations.CreateModel(
            name="Post",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("title", models.CharField(max_length=255)),
                ("slug", models.CharField(max_length=255)),
                ("content", models.TextField(help_text="Markdown source")),
                ("excerpt", models.TextField(blank=True, null=True)),
                (
                    "type",
                    models.CharField(
                        default="post",
                        help_text="Content type value from the organization's configuration",
                        max_length=50,
                    ),
                ),
                ("published", models.BooleanField(default=False)),
                (
                    "published_at",
                    models.DateTimeField(
                        blank=True, help_text="Set when the post becomes published, kept when unpublished", null=True
                    ),
                ),
                (
                    "author",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="posts",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "category",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="posts",
                        to="content.category",
                    ),
                ),
                (
                    "organization",
                    models.ForeignKey(
                        help_text="Owning organization (tenant)",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="post_set",
                        to="organizations.organization",
                    ),
                ),
                ("tags", models.ManyToManyField(blank=True, related_name="posts", to="content.tag")),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["organization", "type"], name="post_org_type_idx"),
                    models.Index(fields=["organization", "published"], name="post_org_published_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("organization", "slug"), name="unique_post_slug_per_org")
                ],
            },
        ),
    ]
