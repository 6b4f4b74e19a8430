import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Organization",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=255)),
                (
                    "slug",
                    models.SlugField(
                        help_text="URL-safe identifier, e.g. 'acme-corp'", max_length=255, unique=True
                    ),
                ),
                (
                    "content_type_config",
                    models.JSONField(
                        blank=True, default=list, help_text="Content type definitions; empty means defaults"
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="SiteSettings",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("site_title", models.CharField(blank=True, max_length=255, null=True)),
                ("favicon_url", models.URLField(blank=True, max_length=2048, null=True)),
                ("logo_url", models.URLField(blank=True, max_length=2048, null=True)),
                (
                    "seo_title_template",
                    models.CharField(
                        blank=True,
                        help_text="Page title template, '%s' is replaced by the page title",
                        max_length=255,
                        null=True,
                    ),
                ),
                ("seo_default_description", models.TextField(blank=True, null=True)),
                ("og_image_url", models.URLField(blank=True, max_length=2048, null=True)),
                (
                    "allowed_origins",
                    models.TextField(
                        blank=True,
                        help_text="Comma-separated origins allowed to call the public API, or '*'. Empty denies all.",
                        null=True,
                    ),
                ),
                (
                    "organization",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="settings",
                        to="organizations.organization",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "site settings",
            },
        ),
    ]
