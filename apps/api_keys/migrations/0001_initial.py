import django.db.models.deletion
from django.db import migrations, models

import apps.api_keys.models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("organizations", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ApiKey",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(help_text="Label shown in the dashboard", max_length=255)),
                (
                    "key",
                    models.CharField(
                        db_index=True,
                        default=apps.api_keys.models.generate_api_key,
                        max_length=255,
                        unique=True,
                    ),
                ),
                (
                    "last_used_at",
                    models.DateTimeField(
                        blank=True,
                        help_text="Time of the most recent authenticated request, best effort",
                        null=True,
                    ),
                ),
                (
                    "organization",
                    models.ForeignKey(
                        help_text="Owning organization (tenant)",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="apikey_set",
                        to="organizations.organization",
                    ),
                ),
            ],
            options={
                "verbose_name": "API key",
                "verbose_name_plural": "API keys",
                "ordering": ["-created_at"],
            },
        ),
    ]
