"""
Factories for organizations app models.
"""

import factory
from factory.django import DjangoModelFactory

from apps.organizations.models import Organization, SiteSettings


class OrganizationFactory(DjangoModelFactory):
    """Factory for Organization model. Uses the default content types."""

    class Meta:
        model = Organization

    name = factory.Faker("company")
    slug = factory.Sequence(lambda n: f"org-{n}")
    content_type_config = factory.LazyFunction(list)


class SiteSettingsFactory(DjangoModelFactory):
    """Factory for SiteSettings model."""

    class Meta:
        model = SiteSettings

    organization = factory.SubFactory(OrganizationFactory)
    site_title = factory.LazyAttribute(lambda o: o.organization.name)
    seo_title_template = factory.LazyAttribute(lambda o: f"%s | {o.organization.name}")
    allowed_origins = None
