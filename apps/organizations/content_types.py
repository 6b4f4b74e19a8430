"""
Per-organization content type configuration.

Posts carry a free-form ``type`` that must be one of the values configured
on their organization. The configuration is read on every post write, so it
is served from a TTL cache in Django's cache framework that the content
type admin actions invalidate for every worker at once.
"""

from functools import lru_cache
from typing import Any

from django.conf import settings

from apps.core.cache import TTLCache
from apps.core.logging import get_logger

logger = get_logger(__name__)

ContentTypeConfig = list[dict[str, Any]]

DEFAULT_CONTENT_TYPES: ContentTypeConfig = [
    {
        "value": "post",
        "label": "Blog Post",
        "description": "Regular blog post for /blog",
        "icon": "📝",
    },
    {
        "value": "page",
        "label": "Page",
        "description": "Static page content (e.g., homepage sections)",
        "icon": "📄",
    },
    {
        "value": "service",
        "label": "Service",
        "description": "Service offering for homepage",
        "icon": "🛠️",
    },
]


def _is_valid_definition(definition: Any) -> bool:
    return (
        isinstance(definition, dict)
        and isinstance(definition.get("value"), str)
        and bool(definition["value"])
        and isinstance(definition.get("label"), str)
        and bool(definition["label"])
    )


def parse_content_type_config(raw: Any) -> ContentTypeConfig:
    """
    Normalize a stored configuration.

    Missing, empty or malformed configuration falls back to the defaults so
    an organization always has at least one usable type.
    """
    if not raw:
        return [dict(definition) for definition in DEFAULT_CONTENT_TYPES]
    if not isinstance(raw, list) or not all(_is_valid_definition(d) for d in raw):
        logger.warning("content_type_config_invalid", config_type=type(raw).__name__)
        return [dict(definition) for definition in DEFAULT_CONTENT_TYPES]
    return [dict(definition) for definition in raw]


def allowed_type_values(config: ContentTypeConfig) -> list[str]:
    return [definition["value"] for definition in config]


def load_content_types(organization_id: int) -> ContentTypeConfig:
    """Read and normalize an organization's configuration from the database."""
    from apps.organizations.models import Organization

    raw = (
        Organization.objects.filter(pk=organization_id)
        .values_list("content_type_config", flat=True)
        .first()
    )
    return parse_content_type_config(raw)


CONTENT_TYPE_CACHE_PREFIX = "content_types"


@lru_cache(maxsize=1)
def get_content_type_cache() -> TTLCache[int, ContentTypeConfig]:
    """
    Get the shared content type cache (singleton).

    Uses lru_cache to ensure only one instance is created. TTL comes from
    ``CONTENT_TYPE_CACHE_TTL_SECONDS``; entries live in the default Django cache.
    """
    return TTLCache(
        loader=load_content_types,
        ttl_seconds=settings.CONTENT_TYPE_CACHE_TTL_SECONDS,
        prefix=CONTENT_TYPE_CACHE_PREFIX,
    )


def get_allowed_types(
    organization_id: int,
    cache: TTLCache[int, ContentTypeConfig] | None = None,
) -> list[str]:
    """Allowed ``Post.type`` values for an organization."""
    if cache is None:
        cache = get_content_type_cache()
    config, _ = cache.get(organization_id)
    return allowed_type_values(config)
