"""
CORS header computation for the public API.

Each organization configures ``SiteSettings.allowed_origins`` as a
comma-separated list of origins (``"example.com, https://app.example.com/"``),
the literal ``"*"``, or nothing at all. The functions here are pure so the
middleware and tests can share them.

Usage::

    from apps.core.cors import cors_headers

    headers = cors_headers(request.headers.get("Origin"), settings.allowed_origins)
"""

from urllib.parse import urlsplit

ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ALLOW_METHODS = "Access-Control-Allow-Methods"
ALLOW_HEADERS = "Access-Control-Allow-Headers"

ALLOWED_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
ALLOWED_HEADERS = "Content-Type, Authorization"

WILDCARD = "*"
_SCHEMES = ("http://", "https://")


def normalize_origin(candidate: str) -> str:
    """
    Normalize a configured or requested origin for comparison.

    Trims whitespace, adds ``https://`` when no scheme is present and strips
    one trailing slash. ``"*"`` and empty strings pass through unchanged.
    Normalizing an already-normalized origin returns it unchanged.
    """
    origin = candidate.strip()
    if not origin or origin == WILDCARD:
        return origin
    if not origin.startswith(_SCHEMES):
        origin = f"https://{origin}"
    return origin.removesuffix("/")


def parse_allowed_origins(allowed_origins: str | None) -> list[str]:
    """Split a comma-separated allow-list into normalized, non-empty origins."""
    if not allowed_origins:
        return []
    normalized = (normalize_origin(part) for part in allowed_origins.split(","))
    return [origin for origin in normalized if origin]


def validate_allowed_origins(allowed_origins: str | None) -> bool:
    """
    Check that every configured origin looks like ``scheme://host[:port]``.

    Bare domains are accepted because they are normalized to ``https://``.
    """
    for origin in parse_allowed_origins(allowed_origins):
        if origin == WILDCARD:
            continue
        parts = urlsplit(origin)
        if parts.scheme not in ("http", "https") or not parts.hostname:
            return False
        if parts.path or parts.query or parts.fragment:
            return False
        try:
            parts.port  # noqa: B018 - raises ValueError on garbage ports
        except ValueError:
            return False
    return True


def resolve_allow_origin(request_origin: str | None, allowed_origins: str | None) -> str:
    """
    Compute the ``Access-Control-Allow-Origin`` value for a tenant.

    - No configuration: ``""`` (cross-origin reads denied).
    - Configuration is exactly ``"*"``: ``"*"``.
    - Otherwise the request origin is reflected when the allow-list holds
      ``"*"`` or the normalized request origin, and ``""`` when it does not.
    """
    if allowed_origins is None:
        return ""
    if allowed_origins == WILDCARD:
        return WILDCARD

    candidates = parse_allowed_origins(allowed_origins)
    if not request_origin:
        return ""
    if WILDCARD in candidates or normalize_origin(request_origin) in candidates:
        return request_origin
    return ""


def cors_headers(request_origin: str | None, allowed_origins: str | None) -> dict[str, str]:
    """Build the full CORS header set for an authenticated tenant response."""
    return {
        ALLOW_ORIGIN: resolve_allow_origin(request_origin, allowed_origins),
        ALLOW_METHODS: ALLOWED_METHODS,
        ALLOW_HEADERS: ALLOWED_HEADERS,
    }


def wildcard_cors_headers() -> dict[str, str]:
    """
    CORS headers for responses where the tenant is unknown.

    Authentication failures use these so any browser client can read the
    error body.
    """
    return {
        ALLOW_ORIGIN: WILDCARD,
        ALLOW_METHODS: ALLOWED_METHODS,
        ALLOW_HEADERS: ALLOWED_HEADERS,
    }
