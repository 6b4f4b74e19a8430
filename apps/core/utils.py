"""
Core utility functions.
"""

import re
import unicodedata
from typing import cast, overload

from django.http import HttpRequest

_TRANSLITERATIONS = {
    "ä": "ae",
    "ö": "oe",
    "ü": "ue",
    "Ä": "Ae",
    "Ö": "Oe",
    "Ü": "Ue",
    "ß": "ss",
}
_COMBINING_MARKS = re.compile(r"[\u0300-\u036f]")


@overload
def get_client_ip(request: HttpRequest) -> str | None: ...


@overload
def get_client_ip(request: HttpRequest, default: str) -> str: ...


def get_client_ip(request: HttpRequest, default: str | None = None) -> str | None:
    """
    Extract client IP from X-Forwarded-For or REMOTE_ADDR.

    The first X-Forwarded-For entry is the original client.
    """
    x_forwarded_for: str | None = request.META.get("HTTP_X_FORWARDED_FOR")
    if x_forwarded_for:
        return x_forwarded_for.split(",")[0].strip()
    remote_addr = cast(str | None, request.META.get("REMOTE_ADDR"))
    if remote_addr is not None:
        return remote_addr
    return default


def generate_slug(text: str) -> str:
    """
    Build a URL slug from a title or name.

    German umlauts are transliterated ("Über" -> "ueber"), other accents are
    stripped, whitespace runs become single hyphens and everything outside
    ``[a-z0-9-]`` is dropped.

    >>> generate_slug("Grüße aus Köln!")
    'gruesse-aus-koeln'
    """
    slug = text
    for char, replacement in _TRANSLITERATIONS.items():
        slug = slug.replace(char, replacement)

    slug = _COMBINING_MARKS.sub("", unicodedata.normalize("NFD", slug))
    slug = slug.lower().strip()
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"[^a-z0-9-]", "", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def parse_non_negative_int(value: str | int | None, default: int) -> int:
    """
    Parse a pagination parameter.

    Missing, unparsable or negative values fall back to ``default``.
    """
    if value is None or value == "":
        return default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed >= 0 else default
