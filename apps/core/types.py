"""
Custom request types.

These help mypy understand attributes that authentication adds to the request.
"""

from typing import TYPE_CHECKING

from django.http import HttpRequest

if TYPE_CHECKING:
    from apps.api_keys.validation import ApiContext


class ApiKeyHttpRequest(HttpRequest):
    """
    Public API request after API key authentication.

    ``auth`` is set by ``ApiKeyAuth`` and carries the resolved tenant.
    """

    auth: "ApiContext"
