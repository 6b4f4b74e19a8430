"""
Ninja authentication for the public API.
"""

from typing import Any

from django.http import HttpRequest
from ninja.security import HttpBearer

from apps.api_keys.validation import ApiContext, get_api_key_validator


class ApiKeyAuth(HttpBearer):
    """
    Organization API key authentication.

    Unlike ninja's ``HttpBearer`` this raises ``ApiKeyError`` subclasses
    instead of returning ``None``, so the public API can report why the
    request was rejected. The returned ``ApiContext`` becomes ``request.auth``.
    """

    def __call__(self, request: HttpRequest) -> Any:
        return get_api_key_validator().validate(request)

    def authenticate(self, request: HttpRequest, token: str) -> ApiContext:
        return get_api_key_validator().authenticate_token(token)
