"""
Exceptions for api_keys app.

Raised while resolving the public API caller. The public API turns them into
``{"error": message}`` responses with ``status_code``.
"""

from apps.core.errors import ErrorCode


class ApiKeyError(Exception):
    """Base exception for API key authentication errors."""

    code: ErrorCode = ErrorCode.UNAUTHENTICATED
    message = "Authentication failed"
    status_code = 401

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.message
        super().__init__(self.message)


class MissingAuthorizationError(ApiKeyError):
    """Authorization header is absent or not a Bearer credential."""

    code = ErrorCode.UNAUTHENTICATED
    message = "Missing or invalid Authorization header"


class InvalidApiKeyError(ApiKeyError):
    """No API key matches the presented token."""

    code = ErrorCode.INVALID_KEY
    message = "Invalid API key"
