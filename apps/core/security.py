"""
Core security - authentication classes for the dashboard API.

The public API authenticates with API keys (see ``apps.api_keys.auth``).
The dashboard uses Django sessions; login itself is handled elsewhere.
"""

from django.http import HttpRequest
from ninja.errors import HttpError
from ninja.security import SessionAuth

from apps.core.auth import AuthContext


class DashboardSessionAuth(SessionAuth):
    """Session authentication for organization members."""

    def authenticate(self, request: HttpRequest, key: str | None):
        user = super().authenticate(request, key)
        if user is None or not user.is_active:
            return None
        return user


class AdminSessionAuth(DashboardSessionAuth):
    """
    Session authentication restricted to platform admins.

    Authenticated non-admins get 403 rather than 401.
    """

    def authenticate(self, request: HttpRequest, key: str | None):
        user = super().authenticate(request, key)
        if user is not None and not user.is_admin:
            raise HttpError(403, "Admin access required")
        return user


def get_auth_context(request: HttpRequest) -> AuthContext:
    """Build the action context for the logged-in dashboard user."""
    user = request.user
    if not user.is_authenticated:
        raise HttpError(401, "Authentication required")
    return AuthContext.from_user(user)  # type: ignore[arg-type]
