"""
Authentication context for dashboard actions.

Provides a typed container for the acting user that endpoints build from
``request.user`` and actions consume.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ninja.errors import HttpError

if TYPE_CHECKING:
    from apps.accounts.models import User


@dataclass(frozen=True)
class AuthContext:
    """
    Identity of the user performing a dashboard action.

    Attributes:
        user_id: Primary key of the acting User
        user_email: Email of the acting User
        organization_id: Organization the user works in, or None for
            platform admins without an organization
        is_admin: True if the user may manage organizations and users
    """

    user_id: int
    user_email: str
    organization_id: int | None = None
    is_admin: bool = False

    @classmethod
    def from_user(cls, user: "User") -> "AuthContext":
        """Build a context from an authenticated User."""
        return cls(
            user_id=user.pk,
            user_email=user.email,
            organization_id=user.organization_id,
            is_admin=user.is_admin,
        )

    def require_organization(self) -> int:
        """
        Get the caller's organization id or raise 403.

        Tenant-scoped endpoints use this before touching content.
        """
        if self.organization_id is None:
            raise HttpError(403, "No organization assigned to this user")
        return self.organization_id
