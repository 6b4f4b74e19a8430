"""
Tests for accounts services.
"""

import pytest

from apps.accounts.models import User
from apps.accounts.services import (
    add_user_to_organization,
    delete_user,
    list_users,
    toggle_user_admin,
    update_password,
    update_profile,
)
from apps.core.auth import AuthContext
from apps.core.errors import ErrorCode
from tests.accounts.factories import DEFAULT_PASSWORD, UserFactory
from tests.organizations.factories import OrganizationFactory


@pytest.mark.django_db
class TestAddUserToOrganization:
    """Tests for add_user_to_organization."""

    def test_creates_user(self, admin_auth) -> None:
        org = OrganizationFactory.create()

        result = add_user_to_organization(
            {
                "organization_id": org.id,
                "email": "new@example.com",
                "name": "New User",
                "password": "long-enough",
            },
            auth=admin_auth,
        )

        assert result.success
        user = User.objects.get(pk=result.data["id"])
        assert user.organization_id == org.id
        assert user.check_password("long-enough")
        assert not user.is_admin

    def test_rejects_existing_email(self, admin_auth) -> None:
        org = OrganizationFactory.create()
        UserFactory.create(email="taken@example.com")

        result = add_user_to_organization(
            {"organization_id": org.id, "email": "TAKEN@example.com", "password": "long-enough"},
            auth=admin_auth,
        )

        assert result.code == ErrorCode.ALREADY_EXISTS
        assert result.error == "Email is already in use"

    def test_rejects_short_password(self, admin_auth) -> None:
        org = OrganizationFactory.create()

        result = add_user_to_organization(
            {"organization_id": org.id, "email": "a@example.com", "password": "short"},
            auth=admin_auth,
        )

        assert "password" in result.field_errors

    def test_unknown_organization(self, admin_auth) -> None:
        result = add_user_to_organization(
            {"organization_id": 999_999, "email": "a@example.com", "password": "long-enough"},
            auth=admin_auth,
        )

        assert result.code == ErrorCode.NOT_FOUND

    def test_requires_admin(self, member_auth, organization) -> None:
        result = add_user_to_organization(
            {"organization_id": organization.id, "email": "a@example.com", "password": "long-enough"},
            auth=member_auth,
        )

        assert result.code == ErrorCode.FORBIDDEN


@pytest.mark.django_db
class TestUserAdministration:
    """Tests for delete_user, toggle_user_admin and list_users."""

    def test_delete_user(self, admin_auth, member) -> None:
        result = delete_user({"user_id": member.id}, auth=admin_auth)

        assert result.success
        assert not User.objects.filter(pk=member.id).exists()

    def test_cannot_delete_self(self, admin_user, admin_auth) -> None:
        result = delete_user({"user_id": admin_user.id}, auth=admin_auth)

        assert result.error == "You cannot delete your own account"
        assert User.objects.filter(pk=admin_user.id).exists()

    def test_delete_missing_user(self, admin_auth) -> None:
        result = delete_user({"user_id": 999_999}, auth=admin_auth)

        assert result.code == ErrorCode.NOT_FOUND

    def test_toggle_admin(self, admin_auth, member) -> None:
        result = toggle_user_admin({"user_id": member.id, "is_admin": True}, auth=admin_auth)

        assert result.success
        member.refresh_from_db()
        assert member.is_admin

    def test_list_users_by_organization(self, admin_auth, member) -> None:
        UserFactory.create(organization=OrganizationFactory.create())

        result = list_users({"organization_id": member.organization_id}, auth=admin_auth)

        assert [row["id"] for row in result.data] == [member.id]


@pytest.mark.django_db
class TestUpdateProfile:
    """Tests for update_profile."""

    def test_updates_name_and_email(self, member, member_auth) -> None:
        result = update_profile(
            {"name": "  Ada Lovelace ", "email": " ADA@Example.com "}, auth=member_auth
        )

        assert result.success
        member.refresh_from_db()
        assert member.name == "Ada Lovelace"
        assert member.email == "ada@example.com"

    def test_blank_name_stored_as_null(self, member, member_auth) -> None:
        update_profile({"name": "   ", "email": member.email}, auth=member_auth)

        member.refresh_from_db()
        assert member.name is None

    def test_rejects_email_of_other_user(self, member_auth) -> None:
        UserFactory.create(email="other@example.com")

        result = update_profile({"name": "x", "email": "other@example.com"}, auth=member_auth)

        assert result.code == ErrorCode.ALREADY_EXISTS

    def test_rejects_invalid_email(self, member_auth) -> None:
        result = update_profile({"name": "x", "email": "not-an-email"}, auth=member_auth)

        assert "email" in result.field_errors

    def test_works_without_organization(self, admin_user, admin_auth) -> None:
        result = update_profile({"name": "Root", "email": admin_user.email}, auth=admin_auth)

        assert result.success


@pytest.mark.django_db
class TestUpdatePassword:
    """Tests for update_password."""

    def payload(self, **overrides) -> dict:
        return {
            "current_password": DEFAULT_PASSWORD,
            "new_password": "New-password1!",
            "confirm_password": "New-password1!",
            **overrides,
        }

    def test_changes_password(self, member, member_auth) -> None:
        result = update_password(self.payload(), auth=member_auth)

        assert result.success
        member.refresh_from_db()
        assert member.check_password("New-password1!")

    def test_wrong_current_password(self, member_auth) -> None:
        result = update_password(self.payload(current_password="wrong"), auth=member_auth)

        assert result.code == ErrorCode.INVALID_CREDENTIALS
        assert result.error == "Current password is incorrect!"

    def test_weak_new_password(self, member_auth) -> None:
        result = update_password(
            self.payload(new_password="longbutplain", confirm_password="longbutplain"),
            auth=member_auth,
        )

        assert result.field_errors["new_password"].startswith(
            "Password must contain at least one special character"
        )

    def test_short_new_password(self, member_auth) -> None:
        result = update_password(
            self.payload(new_password="a!b", confirm_password="a!b"), auth=member_auth
        )

        assert result.field_errors["new_password"] == "Password must be at least 8 characters long"

    def test_confirmation_mismatch(self, member_auth) -> None:
        result = update_password(self.payload(confirm_password="Other-pass1!"), auth=member_auth)

        assert result.field_errors == {"confirm_password": "Passwords do not match"}

    def test_unknown_user(self) -> None:
        auth = AuthContext(user_id=999_999, user_email="ghost@example.com")

        result = update_password(self.payload(), auth=auth)

        assert result.error == "User not found!"
