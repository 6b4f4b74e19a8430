"""
Tests for API key management services.
"""

import re

import pytest

from apps.api_keys.models import ApiKey, generate_api_key
from apps.api_keys.services import create_api_key, delete_api_key, list_api_keys
from apps.core.errors import ErrorCode
from tests.api_keys.factories import ApiKeyFactory


class TestGenerateApiKey:
    """Tests for generate_api_key."""

    def test_format(self) -> None:
        assert re.fullmatch(r"org_[0-9a-f]{64}", generate_api_key())

    def test_unique(self) -> None:
        assert generate_api_key() != generate_api_key()


@pytest.mark.django_db
class TestApiKeyModel:
    """Tests for ApiKey model."""

    def test_masked_key(self) -> None:
        api_key = ApiKeyFactory.create()

        assert api_key.masked_key == f"org_...{api_key.key[-4:]}"

    def test_deleted_with_organization(self) -> None:
        api_key = ApiKeyFactory.create()

        api_key.organization.delete()

        assert not ApiKey.objects.exists()


@pytest.mark.django_db
class TestApiKeyActions:
    """Tests for list_api_keys, create_api_key and delete_api_key."""

    def test_create_returns_full_key_once(self, member, member_auth) -> None:
        result = create_api_key({"name": "Website"}, auth=member_auth)

        assert result.success
        api_key = ApiKey.objects.get(pk=result.data["id"])
        assert result.data["key"] == api_key.key
        assert api_key.organization_id == member.organization_id

        listed = list_api_keys(auth=member_auth)
        assert "key" not in listed.data[0]
        assert listed.data[0]["masked_key"] == api_key.masked_key

    def test_create_requires_name(self, member_auth) -> None:
        result = create_api_key({"name": ""}, auth=member_auth)

        assert "name" in result.field_errors

    def test_list_is_scoped_to_organization(self, member, member_auth) -> None:
        own = ApiKeyFactory.create(organization=member.organization)
        ApiKeyFactory.create()

        result = list_api_keys(auth=member_auth)

        assert [row["id"] for row in result.data] == [own.id]

    def test_delete_own_key(self, member, member_auth) -> None:
        api_key = ApiKeyFactory.create(organization=member.organization)

        assert delete_api_key({"api_key_id": api_key.id}, auth=member_auth).success
        assert not ApiKey.objects.filter(pk=api_key.id).exists()

    def test_cannot_delete_other_organizations_key(self, member_auth) -> None:
        foreign = ApiKeyFactory.create()

        result = delete_api_key({"api_key_id": foreign.id}, auth=member_auth)

        assert result.code == ErrorCode.NOT_FOUND
        assert result.error == "API key not found"
        assert ApiKey.objects.filter(pk=foreign.id).exists()

    def test_requires_organization(self, admin_auth) -> None:
        assert list_api_keys(auth=admin_auth).code == ErrorCode.FORBIDDEN
