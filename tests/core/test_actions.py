"""
Tests for action results and the action decorators.
"""

from unittest.mock import patch

import pytest
from django.db import DatabaseError, IntegrityError
from pydantic import BaseModel, Field, ValidationError, field_validator

from apps.core.actions import (
    action,
    admin_action,
    authenticated_action,
    field_errors_from,
    to_response,
    user_action,
)
from apps.core.auth import AuthContext
from apps.core.errors import (
    ActionError,
    ActionResult,
    ActionValidationError,
    ErrorCode,
    http_status_for,
)

MEMBER = AuthContext(user_id=1, user_email="member@example.com", organization_id=10)
LONER = AuthContext(user_id=2, user_email="loner@example.com")
ADMIN = AuthContext(user_id=3, user_email="admin@example.com", is_admin=True)


class Address(BaseModel):
    city: str = Field(min_length=1)


class SampleInput(BaseModel):
    name: str = Field(min_length=1)
    address: Address | None = None

    @field_validator("name")
    @classmethod
    def no_admin(cls, v: str) -> str:
        if v == "admin":
            raise ValueError("Name is reserved")
        return v


class TestHttpStatusFor:
    """Tests for the error code to status mapping."""

    @pytest.mark.parametrize(
        ("code", "status"),
        [
            (ErrorCode.UNAUTHORIZED, 401),
            (ErrorCode.INVALID_KEY, 401),
            (ErrorCode.FORBIDDEN, 403),
            (ErrorCode.NOT_FOUND, 404),
            (ErrorCode.VALIDATION_ERROR, 400),
            (ErrorCode.ALREADY_EXISTS, 409),
            (ErrorCode.CONSTRAINT_VIOLATION, 409),
            (ErrorCode.SERVICE_UNAVAILABLE, 503),
            (ErrorCode.DATABASE_ERROR, 500),
            (None, 500),
        ],
    )
    def test_maps_code(self, code, status: int) -> None:
        assert http_status_for(code) == status


class TestActionResult:
    """Tests for ActionResult shapes."""

    def test_ok(self) -> None:
        result = ActionResult.ok({"id": 1})

        assert result.success
        assert result.message is None
        assert result.http_status == 200
        assert result.to_dict() == {"success": True, "data": {"id": 1}}

    def test_fail(self) -> None:
        result = ActionResult.fail("Post not found", ErrorCode.NOT_FOUND)

        assert result.http_status == 404
        assert result.to_dict() == {
            "success": False,
            "error": "Post not found",
            "code": ErrorCode.NOT_FOUND,
        }

    def test_validation_joins_messages(self) -> None:
        result = ActionResult.validation(["Name is required", "Slug is invalid"])

        assert result.message == "Name is required, Slug is invalid"
        assert result.to_dict()["errors"] == ["Name is required", "Slug is invalid"]
        assert result.http_status == 400

    def test_invalid_fields(self) -> None:
        result = ActionResult.invalid_fields({"slug": "Slug is invalid"})

        assert result.message == "Slug is invalid"
        assert result.to_dict()["field_errors"] == {"slug": "Slug is invalid"}

    def test_to_response(self) -> None:
        status, body = to_response(ActionResult.fail("nope", ErrorCode.FORBIDDEN))

        assert status == 403
        assert body["error"] == "nope"


class TestFieldErrorsFrom:
    """Tests for flattening pydantic errors."""

    def test_uses_dotted_paths(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            SampleInput.model_validate({"name": "x", "address": {"city": ""}})

        assert list(field_errors_from(exc_info.value)) == ["address.city"]

    def test_uses_custom_validator_message_verbatim(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            SampleInput.model_validate({"name": "admin"})

        assert field_errors_from(exc_info.value) == {"name": "Name is reserved"}


@pytest.mark.django_db
class TestAuthRequirements:
    """Tests for the auth checks of each decorator."""

    def test_action_allows_anonymous(self) -> None:
        @action()
        def ping(data, auth):
            return "pong"

        assert ping().data == "pong"

    def test_user_action_requires_auth(self) -> None:
        @user_action()
        def whoami(data, auth):
            return auth.user_id

        result = whoami()

        assert not result.success
        assert result.code == ErrorCode.UNAUTHORIZED
        assert whoami(auth=LONER).data == 2

    def test_authenticated_action_requires_organization(self) -> None:
        @authenticated_action()
        def org_only(data, auth):
            return auth.organization_id

        assert org_only(auth=LONER).code == ErrorCode.FORBIDDEN
        assert org_only(auth=MEMBER).data == 10

    def test_admin_action_requires_admin(self) -> None:
        @admin_action()
        def admin_only(data, auth):
            return "ok"

        assert admin_only(auth=None).code == ErrorCode.FORBIDDEN
        assert admin_only(auth=MEMBER).code == ErrorCode.FORBIDDEN
        assert admin_only(auth=ADMIN).success


@pytest.mark.django_db
class TestHandlerErrors:
    """Tests for mapping handler outcomes to results."""

    def test_schema_errors_become_field_errors(self) -> None:
        handler_called = False

        @action(SampleInput)
        def create(data, auth):
            nonlocal handler_called
            handler_called = True

        result = create({"name": ""})

        assert not handler_called
        assert result.code == ErrorCode.VALIDATION_ERROR
        assert "name" in result.field_errors

    def test_handler_receives_parsed_schema(self) -> None:
        @action(SampleInput)
        def echo(data, auth):
            return data.name

        assert echo({"name": "Ada"}).data == "Ada"

    def test_action_error(self) -> None:
        @action()
        def fails(data, auth):
            raise ActionError("Tag not found", ErrorCode.NOT_FOUND)

        result = fails()

        assert result.error == "Tag not found"
        assert result.http_status == 404

    def test_action_validation_error(self) -> None:
        @action()
        def invalid(data, auth):
            raise ActionValidationError({"type": "Invalid content type"})

        result = invalid()

        assert result.field_errors == {"type": "Invalid content type"}
        assert result.http_status == 400

    def test_integrity_error(self) -> None:
        @action()
        def duplicate(data, auth):
            raise IntegrityError("UNIQUE constraint failed")

        result = duplicate()

        assert result.code == ErrorCode.ALREADY_EXISTS
        assert result.error == "This record already exists"

    def test_database_error(self) -> None:
        @action()
        def broken(data, auth):
            raise DatabaseError("connection lost")

        with patch("apps.core.actions.logger") as mock_logger:
            result = broken()

        assert result.code == ErrorCode.DATABASE_ERROR
        assert result.http_status == 500
        mock_logger.exception.assert_called_once()

    def test_unexpected_errors_propagate(self) -> None:
        @action()
        def crashes(data, auth):
            raise KeyError("bug")

        with pytest.raises(KeyError):
            crashes()
