"""
Error codes and typed results for dashboard actions.

Actions never raise for expected failures. They return an ``ActionResult``
that carries either data or an error description, and API endpoints map the
result to an HTTP status with ``ActionResult.http_status``.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class ErrorCode(StrEnum):
    """Machine-readable error codes shared by actions and the public API."""

    # Authentication & authorization
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    SESSION_EXPIRED = "SESSION_EXPIRED"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    INVALID_KEY = "INVALID_KEY"

    # Validation
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"

    # Database & resources
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    DATABASE_ERROR = "DATABASE_ERROR"

    # Business logic
    OPERATION_FAILED = "OPERATION_FAILED"
    CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"

    # Server
    INTERNAL_ERROR = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.INVALID_CREDENTIALS: 401,
    ErrorCode.SESSION_EXPIRED: 401,
    ErrorCode.UNAUTHENTICATED: 401,
    ErrorCode.INVALID_KEY: 401,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.INVALID_INPUT: 400,
    ErrorCode.MISSING_REQUIRED_FIELD: 400,
    ErrorCode.ALREADY_EXISTS: 409,
    ErrorCode.CONSTRAINT_VIOLATION: 409,
    ErrorCode.SERVICE_UNAVAILABLE: 503,
}


def http_status_for(code: ErrorCode | None) -> int:
    """Map an error code to an HTTP status. Unknown codes map to 500."""
    if code is None:
        return 500
    return _STATUS_BY_CODE.get(code, 500)


class ErrorMessages:
    """Common user-facing error messages."""

    UNAUTHORIZED = "You must be logged in to perform this action"
    FORBIDDEN = "You don't have permission to perform this action"
    INVALID_CREDENTIALS = "Invalid email or password"
    OPERATION_FAILED = "The operation failed. Please try again"
    UNEXPECTED_ERROR = "An unexpected error occurred. Please try again later"

    @staticmethod
    def not_found(resource: str) -> str:
        return f"{resource} not found"

    @staticmethod
    def already_exists(resource: str) -> str:
        return f"{resource} already exists"


class ActionError(Exception):
    """
    Expected failure raised inside an action handler.

    The action decorators turn it into a failed ``ActionResult``.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.OPERATION_FAILED) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class ActionValidationError(ActionError):
    """Field-level validation failure detected after schema validation."""

    def __init__(self, field_errors: dict[str, str]) -> None:
        super().__init__(", ".join(field_errors.values()), ErrorCode.VALIDATION_ERROR)
        self.field_errors = field_errors


@dataclass
class ActionResult(Generic[T]):
    """
    Outcome of a dashboard action.

    Exactly one shape is populated: ``data`` on success, or one of
    ``error`` / ``errors`` / ``field_errors`` on failure.
    """

    success: bool
    data: T | None = None
    error: str | None = None
    code: ErrorCode | None = None
    errors: list[str] = field(default_factory=list)
    field_errors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def ok(cls, data: T | None = None) -> "ActionResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, message: str, code: ErrorCode = ErrorCode.OPERATION_FAILED) -> "ActionResult[T]":
        return cls(success=False, error=message, code=code)

    @classmethod
    def validation(cls, errors: list[str]) -> "ActionResult[T]":
        return cls(success=False, errors=errors, code=ErrorCode.VALIDATION_ERROR)

    @classmethod
    def invalid_fields(cls, field_errors: dict[str, str]) -> "ActionResult[T]":
        return cls(success=False, field_errors=field_errors, code=ErrorCode.VALIDATION_ERROR)

    @property
    def message(self) -> str | None:
        """Single user-facing message for any failure shape, None on success."""
        if self.success:
            return None
        if self.error:
            return self.error
        if self.errors:
            return ", ".join(self.errors)
        if self.field_errors:
            return ", ".join(self.field_errors.values())
        return "An unknown error occurred"

    @property
    def http_status(self) -> int:
        return 200 if self.success else http_status_for(self.code)

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            return {"success": True, "data": self.data}
        payload: dict[str, Any] = {"success": False, "error": self.message, "code": self.code}
        if self.errors:
            payload["errors"] = self.errors
        if self.field_errors:
            payload["field_errors"] = self.field_errors
        return payload
