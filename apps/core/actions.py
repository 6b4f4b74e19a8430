"""
Dashboard action wrappers.

An action takes untrusted input plus the caller's ``AuthContext`` and always
returns an ``ActionResult``. The decorators here handle the shared steps:

1. check authentication (and admin role where required)
2. validate the input against a pydantic schema
3. run the handler inside a transaction
4. turn expected failures into failed results

Usage::

    @authenticated_action(CreateTagInput)
    def create_tag(data: CreateTagInput, auth: AuthContext) -> dict:
        ...

    result = create_tag({"name": "News"}, auth=AuthContext.from_user(user))
"""

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from django.db import DatabaseError, IntegrityError, transaction
from pydantic import BaseModel, ValidationError

from apps.core.auth import AuthContext
from apps.core.errors import (
    ActionError,
    ActionResult,
    ActionValidationError,
    ErrorCode,
    ErrorMessages,
)
from apps.core.logging import get_logger

logger = get_logger(__name__)

S = TypeVar("S", bound=BaseModel)

Handler = Callable[[Any, AuthContext | None], Any]
Action = Callable[..., ActionResult]

NON_FIELD_ERRORS = "non_field_errors"


def field_errors_from(exc: ValidationError) -> dict[str, str]:
    """
    Flatten pydantic errors into ``{"dotted.path": "message"}``.

    Only the first message per field is kept. ``ValueError`` messages raised
    by custom validators are used verbatim.
    """
    errors: dict[str, str] = {}
    for err in exc.errors():
        path = ".".join(str(part) for part in err["loc"]) or NON_FIELD_ERRORS
        message = err["msg"]
        if err["type"] == "value_error" and "error" in err.get("ctx", {}):
            message = str(err["ctx"]["error"])
        errors.setdefault(path, message)
    return errors


def _build_action(
    schema: type[S] | None,
    *,
    require_auth: bool,
    require_organization: bool,
    require_admin: bool,
) -> Callable[[Handler], Action]:
    def decorator(handler: Handler) -> Action:
        action_name = handler.__name__

        @wraps(handler)
        def wrapper(input: Any = None, auth: AuthContext | None = None) -> ActionResult:
            if require_auth and auth is None:
                return ActionResult.fail(ErrorMessages.UNAUTHORIZED, ErrorCode.UNAUTHORIZED)
            if require_organization and auth is not None and auth.organization_id is None:
                return ActionResult.fail(ErrorMessages.FORBIDDEN, ErrorCode.FORBIDDEN)
            if require_admin and (auth is None or not auth.is_admin):
                return ActionResult.fail(ErrorMessages.FORBIDDEN, ErrorCode.FORBIDDEN)

            data: Any = None
            if schema is not None:
                try:
                    data = schema.model_validate(input)
                except ValidationError as e:
                    return ActionResult.invalid_fields(field_errors_from(e))

            try:
                with transaction.atomic():
                    result = handler(data, auth)
            except ActionValidationError as e:
                return ActionResult.invalid_fields(e.field_errors)
            except ActionError as e:
                logger.info("action_rejected", action=action_name, code=str(e.code), reason=e.message)
                return ActionResult.fail(e.message, e.code)
            except IntegrityError:
                logger.warning("action_integrity_error", action=action_name, exc_info=True)
                return ActionResult.fail("This record already exists", ErrorCode.ALREADY_EXISTS)
            except DatabaseError:
                logger.exception("action_database_error", action=action_name)
                return ActionResult.fail(ErrorMessages.OPERATION_FAILED, ErrorCode.DATABASE_ERROR)

            return ActionResult.ok(result)

        return wrapper

    return decorator


def action(schema: type[S] | None = None) -> Callable[[Handler], Action]:
    """Action without authentication requirements."""
    return _build_action(schema, require_auth=False, require_organization=False, require_admin=False)


def user_action(schema: type[S] | None = None) -> Callable[[Handler], Action]:
    """Action for any logged-in user, with or without an organization."""
    return _build_action(schema, require_auth=True, require_organization=False, require_admin=False)


def authenticated_action(schema: type[S] | None = None) -> Callable[[Handler], Action]:
    """Action for a logged-in user working inside an organization."""
    return _build_action(schema, require_auth=True, require_organization=True, require_admin=False)


def admin_action(schema: type[S] | None = None) -> Callable[[Handler], Action]:
    """Action restricted to platform admins."""
    return _build_action(schema, require_auth=True, require_organization=False, require_admin=True)


def to_response(result: ActionResult) -> tuple[int, dict[str, Any]]:
    """Convert a result into a ninja ``(status, body)`` response."""
    return result.http_status, result.to_dict()
