"""
API key validation for the public API.

Resolves ``Authorization: Bearer <key>`` to the owning organization and its
site settings. Used by ``ApiKeyAuth`` for regular requests and by the CORS
middleware to pick a tenant's origin policy for preflight requests.

Recording ``last_used_at`` is fire-and-forget: the update runs on an
executor and its failures are logged, never raised into the request.
"""

from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache

from django.conf import settings as django_settings
from django.db import connection
from django.http import HttpRequest
from django.utils import timezone

from apps.api_keys.exceptions import InvalidApiKeyError, MissingAuthorizationError
from apps.api_keys.models import ApiKey
from apps.core.logging import bind_contextvars, get_logger
from apps.organizations.models import Organization, SiteSettings

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class ApiContext:
    """Authenticated public API caller. ``organization.id`` scopes every query."""

    organization: Organization
    settings: SiteSettings | None
    api_key_id: int

    @property
    def allowed_origins(self) -> str | None:
        if self.settings is None:
            return None
        return self.settings.allowed_origins


def _touch_last_used(api_key_id: int, used_at: datetime) -> None:
    try:
        ApiKey.objects.filter(pk=api_key_id).update(last_used_at=used_at)
    except Exception:
        # Futures are never awaited; failures surface only here
        logger.warning("api_key_touch_failed", api_key_id=api_key_id, exc_info=True)
    finally:
        # Worker threads open their own connection; one inside a transaction
        # belongs to the calling request.
        if not connection.in_atomic_block:
            connection.close()


class LastUsedRecorder:
    """Submits ``last_used_at`` updates without waiting for them."""

    def __init__(self, executor: Executor) -> None:
        self.executor = executor

    def record(self, api_key_id: int, used_at: datetime | None = None) -> None:
        used_at = used_at or timezone.now()
        try:
            self.executor.submit(_touch_last_used, api_key_id, used_at)
        except RuntimeError:
            # Executor already shut down (process exiting).
            logger.warning("api_key_touch_not_scheduled", api_key_id=api_key_id, exc_info=True)


class ApiKeyValidator:
    """
    Resolves bearer tokens to an ``ApiContext``.

    Usage::

        context = get_api_key_validator().validate(request)
        posts = Post.objects.filter(organization_id=context.organization.id)
    """

    def __init__(self, recorder: LastUsedRecorder) -> None:
        self.recorder = recorder

    def extract_token(self, request: HttpRequest) -> str:
        """
        Return the key from ``Authorization: Bearer <key>``.

        The ``Bearer `` prefix is case-sensitive. Raises
        ``MissingAuthorizationError`` when the header is absent or malformed.
        """
        header = request.headers.get("Authorization")
        if not header or not header.startswith(BEARER_PREFIX):
            raise MissingAuthorizationError()
        return header[len(BEARER_PREFIX) :]

    def authenticate_token(self, token: str) -> ApiContext:
        """Look the key up (exact match) and build the caller context."""
        used_at = timezone.now()
        api_key = (
            ApiKey.objects.select_related("organization", "organization__settings")
            .filter(key=token)
            .first()
        )
        if api_key is None:
            logger.info("api_key_rejected")
            raise InvalidApiKeyError()

        organization = api_key.organization
        try:
            site_settings = organization.settings
        except SiteSettings.DoesNotExist:
            site_settings = None

        bind_contextvars(**{"organization.id": organization.id})
        self.recorder.record(api_key.id, used_at)

        return ApiContext(organization=organization, settings=site_settings, api_key_id=api_key.id)

    def validate(self, request: HttpRequest) -> ApiContext:
        return self.authenticate_token(self.extract_token(request))


@lru_cache(maxsize=1)
def get_touch_executor() -> Executor:
    """Shared thread pool for ``last_used_at`` updates."""
    return ThreadPoolExecutor(
        max_workers=django_settings.API_KEY_TOUCH_WORKERS,
        thread_name_prefix="api-key-touch",
    )


@lru_cache(maxsize=1)
def get_api_key_validator() -> ApiKeyValidator:
    """
    Get the process-wide validator (singleton).

    Uses lru_cache to ensure only one instance is created.
    """
    return ApiKeyValidator(LastUsedRecorder(get_touch_executor()))
