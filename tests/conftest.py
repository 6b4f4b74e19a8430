"""
Shared pytest fixtures for all tests.

This module provides common fixtures used across multiple test modules.
Individual test modules can override these fixtures if needed.

Factories
---------
Import factories directly from their modules:

    from tests.accounts.factories import UserFactory
    from tests.organizations.factories import OrganizationFactory, SiteSettingsFactory
    from tests.content.factories import PostFactory, CategoryFactory, TagFactory
    from tests.api_keys.factories import ApiKeyFactory

Example usage:

    @pytest.mark.django_db
    def test_something():
        org = OrganizationFactory.create()
        user = UserFactory.create(organization=org)
        post = PostFactory.create(organization=org, author=user)
"""

from collections.abc import Callable
from concurrent.futures import Executor, Future
from typing import Any

import pytest
from django.test import Client, RequestFactory
from django.test.client import WSGIRequest  # type: ignore[attr-defined]

from apps.api_keys import validation
from apps.api_keys.validation import get_api_key_validator
from apps.core.auth import AuthContext
from apps.organizations.content_types import get_content_type_cache


class InlineExecutor(Executor):
    """
    Executor that runs submitted work immediately in the calling thread.

    Keeps ``last_used_at`` updates inside the test transaction so they can be
    asserted on.
    """

    def __init__(self) -> None:
        self.submitted = 0
        self.shutdown_called = False

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future:
        if self.shutdown_called:
            raise RuntimeError("cannot schedule new futures after shutdown")
        self.submitted += 1
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:
        self.shutdown_called = True


@pytest.fixture
def inline_executor() -> InlineExecutor:
    return InlineExecutor()


@pytest.fixture(autouse=True)
def api_key_validator(monkeypatch, inline_executor: InlineExecutor):
    """
    Build the process-wide validator on an inline executor.

    Autouse so no test starts background threads against the test database.
    """
    monkeypatch.setattr(validation, "get_touch_executor", lambda: inline_executor)
    get_api_key_validator.cache_clear()
    yield get_api_key_validator()
    get_api_key_validator.cache_clear()


@pytest.fixture(autouse=True)
def clear_content_type_cache():
    """Database ids are reused between tests, so cached configs must not be."""
    get_content_type_cache().invalidate()
    yield
    get_content_type_cache().invalidate()


@pytest.fixture
def request_factory() -> RequestFactory:
    """
    Django request factory for unit testing views.

    Use this when you need to test view functions directly without going through
    the full HTTP stack. Useful for testing Django Ninja endpoints.

    Example:
        def test_endpoint(request_factory):
            request = request_factory.get("/api/dashboard/posts/")
            request.user = user
            result = my_endpoint(request)
    """
    return RequestFactory()


@pytest.fixture
def api_client() -> Client:
    """
    Django test client for full HTTP request/response cycle tests.

    Use this when you need to test the complete HTTP flow including middleware,
    routing, and response handling.

    Example:
        def test_api_returns_200(api_client):
            response = api_client.get("/api/v1/posts", HTTP_AUTHORIZATION=f"Bearer {key}")
            assert response.status_code == 200
    """
    return Client()


def make_dashboard_request(
    request_factory: RequestFactory,
    user: Any,
    method: str = "get",
    path: str = "/",
    data: dict | None = None,
) -> WSGIRequest:
    """
    Build a request as the session middleware would leave it for ``user``.

    Example:
        request = make_dashboard_request(request_factory, user, "post", "/api/dashboard/tags/")
        status, body = create_tag_endpoint(request, TagInput(name="Python"))
    """
    method_func = getattr(request_factory, method.lower())
    kwargs: dict[str, Any] = {}
    if data is not None:
        kwargs["data"] = data
        kwargs["content_type"] = "application/json"
    request = method_func(path, **kwargs)
    request.user = user
    return request


@pytest.fixture
def organization(db):
    """
    Create an organization with default site settings.

    Example:
        def test_scoped(organization):
            assert organization.settings.site_title
    """
    from tests.organizations.factories import SiteSettingsFactory

    return SiteSettingsFactory.create().organization


@pytest.fixture
def member(organization):
    """
    Create a regular user belonging to ``organization``.

    Example:
        def test_member_action(member):
            assert not member.is_admin
    """
    from tests.accounts.factories import UserFactory

    return UserFactory.create(organization=organization)


@pytest.fixture
def admin_user(db):
    """Create a platform admin without an organization."""
    from tests.accounts.factories import UserFactory

    return UserFactory.create(is_admin=True)


@pytest.fixture
def member_auth(member) -> AuthContext:
    """Action context for ``member``."""
    return AuthContext.from_user(member)


@pytest.fixture
def admin_auth(admin_user) -> AuthContext:
    """Action context for ``admin_user``."""
    return AuthContext.from_user(admin_user)
