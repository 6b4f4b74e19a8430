"""
Tests for RequestContextMiddleware and PublicApiCorsMiddleware.
"""

from unittest.mock import MagicMock

import pytest
from django.http import HttpRequest, HttpResponse
from structlog.contextvars import get_contextvars

from apps.api_keys.validation import ApiContext
from apps.core.cors import ALLOW_HEADERS, ALLOW_METHODS, ALLOW_ORIGIN
from apps.core.middleware import PublicApiCorsMiddleware, RequestContextMiddleware
from tests.api_keys.factories import ApiKeyFactory
from tests.organizations.factories import SiteSettingsFactory


def make_request(
    path: str = "/api/v1/posts",
    method: str = "GET",
    auth_header: str | None = None,
    origin: str | None = None,
) -> HttpRequest:
    """Create a bare HttpRequest."""
    request = HttpRequest()
    request.path = path
    request.method = method
    request.META = {"REMOTE_ADDR": "10.0.0.1"}
    if auth_header:
        request.META["HTTP_AUTHORIZATION"] = auth_header
    if origin:
        request.META["HTTP_ORIGIN"] = origin
    return request


def make_get_response(status: int = 200) -> MagicMock:
    """Create a mock get_response callable."""
    return MagicMock(return_value=HttpResponse(status=status))


class TestRequestContextMiddleware:
    """Tests for per-request logging context."""

    def test_sets_request_id_header(self) -> None:
        """Should echo a generated trace id on the response."""
        middleware = RequestContextMiddleware(make_get_response())

        response = middleware(make_request())

        assert response["X-Request-ID"]

    def test_reuses_incoming_request_id(self) -> None:
        """Should keep a trace id provided by the proxy."""
        middleware = RequestContextMiddleware(make_get_response())
        request = make_request()
        request.META["HTTP_X_REQUEST_ID"] = "trace-123"

        response = middleware(request)

        assert response["X-Request-ID"] == "trace-123"

    def test_binds_context_during_request(self) -> None:
        """Should expose the trace id and client ip to code running in the view."""
        seen: dict = {}

        def get_response(request: HttpRequest) -> HttpResponse:
            seen.update(get_contextvars())
            return HttpResponse()

        middleware = RequestContextMiddleware(get_response)
        request = make_request()
        request.META["HTTP_X_REQUEST_ID"] = "trace-abc"

        middleware(request)

        assert seen["correlation_id"] == "trace-abc"
        assert seen["network.client.ip"] == "10.0.0.1"

    def test_clears_context_after_request(self) -> None:
        """Should not leak context into the next request."""
        middleware = RequestContextMiddleware(make_get_response())

        middleware(make_request())

        assert get_contextvars() == {}

    def test_clears_context_when_view_raises(self) -> None:
        """Should clear context even if the view raises."""
        middleware = RequestContextMiddleware(MagicMock(side_effect=RuntimeError("boom")))

        with pytest.raises(RuntimeError):
            middleware(make_request())

        assert get_contextvars() == {}


class TestPublicApiCorsOutsidePrefix:
    """Tests for requests that are not part of the public API."""

    def test_passes_through_untouched(self) -> None:
        """Should not add CORS headers to dashboard responses."""
        get_response = make_get_response()
        middleware = PublicApiCorsMiddleware(get_response)

        response = middleware(make_request("/api/dashboard/posts/"))

        get_response.assert_called_once()
        assert ALLOW_ORIGIN not in response

    def test_does_not_answer_dashboard_preflight(self) -> None:
        """Should leave OPTIONS outside the prefix to the view."""
        get_response = make_get_response(status=200)
        middleware = PublicApiCorsMiddleware(get_response)

        response = middleware(make_request("/api/dashboard/posts/", method="OPTIONS"))

        get_response.assert_called_once()
        assert response.status_code == 200


@pytest.mark.django_db
class TestPublicApiCorsPreflight:
    """Tests for OPTIONS handling under the public API prefix."""

    def test_preflight_without_key_uses_wildcard(self) -> None:
        """Should answer 204 with wildcard headers when no key is sent."""
        get_response = make_get_response()
        middleware = PublicApiCorsMiddleware(get_response)

        response = middleware(make_request(method="OPTIONS", origin="https://blog.example.com"))

        get_response.assert_not_called()
        assert response.status_code == 204
        assert response[ALLOW_ORIGIN] == "*"
        assert response[ALLOW_METHODS] == "GET, POST, PUT, DELETE, OPTIONS"
        assert response[ALLOW_HEADERS] == "Content-Type, Authorization"

    def test_preflight_with_invalid_key_uses_wildcard(self) -> None:
        """Should never fail the preflight on a bad key."""
        middleware = PublicApiCorsMiddleware(make_get_response())

        response = middleware(
            make_request(method="OPTIONS", auth_header="Bearer org_nope", origin="https://x.com")
        )

        assert response.status_code == 204
        assert response[ALLOW_ORIGIN] == "*"

    def test_preflight_with_valid_key_uses_tenant_policy(self) -> None:
        """Should reflect an allowed origin for the key's organization."""
        site_settings = SiteSettingsFactory.create(allowed_origins="blog.example.com")
        api_key = ApiKeyFactory.create(organization=site_settings.organization)
        middleware = PublicApiCorsMiddleware(make_get_response())

        response = middleware(
            make_request(
                method="OPTIONS",
                auth_header=f"Bearer {api_key.key}",
                origin="https://blog.example.com",
            )
        )

        assert response.status_code == 204
        assert response[ALLOW_ORIGIN] == "https://blog.example.com"
        assert "Origin" in response["Vary"]

    def test_preflight_with_valid_key_denies_unlisted_origin(self) -> None:
        """Should send an empty allow-origin for origins the tenant did not list."""
        site_settings = SiteSettingsFactory.create(allowed_origins="https://blog.example.com")
        api_key = ApiKeyFactory.create(organization=site_settings.organization)
        middleware = PublicApiCorsMiddleware(make_get_response())

        response = middleware(
            make_request(
                method="OPTIONS",
                auth_header=f"Bearer {api_key.key}",
                origin="https://evil.example.com",
            )
        )

        assert response[ALLOW_ORIGIN] == ""


@pytest.mark.django_db
class TestPublicApiCorsResponses:
    """Tests for headers added to regular public API responses."""

    def test_unauthenticated_response_gets_wildcard(self) -> None:
        """Should let any origin read authentication errors."""
        middleware = PublicApiCorsMiddleware(make_get_response(status=401))

        response = middleware(make_request(origin="https://blog.example.com"))

        assert response.status_code == 401
        assert response[ALLOW_ORIGIN] == "*"

    def test_authenticated_response_gets_tenant_headers(self) -> None:
        """Should apply the tenant policy once request.auth is an ApiContext."""
        site_settings = SiteSettingsFactory.create(allowed_origins="*")

        def get_response(request: HttpRequest) -> HttpResponse:
            request.auth = ApiContext(  # type: ignore[attr-defined]
                organization=site_settings.organization,
                settings=site_settings,
                api_key_id=1,
            )
            return HttpResponse(status=404)

        middleware = PublicApiCorsMiddleware(get_response)

        response = middleware(make_request(origin="https://any.example.com"))

        assert response.status_code == 404
        assert response[ALLOW_ORIGIN] == "*"
        assert "Origin" in response["Vary"]

    def test_tenant_without_settings_denies_cross_origin(self) -> None:
        """Should send an empty allow-origin when the tenant has no settings."""
        site_settings = SiteSettingsFactory.create()

        def get_response(request: HttpRequest) -> HttpResponse:
            request.auth = ApiContext(  # type: ignore[attr-defined]
                organization=site_settings.organization,
                settings=None,
                api_key_id=1,
            )
            return HttpResponse()

        middleware = PublicApiCorsMiddleware(get_response)

        response = middleware(make_request(origin="https://blog.example.com"))

        assert response[ALLOW_ORIGIN] == ""
