"""
Core middleware.
"""

import time
from collections.abc import Callable
from uuid import uuid4

from django.conf import settings
from django.http import HttpRequest, HttpResponse
from django.utils.cache import patch_vary_headers

from apps.api_keys.exceptions import ApiKeyError
from apps.api_keys.validation import ApiContext, get_api_key_validator
from apps.core.cors import cors_headers, wildcard_cors_headers
from apps.core.logging import bind_contextvars, clear_contextvars, get_logger
from apps.core.utils import get_client_ip

logger = get_logger(__name__)

TRACE_HEADER = "X-Request-ID"


class RequestContextMiddleware:
    """
    Binds per-request logging context and logs request completion.

    The trace id comes from ``X-Request-ID`` when a proxy sets one, and is
    echoed back on the response.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        trace_id = request.headers.get(TRACE_HEADER) or str(uuid4())
        clear_contextvars()
        bind_contextvars(
            correlation_id=trace_id,
            **{"network.client.ip": get_client_ip(request)},
        )
        started = time.perf_counter()
        try:
            response = self.get_response(request)
            logger.info(
                "http_request_completed",
                **{
                    "http.method": request.method,
                    "http.url_details.path": request.path,
                    "http.status_code": response.status_code,
                },
                duration_ms=round((time.perf_counter() - started) * 1000, 3),
            )
            response[TRACE_HEADER] = trace_id
            return response
        finally:
            clear_contextvars()


class PublicApiCorsMiddleware:
    """
    Per-tenant CORS for the public API.

    Requests outside ``PUBLIC_API_PREFIX`` pass through untouched. Inside it:

    - ``OPTIONS`` is answered here with 204. The API key is still resolved
      so the tenant's origin policy applies; if it cannot be resolved the
      preflight gets wildcard headers instead of failing.
    - Every other response gets the tenant's headers when authentication
      succeeded (``request.auth`` is an ``ApiContext``) and wildcard
      headers otherwise, so clients on any origin can read auth errors.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response
        self.prefix: str = settings.PUBLIC_API_PREFIX

    def __call__(self, request: HttpRequest) -> HttpResponse:
        if not request.path.startswith(self.prefix):
            return self.get_response(request)

        if request.method == "OPTIONS":
            return self._preflight(request)

        response = self.get_response(request)
        self._apply_headers(request, response)
        return response

    def _preflight(self, request: HttpRequest) -> HttpResponse:
        response = HttpResponse(status=204)
        origin = request.headers.get("Origin")
        try:
            context = get_api_key_validator().validate(request)
        except ApiKeyError as e:
            logger.debug("cors_preflight_without_tenant", reason=e.code)
            headers = wildcard_cors_headers()
        else:
            headers = cors_headers(origin, context.allowed_origins)
            patch_vary_headers(response, ("Origin",))

        for name, value in headers.items():
            response[name] = value
        return response

    def _apply_headers(self, request: HttpRequest, response: HttpResponse) -> None:
        context = getattr(request, "auth", None)
        if isinstance(context, ApiContext):
            headers = cors_headers(request.headers.get("Origin"), context.allowed_origins)
            patch_vary_headers(response, ("Origin",))
        else:
            headers = wildcard_cors_headers()

        for name, value in headers.items():
            response[name] = value
