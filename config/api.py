"""
Django Ninja API configuration.

Two APIs are mounted:

- ``public_api`` at ``/api/v1/``: read-only content for external sites,
  authenticated with organization API keys.
- ``dashboard_api`` at ``/api/dashboard/``: content management for logged-in
  users, authenticated with the Django session.
"""

from django.http import HttpRequest, HttpResponse
from ninja import NinjaAPI
from ninja.errors import AuthenticationError, HttpError

from apps.accounts.api import admin_router as users_admin_router
from apps.accounts.api import profile_router
from apps.api_keys.api import router as api_keys_router
from apps.api_keys.auth import ApiKeyAuth
from apps.api_keys.exceptions import ApiKeyError
from apps.content.api import categories_router, posts_router, tags_router
from apps.organizations.api import admin_router as organizations_admin_router
from apps.organizations.api import settings_router
from apps.public_api.api import router as public_router

public_api = NinjaAPI(
    title="Markdown CMS Public API",
    version="1.0.0",
    description="Read-only access to an organization's posts, categories and site settings.",
    auth=ApiKeyAuth(),
    urls_namespace="public_api",
    openapi_extra={
        "components": {
            "securitySchemes": {
                "ApiKeyAuth": {
                    "type": "http",
                    "scheme": "bearer",
                    "description": "Organization API key. Include as: Authorization: Bearer org_<key>",
                }
            }
        },
    },
)

public_api.add_router("", public_router)


@public_api.exception_handler(ApiKeyError)
def api_key_error(request: HttpRequest, exc: ApiKeyError) -> HttpResponse:
    return public_api.create_response(request, {"error": exc.message}, status=exc.status_code)


@public_api.exception_handler(AuthenticationError)
def authentication_error(request: HttpRequest, exc: AuthenticationError) -> HttpResponse:
    return public_api.create_response(request, {"error": "Unauthorized"}, status=401)


@public_api.exception_handler(HttpError)
def http_error(request: HttpRequest, exc: HttpError) -> HttpResponse:
    return public_api.create_response(request, {"error": exc.message}, status=exc.status_code)


dashboard_api = NinjaAPI(
    title="Markdown CMS Dashboard API",
    version="1.0.0",
    description="Content management for organization members and platform admins.",
    urls_namespace="dashboard_api",
)

dashboard_api.add_router("/admin/organizations", organizations_admin_router)
dashboard_api.add_router("/admin/users", users_admin_router)
dashboard_api.add_router("/settings/api-keys", api_keys_router)
dashboard_api.add_router("/settings", settings_router)
dashboard_api.add_router("/posts", posts_router)
dashboard_api.add_router("/categories", categories_router)
dashboard_api.add_router("/tags", tags_router)
dashboard_api.add_router("/profile", profile_router)


@dashboard_api.get("/health", tags=["health"], operation_id="healthCheck", summary="Health check")
def health_check(request: HttpRequest) -> dict:
    """Health check endpoint for load balancer."""
    return {"status": "ok"}
