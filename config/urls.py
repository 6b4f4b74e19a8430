"""
URL configuration for the CMS.
"""

from django.contrib import admin
from django.urls import path

from .api import dashboard_api, public_api

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/v1/", public_api.urls),
    path("api/dashboard/", dashboard_api.urls),
]
