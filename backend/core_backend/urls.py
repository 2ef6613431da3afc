"""
URL configuration for core_backend project.

Each app owns its own router; this module only mounts them under /api/.
"""

from django.contrib import admin
from django.urls import path, include
from django.http import JsonResponse


def health_check(request):
    """Simple health check endpoint that doesn't require authentication"""
    return JsonResponse({"status": "ok", "message": "Backend is running"})


urlpatterns = [
    path("api/health/", health_check, name="health_check"),
    path("admin/", admin.site.urls),
    path("api/", include("users.urls")),
    path("api/", include("products.urls")),
    path("api/", include("tables.urls")),
    # The orders app registers both /orders/ and /order-items/ itself.
    path("api/", include("orders.urls")),
]
