"""Detox Wellness URL Configuration.

API routes:
    /api/                      - index
    /api/health/, /api/auth/   - core
    /api/admin/users/          - back-office accounts (core)
    /api/admin/dashboard/      - dashboard stats
    /api/appointments/         - booking + admin management
    /api/services/             - catalog
    /api/practitioners/        - catalog
    /api/programs/             - catalog
    /api/testimonials/         - catalog
    /api/contact/              - contact inquiries
    /api/notifications/        - in-app notifications
    /api/uploads/              - file uploads (admin)
Stored files are served from /uploads/<path>.
"""

from django.conf import settings
from django.contrib import admin
from django.http import HttpResponse
from django.urls import include, path, re_path
from django.views.static import serve

from wellness_backend.catalog.urls import (
    practitioner_urlpatterns,
    program_urlpatterns,
    service_urlpatterns,
    testimonial_urlpatterns,
)
from wellness_backend.core.views import api_index, api_not_found


def root(request):
    """Plain-text liveness response for the bare host."""
    return HttpResponse("Detox Wellness backend is running.")


media_prefix = settings.MEDIA_URL.strip("/")

urlpatterns = [
    # Root & Admin
    path("", root, name="root"),
    path("admin/", admin.site.urls),

    # API Routes - the catch-all must stay last
    path("api/", api_index, name="api-index"),
    path("api/", include("wellness_backend.core.urls")),
    path("api/", include("wellness_backend.dashboard.urls")),
    path("api/appointments/", include("wellness_backend.appointments.urls")),
    path("api/services/", include(service_urlpatterns)),
    path("api/practitioners/", include(practitioner_urlpatterns)),
    path("api/programs/", include(program_urlpatterns)),
    path("api/testimonials/", include(testimonial_urlpatterns)),
    path("api/contact/", include("wellness_backend.inquiries.urls")),
    path("api/notifications/", include("wellness_backend.notifications.urls")),
    path("api/uploads/", include("wellness_backend.uploads.urls")),
    re_path(r"^api/(?P<path>.*)$", api_not_found, name="api-not-found"),

    # Stored uploads
    re_path(rf"^{media_prefix}/(?P<path>.+)$", serve, {"document_root": settings.MEDIA_ROOT}),
]
