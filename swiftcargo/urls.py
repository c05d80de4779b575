"""SwiftCargo root URL configuration."""

from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    path("admin/", admin.site.urls),

    # OpenAPI / Interactive Docs
    path("api/schema/",  SpectacularAPIView.as_view(),       name="schema"),
    path("api/docs/",    SpectacularSwaggerView.as_view(),   name="swagger-ui"),

    # Auth
    path("api/auth/",    include("apps.authentication.urls")),

    # Orders, pricing, tracking
    path("api/",         include("apps.orders.urls")),
    path("api/track/",   include("apps.tracking.urls")),

    # Ops
    path("api/health/",  include("apps.ops.health_urls")),
    path("api/ops/",     include("apps.ops.ops_urls")),

    # Prometheus exporter
    path("", include("django_prometheus.urls")),
]
