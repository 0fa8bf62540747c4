"""URL configuration for the ForMe backend."""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView

from marketplace.api.views.prometheus_metrics import prometheus_metrics


urlpatterns = [
    path("admin/", admin.site.urls),
    # API Documentation
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    # API endpoints
    path("api/accounts/", include("accounts.urls")),
    path("api/marketplace/", include("marketplace.urls")),
    path("api/bookings/", include("bookings.urls")),
    path("api/activity/", include("activity.urls")),
    path("api/chat/", include("chat.urls")),
    path("api/waitlist/", include("waitlist.urls")),
    path("api/system/metrics/", prometheus_metrics, name="prometheus-metrics"),
]
