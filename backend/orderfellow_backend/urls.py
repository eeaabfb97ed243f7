# File: backend/orderfellow_backend/urls.py
from django.contrib import admin
from django.urls import path, include
from django.http import JsonResponse
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from core.views import ping


def root(_r):
    return JsonResponse({
        "service": "orderfellow-backend",
        "docs": "/api/docs/",
        "health": "/ping/",
    })


urlpatterns = [
    path("ping/", ping, name="ping"),
    path("admin/", admin.site.urls),

    # API docs
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),

    # Merchant webhooks (X-Webhook-Secret)
    path("api/v1/webhooks/", include("webhooks.urls")),
    # Public customer tracking
    path("api/v1/orders/", include("tracking.urls")),

    path("", root),
]
