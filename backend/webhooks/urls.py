from django.urls import path

from .views import OrderReceivedView, StatusUpdateView

urlpatterns = [
    path("order-received", OrderReceivedView.as_view(), name="webhook-order-received"),
    path("status-update", StatusUpdateView.as_view(), name="webhook-status-update"),
]
