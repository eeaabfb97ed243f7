import logging

from rest_framework import exceptions, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.exceptions import ConflictError
from notifications.scheduling import CeleryNotificationScheduler
from tracking.services import OrderIngestionService, OrderNotFound

from .authentication import WebhookSecretAuthentication
from .serializers import OrderReceivedSerializer, StatusUpdateSerializer
from .throttling import CompanyScopedRateThrottle, WebhookAuthFailureThrottle

logger = logging.getLogger(__name__)


class CompanyWebhookView(APIView):
    """
    Base for company → us webhooks: X-Webhook-Secret auth, per-company throttle.
    request.auth is the authenticated company id.
    """
    authentication_classes = [WebhookSecretAuthentication]
    permission_classes = [IsAuthenticated]
    throttle_classes = [CompanyScopedRateThrottle]
    scheduler_class = CeleryNotificationScheduler

    def perform_authentication(self, request):
        # DRF authenticates before throttling; rejected secrets are counted here, per IP
        throttle = WebhookAuthFailureThrottle()
        if throttle.is_locked_out(request, self):
            self.throttled(request, throttle.wait())
        try:
            super().perform_authentication(request)
        except exceptions.AuthenticationFailed:
            throttle.record_failure()
            raise

    def get_service(self) -> OrderIngestionService:
        return OrderIngestionService(scheduler=self.scheduler_class())


class OrderReceivedView(CompanyWebhookView):
    """POST /api/v1/webhooks/order-received"""
    throttle_scope = "webhook-order-received"

    def post(self, request):
        serializer = OrderReceivedSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().create_order(request.auth, serializer.to_new_order())
        return Response({
            "success": True,
            "orderId": str(result.order_id),
            "trackingStatus": result.status,
            "message": "Order received and tracking activated" if result.created else "Order already exists",
        }, status=status.HTTP_200_OK)


class StatusUpdateView(CompanyWebhookView):
    """POST /api/v1/webhooks/status-update"""
    throttle_scope = "webhook-status-update"

    def post(self, request):
        serializer = StatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        change = serializer.to_status_change()

        try:
            result = self.get_service().update_status(request.auth, change)
        except OrderNotFound as e:
            logger.warning("status update for unknown order %s (company=%s)", e.external_order_id, request.auth)
            raise ConflictError(str(e))

        if not result.changed:
            return Response({
                "success": True,
                "message": "Status unchanged",
                "currentStatus": result.new_status,
            })
        return Response({
            "success": True,
            "orderId": str(result.order_id),
            "previousStatus": result.previous_status,
            "newStatus": result.new_status,
            "message": "Status updated successfully",
        })
