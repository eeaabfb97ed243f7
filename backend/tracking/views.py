from rest_framework.exceptions import NotFound
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from .models import Order
from .serializers import TrackedOrderSerializer
from .services import track_order


class TrackOrderView(APIView):
    """
    GET /api/v1/orders/track/<email>/<external_order_id>/
    Public: customers look up their own order by email + merchant order id.
    """
    authentication_classes = []
    permission_classes = [AllowAny]
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "tracking-lookup"

    def get(self, request, email, external_order_id):
        try:
            data = track_order(email=email, external_order_id=external_order_id)
        except Order.DoesNotExist:
            raise NotFound("Order not found")
        return Response(TrackedOrderSerializer(data).data)
