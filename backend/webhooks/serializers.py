from rest_framework import serializers

from tracking.models import OrderStatus
from tracking.types import NewOrder, StatusChange


class OrderReceivedSerializer(serializers.Serializer):
    externalOrderId = serializers.CharField(max_length=100, source="external_order_id")
    customerEmail = serializers.EmailField(source="customer_email")
    customerPhone = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, source="customer_phone"
    )
    itemSummary = serializers.CharField(max_length=500, source="item_summary")
    deliveryAddress = serializers.CharField(max_length=500, source="delivery_address")
    initialStatus = serializers.ChoiceField(
        choices=OrderStatus.choices, required=False, allow_null=True, source="initial_status"
    )

    def to_new_order(self) -> NewOrder:
        data = self.validated_data
        return NewOrder(
            external_order_id=data["external_order_id"],
            customer_email=data["customer_email"],
            customer_phone=data.get("customer_phone") or None,
            item_summary=data["item_summary"],
            delivery_address=data["delivery_address"],
            initial_status=data.get("initial_status") or None,
        )


class StatusUpdateSerializer(serializers.Serializer):
    externalOrderId = serializers.CharField(max_length=100, source="external_order_id")
    newStatus = serializers.ChoiceField(choices=OrderStatus.choices, source="new_status")
    note = serializers.CharField(max_length=500, required=False, allow_null=True, allow_blank=True)

    def to_status_change(self) -> StatusChange:
        data = self.validated_data
        return StatusChange(
            external_order_id=data["external_order_id"],
            new_status=data["new_status"],
            note=data.get("note") or None,
        )
