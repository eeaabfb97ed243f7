from rest_framework import serializers


class TimelineEntrySerializer(serializers.Serializer):
    status = serializers.CharField()
    note = serializers.CharField(allow_null=True)
    timestamp = serializers.DateTimeField()


class TrackedOrderSerializer(serializers.Serializer):
    orderId = serializers.CharField()
    currentStatus = serializers.CharField()
    itemSummary = serializers.CharField()
    deliveryAddress = serializers.CharField()
    merchant = serializers.CharField()
    createdAt = serializers.DateTimeField()
    timeline = TimelineEntrySerializer(many=True)
