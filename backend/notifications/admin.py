from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("type", "recipient", "status", "attempts", "sent_at", "failed_at", "created_at")
    list_filter = ("type", "status")
    search_fields = ("recipient", "subject", "order__external_order_id")
    raw_id_fields = ("order",)
    readonly_fields = (
        "order", "type", "recipient", "subject", "body", "status", "sent_at", "failed_at",
        "error_msg", "message_id", "attempts", "created_at", "updated_at",
    )

    def has_add_permission(self, request):
        return False
