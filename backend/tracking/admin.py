from django.contrib import admin

from .models import Order, StatusHistoryEntry


class StatusHistoryInline(admin.TabularInline):
    model = StatusHistoryEntry
    extra = 0
    can_delete = False
    readonly_fields = ("status", "note", "timestamp")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("external_order_id", "company", "customer_email", "current_status", "created_at")
    list_filter = ("current_status", "company")
    search_fields = ("external_order_id", "customer_email", "company__company_name")
    # status changes go through the webhook so history stays consistent
    readonly_fields = ("current_status", "created_at", "updated_at")
    inlines = [StatusHistoryInline]
