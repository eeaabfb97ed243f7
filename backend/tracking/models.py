from django.db import models
from django.db.models.functions import Now

from common.models import BaseModel


class OrderStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    IN_TRANSIT = "IN_TRANSIT", "In Transit"
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY", "Out for Delivery"
    DELIVERED = "DELIVERED", "Delivered"


class Order(BaseModel):
    """
    An order pushed by a company webhook. `current_status` is only changed by
    tracking.services.OrderIngestionService, which also appends the history.
    """
    company = models.ForeignKey("companies.Company", on_delete=models.CASCADE, related_name="orders")
    external_order_id = models.CharField(max_length=100)

    customer_email = models.EmailField()
    customer_phone = models.TextField(blank=True, null=True)
    item_summary = models.CharField(max_length=500)
    delivery_address = models.CharField(max_length=500)

    current_status = models.CharField(max_length=20, choices=OrderStatus.choices, default=OrderStatus.PENDING)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["company", "external_order_id"], name="uniq_external_order_per_company"),
        ]
        indexes = [
            models.Index(fields=["customer_email", "external_order_id"], name="order_customer_lookup_idx"),
            models.Index(fields=["company", "current_status"], name="order_company_status_idx"),
        ]

    def __str__(self):
        return f"{self.external_order_id} ({self.current_status})"


class StatusHistoryEntry(models.Model):
    id = models.BigAutoField(primary_key=True)
    order = models.ForeignKey("tracking.Order", on_delete=models.CASCADE, related_name="status_history")
    status = models.CharField(max_length=20, choices=OrderStatus.choices)
    note = models.CharField(max_length=500, blank=True, null=True)
    # database clock, shared by every worker
    timestamp = models.DateTimeField(db_default=Now(), editable=False)

    class Meta:
        # id breaks ties between entries appended within the same clock tick
        ordering = ["timestamp", "id"]
        indexes = [models.Index(fields=["order", "timestamp"], name="history_order_ts_idx")]
        verbose_name_plural = "status history entries"

    def __str__(self):
        return f"{self.order_id} -> {self.status}"
