from django.db import models
from django.db.models import Q
from django.utils import timezone

from common.models import BaseModel


class Notification(BaseModel):
    """
    One customer email about one order. Created on first dispatch and updated
    in place by retries, so it doubles as the delivery audit trail.
    """
    class Type(models.TextChoices):
        TRACKING_ACTIVATED = "TRACKING_ACTIVATED", "Tracking Activated"
        STATUS_UPDATE = "STATUS_UPDATE", "Status Update"

    class Status(models.TextChoices):
        SENT = "SENT", "Sent"
        FAILED = "FAILED", "Failed"

    order = models.ForeignKey("tracking.Order", on_delete=models.CASCADE, related_name="notifications")
    type = models.CharField(max_length=24, choices=Type.choices)

    recipient = models.EmailField()
    subject = models.CharField(max_length=255)
    body = models.TextField()  # rendered html; retries resend it verbatim

    status = models.CharField(max_length=8, choices=Status.choices)
    sent_at = models.DateTimeField(blank=True, null=True)
    failed_at = models.DateTimeField(blank=True, null=True)
    error_msg = models.TextField(blank=True, null=True)
    message_id = models.CharField(max_length=255, blank=True, null=True)
    attempts = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "created_at"], name="notification_retry_idx"),
            models.Index(fields=["order", "created_at"], name="notification_order_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(status="SENT", sent_at__isnull=False, failed_at__isnull=True, error_msg__isnull=True)
                    | Q(status="FAILED", sent_at__isnull=True, failed_at__isnull=False, error_msg__isnull=False)
                ),
                name="notification_outcome_consistent",
            ),
        ]

    def __str__(self):
        return f"{self.type} -> {self.recipient} [{self.status}]"

    def apply_result(self, result, at=None):
        """Overwrite the outcome fields from a transport SendResult."""
        at = at or timezone.now()
        self.attempts += 1
        if result.success:
            self.status = self.Status.SENT
            self.sent_at, self.failed_at = at, None
            self.error_msg = None
            self.message_id = result.message_id
        else:
            self.status = self.Status.FAILED
            self.sent_at, self.failed_at = None, at
            self.error_msg = result.error or "An unknown error occurred"
