"""
Customer email dispatch for order events.

Dispatch runs in a Celery worker (see notifications.tasks), never inside the
webhook request. Every attempt leaves exactly one Notification row behind;
retries update that same row instead of adding new ones.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from tracking.models import Order
from .models import Notification
from .rendering import EmailRenderer, OrderEmailContext, TemplateEmailRenderer
from .transport import DjangoEmailTransport, EmailTransport, SendResult

logger = logging.getLogger(__name__)

SUBJECTS = {
    Notification.Type.TRACKING_ACTIVATED: "Order {external_order_id} - Tracking Activated",
    Notification.Type.STATUS_UPDATE: "Order {external_order_id} - Status Update",
}


@dataclass(frozen=True)
class RetrySummary:
    total: int = 0
    success: int = 0
    failed: int = 0


def record_outcome(result: SendResult, notification: Optional[Notification] = None, **fields) -> Notification:
    """
    Find-or-create, then update. First dispatch passes the composed fields,
    retries pass the existing row; both go through apply_result().
    """
    if notification is None:
        notification = Notification(**fields)
    notification.apply_result(result)
    notification.save()
    return notification


class NotificationDispatcher:
    def __init__(self, transport: EmailTransport, renderer: EmailRenderer, retry_window: Optional[timedelta] = None):
        self.transport = transport
        self.renderer = renderer
        self.retry_window = retry_window or timedelta(hours=24)

    # ---- dispatch ----
    def dispatch_tracking_activated(self, order_id) -> Optional[Notification]:
        return self._dispatch(order_id, Notification.Type.TRACKING_ACTIVATED)

    def dispatch_status_update(self, order_id, new_status: str, note: Optional[str] = None) -> Optional[Notification]:
        return self._dispatch(order_id, Notification.Type.STATUS_UPDATE, new_status=new_status, note=note)

    def _dispatch(self, order_id, kind: str, new_status: Optional[str] = None, note: Optional[str] = None):
        order = Order.objects.filter(id=order_id).first()
        if order is None:
            logger.info("skipping %s notification: order %s no longer exists", kind, order_id)
            return None

        try:
            ctx = OrderEmailContext.from_order(order)
            if kind == Notification.Type.TRACKING_ACTIVATED:
                body = self.renderer.render_tracking_activated(ctx)
            else:
                body = self.renderer.render_status_update(ctx, new_status, note)
            subject = SUBJECTS[kind].format(external_order_id=order.external_order_id)

            result = self._send(order.customer_email, subject, body)
            notification = record_outcome(
                result, order=order, type=kind, recipient=order.customer_email, subject=subject, body=body,
            )
        except Exception:
            logger.exception("%s notification for order %s could not be dispatched", kind, order_id)
            return None

        logger.info("%s notification for order %s: %s", kind, order.external_order_id, notification.status)
        return notification

    # ---- retry ----
    def retry_failed(self) -> RetrySummary:
        """
        Resend FAILED notifications created within the retry window.

        Each row is locked while it is resent (skip_locked), so an overlapping
        run (beat job vs. management command) skips rows already in flight and
        `attempts` is never incremented from a stale copy.
        """
        since = timezone.now() - self.retry_window
        candidate_ids = list(
            Notification.objects.filter(status=Notification.Status.FAILED, created_at__gte=since)
            .order_by("created_at")
            .values_list("id", flat=True)
        )
        if not candidate_ids:
            return RetrySummary()

        logger.info("retrying %d failed notifications", len(candidate_ids))
        total = success = failed = 0
        for notification_id in candidate_ids:
            try:
                with transaction.atomic():
                    notification = (
                        Notification.objects.select_for_update(skip_locked=True)
                        .filter(id=notification_id, status=Notification.Status.FAILED)
                        .first()
                    )
                    if notification is None:
                        # taken or resolved by a concurrent run
                        continue
                    total += 1
                    result = self._send(notification.recipient, notification.subject, notification.body)
                    record_outcome(result, notification=notification)
            except Exception:
                logger.exception("retry of notification %s failed", notification_id)
                failed += 1
                continue
            if result.success:
                success += 1
            else:
                failed += 1

        summary = RetrySummary(total=total, success=success, failed=failed)
        logger.info("retried %d/%d notifications successfully", summary.success, summary.total)
        return summary

    def _send(self, to: str, subject: str, html: str) -> SendResult:
        try:
            return self.transport.send(to, subject, html)
        except Exception as e:
            # transport exceptions count as a failed send
            logger.exception("email transport raised for %s", to)
            return SendResult(success=False, error=str(e) or e.__class__.__name__)


def build_dispatcher() -> NotificationDispatcher:
    hours = int(getattr(settings, "NOTIFICATION_RETRY_WINDOW_HOURS", 24))
    return NotificationDispatcher(
        transport=DjangoEmailTransport(),
        renderer=TemplateEmailRenderer(),
        retry_window=timedelta(hours=hours),
    )
