"""
Order ingestion: idempotent create-or-fetch and status transitions.

Both operations run their read-check-write inside one database transaction and
hand notification work to a scheduler that only fires after commit, so the
webhook response never waits on (or sees failures from) email delivery.
"""
from __future__ import annotations

import logging
from typing import Optional, Protocol
from uuid import UUID

from django.db import IntegrityError, transaction

from .models import Order, OrderStatus, StatusHistoryEntry
from .types import CreateOrderResult, NewOrder, StatusChange, UpdateStatusResult

logger = logging.getLogger(__name__)

INITIAL_HISTORY_NOTE = "Order received and tracking initiated"


class OrderNotFound(Exception):
    def __init__(self, external_order_id: str):
        self.external_order_id = external_order_id
        super().__init__(f"Order {external_order_id} not found")


class NotificationScheduler(Protocol):
    def tracking_activated(self, order_id: UUID) -> None: ...

    def status_update(self, order_id: UUID, new_status: str, note: Optional[str] = None) -> None: ...


class OrderIngestionService:
    def __init__(self, scheduler: NotificationScheduler):
        self.scheduler = scheduler

    def create_order(self, company_id, data: NewOrder) -> CreateOrderResult:
        existing = self._find(company_id, data.external_order_id)
        if existing:
            return CreateOrderResult(order_id=existing.id, status=existing.current_status, created=False)

        status = data.initial_status or OrderStatus.PENDING
        try:
            with transaction.atomic():
                order = Order.objects.create(
                    company_id=company_id,
                    external_order_id=data.external_order_id,
                    customer_email=data.customer_email,
                    customer_phone=data.customer_phone,
                    item_summary=data.item_summary,
                    delivery_address=data.delivery_address,
                    current_status=status,
                )
                StatusHistoryEntry.objects.create(order=order, status=status, note=INITIAL_HISTORY_NOTE)
        except IntegrityError:
            # Lost a race against a concurrent delivery of the same webhook.
            existing = self._find(company_id, data.external_order_id)
            if existing is None:
                raise
            logger.info("order %s created concurrently, returning existing row", data.external_order_id)
            return CreateOrderResult(order_id=existing.id, status=existing.current_status, created=False)

        logger.info("order created: company=%s external_id=%s status=%s", company_id, order.external_order_id, status)
        self.scheduler.tracking_activated(order.id)
        return CreateOrderResult(order_id=order.id, status=order.current_status, created=True)

    def update_status(self, company_id, change: StatusChange) -> UpdateStatusResult:
        with transaction.atomic():
            order = (
                Order.objects.select_for_update()
                .filter(company_id=company_id, external_order_id=change.external_order_id)
                .first()
            )
            if order is None:
                raise OrderNotFound(change.external_order_id)

            previous = order.current_status
            if previous == change.new_status:
                return UpdateStatusResult(order_id=order.id, changed=False, new_status=previous)

            order.current_status = change.new_status
            order.save(update_fields=["current_status", "updated_at"])
            StatusHistoryEntry.objects.create(order=order, status=change.new_status, note=change.note)
            self.scheduler.status_update(order.id, change.new_status, change.note)

        logger.info(
            "order %s status %s -> %s (company=%s)", order.external_order_id, previous, change.new_status, company_id
        )
        return UpdateStatusResult(
            order_id=order.id, changed=True, previous_status=previous, new_status=change.new_status
        )

    def _find(self, company_id, external_order_id: str) -> Optional[Order]:
        return Order.objects.filter(company_id=company_id, external_order_id=external_order_id).first()


def track_order(email: str, external_order_id: str) -> dict:
    """
    Customer-facing lookup by email + the merchant's order id.
    Raises Order.DoesNotExist when nothing matches.
    """
    order = (
        Order.objects.select_related("company")
        .filter(customer_email__iexact=email, external_order_id=external_order_id)
        .order_by("-created_at")
        .first()
    )
    if order is None:
        raise Order.DoesNotExist(f"Order {external_order_id} not found")

    timeline = order.status_history.order_by("-timestamp", "-id")
    return {
        "orderId": order.external_order_id,
        "currentStatus": order.current_status,
        "itemSummary": order.item_summary,
        "deliveryAddress": order.delivery_address,
        "merchant": order.company.company_name,
        "createdAt": order.created_at,
        "timeline": [{"status": h.status, "note": h.note, "timestamp": h.timestamp} for h in timeline],
    }
