from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from django.template.loader import render_to_string

STATUS_ICONS = {
    "PENDING": "⏳",
    "IN_TRANSIT": "🚚",
    "OUT_FOR_DELIVERY": "📦",
    "DELIVERED": "✅",
}


@dataclass(frozen=True)
class OrderEmailContext:
    external_order_id: str
    item_summary: str
    delivery_address: str
    current_status: str

    @classmethod
    def from_order(cls, order) -> "OrderEmailContext":
        return cls(
            external_order_id=order.external_order_id,
            item_summary=order.item_summary,
            delivery_address=order.delivery_address,
            current_status=order.current_status,
        )


class EmailRenderer(Protocol):
    def render_tracking_activated(self, ctx: OrderEmailContext) -> str: ...

    def render_status_update(self, ctx: OrderEmailContext, new_status: str, note: Optional[str] = None) -> str: ...


class TemplateEmailRenderer:
    """Renders the customer emails from notifications/templates/notifications/*.html."""

    def render_tracking_activated(self, ctx: OrderEmailContext) -> str:
        return render_to_string("notifications/tracking_activated.html", {"order": ctx})

    def render_status_update(self, ctx: OrderEmailContext, new_status: str, note: Optional[str] = None) -> str:
        return render_to_string("notifications/status_update.html", {
            "order": ctx,
            "status_icon": STATUS_ICONS.get(new_status, ""),
            "status_label": new_status.replace("_", " "),
            "note": note,
        })

    def render_test_email(self, sent_at) -> str:
        return render_to_string("notifications/test_email.html", {"sent_at": sent_at})
