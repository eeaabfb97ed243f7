from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class NewOrder:
    external_order_id: str
    customer_email: str
    item_summary: str
    delivery_address: str
    customer_phone: Optional[str] = None
    initial_status: Optional[str] = None


@dataclass(frozen=True)
class StatusChange:
    external_order_id: str
    new_status: str
    note: Optional[str] = None


@dataclass(frozen=True)
class CreateOrderResult:
    order_id: UUID
    status: str
    created: bool


@dataclass(frozen=True)
class UpdateStatusResult:
    order_id: UUID
    changed: bool
    new_status: str
    previous_status: Optional[str] = None
