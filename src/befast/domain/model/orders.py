"""Persistent order records as read by the tracking engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .enums import LifecycleStage

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True, slots=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True, kw_only=True)
class Contact:
    """Name, address and location of either end of a delivery."""

    name: str
    address: str
    latitude: float = 0.0
    longitude: float = 0.0
    phone_number: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class LineItem:
    name: str
    quantity: int = 1
    unit_price: float = 0.0


@dataclass(frozen=True, slots=True, kw_only=True)
class BusinessRecord:
    id: str
    name: str
    address: str
    latitude: float = 0.0
    longitude: float = 0.0


@dataclass(frozen=True, slots=True, kw_only=True)
class OrderRecord:
    """The durable, webhook-maintained view of one order.

    ``key`` is the storage key; ``order_number`` is the customer-facing
    reference printed on tracking links.
    """

    key: str
    order_number: str
    status: str | None = None
    shipday_order_id: str | None = None
    shipday_order_number: str | None = None
    tracking_link: str | None = None
    driver_id: str | None = None
    driver_name: str | None = None
    shipday_carrier_id: int | None = None
    assigned_carrier_id: str | None = None
    business_id: str | None = None
    order_description: str | None = None
    customer: Contact | None = None
    pickup: Contact | None = None
    order_items: tuple[LineItem, ...] = field(default_factory=tuple)
    proof_of_delivery: tuple[str, ...] = field(default_factory=tuple)
    delivery_fee: float | None = None
    total_order_value: float | None = None
    created_at: datetime | None = None
    assigned_at: datetime | None = None
    started_at: datetime | None = None
    picked_up_at: datetime | None = None
    delivered_at: datetime | None = None
    updated_at: datetime | None = None

    def lifecycle_timestamps(self) -> dict[LifecycleStage, datetime]:
        """Return the discrete lifecycle timestamps present on the record."""

        candidates = {
            LifecycleStage.CREATED: self.created_at,
            LifecycleStage.ASSIGNED: self.assigned_at,
            LifecycleStage.STARTED: self.started_at,
            LifecycleStage.PICKED_UP: self.picked_up_at,
            LifecycleStage.DELIVERED: self.delivered_at,
        }
        return {stage: value for stage, value in candidates.items() if value is not None}
