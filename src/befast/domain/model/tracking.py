"""Values flowing through a tracking reconciliation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from .couriers import CourierIdentity
    from .enums import LifecycleStage
    from .orders import Contact, Coordinate, LineItem


@dataclass(frozen=True, slots=True)
class TimelineEntry:
    stage: LifecycleStage
    timestamp: datetime
    description: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderOrderDetail:
    """The dispatch provider's current view of an order (never persisted verbatim)."""

    order_id: int | None = None
    order_number: str | None = None
    status: str | None = None
    assigned_carrier_id: int | None = None
    courier: CourierIdentity | None = None
    customer: Contact | None = None
    business: Contact | None = None
    activity_log: dict[LifecycleStage, datetime] = field(default_factory=dict)
    proof_of_delivery: tuple[str, ...] | None = None
    tracking_link: str | None = None
    # Documented by the provider as always empty; kept only so nothing reads it by accident.
    static_eta: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderProgress:
    courier_location: Coordinate | None = None
    eta_minutes: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class TrackingSnapshot:
    """Tracking data derivable from the persistent record alone."""

    order_number: str
    status: str | None
    customer: Contact
    business: Contact
    courier: CourierIdentity | None
    items: tuple[LineItem, ...]
    delivery_fee: float
    total_cost: float
    timeline: tuple[TimelineEntry, ...]
    proof_of_delivery: tuple[str, ...]
    created_at: datetime | None = None
    delivered_at: datetime | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class TrackingView:
    """Reconciled, point-in-time tracking state of one order."""

    order_number: str
    status: str | None
    customer: Contact
    business: Contact
    courier: CourierIdentity | None
    courier_location: Coordinate | None
    eta_minutes: int | None
    items: tuple[LineItem, ...]
    delivery_fee: float
    total_cost: float
    timeline: tuple[TimelineEntry, ...]
    proof_of_delivery: tuple[str, ...]
    created_at: datetime | None = None
    delivered_at: datetime | None = None
