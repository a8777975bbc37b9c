"""Typed records used by the tracking engine."""

from __future__ import annotations

from .couriers import (
    DEFAULT_DRIVER_RATING,
    CarrierRecord,
    CourierAssignmentRecord,
    CourierIdentity,
    DriverRecord,
)
from .enums import (
    DELIVERED_STATUSES,
    STAGE_DESCRIPTIONS,
    UNASSIGNED_CARRIER_ID,
    FieldSource,
    LifecycleStage,
    is_delivered,
)
from .orders import BusinessRecord, Contact, Coordinate, LineItem, OrderRecord
from .tracking import (
    ProviderOrderDetail,
    ProviderProgress,
    TimelineEntry,
    TrackingSnapshot,
    TrackingView,
)

__all__ = [
    "DEFAULT_DRIVER_RATING",
    "DELIVERED_STATUSES",
    "STAGE_DESCRIPTIONS",
    "UNASSIGNED_CARRIER_ID",
    "BusinessRecord",
    "CarrierRecord",
    "Contact",
    "Coordinate",
    "CourierAssignmentRecord",
    "CourierIdentity",
    "DriverRecord",
    "FieldSource",
    "LifecycleStage",
    "LineItem",
    "OrderRecord",
    "ProviderOrderDetail",
    "ProviderProgress",
    "TimelineEntry",
    "TrackingSnapshot",
    "TrackingView",
    "is_delivered",
]
