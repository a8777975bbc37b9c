"""Domain enums and fixed vocabularies (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class LifecycleStage(StrEnum):
    CREATED = "CREATED"
    ASSIGNED = "ASSIGNED"
    STARTED = "STARTED"
    PICKED_UP = "PICKED_UP"
    ARRIVED = "ARRIVED"
    DELIVERED = "DELIVERED"


STAGE_DESCRIPTIONS: Final[dict[LifecycleStage, str]] = {
    LifecycleStage.CREATED: "Order created",
    LifecycleStage.ASSIGNED: "Courier assigned",
    LifecycleStage.STARTED: "Courier on the way to pickup",
    LifecycleStage.PICKED_UP: "Order picked up",
    LifecycleStage.ARRIVED: "Courier arrived at destination",
    LifecycleStage.DELIVERED: "Order delivered",
}


class FieldSource(StrEnum):
    """Which source supplied a reconciled field."""

    PROVIDER_PROGRESS = "provider_progress"
    PROVIDER_DETAIL = "provider_detail"
    PERSISTENT = "persistent"
    FALLBACK = "fallback"
    NONE = "none"


# Provider vocabulary plus the value the ingestion pipeline writes itself.
DELIVERED_STATUSES: Final[frozenset[str]] = frozenset({"ALREADY_DELIVERED", "DELIVERED"})

# The dispatch provider reports "nobody assigned yet" with this carrier id.
UNASSIGNED_CARRIER_ID: Final[int] = -1


def is_delivered(status: str | None) -> bool:
    return status is not None and status.upper() in DELIVERED_STATUSES
