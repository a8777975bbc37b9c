"""Domain port definitions for adapters."""

from __future__ import annotations

from .dispatch import DispatchProvider
from .persistence import (
    BusinessRepository,
    CarrierRepository,
    CourierAssignmentRepository,
    DriverRepository,
    OrderPatch,
    OrderRepository,
)
from .unit_of_work import (
    RepositoryCollection,
    TrackingRepositories,
    TrackingUnitOfWork,
    UnitOfWork,
)

__all__ = [
    "BusinessRepository",
    "CarrierRepository",
    "CourierAssignmentRepository",
    "DispatchProvider",
    "DriverRepository",
    "OrderPatch",
    "OrderRepository",
    "RepositoryCollection",
    "TrackingRepositories",
    "TrackingUnitOfWork",
    "UnitOfWork",
]
