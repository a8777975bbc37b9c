"""SQLAlchemy adapter for the persistent order store."""

from __future__ import annotations

from .mappings import (
    businesses_table,
    carriers_table,
    courier_assignments_table,
    create_all_tables,
    drivers_table,
    metadata,
    orders_table,
)
from .repositories import (
    SqlAlchemyBusinessRepository,
    SqlAlchemyCarrierRepository,
    SqlAlchemyCourierAssignmentRepository,
    SqlAlchemyDriverRepository,
    SqlAlchemyOrderRepository,
)
from .unit_of_work import (
    SqlAlchemyTrackingUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyBusinessRepository",
    "SqlAlchemyCarrierRepository",
    "SqlAlchemyCourierAssignmentRepository",
    "SqlAlchemyDriverRepository",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyTrackingUnitOfWork",
    "StartupError",
    "businesses_table",
    "carriers_table",
    "configured_engine",
    "courier_assignments_table",
    "create_all_tables",
    "drivers_table",
    "is_started",
    "metadata",
    "orders_table",
    "shutdown",
    "startup",
]
