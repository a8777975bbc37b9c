"""Ports for reading and updating the persistent order store."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from befast.domain.model import (
        BusinessRecord,
        CarrierRecord,
        CourierAssignmentRecord,
        DriverRecord,
        OrderRecord,
    )

# Column-level patch; keys are ``OrderRecord`` field names.
type OrderPatch = Mapping[str, object]


@runtime_checkable
class OrderRepository(Protocol):
    """Persistence contract for order records.

    Finder methods return every match ordered by storage key so callers can
    decide how to treat ambiguity.
    """

    def get(self, key: str) -> OrderRecord | None: ...

    def find_by_order_number(self, order_number: str) -> tuple[OrderRecord, ...]: ...

    def find_by_shipday_order_id(self, shipday_order_id: str) -> tuple[OrderRecord, ...]: ...

    def update(self, key: str, patch: OrderPatch) -> None: ...


@runtime_checkable
class CourierAssignmentRepository(Protocol):
    def get_by_shipday_order_id(self, shipday_order_id: int) -> CourierAssignmentRecord | None: ...


@runtime_checkable
class CarrierRepository(Protocol):
    def get(self, carrier_id: str) -> CarrierRecord | None: ...


@runtime_checkable
class DriverRepository(Protocol):
    def get(self, driver_id: str) -> DriverRecord | None: ...


@runtime_checkable
class BusinessRepository(Protocol):
    def get(self, business_id: str) -> BusinessRecord | None: ...
