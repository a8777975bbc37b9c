"""Builders and seeding helpers for order store tests."""

from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from befast.domain.model import (
    BusinessRecord,
    CarrierRecord,
    Contact,
    CourierAssignmentRecord,
    DriverRecord,
    OrderRecord,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from befast.domain.ports import TrackingUnitOfWork

CREATED_AT = datetime(2025, 3, 1, 18, 0, tzinfo=UTC)
ASSIGNED_AT = datetime(2025, 3, 1, 18, 5, tzinfo=UTC)


def make_order(**overrides: object) -> OrderRecord:
    base = OrderRecord(
        key="order-1",
        order_number="BF-1001",
        status="ASSIGNED",
        shipday_order_id="88",
        customer=Contact(
            name="María López",
            address="Av. Juárez 120, Colima",
            latitude=19.24,
            longitude=-103.72,
            phone_number="+523120000000",
        ),
        pickup=Contact(name="Tacos El Güero", address="Calle Madero 5", latitude=19.2, longitude=-103.7),
        delivery_fee=45.0,
        total_order_value=245.0,
        created_at=CREATED_AT,
        assigned_at=ASSIGNED_AT,
    )
    return replace(base, **overrides)  # type: ignore[arg-type]


def seed(
    unit_of_work_factory: Callable[[], TrackingUnitOfWork],
    *orders: OrderRecord,
    assignments: Iterable[CourierAssignmentRecord] = (),
    carriers: Iterable[CarrierRecord] = (),
    drivers: Iterable[DriverRecord] = (),
    businesses: Iterable[BusinessRecord] = (),
) -> None:
    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        for order in orders:
            repositories.orders.add(order)  # type: ignore[attr-defined]
        for assignment in assignments:
            repositories.courier_assignments.add(assignment)  # type: ignore[attr-defined]
        for carrier in carriers:
            repositories.carriers.add(carrier)  # type: ignore[attr-defined]
        for driver in drivers:
            repositories.drivers.add(driver)  # type: ignore[attr-defined]
        for business in businesses:
            repositories.businesses.add(business)  # type: ignore[attr-defined]
        uow.commit()


def load_order(
    unit_of_work_factory: Callable[[], TrackingUnitOfWork], key: str = "order-1"
) -> OrderRecord:
    with unit_of_work_factory() as uow:
        record = uow.repositories.orders.get(key)
    assert record is not None
    return record
