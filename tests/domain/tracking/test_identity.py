from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from befast.domain.model import (
    CarrierRecord,
    CourierAssignmentRecord,
    CourierIdentity,
    DriverRecord,
    OrderRecord,
)
from befast.domain.tracking import DEFAULT_IDENTITY_RESOLVERS, resolve_fallback_identity
from tests.support.orders import make_order, seed

if TYPE_CHECKING:
    from collections.abc import Callable

    from befast.adapters.sqlalchemy import SqlAlchemyTrackingUnitOfWork
    from befast.domain.ports import TrackingRepositories

    UnitOfWorkFactory = Callable[[], SqlAlchemyTrackingUnitOfWork]


def _reader(factory: UnitOfWorkFactory):  # noqa: ANN202
    async def read[T](call: Callable[[TrackingRepositories], T]) -> T:
        with factory() as uow:
            return call(uow.repositories)

    return read


def _resolve(factory: UnitOfWorkFactory, record: OrderRecord, resolvers=DEFAULT_IDENTITY_RESOLVERS):  # noqa: ANN001, ANN202
    return asyncio.run(resolve_fallback_identity(record, resolvers, read=_reader(factory)))


def test_assignment_mirror_wins_over_carrier_and_roster(
    sqlite_unit_of_work: UnitOfWorkFactory,
) -> None:
    seed(
        sqlite_unit_of_work,
        assignments=[CourierAssignmentRecord(shipday_order_id=88, carrier_name="Luis", carrier_phone="+52 1")],
        carriers=[CarrierRecord(id="c-9", name="Carlos")],
        drivers=[DriverRecord(id="drv-1", full_name="Ana")],
    )
    record = make_order(shipday_order_id="88", assigned_carrier_id="c-9", driver_id="drv-1")

    identity = _resolve(sqlite_unit_of_work, record)

    assert identity == CourierIdentity(name="Luis", phone_number="+52 1")


def test_carrier_used_when_assignment_missing(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    seed(sqlite_unit_of_work, carriers=[CarrierRecord(id="c-9", name="Carlos", photo="https://img/c9")])
    record = make_order(shipday_order_id="88", assigned_carrier_id="c-9", driver_id="drv-1")

    identity = _resolve(sqlite_unit_of_work, record)

    assert identity is not None
    assert identity.name == "Carlos"
    assert identity.photo == "https://img/c9"


def test_roster_driver_gets_default_rating(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    seed(sqlite_unit_of_work, drivers=[DriverRecord(id="drv-1", full_name="Ana")])

    identity = _resolve(sqlite_unit_of_work, make_order(shipday_order_id="not-a-number", driver_id="drv-1"))

    assert identity == CourierIdentity(name="Ana", rating=4.5)


def test_nameless_entries_are_skipped(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    seed(
        sqlite_unit_of_work,
        assignments=[CourierAssignmentRecord(shipday_order_id=88, carrier_name="")],
        drivers=[DriverRecord(id="drv-1", full_name="Ana", average_rating=4.9)],
    )

    identity = _resolve(sqlite_unit_of_work, make_order(driver_id="drv-1"))

    assert identity == CourierIdentity(name="Ana", rating=4.9)


def test_failing_step_does_not_block_later_steps(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    seed(sqlite_unit_of_work, drivers=[DriverRecord(id="drv-1", full_name="Ana")])

    class Broken:
        name = "broken"

        def resolve(self, repositories: TrackingRepositories, record: OrderRecord) -> CourierIdentity | None:
            raise RuntimeError("collection offline")

    resolvers = (Broken(), *DEFAULT_IDENTITY_RESOLVERS)

    identity = _resolve(sqlite_unit_of_work, make_order(driver_id="drv-1"), resolvers)

    assert identity is not None
    assert identity.name == "Ana"


def test_nothing_found_returns_none(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    assert _resolve(sqlite_unit_of_work, make_order(driver_id="drv-404")) is None
