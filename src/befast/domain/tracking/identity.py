"""Recover a courier identity when neither the provider nor the order names one.

Each resolver reads one secondary collection. They are tried in order and the
first usable identity wins; a resolver that fails is logged and skipped so a
broken collection never blocks the ones after it.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from befast.domain.model import CourierIdentity, OrderRecord
    from befast.domain.ports import TrackingRepositories

log = getLogger(__name__)


class IdentityResolver(Protocol):
    name: str

    def resolve(
        self, repositories: TrackingRepositories, record: OrderRecord
    ) -> CourierIdentity | None: ...


class StoreReader(Protocol):
    """Runs a read against a fresh set of repositories, bounded in time."""

    def __call__[T](self, read: Callable[[TrackingRepositories], T], /) -> Awaitable[T]: ...


@dataclass(frozen=True, slots=True)
class AssignmentByProviderOrderId:
    """Assignment mirror keyed by the provider's numeric order id."""

    name: str = "courier_assignment"

    def resolve(
        self, repositories: TrackingRepositories, record: OrderRecord
    ) -> CourierIdentity | None:
        if record.shipday_order_id is None:
            return None
        try:
            provider_order_id = int(record.shipday_order_id)
        except ValueError:
            log.debug(
                "Order %s has non-numeric provider order id %r",
                record.order_number,
                record.shipday_order_id,
            )
            return None
        assignment = repositories.courier_assignments.get_by_shipday_order_id(provider_order_id)
        return assignment.identity() if assignment is not None else None


@dataclass(frozen=True, slots=True)
class CarrierByAssignedId:
    name: str = "carrier"

    def resolve(
        self, repositories: TrackingRepositories, record: OrderRecord
    ) -> CourierIdentity | None:
        if not record.assigned_carrier_id:
            return None
        carrier = repositories.carriers.get(record.assigned_carrier_id)
        return carrier.identity() if carrier is not None else None


@dataclass(frozen=True, slots=True)
class RosterDriverById:
    name: str = "driver_roster"

    def resolve(
        self, repositories: TrackingRepositories, record: OrderRecord
    ) -> CourierIdentity | None:
        if not record.driver_id:
            return None
        driver = repositories.drivers.get(record.driver_id)
        return driver.identity() if driver is not None else None


DEFAULT_IDENTITY_RESOLVERS: tuple[IdentityResolver, ...] = (
    AssignmentByProviderOrderId(),
    CarrierByAssignedId(),
    RosterDriverById(),
)


async def resolve_fallback_identity(
    record: OrderRecord,
    resolvers: tuple[IdentityResolver, ...],
    *,
    read: StoreReader,
) -> CourierIdentity | None:
    for resolver in resolvers:
        try:
            identity = await read(partial(resolver.resolve, record=record))
        except Exception:
            log.warning(
                "Courier lookup %s failed for order %s",
                resolver.name,
                record.order_number,
                exc_info=True,
            )
            continue
        if identity is not None:
            log.debug(
                "Courier for order %s recovered via %s", record.order_number, resolver.name
            )
            return identity
    return None
