"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from befast.domain.ports.persistence import (
        BusinessRepository,
        CarrierRepository,
        CourierAssignmentRepository,
        DriverRepository,
        OrderRepository,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection."""

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class TrackingRepositories(RepositoryCollection):
    """Repositories the tracking engine reads from and writes back to."""

    orders: OrderRepository
    courier_assignments: CourierAssignmentRepository
    carriers: CarrierRepository
    drivers: DriverRepository
    businesses: BusinessRepository


type TrackingUnitOfWork = UnitOfWork[TrackingRepositories]
