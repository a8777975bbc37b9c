"""Persist facts learned from the dispatch provider back onto the order record.

Write-back is fire-and-forget: the caller hands over the facts and returns its
response without waiting. Writes run on a small thread pool so they outlive
the event loop of a single request, and failures end up in the log, never in
the caller's result.
"""

from __future__ import annotations

import concurrent.futures
import threading
import time
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from befast.config.tracking import DEFAULT_WRITE_BACK_WORKERS

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from befast.domain.model import OrderRecord
    from befast.domain.ports import TrackingUnitOfWork

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True, kw_only=True)
class WriteBackFacts:
    """New information about an order that the persistent record lacks."""

    order_key: str
    order_number: str
    driver_name: str | None = None
    shipday_carrier_id: int | None = None
    assigned_at: datetime | None = None
    tracking_link: str | None = None
    shipday_order_id: str | None = None

    def fields(self) -> dict[str, object]:
        values = asdict(self)
        del values["order_key"], values["order_number"]
        return {name: value for name, value in values.items() if value is not None}

    def is_empty(self) -> bool:
        return not self.fields()


@dataclass(frozen=True, slots=True)
class WriteBackResult:
    order_key: str
    applied: Mapping[str, object] = field(default_factory=dict)

    @property
    def changed(self) -> bool:
        return bool(self.applied)


def compute_patch(current: OrderRecord, facts: WriteBackFacts) -> dict[str, object]:
    """Columns to change so ``current`` reflects ``facts``.

    Courier fields follow the provider. Link, provider id and assignment time
    only fill gaps; a value already on the record is never replaced.
    """

    patch: dict[str, object] = {}
    if facts.driver_name and facts.driver_name != current.driver_name:
        patch["driver_name"] = facts.driver_name
    carrier_id = facts.shipday_carrier_id
    if carrier_id is not None and carrier_id != current.shipday_carrier_id:
        patch["shipday_carrier_id"] = carrier_id
    if facts.assigned_at is not None and current.assigned_at is None:
        patch["assigned_at"] = facts.assigned_at
    if facts.tracking_link and not current.tracking_link:
        patch["tracking_link"] = facts.tracking_link
    if facts.shipday_order_id and not current.shipday_order_id:
        patch["shipday_order_id"] = facts.shipday_order_id
    return patch


class WriteBackApplier:
    """Applies ``WriteBackFacts`` as idempotent upserts on the order record."""

    def __init__(
        self,
        unit_of_work_factory: Callable[[], TrackingUnitOfWork],
        *,
        max_workers: int = DEFAULT_WRITE_BACK_WORKERS,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._unit_of_work_factory = unit_of_work_factory
        self._clock = clock
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="befast-write-back"
        )
        self._pending: set[concurrent.futures.Future[WriteBackResult]] = set()
        self._idle = threading.Condition()

    def apply(self, facts: WriteBackFacts) -> WriteBackResult:
        with self._unit_of_work_factory() as uow:
            current = uow.repositories.orders.get(facts.order_key)
            if current is None:
                log.warning(
                    "Order %s vanished before write-back; dropping %s",
                    facts.order_number,
                    sorted(facts.fields()),
                )
                return WriteBackResult(facts.order_key)

            patch = compute_patch(current, facts)
            if not patch:
                return WriteBackResult(facts.order_key)

            uow.repositories.orders.update(facts.order_key, {**patch, "updated_at": self._clock()})
            uow.commit()

        log.info("Wrote back %s for order %s", ", ".join(sorted(patch)), facts.order_number)
        return WriteBackResult(facts.order_key, patch)

    def submit(self, facts: WriteBackFacts) -> concurrent.futures.Future[WriteBackResult] | None:
        """Schedule ``facts`` for background persistence. Never raises."""

        if facts.is_empty():
            return None
        try:
            future = self._executor.submit(self.apply, facts)
        except RuntimeError:
            log.exception("Write-back pool unavailable; dropping facts for %s", facts.order_number)
            return None
        with self._idle:
            self._pending.add(future)
        future.add_done_callback(partial(self._finished, facts))
        return future

    def wait(self, timeout: float | None = None) -> bool:
        """Block until every write scheduled so far has finished and been logged.

        Returns ``False`` if writes were still pending when ``timeout`` expired.
        """

        deadline = None if timeout is None else time.monotonic() + timeout
        with self._idle:
            while self._pending:
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    return False
                self._idle.wait(remaining)
        return True

    def shutdown(self, *, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _finished(
        self, facts: WriteBackFacts, future: concurrent.futures.Future[WriteBackResult]
    ) -> None:
        try:
            if future.cancelled():
                log.warning("Write-back for order %s was cancelled", facts.order_number)
            elif (error := future.exception()) is not None:
                log.error("Write-back failed for order %s", facts.order_number, exc_info=error)
        finally:
            with self._idle:
                self._pending.discard(future)
                self._idle.notify_all()
