"""GetTracking: the tracking engine's single public operation."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from befast.config.tracking import TrackingConfig

from .errors import OrderNotFoundError, TrackingUnavailableError
from .identifiers import (
    DEFAULT_LOOKUP_STRATEGIES,
    LookupStrategy,
    provider_order_identifier,
    resolve_order,
    tracking_token,
)
from .identity import DEFAULT_IDENTITY_RESOLVERS, IdentityResolver, resolve_fallback_identity
from .reconcile import provider_courier, reconcile
from .snapshot import build_snapshot

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from befast.domain.model import (
        BusinessRecord,
        DriverRecord,
        OrderRecord,
        ProviderOrderDetail,
        ProviderProgress,
        TrackingView,
    )
    from befast.domain.ports import DispatchProvider, TrackingRepositories, TrackingUnitOfWork

    from .write_back import WriteBackApplier

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class TrackingService:
    """Answers "where is my order?" from the order store and the dispatch provider.

    Store reads run in worker threads bounded by ``config.store_timeout_seconds``
    and each read gets its own unit of work. Without a ``dispatch`` provider the
    answer is built from persistent data alone.
    """

    unit_of_work_factory: Callable[[], TrackingUnitOfWork]
    write_back: WriteBackApplier
    dispatch: DispatchProvider | None = None
    config: TrackingConfig = field(default_factory=TrackingConfig)
    lookup_strategies: tuple[LookupStrategy, ...] = DEFAULT_LOOKUP_STRATEGIES
    identity_resolvers: tuple[IdentityResolver, ...] = DEFAULT_IDENTITY_RESOLVERS
    clock: Callable[[], datetime] = _utcnow

    async def get_tracking(self, reference: str) -> TrackingView:
        """Return the reconciled tracking view for ``reference``.

        Raises ``OrderNotFoundError`` when nothing matches and
        ``TrackingUnavailableError`` when the order store cannot be read.
        Provider problems only make the answer staler.
        """

        record = await self._load_order(reference)
        business = await self._load_business(record)
        driver = await self._load_driver(record)
        snapshot = build_snapshot(
            record,
            business=business,
            driver=driver,
            default_delivery_fee=self.config.default_delivery_fee,
        )

        detail, progress = await self._fetch_provider_state(record)

        fallback_courier = None
        if provider_courier(detail) is None and snapshot.courier is None:
            fallback_courier = await resolve_fallback_identity(
                record, self.identity_resolvers, read=self._read
            )

        result = reconcile(
            record,
            snapshot,
            detail=detail,
            progress=progress,
            fallback_courier=fallback_courier,
            now=self.clock(),
        )
        if not result.facts.is_empty():
            self.write_back.submit(result.facts)

        view = result.view
        log.info(
            "Tracking %s: status=%s (%s) courier=%s (%s) location=%s (%s) eta=%s (%s)"
            " timeline=%d (%s)",
            record.order_number,
            view.status,
            result.sources["status"],
            view.courier is not None,
            result.sources["courier"],
            view.courier_location is not None,
            result.sources["courier_location"],
            view.eta_minutes,
            result.sources["eta_minutes"],
            len(view.timeline),
            result.sources["timeline"],
        )
        return view

    async def aclose(self) -> None:
        """Release the dispatch provider's connections; write-back is left running."""

        if self.dispatch is not None:
            await self.dispatch.aclose()

    async def _read[T](self, read: Callable[[TrackingRepositories], T]) -> T:
        return await asyncio.wait_for(
            asyncio.to_thread(self._run_read, read),
            timeout=self.config.store_timeout_seconds,
        )

    def _run_read[T](self, read: Callable[[TrackingRepositories], T]) -> T:
        with self.unit_of_work_factory() as uow:
            return read(uow.repositories)

    async def _load_order(self, reference: str) -> OrderRecord:
        lookup = partial(
            resolve_order,
            reference=reference,
            strategies=self.lookup_strategies,
            strict=self.config.strict_lookup,
        )
        try:
            return await self._read(lookup)
        except OrderNotFoundError:
            log.info("No order matches reference %r", reference)
            raise
        except TimeoutError as exc:
            raise TrackingUnavailableError(
                f"Order store timed out looking up {reference!r}"
            ) from exc
        except Exception as exc:
            raise TrackingUnavailableError(
                f"Order store failed looking up {reference!r}"
            ) from exc

    async def _load_business(self, record: OrderRecord) -> BusinessRecord | None:
        business_id = record.business_id
        if not business_id:
            return None
        try:
            return await self._read(lambda repositories: repositories.businesses.get(business_id))
        except Exception:
            log.warning(
                "Business %s lookup failed for order %s",
                business_id,
                record.order_number,
                exc_info=True,
            )
            return None

    async def _load_driver(self, record: OrderRecord) -> DriverRecord | None:
        driver_id = record.driver_id
        # Only a stored driver name is enriched; a bare driver id is left to
        # the fallback identity chain.
        if not driver_id or not record.driver_name:
            return None
        try:
            return await self._read(lambda repositories: repositories.drivers.get(driver_id))
        except Exception:
            log.warning(
                "Driver %s lookup failed for order %s",
                driver_id,
                record.order_number,
                exc_info=True,
            )
            return None

    async def _fetch_provider_state(
        self, record: OrderRecord
    ) -> tuple[ProviderOrderDetail | None, ProviderProgress | None]:
        if self.dispatch is None:
            log.debug("No dispatch provider; order %s served from store", record.order_number)
            return None, None

        identifier = provider_order_identifier(record)
        token = tracking_token(record.tracking_link)
        if token is not None:
            detail, progress = await asyncio.gather(
                self._soft(self.dispatch.fetch_order_detail(identifier), "detail", record),
                self._soft(self.dispatch.fetch_progress(token), "progress", record),
            )
            return detail, progress

        # The tracking link, and with it the progress token, may only be known
        # to the provider so far.
        detail = await self._soft(self.dispatch.fetch_order_detail(identifier), "detail", record)
        token = tracking_token(detail.tracking_link) if detail is not None else None
        if token is None:
            return detail, None
        progress = await self._soft(self.dispatch.fetch_progress(token), "progress", record)
        return detail, progress

    async def _soft[T](self, call: Awaitable[T | None], what: str, record: OrderRecord) -> T | None:
        try:
            return await call
        except Exception:
            log.warning(
                "Dispatch provider %s call raised for order %s",
                what,
                record.order_number,
                exc_info=True,
            )
            return None
