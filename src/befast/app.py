"""Application wiring: build a tracking service from configured adapters."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Any

from befast.adapters.shipday import ShipdayClient
from befast.adapters.sqlalchemy.migrations import current_revision
from befast.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyTrackingUnitOfWork,
    configured_engine,
    is_started,
    startup,
)
from befast.config import get_shipday_config, get_tracking_config
from befast.domain.tracking import TrackingService, WriteBackApplier, to_wire

if TYPE_CHECKING:
    from collections.abc import Callable

    from befast.config import ShipdayConfig, TrackingConfig
    from befast.domain.model import TrackingView
    from befast.domain.ports import DispatchProvider, TrackingUnitOfWork

type UnitOfWorkFactory = Callable[[], TrackingUnitOfWork]

log = getLogger(__name__)


def build_dispatch_provider(config: ShipdayConfig | None = None) -> DispatchProvider | None:
    shipday = config or get_shipday_config()
    if shipday is None:
        log.warning("SHIPDAY_API_KEY is not set; tracking will use stored order data only")
        return None
    return ShipdayClient(config=shipday)


def build_tracking_service(
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    dispatch: DispatchProvider | None = None,
    config: TrackingConfig | None = None,
) -> TrackingService:
    """Wire a ``TrackingService`` from the environment.

    Without an explicit ``unit_of_work_factory`` the SQLAlchemy adapter is
    started (if needed) and used. Without an explicit ``dispatch`` provider a
    Shipday client is built when credentials are configured.
    """

    tracking_config = config or get_tracking_config()
    if unit_of_work_factory is None:
        if not is_started():
            startup()
        unit_of_work_factory = SqlAlchemyTrackingUnitOfWork
    effective_dispatch = dispatch if dispatch is not None else build_dispatch_provider()

    return TrackingService(
        unit_of_work_factory=unit_of_work_factory,
        write_back=WriteBackApplier(
            unit_of_work_factory, max_workers=tracking_config.write_back_workers
        ),
        dispatch=effective_dispatch,
        config=tracking_config,
    )


def track_order(reference: str, *, service: TrackingService | None = None) -> dict[str, Any]:
    """Resolve ``reference`` once and return the wire payload.

    Pending write-backs are drained before returning so short-lived processes
    do not lose them.
    """

    effective_service = service or build_tracking_service()

    async def track_once() -> TrackingView:
        # The provider connection belongs to this event loop; drop it with the loop.
        try:
            return await effective_service.get_tracking(reference)
        finally:
            await effective_service.aclose()

    try:
        view = asyncio.run(track_once())
    finally:
        effective_service.write_back.wait()
    return to_wire(view)


def init_database(*, database_uri: str | None = None) -> None:
    """Create or upgrade the order store schema."""

    startup(database_uri=database_uri, force=is_started())
    engine = configured_engine()
    if engine is not None:
        log.info("Order store schema at revision %s", current_revision(engine))
