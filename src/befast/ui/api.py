"""HTTP surface serving tracking pages."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from logging import getLogger
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from befast.app import build_tracking_service
from befast.domain.tracking import OrderNotFoundError, TrackingUnavailableError, to_wire

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable

    from befast.domain.tracking import TrackingService

log = getLogger(__name__)

DISCONNECT_POLL_SECONDS = 0.5
# nginx convention for "client closed request"; nobody is left to read it.
CLIENT_CLOSED_REQUEST = 499


class ClientDisconnectedError(Exception):
    """Raised when the caller went away before the tracking answer was ready."""


async def _until_disconnected[T](request: Request, call: Awaitable[T]) -> T:
    task = asyncio.ensure_future(call)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=DISCONNECT_POLL_SECONDS)
            if done:
                return task.result()
            if await request.is_disconnected():
                raise ClientDisconnectedError
    finally:
        if not task.done():
            task.cancel()


def create_app(service: TrackingService | None = None) -> FastAPI:
    """Build the API. A supplied ``service`` stays owned by the caller."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.tracking = service or build_tracking_service()
        try:
            yield
        finally:
            if service is None:
                await app.state.tracking.aclose()
                app.state.tracking.write_back.shutdown(wait=True)

    app = FastAPI(title="BeFast Tracking", lifespan=lifespan)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/tracking/{reference}", response_model=None)
    async def get_tracking(reference: str, request: Request) -> dict[str, Any] | JSONResponse:
        tracking: TrackingService = request.app.state.tracking
        try:
            view = await _until_disconnected(request, tracking.get_tracking(reference))
        except OrderNotFoundError:
            return JSONResponse(status_code=404, content={"error": "order_not_found"})
        except ClientDisconnectedError:
            log.info("Client went away; abandoned tracking lookup for %r", reference)
            return JSONResponse(status_code=CLIENT_CLOSED_REQUEST, content=None)
        except TrackingUnavailableError:
            log.exception("Order store unavailable while tracking %r", reference)
            return JSONResponse(status_code=500, content={"error": "internal_error"})
        except Exception:
            log.exception("Unexpected failure while tracking %r", reference)
            return JSONResponse(status_code=500, content={"error": "internal_error"})
        return to_wire(view)

    return app
