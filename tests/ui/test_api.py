from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from fastapi import Request
from fastapi.testclient import TestClient

from befast.config import TrackingConfig
from befast.domain.model import CourierIdentity, ProviderOrderDetail, ProviderProgress
from befast.domain.tracking import TrackingService, WriteBackApplier
from befast.ui import api as api_module
from befast.ui.api import CLIENT_CLOSED_REQUEST, create_app
from tests.support.dispatch import FakeDispatch, StalledDispatch
from tests.support.orders import load_order, make_order, seed

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from befast.adapters.sqlalchemy import SqlAlchemyTrackingUnitOfWork

    UnitOfWorkFactory = Callable[[], SqlAlchemyTrackingUnitOfWork]

TRACKING_LINK = "https://dispatch.shipday.com/trackingPage/tok-123"


@pytest.fixture
def dispatch() -> FakeDispatch:
    return FakeDispatch(
        details={
            "88": ProviderOrderDetail(
                order_id=88,
                status="PICKED_UP",
                assigned_carrier_id=42,
                courier=CourierIdentity(name="Luis", provider_id=42),
                tracking_link=TRACKING_LINK,
            )
        },
        progress={"tok-123": ProviderProgress(eta_minutes=9)},
    )


@pytest.fixture
def service(
    sqlite_unit_of_work: UnitOfWorkFactory, dispatch: FakeDispatch
) -> Iterator[TrackingService]:
    service = TrackingService(
        unit_of_work_factory=sqlite_unit_of_work,
        write_back=WriteBackApplier(sqlite_unit_of_work, max_workers=1),
        dispatch=dispatch,
        config=TrackingConfig(),
    )
    try:
        yield service
    finally:
        service.write_back.shutdown()


def test_tracking_endpoint_returns_wire_payload(
    sqlite_unit_of_work: UnitOfWorkFactory, service: TrackingService
) -> None:
    seed(sqlite_unit_of_work, make_order())

    with TestClient(create_app(service)) as client:
        response = client.get("/api/tracking/BF-1001")
        service.write_back.wait(timeout=5)

    assert response.status_code == 200
    body = response.json()
    assert body["orderNumber"] == "BF-1001"
    assert body["status"] == "PICKED_UP"
    assert body["driver"] == {"name": "Luis"}
    assert body["estimatedTime"] == 9
    assert body["placementTime"] == "2025-03-01T18:00:00Z"
    assert body["deliveryTime"] is None
    assert load_order(sqlite_unit_of_work).shipday_carrier_id == 42


def test_unknown_order_is_404(
    sqlite_unit_of_work: UnitOfWorkFactory, service: TrackingService
) -> None:
    seed(sqlite_unit_of_work, make_order())

    with TestClient(create_app(service)) as client:
        response = client.get("/api/tracking/BF-404")

    assert response.status_code == 404
    assert response.json() == {"error": "order_not_found"}


def test_store_failure_is_500(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    def broken_factory() -> SqlAlchemyTrackingUnitOfWork:
        raise RuntimeError("database unreachable")

    service = TrackingService(
        unit_of_work_factory=broken_factory,
        write_back=WriteBackApplier(sqlite_unit_of_work),
    )
    try:
        with TestClient(create_app(service)) as client:
            response = client.get("/api/tracking/BF-1001")
    finally:
        service.write_back.shutdown()

    assert response.status_code == 500
    assert response.json() == {"error": "internal_error"}


def test_health(service: TrackingService) -> None:
    with TestClient(create_app(service)) as client:
        response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_client_disconnect_cancels_lookup(
    monkeypatch: pytest.MonkeyPatch, sqlite_unit_of_work: UnitOfWorkFactory
) -> None:
    seed(sqlite_unit_of_work, make_order())
    dispatch = StalledDispatch()
    service = TrackingService(
        unit_of_work_factory=sqlite_unit_of_work,
        write_back=WriteBackApplier(sqlite_unit_of_work),
        dispatch=dispatch,
    )

    async def disconnected_once_waiting(_request: Request) -> bool:
        return dispatch.started.is_set()

    monkeypatch.setattr(api_module, "DISCONNECT_POLL_SECONDS", 0.01)
    monkeypatch.setattr(Request, "is_disconnected", disconnected_once_waiting)

    try:
        with TestClient(create_app(service)) as client:
            response = client.get("/api/tracking/BF-1001")
            assert dispatch.cancelled.wait(timeout=5)
    finally:
        service.write_back.shutdown()

    assert response.status_code == CLIENT_CLOSED_REQUEST
