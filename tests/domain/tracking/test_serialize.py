from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime

from befast.domain.model import Coordinate, CourierIdentity, LifecycleStage, ProviderProgress
from befast.domain.tracking import build_snapshot, reconcile, to_wire
from tests.support.orders import ASSIGNED_AT, make_order

NOW = datetime(2025, 3, 1, 19, 0, tzinfo=UTC)


def _view(record=None, **kwargs):  # noqa: ANN001, ANN003, ANN202
    record = record or make_order()
    kwargs.setdefault("detail", None)
    kwargs.setdefault("progress", None)
    return reconcile(record, build_snapshot(record), now=NOW, **kwargs).view


def test_wire_shape_uses_camel_case_keys() -> None:
    payload = to_wire(_view())

    assert set(payload) == {
        "orderNumber",
        "status",
        "customer",
        "business",
        "driver",
        "driverLocation",
        "estimatedTime",
        "orderItems",
        "deliveryFee",
        "totalCost",
        "placementTime",
        "deliveryTime",
        "timeline",
        "proofOfDelivery",
    }
    assert payload["orderNumber"] == "BF-1001"
    assert payload["customer"] == {
        "name": "María López",
        "address": "Av. Juárez 120, Colima",
        "latitude": 19.24,
        "longitude": -103.72,
        "phoneNumber": "+523120000000",
    }
    assert payload["orderItems"] == [{"name": "Delivery order", "quantity": 1, "unitPrice": 200.0}]
    assert payload["driver"] is None
    assert payload["driverLocation"] is None
    assert payload["estimatedTime"] is None


def test_placement_time_is_oldest_timeline_entry() -> None:
    payload = to_wire(_view())

    assert payload["placementTime"] == "2025-03-01T18:00:00Z"
    assert [entry["status"] for entry in payload["timeline"]] == ["ASSIGNED", "CREATED"]
    assert payload["timeline"][0]["timestamp"] == ASSIGNED_AT.isoformat().replace("+00:00", "Z")


def test_delivery_time_only_when_delivered() -> None:
    delivered_at = datetime(2025, 3, 1, 18, 45, tzinfo=UTC)

    in_flight = to_wire(_view(make_order(delivered_at=delivered_at, status="PICKED_UP")))
    delivered = to_wire(_view(make_order(delivered_at=delivered_at, status="ALREADY_DELIVERED")))

    assert in_flight["deliveryTime"] is None
    assert delivered["deliveryTime"] == "2025-03-01T18:45:00Z"
    assert delivered["timeline"][0]["status"] == LifecycleStage.DELIVERED.value


def test_delivery_time_falls_back_to_record_without_timeline() -> None:
    delivered_at = datetime(2025, 3, 1, 18, 45, tzinfo=UTC)
    record = make_order(status="DELIVERED", created_at=None, assigned_at=None, delivered_at=delivered_at)
    view = replace(_view(record), timeline=())

    payload = to_wire(view)

    assert payload["timeline"] == []
    assert payload["placementTime"] is None
    assert payload["deliveryTime"] == "2025-03-01T18:45:00Z"


def test_driver_and_location_blocks() -> None:
    courier = CourierIdentity(name="Luis", phone_number="+523121111111", rating=4.8, provider_id=42)
    view = _view(
        make_order(driver_name=None),
        progress=ProviderProgress(courier_location=Coordinate(19.1, -103.7), eta_minutes=0),
        fallback_courier=courier,
    )

    payload = to_wire(view)

    assert payload["driver"] == {"name": "Luis", "phoneNumber": "+523121111111", "rating": 4.8}
    assert payload["driverLocation"] == {"latitude": 19.1, "longitude": -103.7}
    assert payload["estimatedTime"] == 0


def test_missing_status_is_reported_as_unknown() -> None:
    payload = to_wire(_view(make_order(status=None)))

    assert payload["status"] == "UNKNOWN"


def test_placement_time_is_null_without_any_timestamp() -> None:
    record = make_order(created_at=None, assigned_at=None)

    payload = to_wire(_view(record))

    assert payload["timeline"] == []
    assert payload["placementTime"] is None
    assert payload["deliveryTime"] is None
