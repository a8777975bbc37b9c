from __future__ import annotations

from datetime import UTC, datetime

from befast.domain.model import (
    Contact,
    Coordinate,
    CourierIdentity,
    FieldSource,
    LifecycleStage,
    ProviderOrderDetail,
    ProviderProgress,
)
from befast.domain.tracking import build_snapshot, reconcile
from tests.support.orders import make_order

NOW = datetime(2025, 3, 1, 18, 30, tzinfo=UTC)
LUIS = CourierIdentity(name="Luis", phone_number="+523121111111", rating=4.8, provider_id=42)


def _detail(**overrides: object) -> ProviderOrderDetail:
    values: dict[str, object] = {
        "order_id": 88,
        "order_number": "BF-1001",
        "status": "STARTED",
        "assigned_carrier_id": 42,
        "courier": LUIS,
    }
    values.update(overrides)
    return ProviderOrderDetail(**values)  # type: ignore[arg-type]


def _reconcile(record=None, **kwargs):  # noqa: ANN001, ANN003, ANN202
    record = record or make_order()
    kwargs.setdefault("detail", None)
    kwargs.setdefault("progress", None)
    return reconcile(record, build_snapshot(record), now=NOW, **kwargs)


def test_provider_detail_overrides_status_and_courier() -> None:
    result = _reconcile(detail=_detail())

    assert result.view.status == "STARTED"
    assert result.view.courier == LUIS
    assert result.sources["status"] is FieldSource.PROVIDER_DETAIL
    assert result.sources["courier"] is FieldSource.PROVIDER_DETAIL


def test_missing_provider_keeps_persistent_values() -> None:
    result = _reconcile(record=make_order(driver_name="Pedro"))

    assert result.view.status == "ASSIGNED"
    assert result.view.courier is not None
    assert result.view.courier.name == "Pedro"
    assert result.view.courier_location is None
    assert result.view.eta_minutes is None
    assert result.sources["courier_location"] is FieldSource.NONE
    assert result.facts.is_empty()


def test_blank_provider_status_does_not_erase_persistent_status() -> None:
    result = _reconcile(detail=_detail(status="  "))

    assert result.view.status == "ASSIGNED"
    assert result.sources["status"] is FieldSource.PERSISTENT


def test_unassigned_sentinel_is_treated_as_no_courier() -> None:
    record = make_order(driver_name="Pedro")

    result = _reconcile(record=record, detail=_detail(assigned_carrier_id=-1))

    assert result.view.courier is not None
    assert result.view.courier.name == "Pedro"
    assert result.sources["courier"] is FieldSource.PERSISTENT
    assert result.facts.driver_name is None


def test_fallback_courier_is_last_resort() -> None:
    ana = CourierIdentity(name="Ana", rating=4.5)

    result = _reconcile(detail=_detail(courier=None), fallback_courier=ana)

    assert result.view.courier == ana
    assert result.sources["courier"] is FieldSource.FALLBACK


def test_location_and_eta_come_only_from_progress() -> None:
    result = _reconcile(
        detail=_detail(static_eta="15"),
        progress=ProviderProgress(courier_location=Coordinate(19.1, -103.7), eta_minutes=12),
    )

    assert result.view.courier_location == Coordinate(19.1, -103.7)
    assert result.view.eta_minutes == 12
    assert result.sources["eta_minutes"] is FieldSource.PROVIDER_PROGRESS


def test_static_eta_is_never_used() -> None:
    result = _reconcile(detail=_detail(static_eta="15"))

    assert result.view.eta_minutes is None


def test_zero_minute_eta_is_kept() -> None:
    result = _reconcile(progress=ProviderProgress(eta_minutes=0))

    assert result.view.eta_minutes == 0


def test_provider_contacts_override_persistent_blocks() -> None:
    customer = Contact(name="María L.", address="Av. Juárez 120", latitude=19.3, longitude=-103.8)

    result = _reconcile(detail=_detail(customer=customer, business=Contact(name="", address="")))

    assert result.view.customer == customer
    assert result.view.business.name == "Tacos El Güero"
    assert result.sources["business"] is FieldSource.PERSISTENT


def test_activity_log_replaces_persistent_timeline() -> None:
    delivered = datetime(2025, 3, 1, 18, 40, tzinfo=UTC)
    arrived = datetime(2025, 3, 1, 18, 35, tzinfo=UTC)

    result = _reconcile(
        detail=_detail(
            activity_log={LifecycleStage.ARRIVED: arrived, LifecycleStage.DELIVERED: delivered}
        )
    )

    assert [entry.stage for entry in result.view.timeline] == [
        LifecycleStage.DELIVERED,
        LifecycleStage.ARRIVED,
    ]


def test_empty_activity_log_keeps_persistent_timeline() -> None:
    result = _reconcile(detail=_detail(activity_log={}))

    assert [entry.stage for entry in result.view.timeline] == [
        LifecycleStage.ASSIGNED,
        LifecycleStage.CREATED,
    ]
    assert result.sources["timeline"] is FieldSource.PERSISTENT


def test_proof_of_delivery_prefers_provider_and_empty_list_is_absent() -> None:
    record = make_order(proof_of_delivery=("https://pod/stored.jpg",))

    with_provider = _reconcile(record=record, detail=_detail(proof_of_delivery=("https://pod/1.jpg",)))
    empty_provider = _reconcile(record=record, detail=_detail(proof_of_delivery=()))

    assert with_provider.view.proof_of_delivery == ("https://pod/1.jpg",)
    assert empty_provider.view.proof_of_delivery == ("https://pod/stored.jpg",)


def test_learns_new_courier_link_and_provider_id() -> None:
    record = make_order(shipday_order_id=None, assigned_at=None)

    facts = _reconcile(
        record=record, detail=_detail(tracking_link="https://dispatch.shipday.com/t/tok")
    ).facts

    assert facts.fields() == {
        "driver_name": "Luis",
        "shipday_carrier_id": 42,
        "assigned_at": NOW,
        "tracking_link": "https://dispatch.shipday.com/t/tok",
        "shipday_order_id": "88",
    }


def test_known_courier_and_link_are_not_relearned() -> None:
    record = make_order(
        driver_name="Luis",
        shipday_carrier_id=42,
        tracking_link="https://dispatch.shipday.com/t/tok",
    )

    facts = _reconcile(
        record=record, detail=_detail(tracking_link="https://dispatch.shipday.com/t/other")
    ).facts

    assert facts.is_empty()


def test_courier_change_keeps_existing_assignment_time() -> None:
    facts = _reconcile(record=make_order(driver_name="Pedro", shipday_carrier_id=7), detail=_detail()).facts

    assert facts.driver_name == "Luis"
    assert facts.shipday_carrier_id == 42
    assert facts.assigned_at is None
