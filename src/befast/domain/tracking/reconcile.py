"""Merge the persistent snapshot with the dispatch provider's live view.

Every field of the tracking view has a fixed priority list of sources; the
first source holding a well-formed value wins and the winner is recorded in
``Reconciliation.sources``.

=================  ===========================================================
field              sources, highest priority first
=================  ===========================================================
status             provider detail, persistent record
courier            provider detail, persistent record, fallback resolvers
courier_location   provider progress
eta_minutes        provider progress
customer           provider detail, persistent record
business           provider detail, persistent record
timeline           provider activity log, persistent lifecycle timestamps
proof_of_delivery  provider detail, persistent record
=================  ===========================================================

Provider data is trusted for freshness, but a missing or malformed provider
value never erases a persistent one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from befast.domain.model import UNASSIGNED_CARRIER_ID, FieldSource, TrackingView

from .snapshot import as_utc, assemble_timeline
from .write_back import WriteBackFacts

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime

    from befast.domain.model import (
        Contact,
        CourierIdentity,
        OrderRecord,
        ProviderOrderDetail,
        ProviderProgress,
        TimelineEntry,
        TrackingSnapshot,
    )


@dataclass(frozen=True, slots=True)
class Reconciliation:
    view: TrackingView
    facts: WriteBackFacts
    sources: Mapping[str, FieldSource]


def _first[T](*candidates: tuple[FieldSource, T | None]) -> tuple[T | None, FieldSource]:
    for source, value in candidates:
        if value is not None:
            return value, source
    return None, FieldSource.NONE


def provider_status(detail: ProviderOrderDetail | None) -> str | None:
    if detail is None or not detail.status or not detail.status.strip():
        return None
    return detail.status.strip()


def provider_courier(detail: ProviderOrderDetail | None) -> CourierIdentity | None:
    """The provider's courier, unless the provider says nobody is assigned."""

    if detail is None or detail.courier is None:
        return None
    if detail.assigned_carrier_id == UNASSIGNED_CARRIER_ID:
        return None
    if not detail.courier.name:
        return None
    return detail.courier


def _provider_contact(contact: Contact | None) -> Contact | None:
    if contact is None or not (contact.name or contact.address):
        return None
    return contact


def _provider_timeline(detail: ProviderOrderDetail | None) -> tuple[TimelineEntry, ...] | None:
    if detail is None or not detail.activity_log:
        return None
    return assemble_timeline(detail.activity_log)


def _provider_proof(detail: ProviderOrderDetail | None) -> tuple[str, ...] | None:
    if detail is None or not detail.proof_of_delivery:
        return None
    urls = tuple(url for url in detail.proof_of_delivery if url)
    return urls or None


def learn_facts(
    record: OrderRecord, detail: ProviderOrderDetail | None, *, now: datetime
) -> WriteBackFacts:
    """Facts the provider knows that the persistent record does not."""

    facts: dict[str, object] = {}
    courier = provider_courier(detail)
    if courier is not None and (
        record.driver_name != courier.name or record.shipday_carrier_id != courier.provider_id
    ):
        facts["driver_name"] = courier.name
        facts["shipday_carrier_id"] = courier.provider_id
        if record.assigned_at is None:
            facts["assigned_at"] = as_utc(now)
    if detail is not None:
        if not record.tracking_link and detail.tracking_link:
            facts["tracking_link"] = detail.tracking_link
        if not record.shipday_order_id and detail.order_id is not None:
            facts["shipday_order_id"] = str(detail.order_id)
    return WriteBackFacts(order_key=record.key, order_number=record.order_number, **facts)


def reconcile(
    record: OrderRecord,
    snapshot: TrackingSnapshot,
    *,
    detail: ProviderOrderDetail | None,
    progress: ProviderProgress | None,
    fallback_courier: CourierIdentity | None = None,
    now: datetime,
) -> Reconciliation:
    sources: dict[str, FieldSource] = {}

    status, sources["status"] = _first(
        (FieldSource.PROVIDER_DETAIL, provider_status(detail)),
        (FieldSource.PERSISTENT, snapshot.status),
    )
    courier, sources["courier"] = _first(
        (FieldSource.PROVIDER_DETAIL, provider_courier(detail)),
        (FieldSource.PERSISTENT, snapshot.courier),
        (FieldSource.FALLBACK, fallback_courier),
    )
    # Only the progress endpoint carries location and ETA; the detail payload's
    # static ETA is always empty.
    location, sources["courier_location"] = _first(
        (FieldSource.PROVIDER_PROGRESS, progress.courier_location if progress else None),
    )
    eta, sources["eta_minutes"] = _first(
        (FieldSource.PROVIDER_PROGRESS, progress.eta_minutes if progress else None),
    )
    customer, sources["customer"] = _first(
        (FieldSource.PROVIDER_DETAIL, _provider_contact(detail.customer if detail else None)),
        (FieldSource.PERSISTENT, snapshot.customer),
    )
    business, sources["business"] = _first(
        (FieldSource.PROVIDER_DETAIL, _provider_contact(detail.business if detail else None)),
        (FieldSource.PERSISTENT, snapshot.business),
    )
    timeline, sources["timeline"] = _first(
        (FieldSource.PROVIDER_DETAIL, _provider_timeline(detail)),
        (FieldSource.PERSISTENT, snapshot.timeline),
    )
    proof, sources["proof_of_delivery"] = _first(
        (FieldSource.PROVIDER_DETAIL, _provider_proof(detail)),
        (FieldSource.PERSISTENT, snapshot.proof_of_delivery),
    )

    view = TrackingView(
        order_number=snapshot.order_number,
        status=status,
        customer=customer or snapshot.customer,
        business=business or snapshot.business,
        courier=courier,
        courier_location=location,
        eta_minutes=eta,
        items=snapshot.items,
        delivery_fee=snapshot.delivery_fee,
        total_cost=snapshot.total_cost,
        timeline=timeline or (),
        proof_of_delivery=proof or (),
        created_at=snapshot.created_at,
        delivered_at=snapshot.delivered_at,
    )
    return Reconciliation(view=view, facts=learn_facts(record, detail, now=now), sources=sources)
