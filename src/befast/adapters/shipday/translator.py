"""Translate Shipday payloads into the provider views the reconciler consumes."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from befast.domain.model import (
    Contact,
    Coordinate,
    CourierIdentity,
    LifecycleStage,
    ProviderOrderDetail,
    ProviderProgress,
)

if TYPE_CHECKING:
    from .schema import (
        ActivityLogPayload,
        CarrierPayload,
        PartyPayload,
        ProofOfDeliveryPayload,
        ShipdayOrderPayload,
        ShipdayProgressPayload,
    )


def _utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def translate_order(payload: ShipdayOrderPayload) -> ProviderOrderDetail:
    return ProviderOrderDetail(
        order_id=payload.order_id,
        order_number=payload.order_number,
        status=payload.order_status.order_state if payload.order_status else None,
        assigned_carrier_id=payload.assigned_carrier_id,
        courier=_courier(payload.assigned_carrier, payload.feedback),
        customer=_party(payload.customer),
        business=_party(payload.restaurant),
        activity_log=_activity_log(payload.activity_log),
        proof_of_delivery=_proof_of_delivery(payload.proof_of_delivery),
        tracking_link=payload.tracking_link,
        static_eta=payload.eta_time,
    )


def translate_progress(payload: ShipdayProgressPayload) -> ProviderProgress:
    dynamic = payload.dynamic_data
    if dynamic is None:
        return ProviderProgress()
    location = (
        Coordinate(
            latitude=dynamic.carrier_location.latitude,
            longitude=dynamic.carrier_location.longitude,
        )
        if dynamic.carrier_location is not None
        else None
    )
    return ProviderProgress(
        courier_location=location,
        eta_minutes=dynamic.estimated_time_in_minutes,
    )


def _courier(carrier: CarrierPayload | None, feedback: float | None) -> CourierIdentity | None:
    if carrier is None or not carrier.name:
        return None
    return CourierIdentity(
        name=carrier.name,
        phone_number=carrier.phone_number,
        photo=carrier.carrier_photo,
        rating=feedback,
        provider_id=carrier.id,
    )


def _party(party: PartyPayload | None) -> Contact | None:
    if party is None or not (party.name or party.address):
        return None
    return Contact(
        name=party.name or "",
        address=party.address or "",
        latitude=party.latitude or 0.0,
        longitude=party.longitude or 0.0,
        phone_number=party.phone_number,
    )


def _activity_log(log: ActivityLogPayload | None) -> dict[LifecycleStage, datetime]:
    if log is None:
        return {}
    stages = {
        LifecycleStage.CREATED: log.placement_time,
        LifecycleStage.ASSIGNED: log.assigned_time,
        LifecycleStage.STARTED: log.start_time,
        LifecycleStage.PICKED_UP: log.picked_up_time,
        LifecycleStage.ARRIVED: log.arrived_time,
        LifecycleStage.DELIVERED: log.delivery_time,
    }
    return {stage: _utc(moment) for stage, moment in stages.items() if moment is not None}


def _proof_of_delivery(proof: ProofOfDeliveryPayload | None) -> tuple[str, ...] | None:
    if proof is None:
        return None
    urls = tuple(url for url in (*proof.image_urls, proof.signature_path) if url)
    return urls or None
