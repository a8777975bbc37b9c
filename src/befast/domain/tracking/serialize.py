"""Wire representation of a tracking view."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from befast.domain.model import is_delivered

from .snapshot import as_utc

if TYPE_CHECKING:
    from datetime import datetime

    from befast.domain.model import Contact, CourierIdentity, TrackingView

UNKNOWN_STATUS = "UNKNOWN"


def _iso(value: datetime | None) -> str | None:
    if value is None:
        return None
    return as_utc(value).isoformat().replace("+00:00", "Z")


def _contact(contact: Contact) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": contact.name,
        "address": contact.address,
        "latitude": contact.latitude,
        "longitude": contact.longitude,
    }
    if contact.phone_number:
        payload["phoneNumber"] = contact.phone_number
    return payload


def _driver(courier: CourierIdentity | None) -> dict[str, Any] | None:
    if courier is None:
        return None
    payload: dict[str, Any] = {"name": courier.name}
    if courier.phone_number:
        payload["phoneNumber"] = courier.phone_number
    if courier.photo:
        payload["photo"] = courier.photo
    if courier.rating is not None:
        payload["rating"] = courier.rating
    return payload


def to_wire(view: TrackingView) -> dict[str, Any]:
    """Render ``view`` as the camelCase JSON object served to tracking pages.

    ``placementTime`` is the oldest timeline entry and ``deliveryTime`` the
    newest one, the latter only once the order is delivered. With no timeline
    and no creation time on record, ``placementTime`` is ``None``.
    """

    timeline = view.timeline
    placement_time = timeline[-1].timestamp if timeline else view.created_at
    delivery_time = None
    if is_delivered(view.status):
        delivery_time = timeline[0].timestamp if timeline else view.delivered_at

    return {
        "orderNumber": view.order_number,
        "status": view.status or UNKNOWN_STATUS,
        "customer": _contact(view.customer),
        "business": _contact(view.business),
        "driver": _driver(view.courier),
        "driverLocation": (
            {
                "latitude": view.courier_location.latitude,
                "longitude": view.courier_location.longitude,
            }
            if view.courier_location is not None
            else None
        ),
        "estimatedTime": view.eta_minutes,
        "orderItems": [
            {"name": item.name, "quantity": item.quantity, "unitPrice": item.unit_price}
            for item in view.items
        ],
        "deliveryFee": view.delivery_fee,
        "totalCost": view.total_cost,
        "placementTime": _iso(placement_time),
        "deliveryTime": _iso(delivery_time),
        "timeline": [
            {
                "status": entry.stage.value,
                "timestamp": _iso(entry.timestamp),
                "description": entry.description,
            }
            for entry in timeline
        ],
        "proofOfDelivery": list(view.proof_of_delivery),
    }
