"""Build a tracking snapshot from the persistent order record alone."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from befast.config.tracking import DEFAULT_DELIVERY_FEE
from befast.domain.model import (
    DEFAULT_DRIVER_RATING,
    STAGE_DESCRIPTIONS,
    Contact,
    CourierIdentity,
    LineItem,
    TimelineEntry,
    TrackingSnapshot,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from befast.domain.model import BusinessRecord, DriverRecord, LifecycleStage, OrderRecord

DEFAULT_CUSTOMER_NAME = "Customer"
DEFAULT_BUSINESS_NAME = "Business"
UNKNOWN_ADDRESS = "Address unavailable"
DEFAULT_ITEM_NAME = "Delivery order"


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def assemble_timeline(timestamps: Mapping[LifecycleStage, datetime]) -> tuple[TimelineEntry, ...]:
    """One entry per present stage, most recent first."""

    entries = [
        TimelineEntry(stage=stage, timestamp=as_utc(moment), description=STAGE_DESCRIPTIONS[stage])
        for stage, moment in timestamps.items()
    ]
    entries.sort(key=lambda entry: entry.timestamp, reverse=True)
    return tuple(entries)


def build_snapshot(
    record: OrderRecord,
    *,
    business: BusinessRecord | None = None,
    driver: DriverRecord | None = None,
    default_delivery_fee: float = DEFAULT_DELIVERY_FEE,
) -> TrackingSnapshot:
    """Convert ``record`` into a snapshot without touching the network.

    ``business`` is the business referenced by the order, when the caller could
    load it; otherwise the order's own pickup block stands in. ``driver`` is the
    roster entry for the order's driver and fills in contact details the order
    record does not carry.
    """

    delivery_fee = record.delivery_fee if record.delivery_fee is not None else default_delivery_fee
    total_cost = record.total_order_value if record.total_order_value is not None else 0.0

    return TrackingSnapshot(
        order_number=record.order_number,
        status=record.status or None,
        customer=_customer_block(record.customer),
        business=_business_block(business, record.pickup),
        courier=_persistent_courier(record, driver),
        items=record.order_items or _synthesized_items(record, delivery_fee, total_cost),
        delivery_fee=delivery_fee,
        total_cost=total_cost,
        timeline=assemble_timeline(record.lifecycle_timestamps()),
        proof_of_delivery=tuple(url for url in record.proof_of_delivery if url),
        created_at=as_utc(record.created_at) if record.created_at else None,
        delivered_at=as_utc(record.delivered_at) if record.delivered_at else None,
    )


def _customer_block(customer: Contact | None) -> Contact:
    if customer is None:
        return Contact(name=DEFAULT_CUSTOMER_NAME, address=UNKNOWN_ADDRESS)
    return Contact(
        name=customer.name or DEFAULT_CUSTOMER_NAME,
        address=customer.address or UNKNOWN_ADDRESS,
        latitude=customer.latitude,
        longitude=customer.longitude,
        phone_number=customer.phone_number or None,
    )


def _business_block(business: BusinessRecord | None, pickup: Contact | None) -> Contact:
    if business is not None:
        return Contact(
            name=business.name or DEFAULT_BUSINESS_NAME,
            address=business.address or UNKNOWN_ADDRESS,
            latitude=business.latitude,
            longitude=business.longitude,
        )
    if pickup is not None:
        return Contact(
            name=pickup.name or DEFAULT_BUSINESS_NAME,
            address=pickup.address or "",
            latitude=pickup.latitude,
            longitude=pickup.longitude,
        )
    return Contact(name=DEFAULT_BUSINESS_NAME, address=UNKNOWN_ADDRESS)


def _persistent_courier(
    record: OrderRecord, driver: DriverRecord | None
) -> CourierIdentity | None:
    if not record.driver_name:
        return None
    if driver is None:
        return CourierIdentity(name=record.driver_name, provider_id=record.shipday_carrier_id)
    return CourierIdentity(
        name=driver.full_name or record.driver_name,
        phone_number=driver.phone_number or None,
        photo=driver.profile_photo or None,
        rating=(
            driver.average_rating
            if driver.average_rating is not None
            else DEFAULT_DRIVER_RATING
        ),
        provider_id=record.shipday_carrier_id,
    )


def _synthesized_items(
    record: OrderRecord, delivery_fee: float, total_cost: float
) -> tuple[LineItem, ...]:
    return (
        LineItem(
            name=record.order_description or DEFAULT_ITEM_NAME,
            quantity=1,
            unit_price=total_cost - delivery_fee,
        ),
    )
