"""SQLAlchemy repositories translating store rows into domain records."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields
from logging import getLogger
from typing import TYPE_CHECKING, Any

from sqlalchemy import insert, select, update

from befast.domain.model import (
    BusinessRecord,
    CarrierRecord,
    Contact,
    CourierAssignmentRecord,
    DriverRecord,
    LineItem,
    OrderRecord,
)

from .mappings import (
    businesses_table,
    carriers_table,
    courier_assignments_table,
    drivers_table,
    orders_table,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import RowMapping
    from sqlalchemy.orm import Session

    from befast.domain.ports import OrderPatch

log = getLogger(__name__)

_ORDER_FIELDS = frozenset(field.name for field in fields(OrderRecord))
_JSON_FIELDS = frozenset({"customer", "pickup", "order_items", "proof_of_delivery"})


def _float(value: object, default: float = 0.0) -> float:
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return default
    return default


def _text(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def contact_from_json(value: object) -> Contact | None:
    """Decode a contact block; coordinates may be ``latitude/longitude`` or ``lat/lng``."""

    if not isinstance(value, Mapping):
        return None
    block: Mapping[str, Any] = value
    coordinates = block.get("coordinates")
    source: Mapping[str, Any] = coordinates if isinstance(coordinates, Mapping) else block
    return Contact(
        name=_text(block.get("name")) or "",
        address=_text(block.get("address")) or "",
        latitude=_float(source.get("latitude", source.get("lat"))),
        longitude=_float(source.get("longitude", source.get("lng"))),
        phone_number=_text(block.get("phone_number", block.get("phoneNumber"))),
    )


def contact_to_json(contact: Contact | None) -> dict[str, Any] | None:
    if contact is None:
        return None
    return {
        "name": contact.name,
        "address": contact.address,
        "latitude": contact.latitude,
        "longitude": contact.longitude,
        "phone_number": contact.phone_number,
    }


def _items_from_json(value: object) -> tuple[LineItem, ...]:
    if not isinstance(value, list):
        return ()
    items: list[LineItem] = []
    for entry in value:
        if not isinstance(entry, Mapping) or not _text(entry.get("name")):
            continue
        quantity = entry.get("quantity", 1)
        items.append(
            LineItem(
                name=str(entry["name"]).strip(),
                quantity=quantity if isinstance(quantity, int) and quantity > 0 else 1,
                unit_price=_float(
                    entry.get("unit_price", entry.get("unitPrice", entry.get("price")))
                ),
            )
        )
    return tuple(items)


def _items_to_json(items: tuple[LineItem, ...]) -> list[dict[str, Any]]:
    return [
        {"name": item.name, "quantity": item.quantity, "unit_price": item.unit_price}
        for item in items
    ]


def _urls_from_json(value: object) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(url for url in value if isinstance(url, str) and url)


def _order_from_row(row: RowMapping) -> OrderRecord:
    return OrderRecord(
        key=row["key"],
        order_number=row["order_number"],
        status=row["status"],
        shipday_order_id=row["shipday_order_id"],
        shipday_order_number=row["shipday_order_number"],
        tracking_link=row["tracking_link"],
        driver_id=row["driver_id"],
        driver_name=row["driver_name"],
        shipday_carrier_id=row["shipday_carrier_id"],
        assigned_carrier_id=row["assigned_carrier_id"],
        business_id=row["business_id"],
        order_description=row["order_description"],
        customer=contact_from_json(row["customer"]),
        pickup=contact_from_json(row["pickup"]),
        order_items=_items_from_json(row["order_items"]),
        proof_of_delivery=_urls_from_json(row["proof_of_delivery"]),
        delivery_fee=row["delivery_fee"],
        total_order_value=row["total_order_value"],
        created_at=row["created_at"],
        assigned_at=row["assigned_at"],
        started_at=row["started_at"],
        picked_up_at=row["picked_up_at"],
        delivered_at=row["delivered_at"],
        updated_at=row["updated_at"],
    )


def _order_to_row(record: OrderRecord) -> dict[str, Any]:
    row: dict[str, Any] = {name: getattr(record, name) for name in _ORDER_FIELDS - _JSON_FIELDS}
    row["customer"] = contact_to_json(record.customer)
    row["pickup"] = contact_to_json(record.pickup)
    row["order_items"] = _items_to_json(record.order_items)
    row["proof_of_delivery"] = list(record.proof_of_delivery)
    return row


class SqlAlchemyOrderRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, record: OrderRecord) -> None:
        self._session.execute(insert(orders_table).values(**_order_to_row(record)))

    def get(self, key: str) -> OrderRecord | None:
        row = (
            self._session.execute(select(orders_table).where(orders_table.c.key == key))
            .mappings()
            .first()
        )
        return _order_from_row(row) if row is not None else None

    def find_by_order_number(self, order_number: str) -> tuple[OrderRecord, ...]:
        return self._find(orders_table.c.order_number == order_number)

    def find_by_shipday_order_id(self, shipday_order_id: str) -> tuple[OrderRecord, ...]:
        return self._find(orders_table.c.shipday_order_id == shipday_order_id)

    def update(self, key: str, patch: OrderPatch) -> None:
        rejected = set(patch) - (_ORDER_FIELDS - {"key"})
        if rejected:
            raise ValueError(f"Cannot patch order columns: {sorted(rejected)}")
        values = dict(patch)
        for name in _JSON_FIELDS & set(values):
            values[name] = _encode_json_field(name, values[name])
        self._session.execute(
            update(orders_table).where(orders_table.c.key == key).values(**values)
        )

    def _find(self, condition: Any) -> tuple[OrderRecord, ...]:
        rows = (
            self._session.execute(
                select(orders_table).where(condition).order_by(orders_table.c.key)
            )
            .mappings()
            .all()
        )
        return tuple(_order_from_row(row) for row in rows)


def _encode_json_field(name: str, value: Any) -> Any:
    if name in {"customer", "pickup"}:
        return contact_to_json(value)
    if name == "order_items":
        return _items_to_json(value)
    return list(value)


class SqlAlchemyCourierAssignmentRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, record: CourierAssignmentRecord) -> None:
        self._session.execute(
            insert(courier_assignments_table).values(
                shipday_order_id=record.shipday_order_id,
                carrier_name=record.carrier_name,
                carrier_phone=record.carrier_phone,
                carrier_photo=record.carrier_photo,
            )
        )

    def get_by_shipday_order_id(self, shipday_order_id: int) -> CourierAssignmentRecord | None:
        row = (
            self._session.execute(
                select(courier_assignments_table).where(
                    courier_assignments_table.c.shipday_order_id == shipday_order_id
                )
            )
            .mappings()
            .first()
        )
        if row is None:
            return None
        return CourierAssignmentRecord(
            shipday_order_id=row["shipday_order_id"],
            carrier_name=row["carrier_name"],
            carrier_phone=row["carrier_phone"],
            carrier_photo=row["carrier_photo"],
        )


class SqlAlchemyCarrierRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, record: CarrierRecord) -> None:
        self._session.execute(
            insert(carriers_table).values(
                id=record.id,
                name=record.name,
                phone_number=record.phone_number,
                photo=record.photo,
            )
        )

    def get(self, carrier_id: str) -> CarrierRecord | None:
        row = (
            self._session.execute(select(carriers_table).where(carriers_table.c.id == carrier_id))
            .mappings()
            .first()
        )
        if row is None:
            return None
        return CarrierRecord(
            id=row["id"],
            name=row["name"],
            phone_number=row["phone_number"],
            photo=row["photo"],
        )


class SqlAlchemyDriverRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, record: DriverRecord) -> None:
        self._session.execute(
            insert(drivers_table).values(
                id=record.id,
                full_name=record.full_name,
                phone_number=record.phone_number,
                profile_photo=record.profile_photo,
                average_rating=record.average_rating,
            )
        )

    def get(self, driver_id: str) -> DriverRecord | None:
        row = (
            self._session.execute(select(drivers_table).where(drivers_table.c.id == driver_id))
            .mappings()
            .first()
        )
        if row is None:
            return None
        return DriverRecord(
            id=row["id"],
            full_name=row["full_name"],
            phone_number=row["phone_number"],
            profile_photo=row["profile_photo"],
            average_rating=row["average_rating"],
        )


class SqlAlchemyBusinessRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, record: BusinessRecord) -> None:
        self._session.execute(
            insert(businesses_table).values(
                id=record.id,
                name=record.name,
                address=record.address,
                latitude=record.latitude,
                longitude=record.longitude,
            )
        )

    def get(self, business_id: str) -> BusinessRecord | None:
        row = (
            self._session.execute(
                select(businesses_table).where(businesses_table.c.id == business_id)
            )
            .mappings()
            .first()
        )
        if row is None:
            return None
        return BusinessRecord(
            id=row["id"],
            name=row["name"] or "",
            address=row["address"] or "",
            latitude=_float(row["latitude"]),
            longitude=_float(row["longitude"]),
        )
