"""Table metadata for the persistent order store."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Dialect,
    Float,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    TypeDecorator,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

metadata = MetaData()


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


orders_table = Table(
    "orders",
    metadata,
    Column("key", String(64), primary_key=True),
    Column("order_number", String(64), nullable=False, index=True),
    Column("status", String(32)),
    Column("shipday_order_id", String(64), index=True),
    Column("shipday_order_number", String(64)),
    Column("tracking_link", String(512)),
    Column("driver_id", String(64)),
    Column("driver_name", String(255)),
    Column("shipday_carrier_id", Integer),
    Column("assigned_carrier_id", String(64)),
    Column("business_id", String(64)),
    Column("order_description", Text),
    # Free-form blocks written by order ingestion.
    Column("customer", JSON),
    Column("pickup", JSON),
    Column("order_items", JSON),
    Column("proof_of_delivery", JSON),
    Column("delivery_fee", Float),
    Column("total_order_value", Float),
    Column("created_at", UTCDateTime()),
    Column("assigned_at", UTCDateTime()),
    Column("started_at", UTCDateTime()),
    Column("picked_up_at", UTCDateTime()),
    Column("delivered_at", UTCDateTime()),
    Column("updated_at", UTCDateTime()),
)

courier_assignments_table = Table(
    "courier_assignments",
    metadata,
    Column("shipday_order_id", Integer, primary_key=True, autoincrement=False),
    Column("carrier_name", String(255)),
    Column("carrier_phone", String(64)),
    Column("carrier_photo", String(512)),
)

carriers_table = Table(
    "carriers",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("name", String(255)),
    Column("phone_number", String(64)),
    Column("photo", String(512)),
)

drivers_table = Table(
    "drivers",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("full_name", String(255)),
    Column("phone_number", String(64)),
    Column("profile_photo", String(512)),
    Column("average_rating", Float),
)

businesses_table = Table(
    "businesses",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("name", String(255)),
    Column("address", Text),
    Column("latitude", Float),
    Column("longitude", Float),
)


def create_all_tables(engine: Engine) -> None:
    """Create the tables directly, bypassing migrations."""

    log.info("Creating all tables")
    metadata.create_all(engine)
