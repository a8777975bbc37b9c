"""Order store and courier collections.

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "orders",
        sa.Column("key", sa.String(64), primary_key=True),
        sa.Column("order_number", sa.String(64), nullable=False),
        sa.Column("status", sa.String(32)),
        sa.Column("shipday_order_id", sa.String(64)),
        sa.Column("shipday_order_number", sa.String(64)),
        sa.Column("tracking_link", sa.String(512)),
        sa.Column("driver_id", sa.String(64)),
        sa.Column("driver_name", sa.String(255)),
        sa.Column("shipday_carrier_id", sa.Integer),
        sa.Column("assigned_carrier_id", sa.String(64)),
        sa.Column("business_id", sa.String(64)),
        sa.Column("order_description", sa.Text),
        sa.Column("customer", sa.JSON),
        sa.Column("pickup", sa.JSON),
        sa.Column("order_items", sa.JSON),
        sa.Column("proof_of_delivery", sa.JSON),
        sa.Column("delivery_fee", sa.Float),
        sa.Column("total_order_value", sa.Float),
        sa.Column("created_at", sa.DateTime(timezone=True)),
        sa.Column("assigned_at", sa.DateTime(timezone=True)),
        sa.Column("started_at", sa.DateTime(timezone=True)),
        sa.Column("picked_up_at", sa.DateTime(timezone=True)),
        sa.Column("delivered_at", sa.DateTime(timezone=True)),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_orders_order_number", "orders", ["order_number"])
    op.create_index("ix_orders_shipday_order_id", "orders", ["shipday_order_id"])

    op.create_table(
        "courier_assignments",
        sa.Column("shipday_order_id", sa.Integer, primary_key=True, autoincrement=False),
        sa.Column("carrier_name", sa.String(255)),
        sa.Column("carrier_phone", sa.String(64)),
        sa.Column("carrier_photo", sa.String(512)),
    )
    op.create_table(
        "carriers",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(255)),
        sa.Column("phone_number", sa.String(64)),
        sa.Column("photo", sa.String(512)),
    )
    op.create_table(
        "drivers",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("full_name", sa.String(255)),
        sa.Column("phone_number", sa.String(64)),
        sa.Column("profile_photo", sa.String(512)),
        sa.Column("average_rating", sa.Float),
    )
    op.create_table(
        "businesses",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(255)),
        sa.Column("address", sa.Text),
        sa.Column("latitude", sa.Float),
        sa.Column("longitude", sa.Float),
    )


def downgrade() -> None:
    op.drop_table("businesses")
    op.drop_table("drivers")
    op.drop_table("carriers")
    op.drop_table("courier_assignments")
    op.drop_index("ix_orders_shipday_order_id", table_name="orders")
    op.drop_index("ix_orders_order_number", table_name="orders")
    op.drop_table("orders")
