"""Initial schema

Revision ID: 001
Revises: None
Create Date: 2026-10-17 00:00:00.000000+00:00

What:  Creates every table: venue layout (workstations, floor plans, venue
       objects), vinyl library and DJ sessions, purchasing, company clients
       and staff users.
How:   Portable column types (sa.Uuid, sa.Enum, TIMESTAMP WITH TIME ZONE);
       PostgreSQL gets native UUID and ENUM types.

Rollback: downgrade() drops every table and enum type (destructive).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

venue_object_type = sa.Enum(
    "TABLE",
    "WORKSTATION",
    "WORKSTATION_STORAGE",
    "STORAGE",
    "FREEZER",
    "SHELF",
    "DOOR",
    "WINDOW",
    "IMPASSABLE",
    "OTHER",
    name="venue_object_type",
)
dj_session_status = sa.Enum("LIVE", "ENDED", name="dj_session_status")
purchase_order_status = sa.Enum(
    "DRAFT",
    "PENDING",
    "SUBMITTED",
    "APPROVED",
    "PARTIALLY_RECEIVED",
    "RECEIVED",
    "CANCELLED",
    name="purchase_order_status",
)
user_role = sa.Enum(
    "OWNER",
    "MANAGER",
    "FINANCIAL",
    "SALES",
    "COOK",
    "BARTENDER",
    "CASHIER",
    "SERVER",
    "DJ",
    "DRIVER",
    name="user_role",
)


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    # ── Venue layout ──────────────────────────────────────────────────────
    op.create_table(
        "workstations",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(120), nullable=False, unique=True),
        *_timestamps(),
    )

    op.create_table(
        "floor_plans",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(500), nullable=True),
        sa.Column("width", sa.Integer(), nullable=False),
        sa.Column("height", sa.Integer(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "venue_objects",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("type", venue_object_type, nullable=False),
        sa.Column("anchor_x", sa.Float(), nullable=False),
        sa.Column("anchor_y", sa.Float(), nullable=False),
        sa.Column("width", sa.Float(), nullable=True),
        sa.Column("height", sa.Float(), nullable=True),
        sa.Column("rotation", sa.Float(), nullable=True),
        sa.Column("capacity", sa.Integer(), nullable=True),
        sa.Column("is_reservable", sa.Boolean(), nullable=False),
        sa.Column("reservation_cost", sa.Numeric(10, 2), nullable=True),
        sa.Column(
            "floor_plan_id",
            sa.Uuid(),
            sa.ForeignKey("floor_plans.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "workstation_id",
            sa.Uuid(),
            sa.ForeignKey("workstations.id", ondelete="SET NULL"),
            nullable=True,
            unique=True,
        ),
        *_timestamps(),
    )
    op.create_index("idx_venue_objects_floor_plan_id", "venue_objects", ["floor_plan_id"])
    op.create_index("idx_venue_objects_type", "venue_objects", ["type"])

    # ── Vinyl library and DJ sessions ─────────────────────────────────────
    op.create_table(
        "vinyl_library_slots",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("row", sa.Integer(), nullable=False),
        sa.Column("column", sa.Integer(), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("row", "column", name="uq_vinyl_library_slots_row_column"),
    )

    op.create_table(
        "vinyl_records",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("artist", sa.String(200), nullable=False),
        sa.Column("genre", sa.String(100), nullable=True),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("image_url", sa.String(500), nullable=True),
        sa.Column(
            "slot_id",
            sa.Uuid(),
            sa.ForeignKey("vinyl_library_slots.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("position_in_slot", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint(
            "slot_id", "position_in_slot", name="uq_vinyl_records_slot_position"
        ),
    )
    op.create_index("idx_vinyl_records_artist", "vinyl_records", ["artist"])

    op.create_table(
        "dj_sessions",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("status", dj_session_status, nullable=False),
        sa.Column("actual_start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("actual_end_time", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("idx_dj_sessions_status", "dj_sessions", ["status"])

    op.create_table(
        "dj_set_tracks",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "session_id",
            sa.Uuid(),
            sa.ForeignKey("dj_sessions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "vinyl_record_id",
            sa.Uuid(),
            sa.ForeignKey("vinyl_records.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("played_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("idx_dj_set_tracks_session_id", "dj_set_tracks", ["session_id"])

    # ── Purchasing ────────────────────────────────────────────────────────
    op.create_table(
        "suppliers",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False, unique=True),
        sa.Column("contact_name", sa.String(200), nullable=True),
        sa.Column("contact_phone", sa.String(50), nullable=True),
        sa.Column("contact_email", sa.String(254), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "purchase_orders",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "supplier_id",
            sa.Uuid(),
            sa.ForeignKey("suppliers.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("status", purchase_order_status, nullable=False),
        sa.Column("order_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("expected_delivery_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("actual_delivery_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("invoice_number", sa.String(100), nullable=True, unique=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("total_cost", sa.Numeric(12, 2), nullable=False),
        *_timestamps(),
    )
    op.create_index("idx_purchase_orders_order_date", "purchase_orders", ["order_date"])
    op.create_index("idx_purchase_orders_supplier_id", "purchase_orders", ["supplier_id"])

    op.create_table(
        "purchase_order_items",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "purchase_order_id",
            sa.Uuid(),
            sa.ForeignKey("purchase_orders.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("description", sa.String(300), nullable=False),
        sa.Column("ordered_quantity", sa.Numeric(12, 3), nullable=False),
        sa.Column("ordered_unit", sa.String(30), nullable=False),
        sa.Column("unit_cost", sa.Numeric(12, 2), nullable=False),
        sa.Column("total_item_cost", sa.Numeric(12, 2), nullable=False),
    )

    # ── Sales and staff ───────────────────────────────────────────────────
    op.create_table(
        "company_clients",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("company_name", sa.String(200), nullable=False, unique=True),
        sa.Column("contact_name", sa.String(200), nullable=True),
        sa.Column("contact_phone", sa.String(50), nullable=False, unique=True),
        sa.Column("contact_email", sa.String(254), nullable=True),
        sa.Column("employee_count", sa.Integer(), nullable=True),
        sa.Column("consumption_factor", sa.Numeric(6, 2), nullable=False),
        sa.Column(
            "sales_pipeline_stage",
            sa.String(50),
            nullable=False,
            server_default=sa.text("'LEAD'"),
        ),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("role", user_role, nullable=False),
        sa.Column("pin_hash", sa.String(100), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )


def downgrade() -> None:
    for table in (
        "users",
        "company_clients",
        "purchase_order_items",
        "purchase_orders",
        "suppliers",
        "dj_set_tracks",
        "dj_sessions",
        "vinyl_records",
        "vinyl_library_slots",
        "venue_objects",
        "floor_plans",
        "workstations",
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for enum_type in (user_role, purchase_order_status, dj_session_status, venue_object_type):
        enum_type.drop(bind, checkfirst=True)
