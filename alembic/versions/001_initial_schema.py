"""Initial database schema.

Revision ID: 001_initial
Revises: None
Create Date: 2025-06-28

Creates all initial tables for the ChargeSlot service:
- Users (profile only, credentials live with the identity provider)
- Stations and ports
- Bookings, with partial unique indexes so that a Pending or Accepted
  booking exclusively holds its port slot and its user's timeslot
"""

from typing import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers
revision: str = "001_initial"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

ACTIVE_BOOKING_PREDICATE = "status IN ('Pending', 'Accepted')"


def upgrade() -> None:
    """Create all database tables."""

    # ==================== USERS ====================
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), unique=True, nullable=False, index=True),
        sa.Column("is_active", sa.Boolean, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # ==================== STATIONS ====================
    op.create_table(
        "stations",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.String(500), nullable=False),
        sa.Column("location", sa.String(255), nullable=False, index=True),
        sa.Column("description", sa.Text),
        sa.Column("is_active", sa.Boolean, server_default=sa.true(), index=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "ports",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("station_id", sa.Integer, sa.ForeignKey("stations.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("port_number", sa.String(50), nullable=False),
        sa.Column("charging_type", sa.String(20), nullable=False, server_default="Type 2"),
        sa.Column("power_kw", sa.Integer, server_default="22"),
        sa.Column("is_active", sa.Boolean, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("station_id", "port_number", name="uq_ports_station_port_number"),
        sa.UniqueConstraint("id", "station_id", name="uq_ports_id_station_id"),
        sa.CheckConstraint(
            "charging_type IN ('Type 1', 'Type 2', 'CCS', 'CHAdeMO')",
            name="ck_ports_charging_type",
        ),
    )

    # ==================== BOOKINGS ====================
    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("station_id", sa.Integer, sa.ForeignKey("stations.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("port_id", sa.Integer, nullable=False),
        sa.Column("timeslot", sa.DateTime(timezone=False), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="Pending"),
        sa.Column("admin_notes", sa.Text),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(
            ["port_id", "station_id"],
            ["ports.id", "ports.station_id"],
            name="fk_bookings_port_station",
            ondelete="CASCADE",
        ),
        sa.CheckConstraint(
            "status IN ('Pending', 'Accepted', 'Rejected')",
            name="ck_bookings_status",
        ),
    )

    # A rejected booking releases its slot, so uniqueness covers live rows only
    op.create_index(
        "uq_bookings_port_timeslot_active",
        "bookings",
        ["port_id", "timeslot"],
        unique=True,
        postgresql_where=sa.text(ACTIVE_BOOKING_PREDICATE),
    )
    op.create_index(
        "uq_bookings_user_timeslot_active",
        "bookings",
        ["user_id", "timeslot"],
        unique=True,
        postgresql_where=sa.text(ACTIVE_BOOKING_PREDICATE),
    )
    op.create_index("ix_bookings_port_timeslot_status", "bookings", ["port_id", "timeslot", "status"])
    op.create_index("ix_bookings_user_status", "bookings", ["user_id", "status"])


def downgrade() -> None:
    """Drop all database tables in reverse order."""
    op.drop_index("ix_bookings_user_status", table_name="bookings")
    op.drop_index("ix_bookings_port_timeslot_status", table_name="bookings")
    op.drop_index("uq_bookings_user_timeslot_active", table_name="bookings")
    op.drop_index("uq_bookings_port_timeslot_active", table_name="bookings")
    op.drop_table("bookings")
    op.drop_table("ports")
    op.drop_table("stations")
    op.drop_table("users")
