"""Booking model."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    ForeignKeyConstraint,
    Index,
    Integer,
    String,
    Text,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from chargeslot.database import Base
from chargeslot.domain.booking_state import PENDING

if TYPE_CHECKING:
    from chargeslot.models.station import Port, Station
    from chargeslot.models.user import User

# Rejected bookings must not hold the slot, so uniqueness only covers live rows
ACTIVE_BOOKING_PREDICATE = "status IN ('Pending', 'Accepted')"


class Booking(Base):
    """A request to charge at one port for one 30-minute slot."""

    __tablename__ = "bookings"
    __table_args__ = (
        # A booking's station is always its port's station
        ForeignKeyConstraint(
            ["port_id", "station_id"],
            ["ports.id", "ports.station_id"],
            name="fk_bookings_port_station",
            ondelete="CASCADE",
        ),
        Index(
            "uq_bookings_port_timeslot_active",
            "port_id",
            "timeslot",
            unique=True,
            postgresql_where=text(ACTIVE_BOOKING_PREDICATE),
            sqlite_where=text(ACTIVE_BOOKING_PREDICATE),
        ),
        Index(
            "uq_bookings_user_timeslot_active",
            "user_id",
            "timeslot",
            unique=True,
            postgresql_where=text(ACTIVE_BOOKING_PREDICATE),
            sqlite_where=text(ACTIVE_BOOKING_PREDICATE),
        ),
        Index("ix_bookings_port_timeslot_status", "port_id", "timeslot", "status"),
        Index("ix_bookings_user_status", "user_id", "status"),
        CheckConstraint("status IN ('Pending', 'Accepted', 'Rejected')", name="ck_bookings_status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    station_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("stations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    port_id: Mapped[int] = mapped_column(Integer, nullable=False)

    # Slot start, naive local time in settings.booking_timezone
    timeslot: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)

    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=PENDING
    )  # Pending, Accepted, Rejected
    admin_notes: Mapped[str | None] = mapped_column(Text)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="bookings")
    station: Mapped["Station"] = relationship("Station", back_populates="bookings")
    port: Mapped["Port"] = relationship("Port", back_populates="bookings", foreign_keys=[port_id])

    __mapper_args__ = {"eager_defaults": True}
