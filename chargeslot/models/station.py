"""Station and port models."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from chargeslot.database import Base

if TYPE_CHECKING:
    from chargeslot.models.booking import Booking

CHARGING_TYPES = ("Type 1", "Type 2", "CCS", "CHAdeMO")


class Station(Base):
    """Charging station."""

    __tablename__ = "stations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    ports: Mapped[list["Port"]] = relationship(
        "Port", back_populates="station", cascade="all, delete-orphan", order_by="Port.port_number"
    )
    bookings: Mapped[list["Booking"]] = relationship("Booking", back_populates="station")

    __mapper_args__ = {"eager_defaults": True}


class Port(Base):
    """Individually bookable charging connector of a station."""

    __tablename__ = "ports"
    __table_args__ = (
        UniqueConstraint("station_id", "port_number", name="uq_ports_station_port_number"),
        # Target of the bookings (port_id, station_id) foreign key
        UniqueConstraint("id", "station_id", name="uq_ports_id_station_id"),
        CheckConstraint(
            "charging_type IN ('Type 1', 'Type 2', 'CCS', 'CHAdeMO')",
            name="ck_ports_charging_type",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    station_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("stations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    port_number: Mapped[str] = mapped_column(String(50), nullable=False)  # P1, P2, ...
    charging_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default="Type 2"
    )  # Type 1, Type 2, CCS, CHAdeMO
    power_kw: Mapped[int] = mapped_column(Integer, default=22)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    station: Mapped["Station"] = relationship("Station", back_populates="ports")
    bookings: Mapped[list["Booking"]] = relationship(
        "Booking", back_populates="port", foreign_keys="Booking.port_id"
    )

    __mapper_args__ = {"eager_defaults": True}

    @property
    def is_bookable(self) -> bool:
        """A port takes bookings only while it and its station are active."""
        return bool(self.is_active and self.station.is_active)
