"""Slot availability for charging ports."""

from dataclasses import dataclass
from datetime import date, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from chargeslot.core.exceptions import NotFoundError
from chargeslot.domain.booking_state import ACTIVE_STATUSES
from chargeslot.domain.slots import day_bounds, format_slot, slot_labels
from chargeslot.models.booking import Booking
from chargeslot.models.station import Port


@dataclass
class PortAvailability:
    """Booked and free slot starts of one port on one day."""

    port: Port
    date: date
    booked_slots: list[str]
    free_slots: list[str]


class AvailabilityService:
    """Derives free slots from the bookings holding a port."""

    async def get_port(self, db: AsyncSession, port_id: int) -> Port:
        """Load a port with its station or raise NotFoundError."""
        result = await db.execute(
            select(Port).options(selectinload(Port.station)).where(Port.id == port_id)
        )
        port = result.scalar_one_or_none()
        if not port:
            raise NotFoundError("Port", str(port_id))
        return port

    async def get_port_availability(
        self,
        db: AsyncSession,
        port_id: int,
        day: date,
    ) -> PortAvailability:
        """Compute booked and free slots for a port on ``day``.

        Args:
            db: Database session
            port_id: Port to inspect
            day: Local calendar date

        Returns:
            PortAvailability: Both lists ascending, disjoint, covering the grid
        """
        port = await self.get_port(db, port_id)

        start, end = day_bounds(day)
        result = await db.execute(
            select(Booking.timeslot).where(
                Booking.port_id == port.id,
                Booking.status.in_(ACTIVE_STATUSES),
                Booking.timeslot >= start,
                Booking.timeslot <= end,
            )
        )
        taken = {format_slot(timeslot) for timeslot in result.scalars().all()}

        grid = slot_labels()
        return PortAvailability(
            port=port,
            date=day,
            booked_slots=[slot for slot in grid if slot in taken],
            free_slots=[slot for slot in grid if slot not in taken],
        )

    async def is_slot_free(self, db: AsyncSession, port: Port, timeslot: datetime) -> bool:
        """Check a single slot.

        True only if the port and its station are active and no Pending or
        Accepted booking holds the port at exactly ``timeslot``.
        """
        if not port.is_bookable:
            return False

        result = await db.execute(
            select(Booking.id)
            .where(
                Booking.port_id == port.id,
                Booking.timeslot == timeslot,
                Booking.status.in_(ACTIVE_STATUSES),
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is None


availability_service = AvailabilityService()
