"""Station catalogue and per-station statistics."""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from chargeslot.core.exceptions import NotFoundError
from chargeslot.domain.booking_state import ACCEPTED, PENDING, REJECTED
from chargeslot.models.booking import Booking
from chargeslot.models.station import Port, Station

logger = logging.getLogger(__name__)


class StationService:
    """Read side of stations plus deactivation."""

    async def list_active_stations(
        self,
        db: AsyncSession,
        location: str | None = None,
    ) -> list[Station]:
        """Active stations, each carrying only its active ports."""
        query = (
            select(Station)
            .options(selectinload(Station.ports.and_(Port.is_active.is_(True))))
            .where(Station.is_active.is_(True))
            .execution_options(populate_existing=True)
        )
        if location:
            query = query.where(Station.location == location)

        result = await db.execute(query.order_by(Station.name, Station.id))
        return list(result.scalars().all())

    async def get_station(self, db: AsyncSession, station_id: int) -> Station:
        """Get an active station with its active ports."""
        result = await db.execute(
            select(Station)
            .options(selectinload(Station.ports.and_(Port.is_active.is_(True))))
            .where(Station.id == station_id)
            .execution_options(populate_existing=True)
        )
        station = result.scalar_one_or_none()
        if not station or not station.is_active:
            raise NotFoundError("Station", str(station_id))
        return station

    async def get_station_statistics(self, db: AsyncSession, station_id: int) -> dict:
        """Port and booking counts for a station (active or not)."""
        station = await db.get(Station, station_id)
        if not station:
            raise NotFoundError("Station", str(station_id))

        port_result = await db.execute(
            select(
                func.count(Port.id),
                func.count(Port.id).filter(Port.is_active.is_(True)),
            ).where(Port.station_id == station_id)
        )
        total_ports, active_ports = port_result.one()

        status_result = await db.execute(
            select(Booking.status, func.count(Booking.id))
            .where(Booking.station_id == station_id)
            .group_by(Booking.status)
        )
        by_status = {status: count for status, count in status_result.all()}

        return {
            "station_id": station.id,
            "station_name": station.name,
            "total_ports": total_ports,
            "active_ports": active_ports,
            "total_bookings": sum(by_status.values()),
            "pending_bookings": by_status.get(PENDING, 0),
            "accepted_bookings": by_status.get(ACCEPTED, 0),
            "rejected_bookings": by_status.get(REJECTED, 0),
        }

    async def deactivate_station(self, db: AsyncSession, station_id: int) -> Station:
        """Deactivate a station and force all of its ports inactive."""
        result = await db.execute(
            select(Station)
            .options(selectinload(Station.ports))
            .where(Station.id == station_id)
            .execution_options(populate_existing=True)
        )
        station = result.scalar_one_or_none()
        if not station:
            raise NotFoundError("Station", str(station_id))

        station.is_active = False
        for port in station.ports:
            port.is_active = False
        await db.flush()

        logger.info(f"Station {station_id} deactivated together with {len(station.ports)} ports")
        return station


station_service = StationService()
