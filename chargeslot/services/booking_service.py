"""Booking validation, creation and review."""

import logging
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from chargeslot.config import settings
from chargeslot.core.exceptions import ConflictError, NotFoundError, ValidationError
from chargeslot.domain.booking_rules import (
    MESSAGES,
    PORT_INACTIVE,
    PORT_NOT_FOUND,
    PORT_STATION_MISMATCH,
    STATION_INACTIVE,
    STATION_NOT_FOUND,
    TIMESLOT_BOOKED,
    TIMESLOT_IN_PAST,
    TIMESLOT_NOT_ALIGNED,
    USER_TIMESLOT_CONFLICT,
    ValidationResult,
)
from chargeslot.domain.booking_state import (
    ACCEPTED,
    ACTIVE_STATUSES,
    NOT_PENDING_MESSAGE,
    PENDING,
    REJECTED,
    assert_booking_transition,
)
from chargeslot.domain.slots import is_grid_aligned, local_now, to_local
from chargeslot.models.booking import Booking
from chargeslot.models.station import Port, Station
from chargeslot.services.availability_service import AvailabilityService, availability_service

logger = logging.getLogger(__name__)


class BookingService:
    """Service for the booking lifecycle.

    The acting user is always passed in by the caller; nothing here reads
    request or authentication state.
    """

    def __init__(
        self,
        availability: AvailabilityService | None = None,
        tz_name: str | None = None,
    ) -> None:
        self.availability = availability or availability_service
        self.tz_name = tz_name or settings.booking_timezone

    async def user_has_conflicting_booking(
        self, db: AsyncSession, user_id: int, timeslot: datetime
    ) -> bool:
        """Check if the user already holds a live booking at ``timeslot`` on any port."""
        result = await db.execute(
            select(Booking.id)
            .where(
                Booking.user_id == user_id,
                Booking.timeslot == timeslot,
                Booking.status.in_(ACTIVE_STATUSES),
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def validate_booking(
        self,
        db: AsyncSession,
        user_id: int,
        station_id: int,
        port_id: int,
        timeslot: datetime,
        now: datetime | None = None,
    ) -> ValidationResult:
        """Run every booking rule and collect the violations.

        Timing rules are checked first; if the timeslot is in the past or off
        the grid no other rule is evaluated.

        Args:
            db: Database session
            user_id: Requesting user
            station_id: Station the user picked
            port_id: Port the user picked
            timeslot: Requested slot start
            now: Submission time, defaults to the current local time

        Returns:
            ValidationResult: Empty when the booking may be created
        """
        result = ValidationResult()
        timeslot = to_local(timeslot, self.tz_name)
        now = to_local(now, self.tz_name) if now else local_now(self.tz_name)

        if timeslot <= now:
            result.add(TIMESLOT_IN_PAST)
        if not is_grid_aligned(timeslot):
            result.add(TIMESLOT_NOT_ALIGNED)
        if not result.ok:
            return result

        station = await db.get(Station, station_id)
        if station is None:
            result.add(STATION_NOT_FOUND)

        port_result = await db.execute(
            select(Port).options(selectinload(Port.station)).where(Port.id == port_id)
        )
        port = port_result.scalar_one_or_none()
        if port is None:
            result.add(PORT_NOT_FOUND)
        elif port.station_id != station_id:
            result.add(PORT_STATION_MISMATCH)
        else:
            if not port.is_active:
                result.add(PORT_INACTIVE)
            if not port.station.is_active:
                result.add(STATION_INACTIVE)
            if port.is_bookable and not await self.availability.is_slot_free(db, port, timeslot):
                result.add(TIMESLOT_BOOKED)

        if await self.user_has_conflicting_booking(db, user_id, timeslot):
            result.add(USER_TIMESLOT_CONFLICT)

        return result

    async def create_booking(
        self,
        db: AsyncSession,
        user_id: int,
        station_id: int,
        port_id: int,
        timeslot: datetime,
        now: datetime | None = None,
    ) -> Booking:
        """Validate and store a new Pending booking.

        Raises:
            ValidationError: With every violated rule
            ConflictError: If a concurrent request took the slot first
        """
        validation = await self.validate_booking(db, user_id, station_id, port_id, timeslot, now)
        if not validation.ok:
            logger.info(
                f"Booking request rejected for user {user_id}: {', '.join(validation.codes)}"
            )
            validation.raise_for_violations()

        booking = Booking(
            user_id=user_id,
            station_id=station_id,
            port_id=port_id,
            timeslot=to_local(timeslot, self.tz_name),
            status=PENDING,
        )
        db.add(booking)
        try:
            await db.flush()
        except IntegrityError:
            await db.rollback()
            # Either the port slot or the user's timeslot was taken concurrently
            code = TIMESLOT_BOOKED
            if await self.user_has_conflicting_booking(db, user_id, to_local(timeslot, self.tz_name)):
                code = USER_TIMESLOT_CONFLICT
            logger.warning(
                f"Lost booking race for port {port_id} at {timeslot.isoformat()} "
                f"(user {user_id}): {code}"
            )
            raise ConflictError(MESSAGES[code], code=code)

        logger.info(
            f"Booking {booking.id} created: user={user_id} port={port_id} "
            f"timeslot={booking.timeslot.isoformat()}"
        )
        return await self.get_booking(db, booking.id)

    async def get_booking(self, db: AsyncSession, booking_id: int) -> Booking:
        """Load a booking with its user, station and port."""
        result = await db.execute(
            select(Booking)
            .options(
                selectinload(Booking.user),
                selectinload(Booking.station),
                selectinload(Booking.port),
            )
            .where(Booking.id == booking_id)
            .execution_options(populate_existing=True)
        )
        booking = result.scalar_one_or_none()
        if not booking:
            raise NotFoundError("Booking", str(booking_id))
        return booking

    async def list_bookings(
        self,
        db: AsyncSession,
        user_id: int | None = None,
        status: str | None = None,
    ) -> list[Booking]:
        """List bookings, newest first, optionally for one user and/or status."""
        query = select(Booking).options(
            selectinload(Booking.user),
            selectinload(Booking.station),
            selectinload(Booking.port),
        )
        if user_id is not None:
            query = query.where(Booking.user_id == user_id)
        if status:
            query = query.where(Booking.status == status)

        query = query.order_by(Booking.created_at.desc(), Booking.id.desc())
        result = await db.execute(query)
        return list(result.scalars().all())

    async def update_booking_status(
        self,
        db: AsyncSession,
        booking_id: int,
        status: str,
        admin_notes: str | None = None,
        reviewer_id: int | None = None,
    ) -> Booking:
        """Accept or reject a Pending booking.

        The write is conditional on the row still being Pending, so of two
        concurrent reviewers exactly one succeeds.

        Raises:
            NotFoundError: If the booking does not exist
            ConflictError: If the booking is no longer Pending
        """
        if status not in (ACCEPTED, REJECTED):
            raise ValidationError("Status must be either Accepted or Rejected.")

        booking = await self.get_booking(db, booking_id)
        assert_booking_transition(booking.status, status)

        result = await db.execute(
            update(Booking)
            .where(Booking.id == booking_id, Booking.status == PENDING)
            .values(status=status, admin_notes=admin_notes)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            logger.warning(f"Booking {booking_id} was reviewed concurrently; {status} discarded")
            raise ConflictError(NOT_PENDING_MESSAGE, code="booking_not_pending")

        logger.info(f"Booking {booking_id} {status.lower()} by reviewer {reviewer_id}")
        return await self.get_booking(db, booking_id)


booking_service = BookingService()
