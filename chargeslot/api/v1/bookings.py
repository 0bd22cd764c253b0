"""Booking endpoints."""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from chargeslot.api.deps import get_current_active_user, get_current_reviewer, get_db
from chargeslot.core.middleware import booking_limiter
from chargeslot.models.booking import Booking
from chargeslot.models.user import User
from chargeslot.schemas.booking import (
    BookingCreate,
    BookingListResponse,
    BookingResponse,
    BookingStatusUpdate,
)
from chargeslot.services.booking_service import booking_service

router = APIRouter()

StatusFilter = Literal["Pending", "Accepted", "Rejected"]


@router.post(
    "",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(booking_limiter)],
)
async def create_booking(
    booking_data: BookingCreate,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Booking:
    """Request a charging slot. The booking starts out Pending."""
    return await booking_service.create_booking(
        db,
        user_id=current_user.id,
        station_id=booking_data.station_id,
        port_id=booking_data.port_id,
        timeslot=booking_data.timeslot,
    )


@router.get("/my-bookings", response_model=BookingListResponse)
async def get_my_bookings(
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    status_filter: StatusFilter | None = Query(default=None, alias="status"),
) -> BookingListResponse:
    """Get bookings for the current user, newest first."""
    bookings = await booking_service.list_bookings(
        db, user_id=current_user.id, status=status_filter
    )
    return BookingListResponse(
        bookings=[BookingResponse.model_validate(b) for b in bookings],
        total=len(bookings),
    )


@router.get("", response_model=BookingListResponse)
async def get_all_bookings(
    current_user: Annotated[User, Depends(get_current_reviewer)],
    db: Annotated[AsyncSession, Depends(get_db)],
    status_filter: StatusFilter | None = Query(default=None, alias="status"),
    user_id: int | None = Query(default=None, ge=1),
) -> BookingListResponse:
    """Get all bookings for review, newest first."""
    bookings = await booking_service.list_bookings(db, user_id=user_id, status=status_filter)
    return BookingListResponse(
        bookings=[BookingResponse.model_validate(b) for b in bookings],
        total=len(bookings),
    )


@router.put("/{booking_id}/status", response_model=BookingResponse)
async def update_booking_status(
    booking_id: int,
    request: BookingStatusUpdate,
    current_user: Annotated[User, Depends(get_current_reviewer)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Booking:
    """Accept or reject a pending booking."""
    return await booking_service.update_booking_status(
        db,
        booking_id=booking_id,
        status=request.status,
        admin_notes=request.admin_notes,
        reviewer_id=current_user.id,
    )
