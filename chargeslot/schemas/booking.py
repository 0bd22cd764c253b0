"""Booking-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from chargeslot.schemas.station import PortResponse, StationSummary
from chargeslot.schemas.user import UserSummary


class BookingCreate(BaseModel):
    """Schema for creating a booking.

    Status is never accepted from the client; new bookings are always Pending.
    """

    station_id: int = Field(..., ge=1)
    port_id: int = Field(..., ge=1)
    timeslot: datetime


class BookingStatusUpdate(BaseModel):
    """Schema for a reviewer accepting or rejecting a booking."""

    status: Literal["Accepted", "Rejected"]
    admin_notes: str | None = Field(None, max_length=500)


class BookingResponse(BaseModel):
    """Schema for booking response with related data."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    station_id: int
    port_id: int
    timeslot: datetime
    status: str
    admin_notes: str | None

    user: UserSummary
    station: StationSummary
    port: PortResponse

    created_at: datetime
    updated_at: datetime


class BookingListResponse(BaseModel):
    """Schema for booking list."""

    bookings: list[BookingResponse]
    total: int
