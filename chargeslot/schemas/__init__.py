"""Pydantic schemas for API validation."""

from chargeslot.schemas.booking import (
    BookingCreate,
    BookingListResponse,
    BookingResponse,
    BookingStatusUpdate,
)
from chargeslot.schemas.station import (
    PortAvailabilityResponse,
    PortResponse,
    StationListResponse,
    StationResponse,
    StationStatisticsResponse,
    StationSummary,
)
from chargeslot.schemas.user import UserSummary

__all__ = [
    # User
    "UserSummary",
    # Station
    "PortResponse",
    "StationSummary",
    "StationResponse",
    "StationListResponse",
    "StationStatisticsResponse",
    "PortAvailabilityResponse",
    # Booking
    "BookingCreate",
    "BookingStatusUpdate",
    "BookingResponse",
    "BookingListResponse",
]
