"""Station, port and availability schemas."""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

ChargingType = Literal["Type 1", "Type 2", "CCS", "CHAdeMO"]


class PortResponse(BaseModel):
    """Schema for port response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    station_id: int
    port_number: str
    charging_type: ChargingType
    power_kw: int
    is_active: bool


class StationSummary(BaseModel):
    """Station fields without nested ports."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    address: str
    location: str
    description: str | None
    is_active: bool


class StationResponse(StationSummary):
    """Schema for station response with its active ports."""

    ports: list[PortResponse]
    created_at: datetime
    updated_at: datetime


class StationListResponse(BaseModel):
    """Schema for station list."""

    stations: list[StationResponse]


class StationStatisticsResponse(BaseModel):
    """Schema for per-station counts."""

    station_id: int
    station_name: str
    total_ports: int
    active_ports: int
    total_bookings: int
    pending_bookings: int
    accepted_bookings: int
    rejected_bookings: int


class PortAvailabilityResponse(BaseModel):
    """Schema for a port's slots on one day."""

    model_config = ConfigDict(from_attributes=True)

    port: PortResponse
    date: date
    booked_slots: list[str]
    free_slots: list[str]
