"""Port availability endpoints."""

from datetime import date as date_type
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from chargeslot.api.deps import get_db
from chargeslot.config import settings
from chargeslot.domain.slots import local_now
from chargeslot.schemas.station import PortAvailabilityResponse
from chargeslot.services.availability_service import availability_service

router = APIRouter()


@router.get("/{port_id}/availability", response_model=PortAvailabilityResponse)
async def get_port_availability(
    port_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    date: date_type | None = Query(default=None, description="Local date, defaults to today"),
) -> PortAvailabilityResponse:
    """Booked and free 30-minute slots of a port for one day."""
    day = date or local_now(settings.booking_timezone).date()
    availability = await availability_service.get_port_availability(db, port_id, day)
    return PortAvailabilityResponse.model_validate(availability)
