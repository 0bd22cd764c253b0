"""Station endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from chargeslot.api.deps import get_current_active_user, get_current_reviewer, get_db
from chargeslot.models.station import Station
from chargeslot.models.user import User
from chargeslot.schemas.station import (
    StationListResponse,
    StationResponse,
    StationStatisticsResponse,
)
from chargeslot.services.station_service import station_service

router = APIRouter()


@router.get("", response_model=StationListResponse)
async def list_stations(
    db: Annotated[AsyncSession, Depends(get_db)],
    location: str | None = Query(default=None, max_length=255),
) -> StationListResponse:
    """List active stations with their active ports."""
    stations = await station_service.list_active_stations(db, location=location)
    return StationListResponse(
        stations=[StationResponse.model_validate(s) for s in stations]
    )


@router.get("/{station_id}", response_model=StationResponse)
async def get_station(
    station_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Station:
    """Get an active station by ID."""
    return await station_service.get_station(db, station_id)


@router.get("/{station_id}/statistics", response_model=StationStatisticsResponse)
async def get_station_statistics(
    station_id: int,
    current_user: Annotated[User, Depends(get_current_active_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> StationStatisticsResponse:
    """Port and booking counts for a station."""
    stats = await station_service.get_station_statistics(db, station_id)
    return StationStatisticsResponse(**stats)


@router.post("/{station_id}/deactivate", response_model=StationResponse)
async def deactivate_station(
    station_id: int,
    current_user: Annotated[User, Depends(get_current_reviewer)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Station:
    """Take a station and all of its ports out of service."""
    return await station_service.deactivate_station(db, station_id)
