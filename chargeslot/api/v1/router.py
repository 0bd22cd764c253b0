"""Main API router that includes all endpoint routers."""

from fastapi import APIRouter

from chargeslot.api.v1 import bookings, ports, stations

api_router = APIRouter()

# Stations
api_router.include_router(stations.router, prefix="/stations", tags=["Stations"])

# Ports
api_router.include_router(ports.router, prefix="/ports", tags=["Ports"])

# Bookings
api_router.include_router(bookings.router, prefix="/bookings", tags=["Bookings"])
