"""Database models."""

from chargeslot.models.booking import Booking
from chargeslot.models.station import CHARGING_TYPES, Port, Station
from chargeslot.models.user import User

__all__ = [
    # User
    "User",
    # Station
    "Station",
    "Port",
    "CHARGING_TYPES",
    # Booking
    "Booking",
]
