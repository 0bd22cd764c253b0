"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict


class UserSummary(BaseModel):
    """Public user fields shown alongside bookings."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
