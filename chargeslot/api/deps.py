"""API dependencies for authentication and common operations."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from chargeslot.core.exceptions import AuthenticationError, AuthorizationError
from chargeslot.core.security import verify_token
from chargeslot.database import get_db
from chargeslot.models.user import User

# Security scheme
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    if not credentials:
        raise AuthenticationError("Not authenticated")

    payload = verify_token(credentials.credentials, token_type="access")
    user_id = payload.get("sub")
    try:
        user_pk = int(user_id)
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid token payload")

    user = await db.get(User, user_pk)
    if not user:
        raise AuthenticationError("User not found")

    return user


async def get_current_active_user(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Get current user and verify they are active."""
    if not current_user.is_active:
        raise AuthorizationError("User account is deactivated")
    return current_user


async def get_current_reviewer(
    current_user: Annotated[User, Depends(get_current_active_user)],
) -> User:
    """Principal allowed to accept or reject bookings.

    Any active user may review; reviewer policy belongs to the identity
    provider.
    """
    return current_user


__all__ = [
    "get_db",
    "get_current_user",
    "get_current_active_user",
    "get_current_reviewer",
]
