"""Core utilities and security modules."""

from chargeslot.core.exceptions import (
    AppException,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    RateLimitExceeded,
    ValidationError,
)
from chargeslot.core.security import (
    create_access_token,
    create_user_token,
    verify_token,
)

__all__ = [
    "AppException",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "NotFoundError",
    "RateLimitExceeded",
    "ValidationError",
    "create_access_token",
    "create_user_token",
    "verify_token",
]
