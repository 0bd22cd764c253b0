"""Booking state machine.

States:
- Pending: submitted by a user, awaiting review
- Accepted: approved by a reviewer (terminal)
- Rejected: declined by a reviewer (terminal), frees the slot
"""

from chargeslot.core.exceptions import ConflictError

PENDING = "Pending"
ACCEPTED = "Accepted"
REJECTED = "Rejected"

BOOKING_STATUSES = (PENDING, ACCEPTED, REJECTED)

# Statuses that hold a port slot and count towards a user's conflicts
ACTIVE_STATUSES = (PENDING, ACCEPTED)

BOOKING_TRANSITIONS: dict[str, set[str]] = {
    PENDING: {ACCEPTED, REJECTED},
    ACCEPTED: set(),
    REJECTED: set(),
}

NOT_PENDING_MESSAGE = "Booking status cannot be changed. It is no longer pending."


def can_transition(current: str, target: str) -> bool:
    """Check whether ``current`` may move to ``target``."""
    return target in BOOKING_TRANSITIONS.get(current, set())


def assert_booking_transition(current: str, target: str) -> None:
    """Validate booking state transition.

    Raises:
        ConflictError: If the booking has already left the Pending state
    """
    if not can_transition(current, target):
        raise ConflictError(NOT_PENDING_MESSAGE, code="booking_not_pending")
