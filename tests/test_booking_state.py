"""Tests for the booking state machine."""

import pytest

from chargeslot.core.exceptions import ConflictError
from chargeslot.domain.booking_state import (
    ACCEPTED,
    NOT_PENDING_MESSAGE,
    PENDING,
    REJECTED,
    assert_booking_transition,
    can_transition,
)


@pytest.mark.parametrize("target", [ACCEPTED, REJECTED])
def test_pending_can_be_reviewed(target):
    assert can_transition(PENDING, target)
    assert_booking_transition(PENDING, target)


@pytest.mark.parametrize("current", [ACCEPTED, REJECTED])
@pytest.mark.parametrize("target", [PENDING, ACCEPTED, REJECTED])
def test_reviewed_bookings_are_terminal(current, target):
    assert not can_transition(current, target)
    with pytest.raises(ConflictError) as exc_info:
        assert_booking_transition(current, target)

    assert exc_info.value.status_code == 422
    assert exc_info.value.detail == NOT_PENDING_MESSAGE
    assert exc_info.value.errors == [{"code": "booking_not_pending", "message": NOT_PENDING_MESSAGE}]


def test_pending_cannot_stay_pending():
    assert not can_transition(PENDING, PENDING)


def test_unknown_status_has_no_transitions():
    assert not can_transition("Cancelled", ACCEPTED)
