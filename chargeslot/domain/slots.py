"""Daily slot grid.

Bookings occupy exactly one slot. Slots start every 30 minutes from 06:00 up
to and including 22:00 of the local date, 33 slots per day.
"""

from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo

SLOT_MINUTES = 30
OPENING_TIME = time(6, 0)
CLOSING_TIME = time(22, 0)  # last slot starts here


def slot_grid() -> list[time]:
    """All slot start times of a day in ascending order."""
    slots = []
    current = datetime.combine(date.min, OPENING_TIME)
    last = datetime.combine(date.min, CLOSING_TIME)
    while current <= last:
        slots.append(current.time())
        current += timedelta(minutes=SLOT_MINUTES)
    return slots


def format_slot(value: time | datetime) -> str:
    """Render a slot start as ``HH:MM``."""
    return value.strftime("%H:%M")


def slot_labels() -> list[str]:
    """The grid as ``HH:MM`` strings."""
    return [format_slot(slot) for slot in slot_grid()]


def is_grid_aligned(value: datetime) -> bool:
    """Check that ``value`` is exactly the start of a grid slot."""
    if value.second or value.microsecond:
        return False
    if value.minute % SLOT_MINUTES:
        return False
    return OPENING_TIME <= value.time() <= CLOSING_TIME


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Inclusive ``[start, end]`` naive datetime range covering ``day``.

    Both ends stay within ``day`` so the last representable date works too.
    """
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def to_local(value: datetime, tz_name: str) -> datetime:
    """Normalize ``value`` to a naive datetime in ``tz_name``.

    Naive values are taken to be local already.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(ZoneInfo(tz_name)).replace(tzinfo=None)


def local_now(tz_name: str) -> datetime:
    """Current naive local time in ``tz_name``."""
    return to_local(datetime.now(UTC), tz_name)
