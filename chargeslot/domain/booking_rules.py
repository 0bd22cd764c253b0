"""Booking rule violations and the result type that aggregates them."""

from dataclasses import asdict, dataclass, field

from chargeslot.core.exceptions import ValidationError

TIMESLOT_IN_PAST = "timeslot_in_past"
TIMESLOT_NOT_ALIGNED = "timeslot_not_aligned"
STATION_NOT_FOUND = "station_not_found"
STATION_INACTIVE = "station_inactive"
PORT_NOT_FOUND = "port_not_found"
PORT_STATION_MISMATCH = "port_station_mismatch"
PORT_INACTIVE = "port_inactive"
TIMESLOT_BOOKED = "timeslot_booked"
USER_TIMESLOT_CONFLICT = "user_timeslot_conflict"

MESSAGES: dict[str, str] = {
    TIMESLOT_IN_PAST: "Timeslot must be in the future.",
    TIMESLOT_NOT_ALIGNED: "Timeslot must start on a 30-minute boundary between 06:00 and 22:00.",
    STATION_NOT_FOUND: "Selected station does not exist.",
    STATION_INACTIVE: "This station is not available.",
    PORT_NOT_FOUND: "Port not found.",
    PORT_STATION_MISMATCH: "Port does not belong to the specified station.",
    PORT_INACTIVE: "This port is not available.",
    TIMESLOT_BOOKED: "This timeslot is already booked.",
    USER_TIMESLOT_CONFLICT: "You already have a booking for this timeslot.",
}


@dataclass(frozen=True)
class Violation:
    """A single broken booking rule."""

    code: str
    message: str


@dataclass
class ValidationResult:
    """Collects every violation found for a booking request."""

    violations: list[Violation] = field(default_factory=list)

    def add(self, code: str, message: str | None = None) -> None:
        self.violations.append(Violation(code=code, message=message or MESSAGES[code]))

    @property
    def ok(self) -> bool:
        return not self.violations

    @property
    def codes(self) -> list[str]:
        return [v.code for v in self.violations]

    @property
    def messages(self) -> list[str]:
        return [v.message for v in self.violations]

    def raise_for_violations(self) -> None:
        """Raise a single ValidationError carrying all violations, if any."""
        if self.ok:
            return
        raise ValidationError(
            detail=" ".join(self.messages),
            errors=[asdict(v) for v in self.violations],
        )
