"""Whole-day night counting for a check-in/check-out pair.

No I/O, no side effects. ``today`` is injectable so callers and tests can pin
the reference date.
"""

from datetime import date

from pydantic import ValidationError

from booking_engine.exceptions.custom import InvalidDateRangeError, PastDateError
from booking_engine.schemas.reservations import DateRange


def parse_date_range(check_in: date | str, check_out: date | str) -> DateRange:
    """Build a DateRange from ISO ``YYYY-MM-DD`` strings or date objects."""
    try:
        return DateRange(check_in=check_in, check_out=check_out)
    except ValidationError as exc:
        raise InvalidDateRangeError(
            f"Invalid check-in/check-out dates: {check_in!r}, {check_out!r}"
        ) from exc


def compute_nights(check_in: date, check_out: date, today: date | None = None) -> int:
    """Return the number of nights between check-in and check-out.

    Same-day check-in is allowed; a check-in strictly before ``today`` is not.
    """
    if check_out <= check_in:
        raise InvalidDateRangeError("Check-out date must be after check-in date")

    reference = today or date.today()
    if check_in < reference:
        raise PastDateError("Check-in date cannot be in the past")

    return (check_out - check_in).days


def nights_for(date_range: DateRange, today: date | None = None) -> int:
    return compute_nights(date_range.check_in, date_range.check_out, today=today)
