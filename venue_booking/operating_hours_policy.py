"""
Operating Hours Policy
Version: 1.0

Allowed booking hours by day of week. Same-day windows only; times are
zero-padded "HH:MM" strings so plain string comparison orders them.

Only the start is bounded. The day's end (midnight) is the implicit limit.
"""

from datetime import date
from typing import Optional

from venue_booking.booking_contracts import (
    END_BEFORE_START_MESSAGE,
    WEEKDAY_EARLIEST_START,
    WEEKDAY_HOURS_MESSAGE,
    WEEKEND_EARLIEST_START,
    WEEKEND_HOURS_MESSAGE,
)

SATURDAY = 5
SUNDAY = 6


def is_weekend(booking_date: date) -> bool:
    return booking_date.weekday() in (SATURDAY, SUNDAY)


def check_operating_hours(
    booking_date: Optional[date],
    start_time: Optional[str],
    end_time: Optional[str]
) -> str:
    """Return the hours warning, or "" when the window is allowed or incomplete."""
    if not booking_date or not start_time or not end_time:
        return ""

    if end_time <= start_time:
        return END_BEFORE_START_MESSAGE

    if is_weekend(booking_date):
        if start_time < WEEKEND_EARLIEST_START:
            return WEEKEND_HOURS_MESSAGE
    elif start_time < WEEKDAY_EARLIEST_START:
        return WEEKDAY_HOURS_MESSAGE

    return ""
