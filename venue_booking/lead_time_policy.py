"""
Lead Time Policy
Version: 1.0

Minimum advance notice per event type. Pure, no I/O.
"""

from datetime import date
from typing import Optional

from venue_booking.booking_contracts import EventType, LEAD_TIME_DAYS, LEAD_TIME_MESSAGES


def days_until(booking_date: date, today: date) -> int:
    """Whole calendar days from today to the booking date."""
    return (booking_date - today).days


def check_lead_time(
    event_type: EventType,
    booking_date: Optional[date],
    today: date
) -> str:
    """
    Return the lead-time warning, or "" when the rule is met.

    No date selected means nothing to evaluate yet.
    """
    if booking_date is None:
        return ""

    event_type = EventType(event_type)
    if days_until(booking_date, today) < LEAD_TIME_DAYS[event_type]:
        return LEAD_TIME_MESSAGES[event_type]
    return ""
