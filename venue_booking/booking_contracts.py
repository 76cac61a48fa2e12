"""
Booking Contract Constants
Version: 1.0

Centralized booking-related enums, thresholds and user-facing messages
so that rule modules carry no magic numbers or duplicated strings.

Wire values match the scheduling API.
"""

from enum import Enum
from typing import Dict, List


class EventType(str, Enum):
    """Event type chosen on the draft. Drives the lead-time rule."""
    CLOSED_CLUB = "closed_club"
    OPEN_ALL = "open_all"
    CO_CURRICULAR = "co_curricular"


class VenueCategory(str, Enum):
    """
    Approval tier of a venue.

    A: direct booking (subject to vacancy)
    B: needs convener & faculty approval
    """
    DIRECT = "A"
    RESTRICTED_APPROVAL = "B"


class WarningKind(str, Enum):
    TIMELINE = "timeline"
    HOURS = "hours"
    CONFLICT = "conflict"
    VENUE = "venue"


class MessageLevel(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class UserRole(str, Enum):
    CLUB = "club"
    ADMIN = "admin"
    FACULTY = "faculty"


# Kinds that gate submission. VENUE is advisory only.
BLOCKING_KINDS = (WarningKind.TIMELINE, WarningKind.HOURS, WarningKind.CONFLICT)


# =============================================================================
# LEAD TIME
# =============================================================================

LEAD_TIME_DAYS: Dict[EventType, int] = {
    EventType.CO_CURRICULAR: 30,
    EventType.OPEN_ALL: 20,
    EventType.CLOSED_CLUB: 1,
}

LEAD_TIME_MESSAGES: Dict[EventType, str] = {
    EventType.CO_CURRICULAR: "Co-curricular events must be booked at least 30 days in advance.",
    EventType.OPEN_ALL: "Open-for-All events must be booked at least 20 days in advance.",
    EventType.CLOSED_CLUB: "Closed club events must be booked at least 1 day in advance.",
}


# =============================================================================
# OPERATING HOURS ("HH:MM", same-day only)
# =============================================================================

WEEKEND_EARLIEST_START = "08:00"
WEEKDAY_EARLIEST_START = "16:00"

END_BEFORE_START_MESSAGE = "End time must be after start time."
WEEKEND_HOURS_MESSAGE = "On weekends, bookings are allowed from 8:00 AM to 12:00 AM."
WEEKDAY_HOURS_MESSAGE = "On weekdays, bookings are only allowed from 4:00 PM to 12:00 AM."


# =============================================================================
# VENUE ROUTING
# =============================================================================

# Legacy catalog spellings -> canonical category
LEGACY_VENUE_CATEGORIES: Dict[str, VenueCategory] = {
    "auto_approval": VenueCategory.DIRECT,
    "needs_approval": VenueCategory.RESTRICTED_APPROVAL,
}

RESTRICTED_VENUE_MESSAGE = (
    "Includes Category B Venue(s): Requires Sleazzy Convener & Faculty Approval."
)
DIRECT_VENUE_MESSAGE = "Category A Venues: Direct booking available (Subject to vacancy)."


# =============================================================================
# CONFLICT / CATALOG / SUBMISSION
# =============================================================================

CONFLICT_CHECK_FAILED_MESSAGE = (
    "Could not verify conflicts. Please check your connection and try again."
)
# Used when the scheduling API reports a conflict without details
CONFLICT_FOUND_MESSAGE = "The selected time overlaps an existing booking."
CATALOG_LOAD_FAILED_MESSAGE = "Failed to load clubs and venues. Please refresh the page."

RESOLVE_WARNINGS_MESSAGE = "Please resolve the warnings before submitting."
SUBMISSION_IN_FLIGHT_MESSAGE = "A booking request is already being submitted."
INVALID_CLUB_MESSAGE = "Invalid club selected"
NO_VENUE_MESSAGE = "Please select at least one venue."
MISSING_SCHEDULE_MESSAGE = "Please select a date, start time and end time."
CLUB_LOCKED_MESSAGE = "The organizing club is fixed by your login session."
SUBMISSION_FAILED_MESSAGE = "Failed to submit booking. Please try again."
SUBMISSION_SUCCESS_MESSAGE = "Booking request submitted successfully!"


# =============================================================================
# FORM OPTIONS
# =============================================================================

# Expected attendee bracket value -> label
ATTENDEE_BRACKETS: Dict[str, str] = {
    "0": "0 - No attendees",
    "10": "1-10 attendees",
    "25": "11-25 attendees",
    "50": "26-50 attendees",
    "75": "51-75 attendees",
    "100": "76-100 attendees",
    "150": "101-150 attendees",
    "200": "151-200 attendees",
    "250": "201-250 attendees",
    "300": "251-300 attendees",
    "400": "301-400 attendees",
    "500": "401-500 attendees",
    "500+": "500+ attendees",
}

# Every quarter hour of the day
TIME_OPTIONS: List[str] = [
    f"{hour:02d}:{minute:02d}"
    for hour in range(24)
    for minute in (0, 15, 30, 45)
]


# =============================================================================
# API PATHS
# =============================================================================

CLUBS_PATH = "/api/clubs"
VENUES_PATH = "/api/venues"
CONFLICT_CHECK_PATH = "/api/bookings/check-conflict"
BOOKINGS_PATH = "/api/bookings"
