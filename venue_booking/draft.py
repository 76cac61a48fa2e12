"""
Booking Draft
Version: 1.0

In-progress booking request. Immutable value; edits produce a new draft
via dataclasses.replace so every evaluation sees a consistent snapshot.
"""

import re
from dataclasses import dataclass, field, replace
from datetime import date as Date
from typing import FrozenSet, Optional, Tuple

from schemas import CurrentUser
from venue_booking.booking_contracts import EventType, UserRole

_LEADING_INT = re.compile(r"^\s*(\d+)")


@dataclass(frozen=True)
class BookingDraft:
    event_name: str = ""
    event_type: EventType = EventType.CLOSED_CLUB
    expected_attendees: str = ""
    club_name: str = ""
    date: Optional[Date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    venue_ids: FrozenSet[str] = field(default_factory=frozenset)

    def with_changes(self, **changes) -> "BookingDraft":
        """Return a copy with the given fields replaced."""
        if "venue_ids" in changes:
            changes["venue_ids"] = frozenset(changes["venue_ids"])
        if "event_type" in changes:
            changes["event_type"] = EventType(changes["event_type"])
        if isinstance(changes.get("date"), str):
            changes["date"] = Date.fromisoformat(changes["date"]) if changes["date"] else None
        return replace(self, **changes)

    def toggle_venue(self, venue_id: str) -> "BookingDraft":
        if venue_id in self.venue_ids:
            return replace(self, venue_ids=self.venue_ids - {venue_id})
        return replace(self, venue_ids=self.venue_ids | {venue_id})

    def conflict_key(self) -> Tuple:
        """Fields a conflict check depends on."""
        return (self.date, self.start_time, self.end_time, self.club_name, self.venue_ids)

    @property
    def attendee_count(self) -> int:
        """Numeric attendee count ("500+" -> 500, unparsable -> 0)."""
        match = _LEADING_INT.match(self.expected_attendees or "")
        return int(match.group(1)) if match else 0


def new_draft(current_user: Optional[CurrentUser] = None) -> BookingDraft:
    """Fresh draft; club-role users get their own club prefilled."""
    if current_user is not None and current_user.role == UserRole.CLUB.value:
        return BookingDraft(club_name=current_user.name)
    return BookingDraft()


def is_club_locked(current_user: Optional[CurrentUser]) -> bool:
    """Whether the organizing club field is fixed by the login session."""
    return current_user is not None and current_user.role == UserRole.CLUB.value
