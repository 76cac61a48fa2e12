"""
Eligibility Aggregator
Version: 1.0

Combines the booking policies into one verdict.
DEPENDS ON: lead_time_policy.py, operating_hours_policy.py,
            venue_classifier.py, conflict_checker.py

evaluate() runs the synchronous policies; the conflict slot is filled
separately by aggregate() once the conflict check resolves. Both return
new values and keep no state between calls.
"""

from dataclasses import dataclass, replace
from datetime import date
from typing import Dict, Optional

from venue_booking.booking_contracts import BLOCKING_KINDS, MessageLevel, WarningKind
from venue_booking.conflict_checker import ConflictResult
from venue_booking.draft import BookingDraft
from venue_booking.lead_time_policy import check_lead_time
from venue_booking.operating_hours_policy import check_operating_hours
from venue_booking.venue_classifier import classify_venues


@dataclass(frozen=True)
class EligibilityVerdict:
    """
    Warnings for a draft plus the submission gate.

    Invariants:
    - submittable is False iff timeline, hours or conflict is non-empty
    - venue is advisory and never affects submittable
    """
    timeline: str = ""
    hours: str = ""
    conflict: str = ""
    venue: str = ""
    venue_level: Optional[MessageLevel] = None
    conflict_check_failed: bool = False

    @property
    def submittable(self) -> bool:
        return not any(self.message(kind) for kind in BLOCKING_KINDS)

    def message(self, kind: WarningKind) -> str:
        return getattr(self, WarningKind(kind).value)

    def warnings(self) -> Dict[WarningKind, str]:
        """Non-empty messages keyed by kind."""
        return {
            kind: self.message(kind)
            for kind in WarningKind
            if self.message(kind)
        }

    def blocking_warnings(self) -> Dict[WarningKind, str]:
        return {
            kind: message
            for kind, message in self.warnings().items()
            if kind in BLOCKING_KINDS
        }


def evaluate(draft: BookingDraft, catalog, today: date) -> EligibilityVerdict:
    """
    Run lead-time, operating-hours and venue routing for a draft.

    Args:
        draft: Booking draft
        catalog: Catalog snapshot used to resolve venue categories
        today: Evaluation date (injected, no wall clock)
    """
    routing = classify_venues(draft.venue_ids, catalog)
    return EligibilityVerdict(
        timeline=check_lead_time(draft.event_type, draft.date, today),
        hours=check_operating_hours(draft.date, draft.start_time, draft.end_time),
        venue=routing.message,
        venue_level=routing.level,
    )


def aggregate(verdict: EligibilityVerdict, conflict: ConflictResult) -> EligibilityVerdict:
    """Merge a conflict check result into a verdict."""
    return replace(
        verdict,
        conflict=conflict.warning,
        conflict_check_failed=conflict.check_failed,
    )
