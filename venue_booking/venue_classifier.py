"""
Venue Approval Classifier
Version: 1.0

Decides the approval route for a venue selection.
Catalog category spellings are normalized in exactly one place
(normalize_venue_category); everything else works on VenueCategory.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from venue_booking.booking_contracts import (
    DIRECT_VENUE_MESSAGE,
    LEGACY_VENUE_CATEGORIES,
    RESTRICTED_VENUE_MESSAGE,
    MessageLevel,
    VenueCategory,
)


@dataclass(frozen=True)
class VenueRouting:
    """Advisory venue message. Never blocks submission."""
    message: str = ""
    level: Optional[MessageLevel] = None


NO_ROUTING = VenueRouting()


def normalize_venue_category(raw: Optional[str]) -> Optional[VenueCategory]:
    """
    Map a catalog category value to VenueCategory.

    Accepts canonical "A"/"B" and legacy "auto_approval"/"needs_approval".
    Empty or unknown values give None.
    """
    if not raw:
        return None
    if raw in LEGACY_VENUE_CATEGORIES:
        return LEGACY_VENUE_CATEGORIES[raw]
    try:
        return VenueCategory(raw)
    except ValueError:
        return None


def classify_venues(venue_ids: Iterable[str], catalog) -> VenueRouting:
    """
    Classify a selection against a catalog exposing venue_category(venue_id).

    Any restricted venue makes the whole selection need approval.
    """
    venue_ids = list(venue_ids)
    if not venue_ids:
        return NO_ROUTING

    categories = [catalog.venue_category(venue_id) for venue_id in venue_ids]
    if VenueCategory.RESTRICTED_APPROVAL in categories:
        return VenueRouting(RESTRICTED_VENUE_MESSAGE, MessageLevel.WARNING)
    return VenueRouting(DIRECT_VENUE_MESSAGE, MessageLevel.SUCCESS)
