"""
Conflict Checker
Version: 1.0

Asks the scheduling API whether a proposed window overlaps existing
bookings for the club or the selected venues.
DEPENDS ON: api_gateway.py, catalog_service.py, config.py

This is the only call that suspends during eligibility evaluation.
Transport failures fail closed: the result blocks submission with a
distinct message and is logged and counted apart from real conflicts.
"""

import time as clock
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Dict, Optional
from zoneinfo import ZoneInfo

from pydantic import ValidationError

from config import get_settings
from schemas import ConflictCheckResponse
from venue_booking.api_gateway import APIGateway
from venue_booking.booking_contracts import (
    CONFLICT_CHECK_FAILED_MESSAGE,
    CONFLICT_CHECK_PATH,
    CONFLICT_FOUND_MESSAGE,
)
from venue_booking.catalog_service import CatalogSnapshot
from venue_booking.draft import BookingDraft
from venue_booking.logging_config import get_logger
from venue_booking.metrics import CONFLICT_CHECK_FAILURES, record_conflict_check

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConflictResult:
    has_conflict: bool = False
    message: str = ""
    check_failed: bool = False

    @property
    def warning(self) -> str:
        """Message for the conflict slot ("" when clear)."""
        return self.message if self.has_conflict else ""


NO_CONFLICT = ConflictResult()
CHECK_FAILED = ConflictResult(
    has_conflict=True,
    message=CONFLICT_CHECK_FAILED_MESSAGE,
    check_failed=True
)


def booking_instant(booking_date: date, hhmm: str, zone: ZoneInfo) -> str:
    """
    ISO-8601 UTC instant for a local date and "HH:MM".

    >>> booking_instant(date(2026, 3, 2), "17:00", ZoneInfo("UTC"))
    '2026-03-02T17:00:00.000Z'
    """
    local = datetime.combine(booking_date, time.fromisoformat(hhmm), tzinfo=zone)
    utc = local.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def is_checkable(draft: BookingDraft) -> bool:
    return bool(draft.date and draft.start_time and draft.end_time and draft.club_name)


def build_conflict_query(
    draft: BookingDraft,
    catalog: CatalogSnapshot,
    zone: ZoneInfo
) -> Dict[str, str]:
    """Query parameters for the conflict endpoint."""
    query = {
        "startTime": booking_instant(draft.date, draft.start_time, zone),
        "endTime": booking_instant(draft.date, draft.end_time, zone),
        "clubId": catalog.club_id_for(draft.club_name),
    }
    if draft.venue_ids:
        query["venueIds"] = ",".join(sorted(draft.venue_ids))
    return query


class ConflictChecker:
    """Conflict queries against the scheduling API."""

    def __init__(self, gateway: APIGateway, zone: Optional[ZoneInfo] = None):
        self.gateway = gateway
        self.zone = zone or get_settings().booking_zone

    async def check(self, draft: BookingDraft, catalog: CatalogSnapshot) -> ConflictResult:
        """
        Check the draft's window for overlaps.

        Incomplete drafts (no date, times or club) are not checked and
        come back clear.
        """
        if not is_checkable(draft):
            return NO_CONFLICT

        query = build_conflict_query(draft, catalog, self.zone)
        started = clock.monotonic()
        response = await self.gateway.get(CONFLICT_CHECK_PATH, params=query, auth=True)
        elapsed = clock.monotonic() - started

        if not response.success:
            CONFLICT_CHECK_FAILURES.labels(error_code=response.error_code or "UNKNOWN").inc()
            record_conflict_check("failed", elapsed)
            logger.warning(
                "conflict_check_unavailable",
                check_failed=True,
                status_code=response.status_code,
                error_code=response.error_code,
                error=response.error_message,
                club_id=query["clubId"],
            )
            return CHECK_FAILED

        try:
            payload = ConflictCheckResponse.model_validate(response.data)
        except ValidationError as e:
            CONFLICT_CHECK_FAILURES.labels(error_code="INVALID_PAYLOAD").inc()
            record_conflict_check("failed", elapsed)
            logger.warning("conflict_check_invalid_payload", check_failed=True, error=str(e))
            return CHECK_FAILED

        if payload.has_conflict:
            record_conflict_check("conflict", elapsed)
            logger.info(
                "booking_conflict_found",
                club_id=query["clubId"],
                venue_ids=query.get("venueIds"),
                start=query["startTime"],
            )
            return ConflictResult(has_conflict=True, message=payload.message or CONFLICT_FOUND_MESSAGE)

        record_conflict_check("clear", elapsed)
        return NO_CONFLICT
