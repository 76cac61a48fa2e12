"""
Booking Session
Version: 1.0

Owns one user's draft, catalog snapshot and latest verdict.
DEPENDS ON: catalog_service.py, conflict_checker.py, eligibility.py, api_gateway.py

The caller mutates the draft through update()/toggle_venue(); each
mutation runs recompute(), which re-derives the synchronous warnings
immediately and schedules a conflict check when its inputs changed.
Conflict responses are tagged with a sequence number and dropped unless
they belong to the latest request.
"""

import asyncio
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Optional, Set
from zoneinfo import ZoneInfo

from config import get_settings
from schemas import BookingSubmission, CurrentUser
from venue_booking.api_gateway import APIGateway
from venue_booking.booking_contracts import (
    ATTENDEE_BRACKETS,
    BOOKINGS_PATH,
    CLUB_LOCKED_MESSAGE,
    INVALID_CLUB_MESSAGE,
    MISSING_SCHEDULE_MESSAGE,
    NO_VENUE_MESSAGE,
    RESOLVE_WARNINGS_MESSAGE,
    SUBMISSION_FAILED_MESSAGE,
    SUBMISSION_IN_FLIGHT_MESSAGE,
    SUBMISSION_SUCCESS_MESSAGE,
    TIME_OPTIONS,
    WarningKind,
)
from venue_booking.catalog_service import CatalogLoadError, CatalogService, CatalogSnapshot
from venue_booking.conflict_checker import (
    CHECK_FAILED,
    NO_CONFLICT,
    ConflictChecker,
    ConflictResult,
    booking_instant,
    is_checkable,
)
from venue_booking.draft import BookingDraft, is_club_locked, new_draft
from venue_booking.eligibility import EligibilityVerdict, aggregate, evaluate
from venue_booking.logging_config import get_logger, set_session_id
from venue_booking.metrics import CONFLICT_CHECKS, RULE_VIOLATIONS, SUBMISSIONS

logger = get_logger(__name__)

EMPTY_CATALOG = CatalogSnapshot()


@dataclass(frozen=True)
class SubmissionResult:
    success: bool
    message: str
    data: Any = None


def build_submission(
    draft: BookingDraft,
    club_id: str,
    zone: ZoneInfo
) -> BookingSubmission:
    """Request body for a complete draft."""
    return BookingSubmission(
        event_name=draft.event_name,
        event_type=draft.event_type.value,
        club_name=draft.club_name,
        club_id=club_id,
        date=draft.date.isoformat(),
        start_time=booking_instant(draft.date, draft.start_time, zone),
        end_time=booking_instant(draft.date, draft.end_time, zone),
        venue_ids=sorted(draft.venue_ids),
        expected_attendees=draft.attendee_count,
    )


class BookingSession:
    """
    Single-user booking form state.

    Not shared between users or requests. Runs on one event loop.
    """

    def __init__(
        self,
        gateway: APIGateway,
        current_user: Optional[CurrentUser] = None,
        checker: Optional[ConflictChecker] = None,
        catalog_service: Optional[CatalogService] = None,
        today: Optional[Callable[[], date]] = None,
        zone: Optional[ZoneInfo] = None
    ):
        """
        Args:
            gateway: Scheduling API gateway
            current_user: Logged-in user (prefills and locks the club for club users)
            checker: Conflict checker (defaults to one on the same gateway)
            catalog_service: Catalog loader (defaults to one on the same gateway)
            today: Returns the evaluation date (defaults to today in the booking zone)
            zone: Booking time zone (defaults to settings)
        """
        self.gateway = gateway
        self.current_user = current_user
        self.zone = zone or get_settings().booking_zone
        self.checker = checker or ConflictChecker(gateway, self.zone)
        self.catalog_service = catalog_service or CatalogService(gateway)
        self._today = today or (lambda: datetime.now(self.zone).date())

        self.session_id = uuid.uuid4().hex[:12]
        self.catalog: Optional[CatalogSnapshot] = None
        self.catalog_error: Optional[str] = None

        self._draft = new_draft(current_user)
        self._base = EligibilityVerdict()
        self._conflict: ConflictResult = NO_CONFLICT
        self._conflict_key = None
        self._conflict_seq = 0
        self._pending: Set[asyncio.Task] = set()
        self._submitting = False

    # === STATE ===

    @property
    def draft(self) -> BookingDraft:
        return self._draft

    @property
    def verdict(self) -> EligibilityVerdict:
        return aggregate(self._base, self._conflict)

    @property
    def club_locked(self) -> bool:
        return is_club_locked(self.current_user)

    @property
    def conflict_pending(self) -> bool:
        return bool(self._pending)

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    @property
    def can_submit(self) -> bool:
        """Catalog loaded, no blocking warning, no check or submission in flight."""
        return (
            self.catalog is not None
            and self.verdict.submittable
            and not self.conflict_pending
            and not self._submitting
        )

    # === LIFECYCLE ===

    async def start(self) -> bool:
        """
        Load the catalog for this session.

        Returns False when the catalog is unavailable; the session then
        stays blocked and catalog_error holds the user-facing reason.
        """
        set_session_id(self.session_id)
        try:
            self.catalog = await self.catalog_service.load()
        except CatalogLoadError as e:
            self.catalog = None
            self.catalog_error = str(e)
            logger.error("catalog_load_failed", error=self.catalog_error)
            return False

        self.catalog_error = None
        # Edits made before the catalog arrived were never checked.
        self.recompute(force_conflict=True)
        return True

    async def close(self) -> None:
        """Wait for outstanding conflict checks before the gateway goes away."""
        await self.wait_for_checks()

    # === EDITING ===

    def update(self, **changes) -> EligibilityVerdict:
        """
        Change draft fields and recompute.

        Raises:
            ValueError: locked club changed, or a time/attendee value
                        outside the form options
        """
        if "club_name" in changes and self.club_locked and changes["club_name"] != self._draft.club_name:
            raise ValueError(CLUB_LOCKED_MESSAGE)

        for name in ("start_time", "end_time"):
            value = changes.get(name)
            if value and value not in TIME_OPTIONS:
                raise ValueError(f"Unsupported {name}: {value}")

        attendees = changes.get("expected_attendees")
        if attendees and attendees not in ATTENDEE_BRACKETS:
            raise ValueError(f"Unsupported attendee bracket: {attendees}")

        self._draft = self._draft.with_changes(**changes)
        return self.recompute()

    def toggle_venue(self, venue_id: str) -> EligibilityVerdict:
        self._draft = self._draft.toggle_venue(venue_id)
        return self.recompute()

    def recompute(self, force_conflict: bool = False) -> EligibilityVerdict:
        """
        Re-derive warnings for the current draft.

        Synchronous policies are applied now. A conflict check is
        scheduled on the running loop when its inputs changed, or
        always when force_conflict is set (retry after a failed check).
        """
        previous = self._base
        self._base = evaluate(self._draft, self.catalog or EMPTY_CATALOG, self._today())
        self._record_new_violations(previous, self._base)

        key = self._draft.conflict_key()
        if force_conflict or key != self._conflict_key:
            self._conflict_key = key
            self._issue_conflict_check()

        return self.verdict

    # === CONFLICT CHECKS ===

    def _issue_conflict_check(self) -> None:
        self._conflict_seq += 1
        seq = self._conflict_seq
        # Result for the previous inputs no longer applies.
        self._conflict = NO_CONFLICT

        if self.catalog is None or not is_checkable(self._draft):
            return

        task = asyncio.get_running_loop().create_task(
            self._run_conflict_check(seq, self._draft, self.catalog)
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _run_conflict_check(
        self,
        seq: int,
        draft: BookingDraft,
        catalog: CatalogSnapshot
    ) -> None:
        try:
            result = await self.checker.check(draft, catalog)
        except Exception as e:
            logger.exception("conflict_check_unavailable", check_failed=True, error=str(e))
            result = CHECK_FAILED

        if seq != self._conflict_seq:
            CONFLICT_CHECKS.labels(outcome="stale").inc()
            logger.debug("conflict_result_discarded", seq=seq, latest=self._conflict_seq)
            return

        self._conflict = result

    async def wait_for_checks(self) -> EligibilityVerdict:
        """Wait until no conflict check is outstanding, then return the verdict."""
        while self._pending:
            await asyncio.gather(*list(self._pending))
        return self.verdict

    def _record_new_violations(
        self,
        previous: EligibilityVerdict,
        current: EligibilityVerdict
    ) -> None:
        for kind in (WarningKind.TIMELINE, WarningKind.HOURS):
            message = current.message(kind)
            if message and message != previous.message(kind):
                RULE_VIOLATIONS.labels(kind=kind.value).inc()
                logger.info("booking_rule_violation", kind=kind.value, message=message)

    # === SUBMISSION ===

    async def submit(self) -> SubmissionResult:
        """
        Send the draft to the scheduling API.

        Never raises for rejections; the draft is left as-is for retry.
        """
        if self._submitting:
            return SubmissionResult(False, SUBMISSION_IN_FLIGHT_MESSAGE)

        if self.catalog is None:
            SUBMISSIONS.labels(status="blocked").inc()
            return SubmissionResult(False, self.catalog_error or RESOLVE_WARNINGS_MESSAGE)

        if not self.verdict.submittable or self.conflict_pending:
            SUBMISSIONS.labels(status="blocked").inc()
            return SubmissionResult(False, RESOLVE_WARNINGS_MESSAGE)

        self._submitting = True
        try:
            return await self._submit(self._draft, self.catalog)
        finally:
            self._submitting = False

    async def _submit(self, draft: BookingDraft, catalog: CatalogSnapshot) -> SubmissionResult:
        club = catalog.club_by_name(draft.club_name)
        if club is None:
            SUBMISSIONS.labels(status="blocked").inc()
            return SubmissionResult(False, INVALID_CLUB_MESSAGE)

        if not draft.venue_ids:
            SUBMISSIONS.labels(status="blocked").inc()
            return SubmissionResult(False, NO_VENUE_MESSAGE)

        if not (draft.date and draft.start_time and draft.end_time):
            SUBMISSIONS.labels(status="blocked").inc()
            return SubmissionResult(False, MISSING_SCHEDULE_MESSAGE)

        body = build_submission(draft, club.id, self.zone).model_dump(by_alias=True)
        # Not retried: a repeated POST could create a duplicate booking.
        response = await self.gateway.post(BOOKINGS_PATH, body=body, auth=True, max_retries=0)

        if not response.success:
            SUBMISSIONS.labels(status="rejected").inc()
            logger.warning(
                "booking_submission_failed",
                status_code=response.status_code,
                error_code=response.error_code,
                error=response.error_message,
            )
            if response.is_transport_error or not response.error_message:
                return SubmissionResult(False, SUBMISSION_FAILED_MESSAGE)
            return SubmissionResult(False, response.error_message)

        SUBMISSIONS.labels(status="accepted").inc()
        logger.info("booking_submitted", club_id=club.id, venue_ids=body["venueIds"])
        return SubmissionResult(True, SUBMISSION_SUCCESS_MESSAGE, response.data)
