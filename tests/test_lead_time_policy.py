"""
Tests for the lead-time rule.
"""

import pytest

from tests.helpers import TODAY, days_from_today
from venue_booking.booking_contracts import EventType, LEAD_TIME_MESSAGES
from venue_booking.lead_time_policy import check_lead_time, days_until


class TestLeadTimePolicy:

    @pytest.mark.parametrize("event_type,threshold", [
        (EventType.CO_CURRICULAR, 30),
        (EventType.OPEN_ALL, 20),
        (EventType.CLOSED_CLUB, 1),
    ])
    def test_threshold_boundary(self, event_type, threshold):
        """One day short warns; exactly the threshold passes."""
        short = check_lead_time(event_type, days_from_today(threshold - 1), TODAY)
        exact = check_lead_time(event_type, days_from_today(threshold), TODAY)

        assert short == LEAD_TIME_MESSAGES[event_type]
        assert exact == ""

    def test_messages_are_exact(self):
        assert check_lead_time(EventType.CO_CURRICULAR, days_from_today(5), TODAY) == (
            "Co-curricular events must be booked at least 30 days in advance."
        )
        assert check_lead_time(EventType.OPEN_ALL, days_from_today(5), TODAY) == (
            "Open-for-All events must be booked at least 20 days in advance."
        )
        assert check_lead_time(EventType.CLOSED_CLUB, TODAY, TODAY) == (
            "Closed club events must be booked at least 1 day in advance."
        )

    def test_past_date_warns(self):
        assert check_lead_time(EventType.CLOSED_CLUB, days_from_today(-3), TODAY)

    def test_far_future_passes_for_every_type(self):
        for event_type in EventType:
            assert check_lead_time(event_type, days_from_today(90), TODAY) == ""

    def test_no_date_is_not_evaluated(self):
        assert check_lead_time(EventType.CO_CURRICULAR, None, TODAY) == ""

    def test_accepts_wire_value(self):
        assert check_lead_time("open_all", days_from_today(1), TODAY) == (
            LEAD_TIME_MESSAGES[EventType.OPEN_ALL]
        )

    def test_days_until_uses_calendar_days(self):
        assert days_until(days_from_today(2), TODAY) == 2
        assert days_until(TODAY, TODAY) == 0
