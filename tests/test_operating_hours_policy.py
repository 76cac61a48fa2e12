"""
Tests for the operating-hours rule.
"""

from datetime import date

import pytest

from venue_booking.booking_contracts import (
    END_BEFORE_START_MESSAGE,
    WEEKDAY_HOURS_MESSAGE,
    WEEKEND_HOURS_MESSAGE,
)
from venue_booking.operating_hours_policy import check_operating_hours, is_weekend

TUESDAY = date(2026, 10, 20)
SATURDAY = date(2026, 10, 24)
SUNDAY = date(2026, 10, 25)


def test_fixture_days():
    assert TUESDAY.weekday() == 1
    assert SATURDAY.weekday() == 5
    assert SUNDAY.weekday() == 6


class TestOrdering:

    @pytest.mark.parametrize("day", [TUESDAY, SATURDAY, SUNDAY])
    @pytest.mark.parametrize("start,end", [
        ("18:00", "18:00"),
        ("18:00", "17:45"),
        ("07:00", "06:00"),
        ("23:45", "00:00"),
    ])
    def test_end_not_after_start(self, day, start, end):
        """Ordering is checked before the day-of-week rule."""
        assert check_operating_hours(day, start, end) == END_BEFORE_START_MESSAGE


class TestWeekend:

    @pytest.mark.parametrize("day", [SATURDAY, SUNDAY])
    def test_before_eight(self, day):
        assert check_operating_hours(day, "07:59", "10:00") == WEEKEND_HOURS_MESSAGE

    @pytest.mark.parametrize("day", [SATURDAY, SUNDAY])
    def test_from_eight(self, day):
        assert check_operating_hours(day, "08:00", "10:00") == ""

    def test_weekday_limit_does_not_apply(self):
        assert check_operating_hours(SATURDAY, "09:00", "12:00") == ""


class TestWeekday:

    def test_before_four_pm(self):
        assert check_operating_hours(TUESDAY, "15:59", "17:00") == WEEKDAY_HOURS_MESSAGE

    def test_from_four_pm(self):
        assert check_operating_hours(TUESDAY, "16:00", "17:00") == ""

    def test_late_end_is_not_bounded(self):
        assert check_operating_hours(TUESDAY, "22:00", "23:45") == ""


class TestIncompleteInput:

    @pytest.mark.parametrize("args", [
        (None, "17:00", "18:00"),
        (TUESDAY, None, "18:00"),
        (TUESDAY, "17:00", None),
        (TUESDAY, "", "18:00"),
    ])
    def test_not_evaluated(self, args):
        assert check_operating_hours(*args) == ""


def test_is_weekend():
    assert is_weekend(SATURDAY)
    assert is_weekend(SUNDAY)
    assert not is_weekend(TUESDAY)
