"""
Shared test constants and response builders.
"""

from datetime import date, timedelta
from zoneinfo import ZoneInfo

from venue_booking.api_gateway import APIResponse

# 2026-10-19 is a Monday
TODAY = date(2026, 10, 19)
UTC = ZoneInfo("UTC")


def days_from_today(days: int) -> date:
    return TODAY + timedelta(days=days)


def ok(data) -> APIResponse:
    return APIResponse(success=True, status_code=200, data=data)


def transport_error() -> APIResponse:
    return APIResponse(
        success=False,
        status_code=0,
        data=None,
        error_message="Network error: connection refused",
        error_code="RETRY_EXHAUSTED"
    )
