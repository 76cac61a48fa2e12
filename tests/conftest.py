"""
Test Configuration and Fixtures
Version: 1.0
"""

from datetime import date
from typing import Dict
from unittest.mock import AsyncMock, MagicMock

import pytest

from schemas import ApiClub, ApiVenue, CurrentUser
from tests.helpers import TODAY, days_from_today, ok
from venue_booking.api_gateway import APIResponse
from venue_booking.catalog_service import CatalogSnapshot
from venue_booking.draft import BookingDraft


# ============================================================================
# SAMPLE DATA FIXTURES
# ============================================================================

@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def clubs_payload() -> list:
    return [
        {"id": "c-1", "name": "Robotics Club", "group_category": "A"},
        {"id": 2, "name": "Drama Society", "group_category": "B"},
    ]


@pytest.fixture
def venues_payload() -> list:
    """Mix of canonical and legacy category spellings."""
    return [
        {"id": "v-a1", "name": "Seminar Hall 1", "category": "A"},
        {"id": "v-a2", "name": "Lab 2", "category": "auto_approval"},
        {"id": "v-b1", "name": "Auditorium", "category": "B"},
        {"id": "v-b2", "name": "Open Air Theatre", "category": "needs_approval"},
        {"id": "v-x", "name": "Storage Room", "category": None},
    ]


@pytest.fixture
def catalog(clubs_payload, venues_payload) -> CatalogSnapshot:
    return CatalogSnapshot(
        clubs=tuple(ApiClub.model_validate(c) for c in clubs_payload),
        venues=tuple(ApiVenue.model_validate(v) for v in venues_payload),
    )


@pytest.fixture
def club_user() -> CurrentUser:
    return CurrentUser(name="Robotics Club", role="club", group="A")


@pytest.fixture
def eligible_draft() -> BookingDraft:
    """Closed club event two days out, Wednesday evening, one direct venue."""
    return BookingDraft(
        event_name="Intro to Machine Learning",
        club_name="Robotics Club",
        date=days_from_today(2),
        start_time="17:00",
        end_time="18:00",
        venue_ids=frozenset({"v-a1"}),
        expected_attendees="50",
    )


# ============================================================================
# MOCK FIXTURES
# ============================================================================

@pytest.fixture
def mock_gateway(clubs_payload, venues_payload):
    """Gateway answering catalog calls and reporting no conflicts."""
    routes: Dict[str, APIResponse] = {
        "/api/clubs": ok(clubs_payload),
        "/api/venues": ok(venues_payload),
        "/api/bookings/check-conflict": ok({"hasConflict": False}),
    }

    async def get(path, params=None, **kwargs):
        return routes[path]

    gateway = MagicMock()
    gateway.routes = routes
    gateway.get = AsyncMock(side_effect=get)
    gateway.post = AsyncMock(return_value=APIResponse(True, 201, {"id": "bk-1"}))
    gateway.close = AsyncMock()
    return gateway


# ============================================================================
# ENVIRONMENT FIXTURES
# ============================================================================

@pytest.fixture
def mock_env_vars(monkeypatch):
    """Set mock environment variables."""
    env_vars = {
        "APP_ENV": "testing",
        "SCHEDULING_API_URL": "https://booking.example.edu/",
        "SCHEDULING_API_TOKEN": "test-token",
        "BOOKING_TIMEZONE": "Asia/Kolkata",
    }

    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)

    return env_vars
