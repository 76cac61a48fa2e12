"""
Tests for CatalogService and CatalogSnapshot
"""

import pytest

from schemas import CurrentUser
from tests.helpers import ok, transport_error
from venue_booking.api_gateway import APIResponse
from venue_booking.booking_contracts import CATALOG_LOAD_FAILED_MESSAGE, VenueCategory
from venue_booking.catalog_service import CatalogLoadError, CatalogService


class TestCatalogService:

    @pytest.mark.asyncio
    async def test_load_parses_clubs_and_venues(self, mock_gateway):
        snapshot = await CatalogService(mock_gateway).load()

        assert [c.name for c in snapshot.clubs] == ["Robotics Club", "Drama Society"]
        assert len(snapshot.venues) == 5
        paths = sorted(call.args[0] for call in mock_gateway.get.call_args_list)
        assert paths == ["/api/clubs", "/api/venues"]

    @pytest.mark.asyncio
    async def test_numeric_ids_become_strings(self, mock_gateway):
        snapshot = await CatalogService(mock_gateway).load()

        assert snapshot.club_id_for("Drama Society") == "2"

    @pytest.mark.asyncio
    async def test_transport_failure_uses_generic_message(self, mock_gateway):
        mock_gateway.routes["/api/venues"] = transport_error()

        with pytest.raises(CatalogLoadError) as exc:
            await CatalogService(mock_gateway).load()

        assert str(exc.value) == CATALOG_LOAD_FAILED_MESSAGE

    @pytest.mark.asyncio
    async def test_http_error_keeps_server_message(self, mock_gateway):
        mock_gateway.routes["/api/clubs"] = APIResponse(
            success=False,
            status_code=403,
            data=None,
            error_message="Session expired",
            error_code="FORBIDDEN"
        )

        with pytest.raises(CatalogLoadError, match="Session expired"):
            await CatalogService(mock_gateway).load()

    @pytest.mark.asyncio
    async def test_non_list_payload(self, mock_gateway):
        mock_gateway.routes["/api/clubs"] = ok({"clubs": []})

        with pytest.raises(CatalogLoadError):
            await CatalogService(mock_gateway).load()

    @pytest.mark.asyncio
    async def test_invalid_items(self, mock_gateway):
        mock_gateway.routes["/api/venues"] = ok([{"name": "No id"}])

        with pytest.raises(CatalogLoadError):
            await CatalogService(mock_gateway).load()


class TestCatalogSnapshot:

    def test_club_lookup(self, catalog):
        assert catalog.club_by_name("Robotics Club").id == "c-1"
        assert catalog.club_by_name("Chess Club") is None
        assert catalog.club_id_for("Chess Club") == ""

    def test_club_group(self, catalog):
        assert catalog.club_group("Drama Society") == "B"
        assert catalog.club_group("Chess Club") is None

    def test_current_user_group_wins_for_own_club(self, catalog):
        user = CurrentUser(name="Robotics Club", role="club", group="C")

        assert catalog.club_group("Robotics Club", user) == "C"
        assert catalog.club_group("Drama Society", user) == "B"

    def test_venue_category_normalized(self, catalog):
        assert catalog.venue_category("v-a2") is VenueCategory.DIRECT
        assert catalog.venue_category("v-b2") is VenueCategory.RESTRICTED_APPROVAL
        assert catalog.venue_category("v-x") is None
        assert catalog.venue_category("missing") is None

    def test_venues_by_category(self, catalog):
        grouped = catalog.venues_by_category()

        assert [v.id for v in grouped[VenueCategory.DIRECT]] == ["v-a1", "v-a2"]
        assert [v.id for v in grouped[VenueCategory.RESTRICTED_APPROVAL]] == ["v-b1", "v-b2"]
