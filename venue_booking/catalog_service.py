"""
Catalog Service
Version: 1.0

Read-only club and venue catalog, loaded once per booking session.
DEPENDS ON: api_gateway.py, venue_classifier.py, schemas.py
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from pydantic import ValidationError

from schemas import ApiClub, ApiVenue, CurrentUser
from venue_booking.api_gateway import APIGateway, APIResponse
from venue_booking.booking_contracts import (
    CATALOG_LOAD_FAILED_MESSAGE,
    CLUBS_PATH,
    VENUES_PATH,
    VenueCategory,
)
from venue_booking.metrics import CATALOG_LOAD_FAILURES
from venue_booking.venue_classifier import normalize_venue_category

logger = logging.getLogger(__name__)


class CatalogLoadError(Exception):
    """Clubs or venues could not be loaded. The whole draft is unusable."""
    pass


@dataclass(frozen=True)
class CatalogSnapshot:
    """Immutable view of clubs and venues for one editing session."""
    clubs: Tuple[ApiClub, ...] = ()
    venues: Tuple[ApiVenue, ...] = ()

    def club_by_name(self, name: str) -> Optional[ApiClub]:
        for club in self.clubs:
            if club.name == name:
                return club
        return None

    def club_id_for(self, name: str) -> str:
        """Club id for a club name, "" when unknown."""
        club = self.club_by_name(name)
        return club.id if club else ""

    def club_group(
        self,
        name: str,
        current_user: Optional[CurrentUser] = None
    ) -> Optional[str]:
        """Group category of a club. The user's own group wins for their club."""
        if current_user is not None and name == current_user.name and current_user.group:
            return current_user.group
        club = self.club_by_name(name)
        return club.group_category if club else None

    def venue_by_id(self, venue_id: str) -> Optional[ApiVenue]:
        for venue in self.venues:
            if venue.id == venue_id:
                return venue
        return None

    def venue_category(self, venue_id: str) -> Optional[VenueCategory]:
        venue = self.venue_by_id(venue_id)
        return normalize_venue_category(venue.category) if venue else None

    def venues_by_category(self) -> Dict[VenueCategory, List[ApiVenue]]:
        """Venues grouped for the picker. Uncategorized venues are left out."""
        grouped: Dict[VenueCategory, List[ApiVenue]] = {
            VenueCategory.DIRECT: [],
            VenueCategory.RESTRICTED_APPROVAL: [],
        }
        for venue in self.venues:
            category = normalize_venue_category(venue.category)
            if category is not None:
                grouped[category].append(venue)
        return grouped


class CatalogService:
    """Loads the catalog from the scheduling API."""

    def __init__(self, gateway: APIGateway):
        self.gateway = gateway

    async def list_clubs(self) -> List[ApiClub]:
        response = await self.gateway.get(CLUBS_PATH)
        return [ApiClub.model_validate(item) for item in self._items(response, "clubs")]

    async def list_venues(self) -> List[ApiVenue]:
        response = await self.gateway.get(VENUES_PATH)
        return [ApiVenue.model_validate(item) for item in self._items(response, "venues")]

    async def load(self) -> CatalogSnapshot:
        """
        Fetch clubs and venues concurrently.

        Raises:
            CatalogLoadError: either list could not be fetched or parsed
        """
        try:
            clubs, venues = await asyncio.gather(self.list_clubs(), self.list_venues())
        except ValidationError as e:
            CATALOG_LOAD_FAILURES.inc()
            logger.error(f"Catalog payload invalid: {e}")
            raise CatalogLoadError(CATALOG_LOAD_FAILED_MESSAGE) from e
        except CatalogLoadError:
            CATALOG_LOAD_FAILURES.inc()
            raise

        logger.info(f"Catalog loaded: {len(clubs)} clubs, {len(venues)} venues")
        return CatalogSnapshot(clubs=tuple(clubs), venues=tuple(venues))

    def _items(self, response: APIResponse, what: str) -> list:
        if not response.success:
            logger.error(
                f"Failed to load {what}: {response.error_code} {response.error_message}"
            )
            if response.is_transport_error or not response.error_message:
                raise CatalogLoadError(CATALOG_LOAD_FAILED_MESSAGE)
            raise CatalogLoadError(response.error_message)

        if not isinstance(response.data, list):
            logger.error(f"Failed to load {what}: expected a list, got {type(response.data).__name__}")
            raise CatalogLoadError(CATALOG_LOAD_FAILED_MESSAGE)

        return response.data
