"""
Pydantic Schemas
Version: 1.0

Wire schemas for the scheduling API (catalog, conflict check, submission)
and the session user.
NO DEPENDENCIES on venue_booking.
"""

from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_validator


# === CATALOG SCHEMAS ===

class ApiClub(BaseModel):
    """Club as returned by GET /api/clubs."""
    id: str
    name: str
    group_category: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def id_as_string(cls, v):
        return str(v) if v is not None else v


class ApiVenue(BaseModel):
    """Venue as returned by GET /api/venues. Category is raw, not normalized."""
    id: str
    name: str
    category: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def id_as_string(cls, v):
        return str(v) if v is not None else v


# === CONFLICT CHECK SCHEMAS ===

class ConflictCheckResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    has_conflict: bool = Field(..., alias="hasConflict")
    message: Optional[str] = None


# === SUBMISSION SCHEMAS ===

class BookingSubmission(BaseModel):
    """Body of POST /api/bookings."""
    model_config = ConfigDict(populate_by_name=True)

    event_name: str = Field(..., alias="eventName")
    event_type: str = Field(..., alias="eventType")
    club_name: str = Field(..., alias="clubName")
    club_id: str = Field(..., alias="clubId")
    date: str
    start_time: str = Field(..., alias="startTime")
    end_time: str = Field(..., alias="endTime")
    venue_ids: List[str] = Field(..., alias="venueIds")
    expected_attendees: int = Field(default=0, alias="expectedAttendees")


# === USER SCHEMAS ===

class CurrentUser(BaseModel):
    """Logged-in user. Club-role users get their club prefilled and locked."""
    name: str
    role: str
    group: Optional[str] = None
