"""Itinerary models - request payloads and recompute results."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from backend.app.models.common import Coordinates


class TripCreate(BaseModel):
    """Payload for creating a trip."""

    title: str = Field(..., min_length=1)
    location: str | None = None
    start_date: date
    end_date: date
    budget: float = Field(0.0, ge=0)


class TripUpdate(BaseModel):
    """Partial trip update. Only explicitly supplied fields are applied."""

    title: str | None = None
    location: str | None = None
    budget: float | None = Field(None, ge=0)


class ActivityCreate(BaseModel):
    """Payload for appending an activity to a day."""

    title: str = Field(..., min_length=1)
    description: str | None = None
    location: str | None = None
    coordinates: Coordinates | None = None
    time: str | None = Field(None, pattern=r"^\d{2}:\d{2}$", description="Time of day, HH:MM")
    duration: int | None = Field(None, ge=0, description="Minutes; defaults from settings")
    cost: float = Field(0.0, ge=0)
    icon: str = "MapPin"
    color: str = "orange"
    transport_type: str | None = None


class ActivityUpdate(BaseModel):
    """Partial activity update.

    ``model_fields_set`` decides what the caller supplied: an explicit
    ``coordinates: null`` clears coordinates, an omitted field leaves them
    alone. ``travel_time`` pins the outbound travel time; the
    ``travel_hours``/``travel_minutes`` pair stores a derived value that
    automatic recomputation may still replace.
    """

    title: str | None = None
    description: str | None = None
    location: str | None = None
    coordinates: Coordinates | None = None
    time: str | None = Field(None, pattern=r"^\d{2}:\d{2}$")
    duration: int | None = Field(None, ge=0)
    cost: float | None = Field(None, ge=0)
    icon: str | None = None
    color: str | None = None
    transport_type: str | None = None
    travel_time: int | None = Field(None, ge=0)
    travel_hours: int | None = Field(None, ge=0)
    travel_minutes: int | None = Field(None, ge=0, lt=60)


class StartingLocationInput(BaseModel):
    """Payload for setting a day's starting location."""

    location: str
    coordinates: Coordinates | None = None
    transport_type: str | None = None


class ChecklistCreate(BaseModel):
    """Payload for creating a checklist."""

    title: str = Field(..., min_length=1)
    shared: bool = True


class ChecklistItemCreate(BaseModel):
    """Payload for adding a checklist item."""

    text: str = Field(..., min_length=1)


class CollaboratorCreate(BaseModel):
    """Payload for adding a collaborator to a trip."""

    user_id: UUID


class EdgeFailure(BaseModel):
    """A route lookup that failed during a recompute sweep."""

    origin_id: str
    destination_id: str
    reason: str


class RecalculationSummary(BaseModel):
    """Tally of a full-day recompute sweep."""

    day_id: str
    updated: int = 0
    failed: int = 0
    skipped: int = 0
    failures: list[EdgeFailure] = Field(default_factory=list)
    message: str = ""
