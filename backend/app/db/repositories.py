"""Repository protocol interfaces and records for data access."""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Protocol
from uuid import UUID

from backend.app.models.common import Coordinates, TimeSource


def _coords(latitude: float | None, longitude: float | None) -> Coordinates | None:
    if latitude is None or longitude is None:
        return None
    return Coordinates(latitude=latitude, longitude=longitude)


@dataclass
class TripRecord:
    """Trip data record."""

    owner_id: UUID
    title: str
    start_date: date
    end_date: date
    location: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    budget: float = 0.0
    trip_id: UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=datetime.now)
    collaborator_ids: list[UUID] = field(default_factory=list)

    @property
    def coordinates(self) -> Coordinates | None:
        return _coords(self.latitude, self.longitude)

    def is_member(self, user_id: UUID) -> bool:
        """True when the user owns the trip or collaborates on it."""
        return user_id == self.owner_id or user_id in self.collaborator_ids


@dataclass
class DayRecord:
    """Day data record, including the optional starting-location edge."""

    trip_id: UUID
    day_number: int
    date: date
    day_id: UUID = field(default_factory=uuid.uuid4)
    starting_location: str | None = None
    starting_latitude: float | None = None
    starting_longitude: float | None = None
    starting_transport_type: str | None = None
    starting_travel_distance: float | None = None
    starting_travel_time: int | None = None
    starting_travel_time_source: TimeSource = TimeSource.unset

    @property
    def starting_coordinates(self) -> Coordinates | None:
        return _coords(self.starting_latitude, self.starting_longitude)


@dataclass
class ActivityRecord:
    """Activity data record.

    ``transport_type``, ``travel_distance`` and ``travel_time`` describe the
    outbound edge from this activity to the next one in order.
    """

    day_id: UUID
    order: int
    title: str
    activity_id: UUID = field(default_factory=uuid.uuid4)
    description: str | None = None
    location: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    time: str | None = None
    duration: int = 60
    cost: float = 0.0
    icon: str = "MapPin"
    color: str = "orange"
    transport_type: str | None = None
    travel_distance: float | None = None
    travel_time: int | None = None
    travel_time_source: TimeSource = TimeSource.unset

    @property
    def coordinates(self) -> Coordinates | None:
        return _coords(self.latitude, self.longitude)


@dataclass
class ChecklistRecord:
    """Checklist data record."""

    trip_id: UUID
    title: str
    shared: bool = True
    checklist_id: UUID = field(default_factory=uuid.uuid4)


@dataclass
class ChecklistItemRecord:
    """Checklist item data record."""

    checklist_id: UUID
    text: str
    order: int
    completed: bool = False
    item_id: UUID = field(default_factory=uuid.uuid4)


class TripRepository(Protocol):
    """Repository for trips, their days, collaborators and checklists."""

    def add_trip(self, trip: TripRecord, days: list[DayRecord]) -> None:
        """Persist a new trip together with its pre-populated days."""
        ...

    def get_trip(self, trip_id: UUID) -> TripRecord | None:
        """Get trip by ID, with collaborator IDs populated."""
        ...

    def list_trips_for_user(self, user_id: UUID) -> list[TripRecord]:
        """List trips owned by or shared with the user, most recent first."""
        ...

    def update_trip(self, trip_id: UUID, **changes: Any) -> None:
        """Apply field changes to a trip."""
        ...

    def delete_trip(self, trip_id: UUID) -> None:
        """Delete a trip and everything it owns."""
        ...

    def add_collaborator(self, trip_id: UUID, user_id: UUID) -> None:
        """Grant a user collaborator access to a trip."""
        ...

    def add_day(self, day: DayRecord) -> None:
        """Persist a new day."""
        ...

    def get_day(self, day_id: UUID) -> DayRecord | None:
        """Get day by ID."""
        ...

    def list_days(self, trip_id: UUID) -> list[DayRecord]:
        """List a trip's days ordered by day number."""
        ...

    def update_day(self, day_id: UUID, **changes: Any) -> None:
        """Apply field changes to a day."""
        ...

    def delete_day(self, day_id: UUID) -> None:
        """Delete a day and its activities."""
        ...

    def add_checklist(self, checklist: ChecklistRecord) -> None:
        """Persist a new checklist."""
        ...

    def get_checklist(self, checklist_id: UUID) -> ChecklistRecord | None:
        """Get checklist by ID."""
        ...

    def list_checklists(self, trip_id: UUID) -> list[ChecklistRecord]:
        """List a trip's checklists."""
        ...

    def add_checklist_item(self, item: ChecklistItemRecord) -> None:
        """Persist a new checklist item."""
        ...

    def get_checklist_item(self, item_id: UUID) -> ChecklistItemRecord | None:
        """Get checklist item by ID."""
        ...

    def list_checklist_items(self, checklist_id: UUID) -> list[ChecklistItemRecord]:
        """List a checklist's items ordered by order."""
        ...

    def update_checklist_item(self, item_id: UUID, **changes: Any) -> None:
        """Apply field changes to a checklist item."""
        ...

    def delete_checklist_item(self, item_id: UUID) -> None:
        """Delete a checklist item."""
        ...

    def list_trips_missing_coordinates(self) -> list[TripRecord]:
        """Trips with location text but no coordinates."""
        ...


class ItineraryStore(Protocol):
    """Store for the ordered activity list of each day.

    Each write is its own persistence call; no transaction spans a
    multi-edge recompute sweep.
    """

    def get_day(self, day_id: UUID) -> DayRecord | None:
        """Get day by ID."""
        ...

    def update_day(self, day_id: UUID, **changes: Any) -> None:
        """Apply field changes to a day."""
        ...

    def add_activity(self, activity: ActivityRecord) -> None:
        """Persist a new activity."""
        ...

    def get_activity(self, activity_id: UUID) -> ActivityRecord | None:
        """Get activity by ID."""
        ...

    def list_activities(self, day_id: UUID) -> list[ActivityRecord]:
        """List a day's activities ordered by order."""
        ...

    def max_activity_order(self, day_id: UUID) -> int | None:
        """Highest order value in the day, or None when the day is empty."""
        ...

    def update_activity(self, activity_id: UUID, **changes: Any) -> None:
        """Apply field changes to an activity."""
        ...

    def delete_activity(self, activity_id: UUID) -> None:
        """Delete an activity."""
        ...

    def list_activities_missing_coordinates(self) -> list[ActivityRecord]:
        """Activities with location text but no coordinates."""
        ...
