"""In-memory implementations of repository interfaces."""

import uuid
from dataclasses import replace
from typing import Any

from backend.app.db.repositories import (
    ActivityRecord,
    ChecklistItemRecord,
    ChecklistRecord,
    DayRecord,
    TripRecord,
)


class InMemoryItineraryStore:
    """In-memory implementation of TripRepository and ItineraryStore.

    Records are copied on the way in and out so callers never alias stored
    state, matching the SQL store's behavior.
    """

    def __init__(self) -> None:
        self._trips: dict[uuid.UUID, TripRecord] = {}
        self._days: dict[uuid.UUID, DayRecord] = {}
        self._activities: dict[uuid.UUID, ActivityRecord] = {}
        self._checklists: dict[uuid.UUID, ChecklistRecord] = {}
        self._items: dict[uuid.UUID, ChecklistItemRecord] = {}

    # Trips

    def add_trip(self, trip: TripRecord, days: list[DayRecord]) -> None:
        """Persist a new trip together with its pre-populated days."""
        self._trips[trip.trip_id] = replace(trip, collaborator_ids=list(trip.collaborator_ids))
        for day in days:
            self._days[day.day_id] = replace(day)

    def get_trip(self, trip_id: uuid.UUID) -> TripRecord | None:
        """Get trip by ID."""
        trip = self._trips.get(trip_id)
        if trip is None:
            return None
        return replace(trip, collaborator_ids=list(trip.collaborator_ids))

    def list_trips_for_user(self, user_id: uuid.UUID) -> list[TripRecord]:
        """List trips owned by or shared with the user."""
        trips = [t for t in self._trips.values() if t.is_member(user_id)]
        trips.sort(key=lambda t: t.created_at, reverse=True)
        return [replace(t, collaborator_ids=list(t.collaborator_ids)) for t in trips]

    def update_trip(self, trip_id: uuid.UUID, **changes: Any) -> None:
        """Apply field changes to a trip."""
        if trip_id in self._trips:
            self._trips[trip_id] = replace(self._trips[trip_id], **changes)

    def delete_trip(self, trip_id: uuid.UUID) -> None:
        """Delete a trip and everything it owns."""
        if self._trips.pop(trip_id, None) is None:
            return
        for day_id in [d.day_id for d in self._days.values() if d.trip_id == trip_id]:
            self.delete_day(day_id)
        for checklist_id in [c.checklist_id for c in self._checklists.values() if c.trip_id == trip_id]:
            self._checklists.pop(checklist_id)
            for item_id in [i.item_id for i in self._items.values() if i.checklist_id == checklist_id]:
                self._items.pop(item_id)

    def add_collaborator(self, trip_id: uuid.UUID, user_id: uuid.UUID) -> None:
        """Grant a user collaborator access to a trip."""
        trip = self._trips.get(trip_id)
        if trip is not None and user_id not in trip.collaborator_ids:
            trip.collaborator_ids.append(user_id)

    def list_trips_missing_coordinates(self) -> list[TripRecord]:
        """Trips with location text but no coordinates."""
        return [
            replace(t) for t in self._trips.values() if t.location and t.latitude is None
        ]

    # Days

    def add_day(self, day: DayRecord) -> None:
        """Persist a new day."""
        self._days[day.day_id] = replace(day)

    def get_day(self, day_id: uuid.UUID) -> DayRecord | None:
        """Get day by ID."""
        day = self._days.get(day_id)
        return replace(day) if day is not None else None

    def list_days(self, trip_id: uuid.UUID) -> list[DayRecord]:
        """List a trip's days ordered by day number."""
        days = [replace(d) for d in self._days.values() if d.trip_id == trip_id]
        return sorted(days, key=lambda d: d.day_number)

    def update_day(self, day_id: uuid.UUID, **changes: Any) -> None:
        """Apply field changes to a day."""
        if day_id in self._days:
            self._days[day_id] = replace(self._days[day_id], **changes)

    def delete_day(self, day_id: uuid.UUID) -> None:
        """Delete a day and its activities."""
        if self._days.pop(day_id, None) is None:
            return
        for activity_id in [a.activity_id for a in self._activities.values() if a.day_id == day_id]:
            self._activities.pop(activity_id)

    # Activities

    def add_activity(self, activity: ActivityRecord) -> None:
        """Persist a new activity."""
        self._activities[activity.activity_id] = replace(activity)

    def get_activity(self, activity_id: uuid.UUID) -> ActivityRecord | None:
        """Get activity by ID."""
        activity = self._activities.get(activity_id)
        return replace(activity) if activity is not None else None

    def list_activities(self, day_id: uuid.UUID) -> list[ActivityRecord]:
        """List a day's activities ordered by order."""
        activities = [replace(a) for a in self._activities.values() if a.day_id == day_id]
        return sorted(activities, key=lambda a: a.order)

    def max_activity_order(self, day_id: uuid.UUID) -> int | None:
        """Highest order value in the day, or None when the day is empty."""
        orders = [a.order for a in self._activities.values() if a.day_id == day_id]
        return max(orders) if orders else None

    def update_activity(self, activity_id: uuid.UUID, **changes: Any) -> None:
        """Apply field changes to an activity."""
        if activity_id in self._activities:
            self._activities[activity_id] = replace(self._activities[activity_id], **changes)

    def delete_activity(self, activity_id: uuid.UUID) -> None:
        """Delete an activity."""
        self._activities.pop(activity_id, None)

    def list_activities_missing_coordinates(self) -> list[ActivityRecord]:
        """Activities with location text but no coordinates."""
        return [
            replace(a) for a in self._activities.values() if a.location and a.latitude is None
        ]

    # Checklists

    def add_checklist(self, checklist: ChecklistRecord) -> None:
        """Persist a new checklist."""
        self._checklists[checklist.checklist_id] = replace(checklist)

    def get_checklist(self, checklist_id: uuid.UUID) -> ChecklistRecord | None:
        """Get checklist by ID."""
        checklist = self._checklists.get(checklist_id)
        return replace(checklist) if checklist is not None else None

    def list_checklists(self, trip_id: uuid.UUID) -> list[ChecklistRecord]:
        """List a trip's checklists."""
        return [replace(c) for c in self._checklists.values() if c.trip_id == trip_id]

    def add_checklist_item(self, item: ChecklistItemRecord) -> None:
        """Persist a new checklist item."""
        self._items[item.item_id] = replace(item)

    def get_checklist_item(self, item_id: uuid.UUID) -> ChecklistItemRecord | None:
        """Get checklist item by ID."""
        item = self._items.get(item_id)
        return replace(item) if item is not None else None

    def list_checklist_items(self, checklist_id: uuid.UUID) -> list[ChecklistItemRecord]:
        """List a checklist's items ordered by order."""
        items = [replace(i) for i in self._items.values() if i.checklist_id == checklist_id]
        return sorted(items, key=lambda i: i.order)

    def update_checklist_item(self, item_id: uuid.UUID, **changes: Any) -> None:
        """Apply field changes to a checklist item."""
        if item_id in self._items:
            self._items[item_id] = replace(self._items[item_id], **changes)

    def delete_checklist_item(self, item_id: uuid.UUID) -> None:
        """Delete a checklist item."""
        self._items.pop(item_id, None)
