"""Ownership checks shared by the itinerary services.

Trips are visible to their owner and collaborators. Anything a caller
cannot see is reported as not found so existence does not leak.
"""

from uuid import UUID

from backend.app.db.context import RequestContext
from backend.app.db.repositories import (
    ActivityRecord,
    ChecklistItemRecord,
    ChecklistRecord,
    DayRecord,
    ItineraryStore,
    TripRecord,
    TripRepository,
)
from backend.app.itinerary.errors import AuthorizationError, NotFoundError


class AccessPolicy:
    """Resolves resources to their trip and enforces membership."""

    def __init__(self, trips: TripRepository, store: ItineraryStore) -> None:
        self._trips = trips
        self._store = store

    def trip_for_member(self, ctx: RequestContext, trip_id: UUID) -> TripRecord:
        """Load a trip the caller owns or collaborates on.

        Raises:
            NotFoundError: If the trip is missing or the caller is not a member
        """
        trip = self._trips.get_trip(trip_id)
        if trip is None or not trip.is_member(ctx.user_id):
            raise NotFoundError("trip", trip_id)
        return trip

    def trip_for_owner(self, ctx: RequestContext, trip_id: UUID) -> TripRecord:
        """Load a trip the caller owns.

        Raises:
            NotFoundError: If the trip is missing or the caller is not a member
            AuthorizationError: If the caller collaborates but does not own it
        """
        trip = self.trip_for_member(ctx, trip_id)
        if trip.owner_id != ctx.user_id:
            raise AuthorizationError("only the trip owner can do this")
        return trip

    def day_for_member(self, ctx: RequestContext, day_id: UUID) -> DayRecord:
        """Load a day on a trip the caller is a member of."""
        day = self._trips.get_day(day_id)
        if day is None:
            raise NotFoundError("day", day_id)
        try:
            self.trip_for_member(ctx, day.trip_id)
        except NotFoundError as e:
            raise NotFoundError("day", day_id) from e
        return day

    def activity_for_member(self, ctx: RequestContext, activity_id: UUID) -> ActivityRecord:
        """Load an activity on a trip the caller is a member of."""
        activity = self._store.get_activity(activity_id)
        if activity is None:
            raise NotFoundError("activity", activity_id)
        try:
            self.day_for_member(ctx, activity.day_id)
        except NotFoundError as e:
            raise NotFoundError("activity", activity_id) from e
        return activity

    def checklist_for_member(self, ctx: RequestContext, checklist_id: UUID) -> ChecklistRecord:
        """Load a checklist on a trip the caller is a member of."""
        checklist = self._trips.get_checklist(checklist_id)
        if checklist is None:
            raise NotFoundError("checklist", checklist_id)
        try:
            self.trip_for_member(ctx, checklist.trip_id)
        except NotFoundError as e:
            raise NotFoundError("checklist", checklist_id) from e
        return checklist

    def checklist_item_for_member(
        self, ctx: RequestContext, item_id: UUID
    ) -> ChecklistItemRecord:
        """Load a checklist item on a trip the caller is a member of."""
        item = self._trips.get_checklist_item(item_id)
        if item is None:
            raise NotFoundError("checklist item", item_id)
        try:
            self.checklist_for_member(ctx, item.checklist_id)
        except NotFoundError as e:
            raise NotFoundError("checklist item", item_id) from e
        return item
