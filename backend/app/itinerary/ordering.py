"""Activity ordering and the structural changes that trigger edge recomputation.

Activities are only ever appended: a new activity gets ``max(order) + 1``
(or 0 in an empty day) and is never moved. Callers must serialize
mutations per day; nothing here locks the order counter.
"""

import logging
from typing import Any
from uuid import UUID

from backend.app.adapters.geocoding import Geocoder
from backend.app.db.context import RequestContext
from backend.app.db.repositories import ActivityRecord, DayRecord, ItineraryStore
from backend.app.itinerary.access import AccessPolicy
from backend.app.itinerary.recalculation import DistanceRecalculationEngine
from backend.app.itinerary.sequence import DaySequence
from backend.app.models.common import Coordinates, TimeSource
from backend.app.models.itinerary import (
    ActivityCreate,
    ActivityUpdate,
    RecalculationSummary,
    StartingLocationInput,
)
from backend.app.models.routes import RouteAlternatives, RouteSelection

logger = logging.getLogger(__name__)

_PLAIN_FIELDS = ("title", "description", "time", "duration", "cost", "icon", "color")
_REQUIRED_FIELDS = {"title", "duration", "cost", "icon", "color"}


class ActivityOrderingService:
    """Appends, edits and removes activities, keeping edges up to date."""

    def __init__(
        self,
        store: ItineraryStore,
        access: AccessPolicy,
        engine: DistanceRecalculationEngine,
        geocoder: Geocoder,
        recompute_on_delete: bool = False,
        default_duration_min: int = 60,
    ) -> None:
        self._store = store
        self._access = access
        self._engine = engine
        self._geocoder = geocoder
        self._recompute_on_delete = recompute_on_delete
        self._default_duration_min = default_duration_min

    async def append(
        self, ctx: RequestContext, day_id: UUID, data: ActivityCreate
    ) -> ActivityRecord:
        """Append an activity at the end of a day.

        A day's first activity triggers the starting-location edge; any
        later one triggers the edge from its predecessor.
        """
        self._access.day_for_member(ctx, day_id)

        coords = data.coordinates
        if coords is None and data.location:
            coords = await self._geocoder.geocode(data.location)

        max_order = self._store.max_activity_order(day_id)
        activity = ActivityRecord(
            day_id=day_id,
            order=0 if max_order is None else max_order + 1,
            title=data.title,
            description=data.description,
            location=data.location,
            latitude=coords.latitude if coords else None,
            longitude=coords.longitude if coords else None,
            time=data.time,
            duration=data.duration if data.duration is not None else self._default_duration_min,
            cost=data.cost,
            icon=data.icon,
            color=data.color,
            transport_type=data.transport_type,
        )
        self._store.add_activity(activity)
        logger.info(
            "Activity appended",
            extra={
                "structured": {
                    "day_id": str(day_id),
                    "activity_id": str(activity.activity_id),
                    "order": activity.order,
                    "geocoded": coords is not None,
                }
            },
        )

        if max_order is None:
            if coords is not None:
                await self._engine.recompute_starting_edge(day_id)
        else:
            sequence = DaySequence(self._store.list_activities(day_id))
            predecessor = sequence.predecessor(activity.activity_id)
            if predecessor is not None:
                await self._engine.recompute_edge(predecessor.activity_id)

        return self._reload(activity.activity_id)

    async def update(
        self, ctx: RequestContext, activity_id: UUID, changes: ActivityUpdate
    ) -> ActivityRecord:
        """Apply an edit and recompute the edges touching the activity when needed.

        Explicit coordinates win over geocoding. A changed location text is
        re-geocoded; a failed lookup or an emptied location clears the
        coordinates.
        """
        activity = self._access.activity_for_member(ctx, activity_id)
        supplied = changes.model_fields_set
        updates: dict[str, Any] = {}

        for name in _PLAIN_FIELDS:
            if name in supplied:
                value = getattr(changes, name)
                if value is None and name in _REQUIRED_FIELDS:
                    continue
                updates[name] = value

        coords_touched = False
        if "coordinates" in supplied:
            self._set_coordinates(updates, changes.coordinates)
            if "location" in supplied:
                updates["location"] = changes.location
            coords_touched = True
        elif "location" in supplied and changes.location != activity.location:
            updates["location"] = changes.location
            coords = None
            if changes.location and changes.location.strip():
                coords = await self._geocoder.geocode(changes.location)
            self._set_coordinates(updates, coords)
            coords_touched = True

        mode_changed = False
        if "transport_type" in supplied and changes.transport_type != activity.transport_type:
            updates["transport_type"] = changes.transport_type
            mode_changed = True

        if "travel_time" in supplied and changes.travel_time is not None:
            updates["travel_time"] = changes.travel_time
            updates["travel_time_source"] = TimeSource.pinned
        elif changes.travel_hours is not None or changes.travel_minutes is not None:
            updates["travel_time"] = (changes.travel_hours or 0) * 60 + (changes.travel_minutes or 0)
            updates["travel_time_source"] = TimeSource.auto

        if updates:
            self._store.update_activity(activity_id, **updates)

        if coords_touched or mode_changed:
            await self._recompute_incoming(activity)
            await self._engine.recompute_edge(activity_id)

        return self._reload(activity_id)

    async def remove(self, ctx: RequestContext, activity_id: UUID) -> None:
        """Delete an activity.

        Neighboring edges are left as they are unless ``recompute_on_delete``
        is enabled, in which case the edge ending at the removed activity is
        recomputed against the new sequence.
        """
        activity = self._access.activity_for_member(ctx, activity_id)
        predecessor = DaySequence(self._store.list_activities(activity.day_id)).predecessor(
            activity_id
        )

        self._store.delete_activity(activity_id)
        logger.info(
            "Activity removed",
            extra={
                "structured": {
                    "day_id": str(activity.day_id),
                    "activity_id": str(activity_id),
                    "recompute": self._recompute_on_delete,
                }
            },
        )

        if not self._recompute_on_delete:
            return

        if predecessor is not None:
            await self._engine.recompute_edge(predecessor.activity_id)
        else:
            await self._engine.recompute_starting_edge(activity.day_id)

    async def set_starting_location(
        self, ctx: RequestContext, day_id: UUID, data: StartingLocationInput
    ) -> DayRecord:
        """Set a day's starting location and route it to the first activity."""
        self._access.day_for_member(ctx, day_id)

        coords = data.coordinates
        if coords is None and data.location.strip():
            coords = await self._geocoder.geocode(data.location)

        self._store.update_day(
            day_id,
            starting_location=data.location or None,
            starting_latitude=coords.latitude if coords else None,
            starting_longitude=coords.longitude if coords else None,
            starting_transport_type=data.transport_type,
        )

        first = DaySequence(self._store.list_activities(day_id)).first()
        if first is not None and first.coordinates is not None:
            await self._engine.recompute_starting_edge(day_id)

        day = self._store.get_day(day_id)
        assert day is not None
        return day

    async def recalculate_day(self, ctx: RequestContext, day_id: UUID) -> RecalculationSummary:
        """Recompute every edge of a day on the caller's behalf."""
        self._access.day_for_member(ctx, day_id)
        return await self._engine.recompute_day(day_id)

    async def route_alternatives(
        self, ctx: RequestContext, activity_id: UUID
    ) -> RouteAlternatives:
        """List alternative routes for an activity's outbound edge."""
        self._access.activity_for_member(ctx, activity_id)
        return await self._engine.list_alternatives(activity_id)

    def select_route(
        self, ctx: RequestContext, activity_id: UUID, selection: RouteSelection
    ) -> ActivityRecord:
        """Store the caller's chosen route and pin its travel time."""
        self._access.activity_for_member(ctx, activity_id)
        self._engine.select_alternative(
            activity_id, selection.distance_km, selection.duration_minutes
        )
        return self._reload(activity_id)

    async def _recompute_incoming(self, activity: ActivityRecord) -> None:
        sequence = DaySequence(self._store.list_activities(activity.day_id))
        predecessor = sequence.predecessor(activity.activity_id)
        if predecessor is not None:
            await self._engine.recompute_edge(predecessor.activity_id)
        else:
            await self._engine.recompute_starting_edge(activity.day_id)

    @staticmethod
    def _set_coordinates(updates: dict[str, Any], coords: Coordinates | None) -> None:
        updates["latitude"] = coords.latitude if coords else None
        updates["longitude"] = coords.longitude if coords else None

    def _reload(self, activity_id: UUID) -> ActivityRecord:
        activity = self._store.get_activity(activity_id)
        assert activity is not None
        return activity
