"""Trip and day management.

Days are numbered 1..N without gaps. Creating a trip pre-populates one day
per calendar date between start and end (inclusive); deleting a day
renumbers the ones after it and moves the trip's date range to the
remaining days.
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any
from uuid import UUID

from backend.app.adapters.geocoding import Geocoder
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
from backend.app.itinerary.access import AccessPolicy
from backend.app.itinerary.errors import StructuralInvariantViolation
from backend.app.models.itinerary import TripCreate, TripUpdate

logger = logging.getLogger(__name__)

DEFAULT_CHECKLIST_TITLE = "Packing List"


@dataclass
class DayItinerary:
    """A day with its activities in order."""

    day: DayRecord
    activities: list[ActivityRecord] = field(default_factory=list)


@dataclass
class ChecklistView:
    """A checklist with its items in order."""

    checklist: ChecklistRecord
    items: list[ChecklistItemRecord] = field(default_factory=list)


@dataclass
class TripItinerary:
    """Full read model of a trip."""

    trip: TripRecord
    days: list[DayItinerary]
    checklists: list[ChecklistView]


class TripService:
    """Creates, reads, edits and deletes trips and their days."""

    def __init__(
        self,
        trips: TripRepository,
        store: ItineraryStore,
        access: AccessPolicy,
        geocoder: Geocoder,
    ) -> None:
        self._trips = trips
        self._store = store
        self._access = access
        self._geocoder = geocoder

    async def create_trip(self, ctx: RequestContext, data: TripCreate) -> TripRecord:
        """Create a trip with its days and a default packing list."""
        if data.end_date < data.start_date:
            raise StructuralInvariantViolation("end date must not be before start date")

        coords = await self._geocoder.geocode(data.location) if data.location else None
        trip = TripRecord(
            owner_id=ctx.user_id,
            title=data.title,
            location=data.location,
            latitude=coords.latitude if coords else None,
            longitude=coords.longitude if coords else None,
            start_date=data.start_date,
            end_date=data.end_date,
            budget=data.budget,
        )

        day_count = (data.end_date - data.start_date).days + 1
        days = [
            DayRecord(
                trip_id=trip.trip_id,
                day_number=i + 1,
                date=data.start_date + timedelta(days=i),
            )
            for i in range(day_count)
        ]
        self._trips.add_trip(trip, days)
        self._trips.add_checklist(ChecklistRecord(trip_id=trip.trip_id, title=DEFAULT_CHECKLIST_TITLE))

        logger.info(
            "Trip created",
            extra={"structured": {"trip_id": str(trip.trip_id), "days": day_count}},
        )
        return trip

    def list_trips(self, ctx: RequestContext) -> list[TripRecord]:
        """List trips the caller owns or collaborates on."""
        return self._trips.list_trips_for_user(ctx.user_id)

    def get_itinerary(self, ctx: RequestContext, trip_id: UUID) -> TripItinerary:
        """Load a trip with days, activities and checklists."""
        trip = self._access.trip_for_member(ctx, trip_id)
        days = [
            DayItinerary(day=day, activities=self._store.list_activities(day.day_id))
            for day in self._trips.list_days(trip_id)
        ]
        checklists = [
            ChecklistView(
                checklist=checklist,
                items=self._trips.list_checklist_items(checklist.checklist_id),
            )
            for checklist in self._trips.list_checklists(trip_id)
        ]
        return TripItinerary(trip=trip, days=days, checklists=checklists)

    async def update_trip(
        self, ctx: RequestContext, trip_id: UUID, changes: TripUpdate
    ) -> TripRecord:
        """Edit trip title, location or budget. Owner only."""
        trip = self._access.trip_for_owner(ctx, trip_id)
        supplied = changes.model_fields_set
        updates: dict[str, Any] = {}

        if "title" in supplied and changes.title:
            updates["title"] = changes.title
        if "budget" in supplied and changes.budget is not None:
            updates["budget"] = changes.budget
        if "location" in supplied and changes.location != trip.location:
            updates["location"] = changes.location
            coords = None
            if changes.location and changes.location.strip():
                coords = await self._geocoder.geocode(changes.location)
            updates["latitude"] = coords.latitude if coords else None
            updates["longitude"] = coords.longitude if coords else None

        if updates:
            self._trips.update_trip(trip_id, **updates)
        return self._access.trip_for_member(ctx, trip_id)

    def delete_trip(self, ctx: RequestContext, trip_id: UUID) -> None:
        """Delete a trip with its days, activities and checklists. Owner only."""
        self._access.trip_for_owner(ctx, trip_id)
        self._trips.delete_trip(trip_id)
        logger.info("Trip deleted", extra={"structured": {"trip_id": str(trip_id)}})

    def add_collaborator(self, ctx: RequestContext, trip_id: UUID, user_id: UUID) -> TripRecord:
        """Share a trip with another user. Owner only."""
        trip = self._access.trip_for_owner(ctx, trip_id)
        if user_id != trip.owner_id:
            self._trips.add_collaborator(trip_id, user_id)
        return self._access.trip_for_member(ctx, trip_id)

    def add_day(self, ctx: RequestContext, trip_id: UUID) -> DayRecord:
        """Append a day after the trip's last day and extend the trip's end date."""
        trip = self._access.trip_for_member(ctx, trip_id)
        days = self._trips.list_days(trip_id)

        if days:
            last = days[-1]
            day = DayRecord(
                trip_id=trip_id,
                day_number=last.day_number + 1,
                date=last.date + timedelta(days=1),
            )
        else:
            day = DayRecord(trip_id=trip_id, day_number=1, date=trip.start_date)

        self._trips.add_day(day)
        self._trips.update_trip(trip_id, end_date=day.date)
        return day

    def delete_day(self, ctx: RequestContext, day_id: UUID) -> None:
        """Delete a day, renumber the days after it and refit the trip's dates.

        Raises:
            StructuralInvariantViolation: If it is the trip's only day
        """
        day = self._access.day_for_member(ctx, day_id)
        days = self._trips.list_days(day.trip_id)
        if len(days) <= 1:
            raise StructuralInvariantViolation("cannot delete the only day of a trip")

        self._trips.delete_day(day_id)

        remaining = [d for d in days if d.day_id != day_id]
        for number, other in enumerate(remaining, start=1):
            if other.day_number != number:
                self._trips.update_day(other.day_id, day_number=number)

        self._trips.update_trip(
            day.trip_id, start_date=remaining[0].date, end_date=remaining[-1].date
        )
        logger.info(
            "Day deleted",
            extra={
                "structured": {
                    "trip_id": str(day.trip_id),
                    "day_id": str(day_id),
                    "remaining_days": len(remaining),
                }
            },
        )
