"""API response schemas."""

from datetime import date, datetime

from pydantic import BaseModel

from backend.app.db.repositories import (
    ActivityRecord,
    ChecklistItemRecord,
    ChecklistRecord,
    DayRecord,
    TripRecord,
)
from backend.app.itinerary.trips import TripItinerary
from backend.app.models.common import Coordinates, TimeSource


class TripResponse(BaseModel):
    """Trip summary."""

    trip_id: str
    owner_id: str
    title: str
    location: str | None
    coordinates: Coordinates | None
    start_date: date
    end_date: date
    budget: float
    created_at: datetime
    collaborator_ids: list[str]

    @classmethod
    def from_record(cls, trip: TripRecord) -> "TripResponse":
        return cls(
            trip_id=str(trip.trip_id),
            owner_id=str(trip.owner_id),
            title=trip.title,
            location=trip.location,
            coordinates=trip.coordinates,
            start_date=trip.start_date,
            end_date=trip.end_date,
            budget=trip.budget,
            created_at=trip.created_at,
            collaborator_ids=[str(c) for c in trip.collaborator_ids],
        )


class ActivityResponse(BaseModel):
    """Activity with its outbound travel edge."""

    activity_id: str
    day_id: str
    order: int
    title: str
    description: str | None
    location: str | None
    coordinates: Coordinates | None
    time: str | None
    duration: int
    cost: float
    icon: str
    color: str
    transport_type: str | None
    travel_distance: float | None
    travel_time: int | None
    travel_time_source: TimeSource

    @classmethod
    def from_record(cls, activity: ActivityRecord) -> "ActivityResponse":
        return cls(
            activity_id=str(activity.activity_id),
            day_id=str(activity.day_id),
            order=activity.order,
            title=activity.title,
            description=activity.description,
            location=activity.location,
            coordinates=activity.coordinates,
            time=activity.time,
            duration=activity.duration,
            cost=activity.cost,
            icon=activity.icon,
            color=activity.color,
            transport_type=activity.transport_type,
            travel_distance=activity.travel_distance,
            travel_time=activity.travel_time,
            travel_time_source=activity.travel_time_source,
        )


class DayResponse(BaseModel):
    """Day with its starting-location edge and activities."""

    day_id: str
    trip_id: str
    day_number: int
    date: date
    starting_location: str | None
    starting_coordinates: Coordinates | None
    starting_transport_type: str | None
    starting_travel_distance: float | None
    starting_travel_time: int | None
    starting_travel_time_source: TimeSource
    activities: list[ActivityResponse] = []

    @classmethod
    def from_record(
        cls, day: DayRecord, activities: list[ActivityRecord] | None = None
    ) -> "DayResponse":
        return cls(
            day_id=str(day.day_id),
            trip_id=str(day.trip_id),
            day_number=day.day_number,
            date=day.date,
            starting_location=day.starting_location,
            starting_coordinates=day.starting_coordinates,
            starting_transport_type=day.starting_transport_type,
            starting_travel_distance=day.starting_travel_distance,
            starting_travel_time=day.starting_travel_time,
            starting_travel_time_source=day.starting_travel_time_source,
            activities=[ActivityResponse.from_record(a) for a in activities or []],
        )


class ChecklistItemResponse(BaseModel):
    """Checklist item."""

    item_id: str
    checklist_id: str
    text: str
    completed: bool
    order: int

    @classmethod
    def from_record(cls, item: ChecklistItemRecord) -> "ChecklistItemResponse":
        return cls(
            item_id=str(item.item_id),
            checklist_id=str(item.checklist_id),
            text=item.text,
            completed=item.completed,
            order=item.order,
        )


class ChecklistResponse(BaseModel):
    """Checklist with items."""

    checklist_id: str
    trip_id: str
    title: str
    shared: bool
    items: list[ChecklistItemResponse] = []

    @classmethod
    def from_record(
        cls, checklist: ChecklistRecord, items: list[ChecklistItemRecord] | None = None
    ) -> "ChecklistResponse":
        return cls(
            checklist_id=str(checklist.checklist_id),
            trip_id=str(checklist.trip_id),
            title=checklist.title,
            shared=checklist.shared,
            items=[ChecklistItemResponse.from_record(i) for i in items or []],
        )


class TripDetailResponse(BaseModel):
    """Trip with days, activities and checklists."""

    trip: TripResponse
    days: list[DayResponse]
    checklists: list[ChecklistResponse]

    @classmethod
    def from_itinerary(cls, itinerary: TripItinerary) -> "TripDetailResponse":
        return cls(
            trip=TripResponse.from_record(itinerary.trip),
            days=[DayResponse.from_record(d.day, d.activities) for d in itinerary.days],
            checklists=[
                ChecklistResponse.from_record(c.checklist, c.items) for c in itinerary.checklists
            ],
        )
