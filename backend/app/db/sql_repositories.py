"""SQL implementations of repository interfaces."""

import uuid
from enum import Enum
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from backend.app.db.models import Activity, Checklist, ChecklistItem, Day, Trip, TripCollaborator
from backend.app.db.queries import collaborator_ids, select_day_activities, select_trips_for_user
from backend.app.db.repositories import (
    ActivityRecord,
    ChecklistItemRecord,
    ChecklistRecord,
    DayRecord,
    TripRecord,
)
from backend.app.models.common import TimeSource


def _apply(row: Any, changes: dict[str, Any]) -> None:
    for key, value in changes.items():
        if isinstance(value, Enum):
            value = value.value
        setattr(row, key, value)


def _trip_record(row: Trip, collaborators: list[uuid.UUID]) -> TripRecord:
    return TripRecord(
        trip_id=row.trip_id,
        owner_id=row.owner_id,
        title=row.title,
        location=row.location,
        latitude=row.latitude,
        longitude=row.longitude,
        start_date=row.start_date,
        end_date=row.end_date,
        budget=row.budget,
        created_at=row.created_at,
        collaborator_ids=collaborators,
    )


def _day_record(row: Day) -> DayRecord:
    return DayRecord(
        day_id=row.day_id,
        trip_id=row.trip_id,
        day_number=row.day_number,
        date=row.date,
        starting_location=row.starting_location,
        starting_latitude=row.starting_latitude,
        starting_longitude=row.starting_longitude,
        starting_transport_type=row.starting_transport_type,
        starting_travel_distance=row.starting_travel_distance,
        starting_travel_time=row.starting_travel_time,
        starting_travel_time_source=TimeSource(row.starting_travel_time_source),
    )


def _activity_record(row: Activity) -> ActivityRecord:
    return ActivityRecord(
        activity_id=row.activity_id,
        day_id=row.day_id,
        order=row.order,
        title=row.title,
        description=row.description,
        location=row.location,
        latitude=row.latitude,
        longitude=row.longitude,
        time=row.time,
        duration=row.duration,
        cost=row.cost,
        icon=row.icon,
        color=row.color,
        transport_type=row.transport_type,
        travel_distance=row.travel_distance,
        travel_time=row.travel_time,
        travel_time_source=TimeSource(row.travel_time_source),
    )


class SqlItineraryStore:
    """SQL implementation of TripRepository and ItineraryStore.

    Every mutating call commits on its own.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    # Trips

    def add_trip(self, trip: TripRecord, days: list[DayRecord]) -> None:
        """Persist a new trip together with its pre-populated days."""
        row = Trip(
            trip_id=trip.trip_id,
            owner_id=trip.owner_id,
            title=trip.title,
            location=trip.location,
            latitude=trip.latitude,
            longitude=trip.longitude,
            start_date=trip.start_date,
            end_date=trip.end_date,
            budget=trip.budget,
            created_at=trip.created_at,
        )
        row.days = [
            Day(day_id=day.day_id, day_number=day.day_number, date=day.date) for day in days
        ]
        self._session.add(row)
        self._session.commit()

    def get_trip(self, trip_id: uuid.UUID) -> TripRecord | None:
        """Get trip by ID."""
        row = self._session.get(Trip, trip_id)
        if row is None:
            return None
        return _trip_record(row, collaborator_ids(self._session, trip_id))

    def list_trips_for_user(self, user_id: uuid.UUID) -> list[TripRecord]:
        """List trips owned by or shared with the user."""
        rows = self._session.scalars(select_trips_for_user(user_id)).all()
        return [_trip_record(row, collaborator_ids(self._session, row.trip_id)) for row in rows]

    def update_trip(self, trip_id: uuid.UUID, **changes: Any) -> None:
        """Apply field changes to a trip."""
        row = self._session.get(Trip, trip_id)
        if row is None:
            return
        _apply(row, changes)
        self._session.commit()

    def delete_trip(self, trip_id: uuid.UUID) -> None:
        """Delete a trip; days, activities and checklists cascade."""
        row = self._session.get(Trip, trip_id)
        if row is None:
            return
        self._session.delete(row)
        self._session.commit()

    def add_collaborator(self, trip_id: uuid.UUID, user_id: uuid.UUID) -> None:
        """Grant a user collaborator access to a trip."""
        if user_id in collaborator_ids(self._session, trip_id):
            return
        self._session.add(TripCollaborator(trip_id=trip_id, user_id=user_id))
        self._session.commit()

    def list_trips_missing_coordinates(self) -> list[TripRecord]:
        """Trips with location text but no coordinates."""
        rows = self._session.scalars(
            select(Trip).where(Trip.location.is_not(None), Trip.latitude.is_(None))
        ).all()
        return [_trip_record(row, []) for row in rows]

    # Days

    def add_day(self, day: DayRecord) -> None:
        """Persist a new day."""
        self._session.add(
            Day(day_id=day.day_id, trip_id=day.trip_id, day_number=day.day_number, date=day.date)
        )
        self._session.commit()

    def get_day(self, day_id: uuid.UUID) -> DayRecord | None:
        """Get day by ID."""
        row = self._session.get(Day, day_id)
        return _day_record(row) if row is not None else None

    def list_days(self, trip_id: uuid.UUID) -> list[DayRecord]:
        """List a trip's days ordered by day number."""
        rows = self._session.scalars(
            select(Day).where(Day.trip_id == trip_id).order_by(Day.day_number.asc())
        ).all()
        return [_day_record(row) for row in rows]

    def update_day(self, day_id: uuid.UUID, **changes: Any) -> None:
        """Apply field changes to a day."""
        row = self._session.get(Day, day_id)
        if row is None:
            return
        _apply(row, changes)
        self._session.commit()

    def delete_day(self, day_id: uuid.UUID) -> None:
        """Delete a day; its activities cascade."""
        row = self._session.get(Day, day_id)
        if row is None:
            return
        self._session.delete(row)
        self._session.commit()

    # Activities

    def add_activity(self, activity: ActivityRecord) -> None:
        """Persist a new activity."""
        self._session.add(
            Activity(
                activity_id=activity.activity_id,
                day_id=activity.day_id,
                order=activity.order,
                title=activity.title,
                description=activity.description,
                location=activity.location,
                latitude=activity.latitude,
                longitude=activity.longitude,
                time=activity.time,
                duration=activity.duration,
                cost=activity.cost,
                icon=activity.icon,
                color=activity.color,
                transport_type=activity.transport_type,
                travel_distance=activity.travel_distance,
                travel_time=activity.travel_time,
                travel_time_source=activity.travel_time_source.value,
            )
        )
        self._session.commit()

    def get_activity(self, activity_id: uuid.UUID) -> ActivityRecord | None:
        """Get activity by ID."""
        row = self._session.get(Activity, activity_id)
        return _activity_record(row) if row is not None else None

    def list_activities(self, day_id: uuid.UUID) -> list[ActivityRecord]:
        """List a day's activities ordered by order."""
        rows = self._session.scalars(select_day_activities(day_id)).all()
        return [_activity_record(row) for row in rows]

    def max_activity_order(self, day_id: uuid.UUID) -> int | None:
        """Highest order value in the day, or None when the day is empty."""
        return self._session.scalar(
            select(func.max(Activity.order)).where(Activity.day_id == day_id)
        )

    def update_activity(self, activity_id: uuid.UUID, **changes: Any) -> None:
        """Apply field changes to an activity."""
        row = self._session.get(Activity, activity_id)
        if row is None:
            return
        _apply(row, changes)
        self._session.commit()

    def delete_activity(self, activity_id: uuid.UUID) -> None:
        """Delete an activity."""
        row = self._session.get(Activity, activity_id)
        if row is None:
            return
        self._session.delete(row)
        self._session.commit()

    def list_activities_missing_coordinates(self) -> list[ActivityRecord]:
        """Activities with location text but no coordinates."""
        rows = self._session.scalars(
            select(Activity).where(Activity.location.is_not(None), Activity.latitude.is_(None))
        ).all()
        return [_activity_record(row) for row in rows]

    # Checklists

    def add_checklist(self, checklist: ChecklistRecord) -> None:
        """Persist a new checklist."""
        self._session.add(
            Checklist(
                checklist_id=checklist.checklist_id,
                trip_id=checklist.trip_id,
                title=checklist.title,
                shared=checklist.shared,
            )
        )
        self._session.commit()

    def get_checklist(self, checklist_id: uuid.UUID) -> ChecklistRecord | None:
        """Get checklist by ID."""
        row = self._session.get(Checklist, checklist_id)
        if row is None:
            return None
        return ChecklistRecord(
            checklist_id=row.checklist_id, trip_id=row.trip_id, title=row.title, shared=row.shared
        )

    def list_checklists(self, trip_id: uuid.UUID) -> list[ChecklistRecord]:
        """List a trip's checklists."""
        rows = self._session.scalars(select(Checklist).where(Checklist.trip_id == trip_id)).all()
        return [
            ChecklistRecord(
                checklist_id=row.checklist_id,
                trip_id=row.trip_id,
                title=row.title,
                shared=row.shared,
            )
            for row in rows
        ]

    def add_checklist_item(self, item: ChecklistItemRecord) -> None:
        """Persist a new checklist item."""
        self._session.add(
            ChecklistItem(
                item_id=item.item_id,
                checklist_id=item.checklist_id,
                text=item.text,
                completed=item.completed,
                order=item.order,
            )
        )
        self._session.commit()

    def get_checklist_item(self, item_id: uuid.UUID) -> ChecklistItemRecord | None:
        """Get checklist item by ID."""
        row = self._session.get(ChecklistItem, item_id)
        if row is None:
            return None
        return ChecklistItemRecord(
            item_id=row.item_id,
            checklist_id=row.checklist_id,
            text=row.text,
            completed=row.completed,
            order=row.order,
        )

    def list_checklist_items(self, checklist_id: uuid.UUID) -> list[ChecklistItemRecord]:
        """List a checklist's items ordered by order."""
        rows = self._session.scalars(
            select(ChecklistItem)
            .where(ChecklistItem.checklist_id == checklist_id)
            .order_by(ChecklistItem.order.asc())
        ).all()
        return [
            ChecklistItemRecord(
                item_id=row.item_id,
                checklist_id=row.checklist_id,
                text=row.text,
                completed=row.completed,
                order=row.order,
            )
            for row in rows
        ]

    def update_checklist_item(self, item_id: uuid.UUID, **changes: Any) -> None:
        """Apply field changes to a checklist item."""
        row = self._session.get(ChecklistItem, item_id)
        if row is None:
            return
        _apply(row, changes)
        self._session.commit()

    def delete_checklist_item(self, item_id: uuid.UUID) -> None:
        """Delete a checklist item."""
        row = self._session.get(ChecklistItem, item_id)
        if row is None:
            return
        self._session.delete(row)
        self._session.commit()
