"""Shared query helpers."""

from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from backend.app.db.models import Activity, Trip, TripCollaborator


def select_trips_for_user(user_id: UUID) -> Select:
    """Select trips the user owns or collaborates on.

    Args:
        user_id: Authenticated user ID

    Returns:
        Select over Trip, most recently created first
    """
    shared = select(TripCollaborator.trip_id).where(TripCollaborator.user_id == user_id)
    return (
        select(Trip)
        .where(or_(Trip.owner_id == user_id, Trip.trip_id.in_(shared)))
        .order_by(Trip.created_at.desc())
    )


def select_day_activities(day_id: UUID) -> Select:
    """Select a day's activities in sequence order.

    Args:
        day_id: Day ID

    Returns:
        Select over Activity ordered by order ascending
    """
    return select(Activity).where(Activity.day_id == day_id).order_by(Activity.order.asc())


def collaborator_ids(session: Session, trip_id: UUID) -> list[UUID]:
    """Load collaborator user IDs for a trip."""
    rows = session.scalars(
        select(TripCollaborator.user_id).where(TripCollaborator.trip_id == trip_id)
    )
    return list(rows)
