"""SQLAlchemy ORM models for trips, days, activities and checklists."""

import datetime as dt
import uuid

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class Trip(Base):
    """Trip table - top-level ownership boundary."""

    __tablename__ = "trip"
    __table_args__ = (Index("idx_trip_owner", "owner_id", "created_at"),)

    trip_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str | None] = mapped_column(Text, nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    start_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    end_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    budget: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    days: Mapped[list["Day"]] = relationship(
        "Day", back_populates="trip", cascade="all, delete-orphan", order_by="Day.day_number"
    )
    collaborators: Mapped[list["TripCollaborator"]] = relationship(
        "TripCollaborator", back_populates="trip", cascade="all, delete-orphan"
    )
    checklists: Mapped[list["Checklist"]] = relationship(
        "Checklist", back_populates="trip", cascade="all, delete-orphan"
    )


class TripCollaborator(Base):
    """Trip collaborator table - users sharing edit access to a trip."""

    __tablename__ = "trip_collaborator"
    __table_args__ = (UniqueConstraint("trip_id", "user_id", name="uq_collaborator_trip_user"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("trip.trip_id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)

    # Relationships
    trip: Mapped["Trip"] = relationship("Trip", back_populates="collaborators")


class Day(Base):
    """Day table - one calendar day of a trip, with an optional starting location."""

    __tablename__ = "day"
    __table_args__ = (UniqueConstraint("trip_id", "day_number", name="uq_day_trip_number"),)

    day_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("trip.trip_id", ondelete="CASCADE"), nullable=False
    )
    day_number: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    starting_location: Mapped[str | None] = mapped_column(Text, nullable=True)
    starting_latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    starting_longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    starting_transport_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    starting_travel_distance: Mapped[float | None] = mapped_column(Float, nullable=True)
    starting_travel_time: Mapped[int | None] = mapped_column(Integer, nullable=True)
    starting_travel_time_source: Mapped[str] = mapped_column(
        Text, nullable=False, default="unset"
    )

    # Relationships
    trip: Mapped["Trip"] = relationship("Trip", back_populates="days")
    activities: Mapped[list["Activity"]] = relationship(
        "Activity", back_populates="day", cascade="all, delete-orphan", order_by="Activity.order"
    )


class Activity(Base):
    """Activity table - a timed stop within a day.

    travel_* columns describe the edge to the next activity in order.
    """

    __tablename__ = "activity"
    __table_args__ = (Index("idx_activity_day_order", "day_id", "order"),)

    activity_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    day_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("day.day_id", ondelete="CASCADE"), nullable=False
    )
    order: Mapped[int] = mapped_column("order", Integer, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str | None] = mapped_column(Text, nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    time: Mapped[str | None] = mapped_column(Text, nullable=True)
    duration: Mapped[int] = mapped_column(Integer, nullable=False, default=60)
    cost: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    icon: Mapped[str] = mapped_column(Text, nullable=False, default="MapPin")
    color: Mapped[str] = mapped_column(Text, nullable=False, default="orange")
    transport_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    travel_distance: Mapped[float | None] = mapped_column(Float, nullable=True)
    travel_time: Mapped[int | None] = mapped_column(Integer, nullable=True)
    travel_time_source: Mapped[str] = mapped_column(Text, nullable=False, default="unset")

    # Relationships
    day: Mapped["Day"] = relationship("Day", back_populates="activities")


class Checklist(Base):
    """Checklist table - per-trip list such as the default packing list."""

    __tablename__ = "checklist"

    checklist_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("trip.trip_id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    shared: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Relationships
    trip: Mapped["Trip"] = relationship("Trip", back_populates="checklists")
    items: Mapped[list["ChecklistItem"]] = relationship(
        "ChecklistItem",
        back_populates="checklist",
        cascade="all, delete-orphan",
        order_by="ChecklistItem.order",
    )


class ChecklistItem(Base):
    """Checklist item table."""

    __tablename__ = "checklist_item"

    item_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    checklist_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("checklist.checklist_id", ondelete="CASCADE"), nullable=False
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    order: Mapped[int] = mapped_column("order", Integer, nullable=False)

    # Relationships
    checklist: Mapped["Checklist"] = relationship("Checklist", back_populates="items")
