"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19

Creates:
- trip, trip_collaborator
- day, activity
- checklist, checklist_item
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create all tables."""
    # trip table
    op.create_table(
        "trip",
        sa.Column("trip_id", sa.Uuid(), primary_key=True),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("budget", sa.Float(), server_default=sa.text("0"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("idx_trip_owner", "trip", ["owner_id", "created_at"])

    # trip_collaborator table
    op.create_table(
        "trip_collaborator",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("trip_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(["trip_id"], ["trip.trip_id"], ondelete="CASCADE"),
        sa.UniqueConstraint("trip_id", "user_id", name="uq_collaborator_trip_user"),
    )

    # day table
    op.create_table(
        "day",
        sa.Column("day_id", sa.Uuid(), primary_key=True),
        sa.Column("trip_id", sa.Uuid(), nullable=False),
        sa.Column("day_number", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("starting_location", sa.Text(), nullable=True),
        sa.Column("starting_latitude", sa.Float(), nullable=True),
        sa.Column("starting_longitude", sa.Float(), nullable=True),
        sa.Column("starting_transport_type", sa.Text(), nullable=True),
        sa.Column("starting_travel_distance", sa.Float(), nullable=True),
        sa.Column("starting_travel_time", sa.Integer(), nullable=True),
        sa.Column("starting_travel_time_source", sa.Text(), server_default="unset", nullable=False),
        sa.ForeignKeyConstraint(["trip_id"], ["trip.trip_id"], ondelete="CASCADE"),
        sa.UniqueConstraint("trip_id", "day_number", name="uq_day_trip_number"),
    )

    # activity table
    op.create_table(
        "activity",
        sa.Column("activity_id", sa.Uuid(), primary_key=True),
        sa.Column("day_id", sa.Uuid(), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("time", sa.Text(), nullable=True),
        sa.Column("duration", sa.Integer(), server_default=sa.text("60"), nullable=False),
        sa.Column("cost", sa.Float(), server_default=sa.text("0"), nullable=False),
        sa.Column("icon", sa.Text(), server_default="MapPin", nullable=False),
        sa.Column("color", sa.Text(), server_default="orange", nullable=False),
        sa.Column("transport_type", sa.Text(), nullable=True),
        sa.Column("travel_distance", sa.Float(), nullable=True),
        sa.Column("travel_time", sa.Integer(), nullable=True),
        sa.Column("travel_time_source", sa.Text(), server_default="unset", nullable=False),
        sa.ForeignKeyConstraint(["day_id"], ["day.day_id"], ondelete="CASCADE"),
    )
    op.create_index("idx_activity_day_order", "activity", ["day_id", "order"])

    # checklist table
    op.create_table(
        "checklist",
        sa.Column("checklist_id", sa.Uuid(), primary_key=True),
        sa.Column("trip_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("shared", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.ForeignKeyConstraint(["trip_id"], ["trip.trip_id"], ondelete="CASCADE"),
    )

    # checklist_item table
    op.create_table(
        "checklist_item",
        sa.Column("item_id", sa.Uuid(), primary_key=True),
        sa.Column("checklist_id", sa.Uuid(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("completed", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["checklist_id"], ["checklist.checklist_id"], ondelete="CASCADE"),
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("checklist_item")
    op.drop_table("checklist")
    op.drop_index("idx_activity_day_order", table_name="activity")
    op.drop_table("activity")
    op.drop_table("day")
    op.drop_table("trip_collaborator")
    op.drop_index("idx_trip_owner", table_name="trip")
    op.drop_table("trip")
