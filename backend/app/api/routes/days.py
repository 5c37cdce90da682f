"""Day endpoints - starting location, activities, full-day recalculation."""

import uuid

from fastapi import APIRouter, status

from backend.app.api.dependencies import ContextDep, OrderingServiceDep, TripServiceDep
from backend.app.api.schemas import ActivityResponse, DayResponse
from backend.app.models.itinerary import ActivityCreate, RecalculationSummary, StartingLocationInput

router = APIRouter(prefix="/days", tags=["days"])


@router.delete("/{day_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_day(day_id: uuid.UUID, ctx: ContextDep, service: TripServiceDep) -> None:
    """Delete a day; later days are renumbered."""
    service.delete_day(ctx, day_id)


@router.post(
    "/{day_id}/activities", response_model=ActivityResponse, status_code=status.HTTP_201_CREATED
)
async def append_activity(
    day_id: uuid.UUID, request: ActivityCreate, ctx: ContextDep, service: OrderingServiceDep
) -> ActivityResponse:
    """Append an activity to the end of the day."""
    activity = await service.append(ctx, day_id, request)
    return ActivityResponse.from_record(activity)


@router.put("/{day_id}/starting-location", response_model=DayResponse)
async def set_starting_location(
    day_id: uuid.UUID,
    request: StartingLocationInput,
    ctx: ContextDep,
    service: OrderingServiceDep,
) -> DayResponse:
    """Set where the day starts and how the traveler gets to the first stop."""
    day = await service.set_starting_location(ctx, day_id, request)
    return DayResponse.from_record(day)


@router.post("/{day_id}/recalculate", response_model=RecalculationSummary)
async def recalculate_day(
    day_id: uuid.UUID, ctx: ContextDep, service: OrderingServiceDep
) -> RecalculationSummary:
    """Recompute travel distance and time for every edge of the day."""
    return await service.recalculate_day(ctx, day_id)
