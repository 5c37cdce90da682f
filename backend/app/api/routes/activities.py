"""Activity endpoints - edit, delete, route alternatives."""

import uuid

from fastapi import APIRouter, status

from backend.app.api.dependencies import ContextDep, OrderingServiceDep
from backend.app.api.schemas import ActivityResponse
from backend.app.models.itinerary import ActivityUpdate
from backend.app.models.routes import RouteAlternatives, RouteSelection

router = APIRouter(prefix="/activities", tags=["activities"])


@router.patch("/{activity_id}", response_model=ActivityResponse)
async def update_activity(
    activity_id: uuid.UUID, request: ActivityUpdate, ctx: ContextDep, service: OrderingServiceDep
) -> ActivityResponse:
    """Edit an activity; moving it or changing its transport reroutes adjacent edges."""
    activity = await service.update(ctx, activity_id, request)
    return ActivityResponse.from_record(activity)


@router.delete("/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_activity(
    activity_id: uuid.UUID, ctx: ContextDep, service: OrderingServiceDep
) -> None:
    """Delete an activity."""
    await service.remove(ctx, activity_id)


@router.get("/{activity_id}/routes", response_model=RouteAlternatives)
async def list_routes(
    activity_id: uuid.UUID, ctx: ContextDep, service: OrderingServiceDep
) -> RouteAlternatives:
    """Current route to the next stop plus any alternatives."""
    return await service.route_alternatives(ctx, activity_id)


@router.post("/{activity_id}/routes/select", response_model=ActivityResponse)
async def select_route(
    activity_id: uuid.UUID, request: RouteSelection, ctx: ContextDep, service: OrderingServiceDep
) -> ActivityResponse:
    """Store the chosen route; its travel time is pinned against recalculation."""
    activity = service.select_route(ctx, activity_id, request)
    return ActivityResponse.from_record(activity)
