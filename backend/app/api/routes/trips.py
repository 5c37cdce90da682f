"""Trip endpoints - create, list, read, edit, delete, share."""

import uuid

from fastapi import APIRouter, status

from backend.app.api.dependencies import ChecklistServiceDep, ContextDep, TripServiceDep
from backend.app.api.schemas import ChecklistResponse, DayResponse, TripDetailResponse, TripResponse
from backend.app.models.itinerary import ChecklistCreate, CollaboratorCreate, TripCreate, TripUpdate

router = APIRouter(prefix="/trips", tags=["trips"])


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(request: TripCreate, ctx: ContextDep, service: TripServiceDep) -> TripResponse:
    """Create a trip with one day per date and a default packing list."""
    trip = await service.create_trip(ctx, request)
    return TripResponse.from_record(trip)


@router.get("", response_model=list[TripResponse])
async def list_trips(ctx: ContextDep, service: TripServiceDep) -> list[TripResponse]:
    """List trips the caller owns or collaborates on."""
    return [TripResponse.from_record(t) for t in service.list_trips(ctx)]


@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_trip(
    trip_id: uuid.UUID, ctx: ContextDep, service: TripServiceDep
) -> TripDetailResponse:
    """Get a trip with its days, activities and checklists."""
    return TripDetailResponse.from_itinerary(service.get_itinerary(ctx, trip_id))


@router.patch("/{trip_id}", response_model=TripResponse)
async def update_trip(
    trip_id: uuid.UUID, request: TripUpdate, ctx: ContextDep, service: TripServiceDep
) -> TripResponse:
    """Edit a trip's title, location or budget."""
    trip = await service.update_trip(ctx, trip_id, request)
    return TripResponse.from_record(trip)


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trip(trip_id: uuid.UUID, ctx: ContextDep, service: TripServiceDep) -> None:
    """Delete a trip and everything in it."""
    service.delete_trip(ctx, trip_id)


@router.post("/{trip_id}/days", response_model=DayResponse, status_code=status.HTTP_201_CREATED)
async def add_day(trip_id: uuid.UUID, ctx: ContextDep, service: TripServiceDep) -> DayResponse:
    """Append a day to the end of the trip."""
    return DayResponse.from_record(service.add_day(ctx, trip_id))


@router.post("/{trip_id}/collaborators", response_model=TripResponse)
async def add_collaborator(
    trip_id: uuid.UUID, request: CollaboratorCreate, ctx: ContextDep, service: TripServiceDep
) -> TripResponse:
    """Share the trip with another user."""
    trip = service.add_collaborator(ctx, trip_id, request.user_id)
    return TripResponse.from_record(trip)


@router.post(
    "/{trip_id}/checklists", response_model=ChecklistResponse, status_code=status.HTTP_201_CREATED
)
async def create_checklist(
    trip_id: uuid.UUID, request: ChecklistCreate, ctx: ContextDep, service: ChecklistServiceDep
) -> ChecklistResponse:
    """Add a checklist to the trip."""
    checklist = service.create_checklist(ctx, trip_id, request.title, request.shared)
    return ChecklistResponse.from_record(checklist)
