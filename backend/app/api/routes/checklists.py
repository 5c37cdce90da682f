"""Checklist endpoints - items."""

import uuid

from fastapi import APIRouter, status

from backend.app.api.dependencies import ChecklistServiceDep, ContextDep
from backend.app.api.schemas import ChecklistItemResponse
from backend.app.models.itinerary import ChecklistItemCreate

router = APIRouter(tags=["checklists"])


@router.post(
    "/checklists/{checklist_id}/items",
    response_model=ChecklistItemResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_item(
    checklist_id: uuid.UUID,
    request: ChecklistItemCreate,
    ctx: ContextDep,
    service: ChecklistServiceDep,
) -> ChecklistItemResponse:
    """Append an item to a checklist."""
    return ChecklistItemResponse.from_record(service.add_item(ctx, checklist_id, request.text))


@router.post("/checklist-items/{item_id}/toggle", response_model=ChecklistItemResponse)
async def toggle_item(
    item_id: uuid.UUID, ctx: ContextDep, service: ChecklistServiceDep
) -> ChecklistItemResponse:
    """Flip an item's completed flag."""
    return ChecklistItemResponse.from_record(service.toggle_item(ctx, item_id))


@router.delete("/checklist-items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(item_id: uuid.UUID, ctx: ContextDep, service: ChecklistServiceDep) -> None:
    """Delete a checklist item."""
    service.delete_item(ctx, item_id)
