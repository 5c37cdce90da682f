"""Trip checklists (packing lists and the like)."""

from uuid import UUID

from backend.app.db.context import RequestContext
from backend.app.db.repositories import ChecklistItemRecord, ChecklistRecord, TripRepository
from backend.app.itinerary.access import AccessPolicy


class ChecklistService:
    """Checklist and checklist item operations for trip members."""

    def __init__(self, trips: TripRepository, access: AccessPolicy) -> None:
        self._trips = trips
        self._access = access

    def create_checklist(
        self, ctx: RequestContext, trip_id: UUID, title: str, shared: bool = True
    ) -> ChecklistRecord:
        self._access.trip_for_member(ctx, trip_id)
        checklist = ChecklistRecord(trip_id=trip_id, title=title, shared=shared)
        self._trips.add_checklist(checklist)
        return checklist

    def add_item(self, ctx: RequestContext, checklist_id: UUID, text: str) -> ChecklistItemRecord:
        """Append an item; order is max existing + 1, or 0 for an empty list."""
        self._access.checklist_for_member(ctx, checklist_id)
        items = self._trips.list_checklist_items(checklist_id)
        item = ChecklistItemRecord(
            checklist_id=checklist_id,
            text=text,
            order=(items[-1].order + 1) if items else 0,
        )
        self._trips.add_checklist_item(item)
        return item

    def toggle_item(self, ctx: RequestContext, item_id: UUID) -> ChecklistItemRecord:
        item = self._access.checklist_item_for_member(ctx, item_id)
        self._trips.update_checklist_item(item_id, completed=not item.completed)
        item.completed = not item.completed
        return item

    def delete_item(self, ctx: RequestContext, item_id: UUID) -> None:
        self._access.checklist_item_for_member(ctx, item_id)
        self._trips.delete_checklist_item(item_id)
