"""Models package - re-exports for convenience."""

from backend.app.models.common import Coordinates, RoutingMode, TimeSource, TransportCategory
from backend.app.models.itinerary import (
    ActivityCreate,
    ActivityUpdate,
    ChecklistCreate,
    ChecklistItemCreate,
    CollaboratorCreate,
    EdgeFailure,
    RecalculationSummary,
    StartingLocationInput,
    TripCreate,
    TripUpdate,
)
from backend.app.models.routes import RouteAlternatives, RouteOption, RouteResult, RouteSelection

__all__ = [
    # Common
    "Coordinates",
    "RoutingMode",
    "TimeSource",
    "TransportCategory",
    # Itinerary
    "ActivityCreate",
    "ActivityUpdate",
    "ChecklistCreate",
    "ChecklistItemCreate",
    "CollaboratorCreate",
    "EdgeFailure",
    "RecalculationSummary",
    "StartingLocationInput",
    "TripCreate",
    "TripUpdate",
    # Routes
    "RouteAlternatives",
    "RouteOption",
    "RouteResult",
    "RouteSelection",
]
