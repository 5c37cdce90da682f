"""Itinerary error taxonomy.

Collaborator failures (geocoding, directions) never surface here: they are
absorbed as "keep stale data" and tallied. These exceptions cover what the
caller must see.
"""


class ItineraryError(Exception):
    """Base class for itinerary errors."""

    pass


class NotFoundError(ItineraryError):
    """Resource does not exist or is not visible to the caller."""

    def __init__(self, kind: str, resource_id: object) -> None:
        self.kind = kind
        self.resource_id = resource_id
        super().__init__(f"{kind} {resource_id} not found")


class AuthorizationError(ItineraryError):
    """Caller may see the resource but not perform this operation on it."""

    pass


class StructuralInvariantViolation(ItineraryError):
    """Operation would break a trip/day structural invariant."""

    pass


class MissingCoordinatesError(ItineraryError):
    """An edge endpoint lacks coordinates and the caller asked for routes explicitly."""

    pass


class NoNextStopError(ItineraryError):
    """Activity is the last of its day, so it has no outbound edge."""

    pass


class RouteLookupError(ItineraryError):
    """Directions service returned no route for an explicit request."""

    pass
