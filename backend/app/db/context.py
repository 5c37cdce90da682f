"""Request context for ownership enforcement."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class RequestContext:
    """Request context carrying the authenticated user's identity.

    Every trip, day, activity and checklist operation checks ownership or
    collaboration against this before touching the store.
    """

    user_id: UUID
