"""Ordered view over a day's activities with explicit adjacency queries."""

from collections.abc import Iterator
from uuid import UUID

from backend.app.db.repositories import ActivityRecord


class DaySequence:
    """A day's activities sorted by order, with O(1) neighbor lookup.

    Built from a single store read; adjacency always reflects the pruned,
    current sequence so a deleted activity's neighbors become adjacent.
    """

    def __init__(self, activities: list[ActivityRecord]) -> None:
        self._activities = sorted(activities, key=lambda a: a.order)
        self._index = {a.activity_id: i for i, a in enumerate(self._activities)}

    def __len__(self) -> int:
        return len(self._activities)

    def __iter__(self) -> Iterator[ActivityRecord]:
        return iter(self._activities)

    def __contains__(self, activity_id: object) -> bool:
        return activity_id in self._index

    def get(self, activity_id: UUID) -> ActivityRecord | None:
        i = self._index.get(activity_id)
        return self._activities[i] if i is not None else None

    def first(self) -> ActivityRecord | None:
        return self._activities[0] if self._activities else None

    def last(self) -> ActivityRecord | None:
        return self._activities[-1] if self._activities else None

    def successor(self, activity_id: UUID) -> ActivityRecord | None:
        """Activity immediately after the given one, or None when it is last."""
        i = self._index.get(activity_id)
        if i is None or i + 1 >= len(self._activities):
            return None
        return self._activities[i + 1]

    def predecessor(self, activity_id: UUID) -> ActivityRecord | None:
        """Activity immediately before the given one, or None when it is first."""
        i = self._index.get(activity_id)
        if i is None or i == 0:
            return None
        return self._activities[i - 1]

    def pairs(self) -> Iterator[tuple[ActivityRecord, ActivityRecord]]:
        """Consecutive (origin, destination) pairs in order."""
        return zip(self._activities, self._activities[1:])
