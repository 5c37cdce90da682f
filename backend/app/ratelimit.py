"""Mutation quotas for the itinerary API.

Edits are counted per caller. Day recalculation is counted per day and shared
by every member of the trip, so back-to-back recomputes of the same day are
throttled whoever triggers them.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol

import redis

from backend.app.db.context import RequestContext

EDIT_BUCKET = "edit"
RECOMPUTE_BUCKET = "recompute"

_MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})
_ITINERARY_ROOTS = frozenset({"trips", "days", "activities", "checklists", "checklist-items"})


@dataclass(frozen=True)
class QuotaScope:
    """Bucket a request draws from and the subject it is counted against."""

    bucket: str
    subject: str

    @property
    def key(self) -> str:
        return f"{self.bucket}:{self.subject}"


def quota_scope(method: str, path: str, ctx: RequestContext) -> QuotaScope | None:
    """Resolve the quota for a request, or None when it is not counted.

    Reads and paths outside the itinerary resources are free.
    """
    if method.upper() not in _MUTATING_METHODS:
        return None

    segments = [segment for segment in path.split("/") if segment]
    if not segments or segments[0] not in _ITINERARY_ROOTS:
        return None

    if len(segments) == 3 and segments[0] == "days" and segments[2] == "recalculate":
        return QuotaScope(RECOMPUTE_BUCKET, f"day:{segments[1]}")

    return QuotaScope(EDIT_BUCKET, f"user:{ctx.user_id}")


@dataclass
class RetryAfter:
    """Seconds until the current window closes."""

    seconds: int


class QuotaCounter(Protocol):
    """Counts hits per key in clock-aligned windows."""

    def hit(self, key: str, now: datetime) -> RetryAfter | None:
        """Count one hit; return RetryAfter once the key is over its limit."""
        ...


class _FixedWindow:
    def __init__(self, limit: int, window_seconds: int = 60) -> None:
        self.limit = limit
        self.window_seconds = window_seconds

    def _window(self, now: datetime) -> tuple[int, int]:
        """Window index for `now` and the whole seconds left in it."""
        index, elapsed = divmod(int(now.timestamp()), self.window_seconds)
        return index, self.window_seconds - elapsed

    def _verdict(self, count: int, seconds_left: int) -> RetryAfter | None:
        if count <= self.limit:
            return None
        return RetryAfter(seconds=max(1, seconds_left))


class InMemoryQuotaCounter(_FixedWindow):
    """Process-local counter; used when no Redis URL is configured."""

    def __init__(self, limit: int, window_seconds: int = 60) -> None:
        super().__init__(limit, window_seconds)
        self._counts: dict[str, tuple[int, int]] = {}

    def hit(self, key: str, now: datetime) -> RetryAfter | None:
        index, seconds_left = self._window(now)
        seen_index, count = self._counts.get(key, (index, 0))
        count = count + 1 if seen_index == index else 1
        self._counts[key] = (index, count)
        return self._verdict(count, seconds_left)


class RedisQuotaCounter(_FixedWindow):
    """Counter shared across workers through Redis."""

    def __init__(self, client: redis.Redis, limit: int, window_seconds: int = 60) -> None:
        super().__init__(limit, window_seconds)
        self._client = client

    def hit(self, key: str, now: datetime) -> RetryAfter | None:
        index, seconds_left = self._window(now)
        window_key = f"itinerary:quota:{key}:{index}"

        pipe = self._client.pipeline()
        pipe.incr(window_key)
        pipe.expire(window_key, self.window_seconds)
        count, _ = pipe.execute()

        return self._verdict(int(count), seconds_left)


class ItineraryQuotas:
    """Routes each mutating request to its bucket's counter."""

    def __init__(self, counters: dict[str, QuotaCounter]) -> None:
        self._counters = counters

    @classmethod
    def in_memory(cls, edits_per_min: int, recomputes_per_min: int) -> "ItineraryQuotas":
        return cls(
            {
                EDIT_BUCKET: InMemoryQuotaCounter(edits_per_min),
                RECOMPUTE_BUCKET: InMemoryQuotaCounter(recomputes_per_min),
            }
        )

    @classmethod
    def with_redis(
        cls, client: redis.Redis, edits_per_min: int, recomputes_per_min: int
    ) -> "ItineraryQuotas":
        return cls(
            {
                EDIT_BUCKET: RedisQuotaCounter(client, edits_per_min),
                RECOMPUTE_BUCKET: RedisQuotaCounter(client, recomputes_per_min),
            }
        )

    def check(
        self, method: str, path: str, ctx: RequestContext, now: datetime | None = None
    ) -> RetryAfter | None:
        """Count the request against its quota.

        Returns:
            RetryAfter when the request must be rejected, None otherwise
        """
        scope = quota_scope(method, path, ctx)
        if scope is None:
            return None

        counter = self._counters.get(scope.bucket)
        if counter is None:
            return None

        return counter.hit(scope.key, now or datetime.now(timezone.utc))
