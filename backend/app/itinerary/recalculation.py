"""Travel distance/time recomputation for itinerary edges.

An edge runs from a stop to the next activity of the same day. Its origin
is either a day's starting location or an activity, and the computed
distance/time are stored on the origin record:

- ``Day.starting_travel_*`` for starting location -> first activity
- ``Activity.travel_*`` for activity -> successor

Automatic recomputation always overwrites distance but leaves a pinned
travel time alone. A failed lookup keeps whatever was stored before.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any
from uuid import UUID

from backend.app.adapters.directions import RouteEngine, format_distance
from backend.app.db.repositories import ActivityRecord, DayRecord, ItineraryStore
from backend.app.itinerary.errors import (
    MissingCoordinatesError,
    NoNextStopError,
    NotFoundError,
    RouteLookupError,
)
from backend.app.itinerary.sequence import DaySequence
from backend.app.itinerary.transport import routing_mode_for
from backend.app.models.common import Coordinates, TimeSource
from backend.app.models.itinerary import EdgeFailure, RecalculationSummary
from backend.app.models.routes import RouteAlternatives, RouteOption, RouteResult
from backend.app.utils.metrics import PrometheusLookupMetrics

logger = logging.getLogger(__name__)


class EdgeOutcome(str, Enum):
    """Result of a single edge recompute."""

    updated = "updated"
    skipped = "skipped"
    failed = "failed"


@dataclass
class EdgeResult:
    """Outcome of recomputing one edge."""

    outcome: EdgeOutcome
    origin_id: UUID
    destination_id: UUID | None = None
    reason: str | None = None


class DistanceRecalculationEngine:
    """Keeps stored edge distance/time consistent with endpoint coordinates and mode."""

    def __init__(self, store: ItineraryStore, route_engine: RouteEngine) -> None:
        self._store = store
        self._routes = route_engine
        self._metrics = PrometheusLookupMetrics()

    async def recompute_edge(self, activity_id: UUID) -> EdgeResult:
        """Recompute the outbound edge of an activity.

        Raises:
            NotFoundError: If the activity does not exist
        """
        activity = self._store.get_activity(activity_id)
        if activity is None:
            raise NotFoundError("activity", activity_id)

        sequence = DaySequence(self._store.list_activities(activity.day_id))
        return await self._recompute_activity_edge(activity, sequence.successor(activity_id))

    async def recompute_starting_edge(self, day_id: UUID) -> EdgeResult:
        """Recompute the edge from a day's starting location to its first activity.

        Raises:
            NotFoundError: If the day does not exist
        """
        day = self._store.get_day(day_id)
        if day is None:
            raise NotFoundError("day", day_id)

        sequence = DaySequence(self._store.list_activities(day_id))
        return await self._recompute_starting_edge(day, sequence.first())

    async def recompute_day(self, day_id: UUID) -> RecalculationSummary:
        """Recompute every edge of a day, sequentially.

        The starting-location edge goes first (when a starting transport
        mode is set), then each consecutive activity pair. Failures are
        tallied, never raised.

        Raises:
            NotFoundError: If the day does not exist
        """
        day = self._store.get_day(day_id)
        if day is None:
            raise NotFoundError("day", day_id)

        sequence = DaySequence(self._store.list_activities(day_id))
        results: list[EdgeResult] = []

        if day.starting_transport_type is not None:
            results.append(await self._recompute_starting_edge(day, sequence.first()))

        for origin, destination in sequence.pairs():
            results.append(await self._recompute_activity_edge(origin, destination))

        last = sequence.last()
        if last is not None:
            self._clear_dangling_edge(last)

        summary = RecalculationSummary(day_id=str(day_id))
        for result in results:
            if result.outcome == EdgeOutcome.updated:
                summary.updated += 1
            elif result.outcome == EdgeOutcome.failed:
                summary.failed += 1
                summary.failures.append(
                    EdgeFailure(
                        origin_id=str(result.origin_id),
                        destination_id=str(result.destination_id),
                        reason=result.reason or "route lookup failed",
                    )
                )
            else:
                summary.skipped += 1

        summary.message = _summary_message(summary)
        logger.info(
            "Day recalculated",
            extra={
                "structured": {
                    "day_id": str(day_id),
                    "updated": summary.updated,
                    "failed": summary.failed,
                    "skipped": summary.skipped,
                }
            },
        )
        return summary

    async def list_alternatives(self, activity_id: UUID) -> RouteAlternatives:
        """Fetch the current route plus alternatives for an activity's outbound edge.

        Raises:
            NotFoundError: If the activity does not exist
            NoNextStopError: If the activity is the last of its day
            MissingCoordinatesError: If either endpoint lacks coordinates
            RouteLookupError: If the directions service returns nothing
        """
        activity = self._store.get_activity(activity_id)
        if activity is None:
            raise NotFoundError("activity", activity_id)

        destination = DaySequence(self._store.list_activities(activity.day_id)).successor(
            activity_id
        )
        if destination is None:
            raise NoNextStopError(f"activity {activity_id} has no next stop")

        origin_coords = activity.coordinates
        dest_coords = destination.coordinates
        if origin_coords is None or dest_coords is None:
            raise MissingCoordinatesError(
                "both stops need coordinates to look up routes; "
                "add a location that can be found on the map"
            )

        result = await self._lookup(
            origin_coords, dest_coords, activity.transport_type, include_alternatives=True
        )
        if result is None:
            raise RouteLookupError(f"no route found from activity {activity_id}")

        if activity.travel_distance is not None:
            duration = (
                activity.travel_time
                if activity.travel_time is not None
                else result.duration_minutes
            )
            current = RouteOption(
                distance_km=activity.travel_distance,
                duration_minutes=duration,
                distance_text=format_distance(activity.travel_distance),
                duration_text=f"{duration} mins",
                summary="Current route",
            )
        else:
            current = result.primary()

        return RouteAlternatives(
            activity_id=str(activity_id),
            current=current,
            alternatives=list(result.alternatives),
        )

    def select_alternative(
        self, activity_id: UUID, distance_km: float, duration_minutes: int
    ) -> None:
        """Store a user-chosen route on an activity's outbound edge and pin its time.

        Raises:
            NotFoundError: If the activity does not exist
        """
        if self._store.get_activity(activity_id) is None:
            raise NotFoundError("activity", activity_id)

        self._store.update_activity(
            activity_id,
            travel_distance=distance_km,
            travel_time=duration_minutes,
            travel_time_source=TimeSource.pinned,
        )

    async def _recompute_activity_edge(
        self, origin: ActivityRecord, destination: ActivityRecord | None
    ) -> EdgeResult:
        if destination is None:
            self._clear_dangling_edge(origin)
            return self._record(EdgeResult(EdgeOutcome.skipped, origin.activity_id, reason="last stop"))

        result = await self._compute(
            origin.activity_id,
            origin.coordinates,
            destination,
            origin.transport_type,
        )
        if isinstance(result, EdgeResult):
            return self._record(result)

        changes: dict[str, Any] = {"travel_distance": result.distance_km}
        if origin.travel_time_source != TimeSource.pinned:
            changes["travel_time"] = result.duration_minutes
            changes["travel_time_source"] = TimeSource.auto
        self._store.update_activity(origin.activity_id, **changes)

        return self._record(
            EdgeResult(EdgeOutcome.updated, origin.activity_id, destination.activity_id)
        )

    async def _recompute_starting_edge(
        self, day: DayRecord, first: ActivityRecord | None
    ) -> EdgeResult:
        if first is None:
            if day.starting_travel_distance is not None or day.starting_travel_time is not None:
                self._store.update_day(
                    day.day_id,
                    starting_travel_distance=None,
                    starting_travel_time=None,
                    starting_travel_time_source=TimeSource.unset,
                )
            return self._record(EdgeResult(EdgeOutcome.skipped, day.day_id, reason="no activities"))

        result = await self._compute(
            day.day_id,
            day.starting_coordinates,
            first,
            day.starting_transport_type,
        )
        if isinstance(result, EdgeResult):
            return self._record(result)

        changes: dict[str, Any] = {"starting_travel_distance": result.distance_km}
        if day.starting_travel_time_source != TimeSource.pinned:
            changes["starting_travel_time"] = result.duration_minutes
            changes["starting_travel_time_source"] = TimeSource.auto
        self._store.update_day(day.day_id, **changes)

        return self._record(EdgeResult(EdgeOutcome.updated, day.day_id, first.activity_id))

    async def _compute(
        self,
        origin_id: UUID,
        origin_coords: Coordinates | None,
        destination: ActivityRecord,
        transport_type: str | None,
    ) -> RouteResult | EdgeResult:
        """Route one edge, or explain why it was skipped or failed."""
        dest_coords = destination.coordinates
        if origin_coords is None or dest_coords is None:
            return EdgeResult(
                EdgeOutcome.skipped, origin_id, destination.activity_id, "missing coordinates"
            )
        if transport_type is None:
            return EdgeResult(
                EdgeOutcome.skipped, origin_id, destination.activity_id, "no transport mode"
            )

        result = await self._lookup(origin_coords, dest_coords, transport_type)
        if result is None:
            logger.warning(
                "Route lookup failed, keeping stored values",
                extra={
                    "structured": {
                        "origin_id": str(origin_id),
                        "destination_id": str(destination.activity_id),
                        "transport_type": transport_type,
                    }
                },
            )
            return EdgeResult(
                EdgeOutcome.failed, origin_id, destination.activity_id, "no route found"
            )
        return result

    async def _lookup(
        self,
        origin: Coordinates,
        destination: Coordinates,
        transport_type: str | None,
        include_alternatives: bool = False,
    ) -> RouteResult | None:
        mode = routing_mode_for(transport_type)
        try:
            return await self._routes.route(origin, destination, mode, include_alternatives)
        except Exception as exc:
            # Any collaborator failure is terminal for this edge
            logger.warning(
                "Route engine raised %s for mode=%s", type(exc).__name__, mode.value
            )
            return None

    def _clear_dangling_edge(self, last: ActivityRecord) -> None:
        """The last activity of a day has no outbound edge.

        This is the one place a pinned time is reset to unset: once the
        activity is last, the edge the pin described no longer exists.
        """
        if last.travel_distance is None and last.travel_time is None:
            return
        self._store.update_activity(
            last.activity_id,
            travel_distance=None,
            travel_time=None,
            travel_time_source=TimeSource.unset,
        )

    def _record(self, result: EdgeResult) -> EdgeResult:
        self._metrics.record_edge(result.outcome.value)
        return result


def _summary_message(summary: RecalculationSummary) -> str:
    if summary.updated == 0 and summary.failed == 0:
        return "No routes to recalculate"
    message = f"Recalculated {summary.updated} route(s)"
    if summary.failed:
        message += f", {summary.failed} could not be calculated"
    return message
