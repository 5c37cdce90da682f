"""Historical geocoding backfill for records saved before coordinates existed."""

import asyncio
import logging
from dataclasses import dataclass

from backend.app.adapters.geocoding import Geocoder
from backend.app.db.repositories import ItineraryStore, TripRepository

logger = logging.getLogger(__name__)


@dataclass
class BackfillReport:
    """Counts from a backfill run."""

    activities_found: int = 0
    activities_geocoded: int = 0
    activities_failed: int = 0
    trips_found: int = 0
    trips_geocoded: int = 0
    trips_failed: int = 0

    def summary(self) -> str:
        return (
            f"Activities: {self.activities_geocoded}/{self.activities_found} geocoded, "
            f"Trips: {self.trips_geocoded}/{self.trips_found} geocoded"
        )


async def backfill_coordinates(
    store: ItineraryStore,
    trips: TripRepository,
    geocoder: Geocoder,
    delay_ms: int = 100,
) -> BackfillReport:
    """Geocode every activity and trip that has a location but no coordinates.

    Lookups run one at a time with ``delay_ms`` between them to stay under
    the geocoding service's rate limit.
    """
    report = BackfillReport()
    delay_s = delay_ms / 1000

    activities = store.list_activities_missing_coordinates()
    report.activities_found = len(activities)
    for activity in activities:
        if not activity.location:
            continue
        coords = await geocoder.geocode(activity.location)
        if coords is not None:
            store.update_activity(
                activity.activity_id, latitude=coords.latitude, longitude=coords.longitude
            )
            report.activities_geocoded += 1
        else:
            logger.warning("Could not geocode activity location %r", activity.location)
            report.activities_failed += 1
        if delay_s > 0:
            await asyncio.sleep(delay_s)

    missing_trips = trips.list_trips_missing_coordinates()
    report.trips_found = len(missing_trips)
    for trip in missing_trips:
        if not trip.location:
            continue
        coords = await geocoder.geocode(trip.location)
        if coords is not None:
            trips.update_trip(trip.trip_id, latitude=coords.latitude, longitude=coords.longitude)
            report.trips_geocoded += 1
        else:
            logger.warning("Could not geocode trip location %r", trip.location)
            report.trips_failed += 1
        if delay_s > 0:
            await asyncio.sleep(delay_s)

    logger.info("Backfill complete: %s", report.summary())
    return report
