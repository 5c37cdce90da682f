"""Geocode activities and trips saved before coordinates were captured.

Usage:
    GOOGLE_MAPS_API_KEY=... DATABASE_URL=... python -m scripts.geocode_existing
"""

import asyncio
import logging
import sys

from backend.app.adapters.geocoding import GoogleGeocoder
from backend.app.config import Settings, get_settings
from backend.app.db.engine import create_engine_from_settings, create_session_factory
from backend.app.db.sql_repositories import SqlItineraryStore
from backend.app.itinerary.backfill import BackfillReport, backfill_coordinates


async def run(settings: Settings) -> BackfillReport:
    """Run the backfill against the configured database."""
    session_factory = create_session_factory(create_engine_from_settings(settings))
    geocoder = GoogleGeocoder(
        api_key=settings.google_maps_api_key,
        base_url=settings.geocode_base_url,
        timeout_s=settings.http_timeout_s,
    )
    with session_factory() as session:
        store = SqlItineraryStore(session)
        return await backfill_coordinates(
            store, store, geocoder, delay_ms=settings.backfill_delay_ms
        )


def main() -> int:
    """Run the backfill; non-zero exit when configuration is missing."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    settings = get_settings()

    if not settings.google_maps_api_key:
        print("GOOGLE_MAPS_API_KEY is not set", file=sys.stderr)
        return 1
    if not settings.database_url:
        print("DATABASE_URL is not set", file=sys.stderr)
        return 1

    report = asyncio.run(run(settings))

    print("\n=== Summary ===")
    print(f"Activities: {report.activities_found} found, {report.activities_geocoded} geocoded")
    print(f"Trips: {report.trips_found} found, {report.trips_geocoded} geocoded")
    return 0


if __name__ == "__main__":
    sys.exit(main())
