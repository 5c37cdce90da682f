"""Tests for the historical geocoding backfill."""

import pytest

from backend.app.db.inmemory import InMemoryItineraryStore
from backend.app.db.repositories import DayRecord, TripRecord
from backend.app.itinerary.backfill import backfill_coordinates
from tests.stubs import PALACE, TEMPLE, StubGeocoder, add_activity


@pytest.mark.asyncio
async def test_backfill_geocodes_activities_and_trips(
    store: InMemoryItineraryStore, trip: TripRecord, day: DayRecord
) -> None:
    geocoder = StubGeocoder(known={"Wat Pho": TEMPLE, "Bangkok Old Town": PALACE})
    found = add_activity(store, day.day_id, 0, None, location="Wat Pho")
    missing = add_activity(store, day.day_id, 1, None, location="Nowhere")
    already = add_activity(store, day.day_id, 2, PALACE, location="Grand Palace")
    store.update_trip(trip.trip_id, location="Bangkok Old Town")

    report = await backfill_coordinates(store, store, geocoder, delay_ms=0)

    assert report.activities_found == 2
    assert report.activities_geocoded == 1
    assert report.activities_failed == 1
    assert report.trips_found == 1
    assert report.trips_geocoded == 1
    assert report.summary() == "Activities: 1/2 geocoded, Trips: 1/1 geocoded"
    assert "Grand Palace" not in geocoder.calls

    stored = store.get_activity(found.activity_id)
    assert stored is not None
    assert stored.coordinates == TEMPLE
    stored_missing = store.get_activity(missing.activity_id)
    assert stored_missing is not None
    assert stored_missing.coordinates is None
    stored_already = store.get_activity(already.activity_id)
    assert stored_already is not None
    assert stored_already.coordinates == PALACE
    stored_trip = store.get_trip(trip.trip_id)
    assert stored_trip is not None
    assert stored_trip.coordinates == PALACE


@pytest.mark.asyncio
async def test_backfill_with_nothing_to_do(store: InMemoryItineraryStore) -> None:
    geocoder = StubGeocoder()

    report = await backfill_coordinates(store, store, geocoder, delay_ms=0)

    assert report.activities_found == 0
    assert report.trips_found == 0
    assert geocoder.calls == []
