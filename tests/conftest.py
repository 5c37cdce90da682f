"""Shared pytest fixtures for all test suites."""

from datetime import date

import pytest

from backend.app.db.context import RequestContext
from backend.app.db.inmemory import InMemoryItineraryStore
from backend.app.db.repositories import DayRecord, TripRecord
from backend.app.itinerary.access import AccessPolicy
from backend.app.itinerary.ordering import ActivityOrderingService
from backend.app.itinerary.recalculation import DistanceRecalculationEngine
from backend.app.itinerary.trips import TripService
from tests.stubs import (
    COLLABORATOR_ID,
    HOTEL,
    MARKET,
    OWNER_ID,
    PALACE,
    STRANGER_ID,
    TEMPLE,
    StubGeocoder,
    StubRouteEngine,
)


@pytest.fixture
def store() -> InMemoryItineraryStore:
    return InMemoryItineraryStore()


@pytest.fixture
def route_engine() -> StubRouteEngine:
    return StubRouteEngine()


@pytest.fixture
def geocoder() -> StubGeocoder:
    return StubGeocoder(
        known={
            "Grand Palace": PALACE,
            "Chatuchak Market": MARKET,
            "Wat Pho": TEMPLE,
            "Bangkok": HOTEL,
        }
    )


@pytest.fixture
def owner() -> RequestContext:
    return RequestContext(user_id=OWNER_ID)


@pytest.fixture
def collaborator() -> RequestContext:
    return RequestContext(user_id=COLLABORATOR_ID)


@pytest.fixture
def stranger() -> RequestContext:
    return RequestContext(user_id=STRANGER_ID)


@pytest.fixture
def access(store: InMemoryItineraryStore) -> AccessPolicy:
    return AccessPolicy(store, store)


@pytest.fixture
def engine(
    store: InMemoryItineraryStore, route_engine: StubRouteEngine
) -> DistanceRecalculationEngine:
    return DistanceRecalculationEngine(store, route_engine)


@pytest.fixture
def ordering(
    store: InMemoryItineraryStore,
    access: AccessPolicy,
    engine: DistanceRecalculationEngine,
    geocoder: StubGeocoder,
) -> ActivityOrderingService:
    return ActivityOrderingService(store, access, engine, geocoder)


@pytest.fixture
def trip_service(
    store: InMemoryItineraryStore, access: AccessPolicy, geocoder: StubGeocoder
) -> TripService:
    return TripService(store, store, access, geocoder)


@pytest.fixture
def trip(store: InMemoryItineraryStore) -> TripRecord:
    """Two-day trip owned by OWNER_ID and shared with COLLABORATOR_ID."""
    record = TripRecord(
        owner_id=OWNER_ID,
        title="Bangkok",
        start_date=date(2026, 3, 1),
        end_date=date(2026, 3, 2),
        collaborator_ids=[COLLABORATOR_ID],
    )
    days = [
        DayRecord(trip_id=record.trip_id, day_number=1, date=date(2026, 3, 1)),
        DayRecord(trip_id=record.trip_id, day_number=2, date=date(2026, 3, 2)),
    ]
    store.add_trip(record, days)
    return record


@pytest.fixture
def day(store: InMemoryItineraryStore, trip: TripRecord) -> DayRecord:
    """First day of the shared trip."""
    return store.list_days(trip.trip_id)[0]
