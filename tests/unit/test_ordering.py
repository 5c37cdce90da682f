"""Tests for ActivityOrderingService."""

import uuid

import pytest

from backend.app.db.context import RequestContext
from backend.app.db.inmemory import InMemoryItineraryStore
from backend.app.db.repositories import DayRecord
from backend.app.itinerary.access import AccessPolicy
from backend.app.itinerary.errors import NotFoundError
from backend.app.itinerary.ordering import ActivityOrderingService
from backend.app.itinerary.recalculation import DistanceRecalculationEngine
from backend.app.models.common import Coordinates, RoutingMode, TimeSource
from backend.app.models.itinerary import ActivityCreate, ActivityUpdate, StartingLocationInput
from backend.app.models.routes import RouteSelection
from tests.stubs import (
    HOTEL,
    MARKET,
    PALACE,
    TEMPLE,
    StubGeocoder,
    StubRouteEngine,
    add_activity,
    make_route,
)


def _set_start(store: InMemoryItineraryStore, day: DayRecord, mode: str = "walking") -> None:
    store.update_day(
        day.day_id,
        starting_location="Hotel",
        starting_latitude=HOTEL.latitude,
        starting_longitude=HOTEL.longitude,
        starting_transport_type=mode,
    )


class TestAppend:
    """Appending activities."""

    @pytest.mark.asyncio
    async def test_first_activity_gets_order_zero_and_starting_edge(
        self,
        store: InMemoryItineraryStore,
        day: DayRecord,
        ordering: ActivityOrderingService,
        owner: RequestContext,
        geocoder: StubGeocoder,
    ) -> None:
        _set_start(store, day)

        activity = await ordering.append(
            owner, day.day_id, ActivityCreate(title="Temple", location="Wat Pho")
        )

        assert activity.order == 0
        assert activity.coordinates == TEMPLE
        assert activity.duration == 60
        assert geocoder.calls == ["Wat Pho"]
        stored_day = store.get_day(day.day_id)
        assert stored_day is not None
        assert stored_day.starting_travel_distance == 5.0
        assert stored_day.starting_travel_time_source == TimeSource.auto

    @pytest.mark.asyncio
    async def test_next_activity_routes_from_predecessor(
        self,
        store: InMemoryItineraryStore,
        day: DayRecord,
        ordering: ActivityOrderingService,
        owner: RequestContext,
        route_engine: StubRouteEngine,
        geocoder: StubGeocoder,
    ) -> None:
        first = await ordering.append(
            owner,
            day.day_id,
            ActivityCreate(title="Temple", coordinates=TEMPLE, transport_type="bus"),
        )
        second = await ordering.append(
            owner, day.day_id, ActivityCreate(title="Market", coordinates=MARKET)
        )

        assert second.order == 1
        assert geocoder.calls == []
        assert len(route_engine.calls) == 1
        assert route_engine.calls[0].origin == TEMPLE
        assert route_engine.calls[0].destination == MARKET
        assert route_engine.calls[0].mode == RoutingMode.transit

        stored_first = store.get_activity(first.activity_id)
        assert stored_first is not None
        assert stored_first.travel_distance == 5.0
        assert stored_first.travel_time == 12

    @pytest.mark.asyncio
    async def test_order_is_max_plus_one_despite_gaps(
        self,
        store: InMemoryItineraryStore,
        day: DayRecord,
        ordering: ActivityOrderingService,
        owner: RequestContext,
    ) -> None:
        add_activity(store, day.day_id, 0, TEMPLE)
        add_activity(store, day.day_id, 5, MARKET)

        activity = await ordering.append(owner, day.day_id, ActivityCreate(title="Late dinner"))

        assert activity.order == 6
        assert [a.order for a in store.list_activities(day.day_id)] == [0, 5, 6]

    @pytest.mark.asyncio
    async def test_unresolvable_location_keeps_null_coordinates(
        self,
        store: InMemoryItineraryStore,
        day: DayRecord,
        ordering: ActivityOrderingService,
        owner: RequestContext,
        route_engine: StubRouteEngine,
    ) -> None:
        add_activity(store, day.day_id, 0, TEMPLE)

        activity = await ordering.append(
            owner, day.day_id, ActivityCreate(title="Secret bar", location="Nowhere Alley")
        )

        assert activity.coordinates is None
        assert route_engine.calls == []

    @pytest.mark.asyncio
    async def test_first_activity_without_coordinates_skips_starting_edge(
        self,
        store: InMemoryItineraryStore,
        day: DayRecord,
        ordering: ActivityOrderingService,
        owner: RequestContext,
        route_engine: StubRouteEngine,
    ) -> None:
        _set_start(store, day)

        await ordering.append(owner, day.day_id, ActivityCreate(title="Somewhere"))

        assert route_engine.calls == []

    @pytest.mark.asyncio
    async def test_collaborator_can_append(
        self,
        day: DayRecord,
        ordering: ActivityOrderingService,
        collaborator: RequestContext,
    ) -> None:
        activity = await ordering.append(collaborator, day.day_id, ActivityCreate(title="Lunch"))

        assert activity.day_id == day.day_id

    @pytest.mark.asyncio
    async def test_stranger_cannot_see_day(
        self,
        store: InMemoryItineraryStore,
        day: DayRecord,
        ordering: ActivityOrderingService,
        stranger: RequestContext,
    ) -> None:
        with pytest.raises(NotFoundError):
            await ordering.append(stranger, day.day_id, ActivityCreate(title="Lunch"))

        assert store.list_activities(day.day_id) == []

    @pytest.mark.asyncio
    async def test_default_duration_comes_from_service(
        self,
        store: InMemoryItineraryStore,
        day: DayRecord,
        access: AccessPolicy,
        engine: DistanceRecalculationEngine,
        geocoder: StubGeocoder,
        owner: RequestContext,
    ) -> None:
        service = ActivityOrderingService(store, access, engine, geocoder, default_duration_min=90)

        activity = await service.append(owner, day.day_id, ActivityCreate(title="Museum"))

        assert activity.duration == 90


class TestUpdate:
    """Editing activities."""

    @pytest.mark.asyncio
    async def test_failed_geocode_clears_coordinates_and_edges_become_no_ops(
        self,
        store: InMemoryItineraryStore,
        day: DayRecord,
        ordering: ActivityOrderingService,
        owner: RequestContext,
        route_engine: StubRouteEngine,
    ) -> None:
        a = add_activity(
            store, day.day_id, 0, TEMPLE, travel_distance=3.0, travel_time=10,
            travel_time_source=TimeSource.auto,
        )
        b = add_activity(store, day.day_id, 1, MARKET, location="Chatuchak Market")
        add_activity(store, day.day_id, 2, PALACE)

        updated = await ordering.update(
            owner, b.activity_id, ActivityUpdate(location="Unknown Place 123")
        )

        assert updated.location == "Unknown Place 123"
        assert updated.latitude is None
        assert updated.longitude is None
        assert route_engine.calls == []
        stored_a = store.get_activity(a.activity_id)
        assert stored_a is not None
        assert (stored_a.travel_distance, stored_a.travel_time) == (3.0, 10)

    @pytest.mark.asyncio
    async def test_new_location_recomputes_incoming_then_outbound(
        self,
        store: InMemoryItineraryStore,
        day: DayRecord,
        ordering: ActivityOrderingService,
        owner: RequestContext,
        route_engine: StubRouteEngine,
    ) -> None:
        add_activity(store, day.day_id, 0, TEMPLE)
        b = add_activity(store, day.day_id, 1, MARKET, location="Chatuchak Market")
        add_activity(store, day.day_id, 2, PALACE)

        updated = await ordering.update(owner, b.activity_id, ActivityUpdate(location="Bangkok"))

        assert updated.coordinates == HOTEL
        assert [(c.origin, c.destination) for c in route_engine.calls] == [
            (TEMPLE, HOTEL),
            (HOTEL, PALACE),
        ]

    @pytest.mark.asyncio
    async def test_explicit_coordinates_win_over_geocoding(
        self,
        store: InMemoryItineraryStore,
        day: DayRecord,
        ordering: ActivityOrderingService,
        owner: RequestContext,
        geocoder: StubGeocoder,
    ) -> None:
        a = add_activity(store, day.day_id, 0, TEMPLE)
        custom = Coordinates(latitude=13.70, longitude=100.60)

        updated = await ordering.update(
            owner, a.activity_id, ActivityUpdate(location="Wat Pho", coordinates=custom)
        )

        assert updated.coordinates == custom
        assert updated.location == "Wat Pho"
        assert geocoder.calls == []

    @pytest.mark.asyncio
    async def test_emptied_location_clears_coordinates_without_geocoding(
        self,
        store: InMemoryItineraryStore,
        day: DayRecord,
        ordering: ActivityOrderingService,
        owner: RequestContext,
        geocoder: StubGeocoder,
    ) -> None:
        a = add_activity(store, day.day_id, 0, TEMPLE, location="Wat Pho")

        updated = await ordering.update(owner, a.activity_id, ActivityUpdate(location=""))

        assert updated.coordinates is None
        assert geocoder.calls == []

    @pytest.mark.asyncio
    async def test_first_activity_recomputes_starting_edge(
        self,
        store: InMemoryItineraryStore,
        day: DayRecord,
        ordering: ActivityOrderingService,
        owner: RequestContext,
        route_engine: StubRouteEngine,
    ) -> None:
        _set_start(store, day)
        a = add_activity(store, day.day_id, 0, TEMPLE)
        add_activity(store, day.day_id, 1, MARKET)

        await ordering.update(owner, a.activity_id, ActivityUpdate(coordinates=PALACE))

        assert [(c.origin, c.destination) for c in route_engine.calls] == [
            (HOTEL, PALACE),
            (PALACE, MARKET),
        ]

    @pytest.mark.asyncio
    async def test_transport_change_recomputes_with_new_mode(
        self,
        store: InMemoryItineraryStore,
        day: DayRecord,
        ordering: ActivityOrderingService,
        owner: RequestContext,
        route_engine: StubRouteEngine,
    ) -> None:
        route_engine.by_mode[RoutingMode.bicycling] = make_route(4.0, 16)
        a = add_activity(store, day.day_id, 0, TEMPLE, transport_type="walking")
        add_activity(store, day.day_id, 1, MARKET)

        updated = await ordering.update(
            owner, a.activity_id, ActivityUpdate(transport_type="bicycling")
        )

        assert updated.transport_type == "bicycling"
        assert updated.travel_distance == 4.0
        assert updated.travel_time == 16
        assert route_engine.calls[-1].mode == RoutingMode.bicycling

    @pytest.mark.asyncio
    async def test_plain_field_edit_does_not_recompute(
        self,
        store: InMemoryItineraryStore,
        day: DayRecord,
        ordering: ActivityOrderingService,
        owner: RequestContext,
        route_engine: StubRouteEngine,
    ) -> None:
        a = add_activity(store, day.day_id, 0, TEMPLE)
        add_activity(store, day.day_id, 1, MARKET)

        updated = await ordering.update(
            owner, a.activity_id, ActivityUpdate(title="Wat Pho", cost=12.5, time="09:30")
        )

        assert updated.title == "Wat Pho"
        assert updated.cost == 12.5
        assert updated.time == "09:30"
        assert route_engine.calls == []

    @pytest.mark.asyncio
    async def test_manual_travel_time_is_pinned(
        self,
        store: InMemoryItineraryStore,
        day: DayRecord,
        ordering: ActivityOrderingService,
        engine: DistanceRecalculationEngine,
        owner: RequestContext,
    ) -> None:
        a = add_activity(store, day.day_id, 0, TEMPLE)
        add_activity(store, day.day_id, 1, MARKET)

        updated = await ordering.update(owner, a.activity_id, ActivityUpdate(travel_time=40))
        assert updated.travel_time_source == TimeSource.pinned

        await engine.recompute_day(day.day_id)

        stored = store.get_activity(a.activity_id)
        assert stored is not None
        assert stored.travel_time == 40

    @pytest.mark.asyncio
    async def test_hours_and_minutes_are_not_pinned(
        self,
        store: InMemoryItineraryStore,
        day: DayRecord,
        ordering: ActivityOrderingService,
        owner: RequestContext,
    ) -> None:
        a = add_activity(store, day.day_id, 0, TEMPLE)

        updated = await ordering.update(
            owner, a.activity_id, ActivityUpdate(travel_hours=1, travel_minutes=15)
        )

        assert updated.travel_time == 75
        assert updated.travel_time_source == TimeSource.auto

    @pytest.mark.asyncio
    async def test_unknown_activity_raises(
        self, ordering: ActivityOrderingService, owner: RequestContext
    ) -> None:
        with pytest.raises(NotFoundError):
            await ordering.update(owner, uuid.uuid4(), ActivityUpdate(title="x"))


class TestRemove:
    """Removing activities."""

    @pytest.mark.asyncio
    async def test_remove_leaves_neighbor_edges_by_default(
        self,
        store: InMemoryItineraryStore,
        day: DayRecord,
        ordering: ActivityOrderingService,
        owner: RequestContext,
        route_engine: StubRouteEngine,
    ) -> None:
        a = add_activity(
            store, day.day_id, 0, TEMPLE, travel_distance=2.0, travel_time=6,
            travel_time_source=TimeSource.auto,
        )
        b = add_activity(store, day.day_id, 1, MARKET)
        add_activity(store, day.day_id, 2, PALACE)

        await ordering.remove(owner, b.activity_id)

        assert store.get_activity(b.activity_id) is None
        assert route_engine.calls == []
        stored_a = store.get_activity(a.activity_id)
        assert stored_a is not None
        assert stored_a.travel_distance == 2.0

    @pytest.mark.asyncio
    async def test_remove_recomputes_predecessor_when_enabled(
        self,
        store: InMemoryItineraryStore,
        day: DayRecord,
        access: AccessPolicy,
        engine: DistanceRecalculationEngine,
        geocoder: StubGeocoder,
        owner: RequestContext,
        route_engine: StubRouteEngine,
    ) -> None:
        service = ActivityOrderingService(store, access, engine, geocoder, recompute_on_delete=True)
        a = add_activity(store, day.day_id, 0, TEMPLE)
        b = add_activity(store, day.day_id, 1, MARKET)
        add_activity(store, day.day_id, 2, PALACE)

        await service.remove(owner, b.activity_id)

        assert [(c.origin, c.destination) for c in route_engine.calls] == [(TEMPLE, PALACE)]
        stored_a = store.get_activity(a.activity_id)
        assert stored_a is not None
        assert stored_a.travel_distance == 5.0

    @pytest.mark.asyncio
    async def test_remove_first_recomputes_starting_edge_when_enabled(
        self,
        store: InMemoryItineraryStore,
        day: DayRecord,
        access: AccessPolicy,
        engine: DistanceRecalculationEngine,
        geocoder: StubGeocoder,
        owner: RequestContext,
        route_engine: StubRouteEngine,
    ) -> None:
        service = ActivityOrderingService(store, access, engine, geocoder, recompute_on_delete=True)
        _set_start(store, day)
        a = add_activity(store, day.day_id, 0, TEMPLE)
        add_activity(store, day.day_id, 1, MARKET)

        await service.remove(owner, a.activity_id)

        assert [(c.origin, c.destination) for c in route_engine.calls] == [(HOTEL, MARKET)]

    @pytest.mark.asyncio
    async def test_stranger_cannot_remove(
        self,
        store: InMemoryItineraryStore,
        day: DayRecord,
        ordering: ActivityOrderingService,
        stranger: RequestContext,
    ) -> None:
        a = add_activity(store, day.day_id, 0, TEMPLE)

        with pytest.raises(NotFoundError):
            await ordering.remove(stranger, a.activity_id)

        assert store.get_activity(a.activity_id) is not None


class TestStartingLocation:
    """Setting a day's starting location."""

    @pytest.mark.asyncio
    async def test_geocodes_and_routes_to_first_activity(
        self,
        store: InMemoryItineraryStore,
        day: DayRecord,
        ordering: ActivityOrderingService,
        owner: RequestContext,
        route_engine: StubRouteEngine,
    ) -> None:
        add_activity(store, day.day_id, 0, TEMPLE)

        updated = await ordering.set_starting_location(
            owner,
            day.day_id,
            StartingLocationInput(location="Bangkok", transport_type="taxi"),
        )

        assert updated.starting_coordinates == HOTEL
        assert updated.starting_transport_type == "taxi"
        assert updated.starting_travel_distance == 5.0
        assert route_engine.calls[0].mode == RoutingMode.driving

    @pytest.mark.asyncio
    async def test_empty_day_does_not_route(
        self,
        day: DayRecord,
        ordering: ActivityOrderingService,
        owner: RequestContext,
        route_engine: StubRouteEngine,
    ) -> None:
        updated = await ordering.set_starting_location(
            owner,
            day.day_id,
            StartingLocationInput(location="Hotel", coordinates=HOTEL, transport_type="walking"),
        )

        assert updated.starting_coordinates == HOTEL
        assert route_engine.calls == []


class TestRouteSelection:
    """Alternative-route picker through the service."""

    @pytest.mark.asyncio
    async def test_select_route_pins_time(
        self,
        store: InMemoryItineraryStore,
        day: DayRecord,
        ordering: ActivityOrderingService,
        collaborator: RequestContext,
    ) -> None:
        a = add_activity(store, day.day_id, 0, TEMPLE)
        add_activity(store, day.day_id, 1, MARKET)

        alternatives = await ordering.route_alternatives(collaborator, a.activity_id)
        updated = ordering.select_route(
            collaborator,
            a.activity_id,
            RouteSelection(distance_km=6.1, duration_minutes=18),
        )

        assert alternatives.current.distance_km == 5.0
        assert updated.travel_distance == 6.1
        assert updated.travel_time == 18
        assert updated.travel_time_source == TimeSource.pinned
