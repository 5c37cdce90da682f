"""FastAPI dependencies wiring stores, collaborators and services."""

from functools import lru_cache
from typing import Annotated

import redis
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from backend.app.adapters.directions import GoogleDirectionsEngine, RouteEngine
from backend.app.adapters.geocoding import Geocoder, GoogleGeocoder
from backend.app.api.auth import get_current_context
from backend.app.config import get_settings
from backend.app.db.context import RequestContext
from backend.app.db.engine import get_session
from backend.app.db.sql_repositories import SqlItineraryStore
from backend.app.itinerary.access import AccessPolicy
from backend.app.itinerary.checklists import ChecklistService
from backend.app.itinerary.ordering import ActivityOrderingService
from backend.app.itinerary.recalculation import DistanceRecalculationEngine
from backend.app.itinerary.trips import TripService
from backend.app.ratelimit import ItineraryQuotas


def get_store(session: Annotated[Session, Depends(get_session)]) -> SqlItineraryStore:
    """Request-scoped store over the request's session."""
    return SqlItineraryStore(session)


@lru_cache
def get_geocoder() -> Geocoder:
    """Process-wide geocoder."""
    settings = get_settings()
    return GoogleGeocoder(
        api_key=settings.google_maps_api_key,
        base_url=settings.geocode_base_url,
        timeout_s=settings.http_timeout_s,
    )


@lru_cache
def get_route_engine() -> RouteEngine:
    """Process-wide directions engine."""
    settings = get_settings()
    return GoogleDirectionsEngine(
        api_key=settings.google_maps_api_key,
        base_url=settings.directions_base_url,
        timeout_s=settings.http_timeout_s,
    )


@lru_cache
def get_quotas() -> ItineraryQuotas:
    """Redis-backed quotas when REDIS_URL is set, process-local otherwise."""
    settings = get_settings()
    if settings.redis_url:
        client = redis.from_url(settings.redis_url, decode_responses=True)  # type: ignore[no-untyped-call]
        return ItineraryQuotas.with_redis(
            client, settings.crud_ops_per_min, settings.recompute_ops_per_min
        )
    return ItineraryQuotas.in_memory(settings.crud_ops_per_min, settings.recompute_ops_per_min)


StoreDep = Annotated[SqlItineraryStore, Depends(get_store)]
GeocoderDep = Annotated[Geocoder, Depends(get_geocoder)]
RouteEngineDep = Annotated[RouteEngine, Depends(get_route_engine)]


def enforce_rate_limit(
    request: Request,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    quotas: Annotated[ItineraryQuotas, Depends(get_quotas)],
) -> RequestContext:
    """Authenticate the caller and apply the mutation rate limit.

    Raises:
        HTTPException: 429 with Retry-After when over quota
    """
    retry_after = quotas.check(request.method, request.url.path, ctx)
    if retry_after is not None:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Rate limit exceeded",
            headers={"Retry-After": str(retry_after.seconds)},
        )
    return ctx


ContextDep = Annotated[RequestContext, Depends(enforce_rate_limit)]


def get_trip_service(store: StoreDep, geocoder: GeocoderDep) -> TripService:
    return TripService(store, store, AccessPolicy(store, store), geocoder)


def get_checklist_service(store: StoreDep) -> ChecklistService:
    return ChecklistService(store, AccessPolicy(store, store))


def get_ordering_service(
    store: StoreDep, geocoder: GeocoderDep, route_engine: RouteEngineDep
) -> ActivityOrderingService:
    settings = get_settings()
    return ActivityOrderingService(
        store=store,
        access=AccessPolicy(store, store),
        engine=DistanceRecalculationEngine(store, route_engine),
        geocoder=geocoder,
        recompute_on_delete=settings.recompute_on_delete,
        default_duration_min=settings.default_activity_duration_min,
    )


TripServiceDep = Annotated[TripService, Depends(get_trip_service)]
ChecklistServiceDep = Annotated[ChecklistService, Depends(get_checklist_service)]
OrderingServiceDep = Annotated[ActivityOrderingService, Depends(get_ordering_service)]
