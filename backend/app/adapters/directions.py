"""Directions adapter using the Google Directions API."""

import math
import time
from typing import Any, Protocol

import httpx

from backend.app.models.common import Coordinates, RoutingMode
from backend.app.models.routes import RouteOption, RouteResult
from backend.app.utils.logging import StructuredLookupLogger
from backend.app.utils.metrics import PrometheusLookupMetrics

DEFAULT_ALTERNATIVE_SUMMARY = "Alternative route"


class RouteEngine(Protocol):
    """Coordinate pair + travel mode to route lookup. Never raises; None means no route."""

    async def route(
        self,
        origin: Coordinates,
        destination: Coordinates,
        mode: RoutingMode,
        include_alternatives: bool = False,
    ) -> RouteResult | None:
        """Look up the primary route and, optionally, alternatives."""
        ...


def format_distance(distance_km: float) -> str:
    """Format a distance for display: meters under 1 km, otherwise one decimal km."""
    meters = round(distance_km * 1000)
    if meters < 1000:
        return f"{meters} m"
    return f"{distance_km:.1f} km"


def _parse_leg(route: dict[str, Any]) -> RouteOption:
    leg = route["legs"][0]
    return RouteOption(
        # meters -> km, unrounded
        distance_km=leg["distance"]["value"] / 1000,
        # seconds -> minutes, rounded up
        duration_minutes=math.ceil(leg["duration"]["value"] / 60),
        distance_text=leg["distance"].get("text", ""),
        duration_text=leg["duration"].get("text", ""),
        summary=route.get("summary") or "",
    )


def parse_directions(data: dict[str, Any]) -> RouteResult | None:
    """Parse a Directions API payload into a RouteResult.

    routes[0] is the primary route; routes[1:] become alternatives.
    """
    routes = data.get("routes") or []
    if not routes:
        return None

    primary = _parse_leg(routes[0])
    alternatives = []
    for alt_route in routes[1:]:
        alt = _parse_leg(alt_route)
        if not alt.summary:
            alt.summary = DEFAULT_ALTERNATIVE_SUMMARY
        alternatives.append(alt)

    return RouteResult(**primary.model_dump(), alternatives=alternatives)


class GoogleDirectionsEngine:
    """RouteEngine backed by the Google Directions API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://maps.googleapis.com/maps/api/directions/json",
        timeout_s: float = 4.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize directions engine.

        Args:
            api_key: Google Maps API key; empty disables lookups
            base_url: Directions endpoint
            timeout_s: Per-request timeout when no client is supplied
            client: Optional httpx client (for testing with mocks)
        """
        self._api_key = api_key
        self._base_url = base_url
        self._timeout_s = timeout_s
        self._client = client
        self._log = StructuredLookupLogger()
        self._metrics = PrometheusLookupMetrics()

    async def route(
        self,
        origin: Coordinates,
        destination: Coordinates,
        mode: RoutingMode,
        include_alternatives: bool = False,
    ) -> RouteResult | None:
        """Look up a route between two coordinates.

        Alternatives are requested only for driving mode. Returns None on a
        missing API key, no route, or any HTTP or decoding error.
        """
        if not self._api_key:
            self._log.log_lookup(
                "directions", "not_configured", 0.0, mode=mode.value, error_reason="missing_api_key"
            )
            self._metrics.record_route(mode.value, "not_configured", 0.0)
            return None

        params: dict[str, str] = {
            "origin": f"{origin.latitude},{origin.longitude}",
            "destination": f"{destination.latitude},{destination.longitude}",
            "mode": mode.value,
            "alternatives": "true" if include_alternatives and mode == RoutingMode.driving else "false",
            "key": self._api_key,
        }

        started = time.perf_counter()
        client = self._client
        close_client = False
        if client is None:
            client = httpx.AsyncClient(timeout=self._timeout_s)
            close_client = True

        try:
            response = await client.get(self._base_url, params=params)
            response.raise_for_status()
            result = parse_directions(response.json())
            latency_ms = (time.perf_counter() - started) * 1000

            if result is None:
                self._log.log_lookup(
                    "directions", "no_route", latency_ms, mode=mode.value, error_reason="no routes"
                )
                self._metrics.record_route(mode.value, "no_route", latency_ms)
                return None

            self._log.log_lookup("directions", "success", latency_ms, mode=mode.value)
            self._metrics.record_route(mode.value, "success", latency_ms)
            return result
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as e:
            latency_ms = (time.perf_counter() - started) * 1000
            self._log.log_lookup(
                "directions", "error", latency_ms, mode=mode.value, error_reason=type(e).__name__
            )
            self._metrics.record_route(mode.value, "error", latency_ms)
            return None
        finally:
            if close_client:
                await client.aclose()
