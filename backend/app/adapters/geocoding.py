"""Geocoding adapter using the Google Geocoding API."""

import time
from typing import Protocol

import httpx

from backend.app.models.common import Coordinates
from backend.app.utils.logging import StructuredLookupLogger
from backend.app.utils.metrics import PrometheusLookupMetrics


class Geocoder(Protocol):
    """Address to coordinates lookup. Never raises; None means no match."""

    async def geocode(self, address: str) -> Coordinates | None:
        """Resolve an address to coordinates."""
        ...


class GoogleGeocoder:
    """Geocoder backed by the Google Geocoding API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://maps.googleapis.com/maps/api/geocode/json",
        timeout_s: float = 4.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize geocoder.

        Args:
            api_key: Google Maps API key; empty disables lookups
            base_url: Geocoding endpoint
            timeout_s: Per-request timeout when no client is supplied
            client: Optional httpx client (for testing with mocks)
        """
        self._api_key = api_key
        self._base_url = base_url
        self._timeout_s = timeout_s
        self._client = client
        self._log = StructuredLookupLogger()
        self._metrics = PrometheusLookupMetrics()

    async def geocode(self, address: str) -> Coordinates | None:
        """Resolve an address to coordinates.

        Returns None for blank addresses, a missing API key, no match, or
        any HTTP or decoding error.
        """
        if not address or not address.strip():
            return None

        if not self._api_key:
            self._log.log_lookup("geocode", "not_configured", 0.0, error_reason="missing_api_key")
            self._metrics.record_geocode("not_configured")
            return None

        started = time.perf_counter()
        client = self._client
        close_client = False
        if client is None:
            client = httpx.AsyncClient(timeout=self._timeout_s)
            close_client = True

        try:
            response = await client.get(
                self._base_url, params={"address": address, "key": self._api_key}
            )
            response.raise_for_status()
            results = response.json().get("results", [])

            if not results:
                self._log.log_lookup(
                    "geocode",
                    "no_match",
                    (time.perf_counter() - started) * 1000,
                    error_reason=f"no results for {address!r}",
                )
                self._metrics.record_geocode("no_match")
                return None

            location = results[0]["geometry"]["location"]
            coords = Coordinates(latitude=location["lat"], longitude=location["lng"])
            self._log.log_lookup("geocode", "success", (time.perf_counter() - started) * 1000)
            self._metrics.record_geocode("success")
            return coords
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            self._log.log_lookup(
                "geocode",
                "error",
                (time.perf_counter() - started) * 1000,
                error_reason=type(e).__name__,
            )
            self._metrics.record_geocode("error")
            return None
        finally:
            if close_client:
                await client.aclose()
