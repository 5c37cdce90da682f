"""Tests for the Google geocoding adapter."""

import httpx
import pytest

from backend.app.adapters.geocoding import GoogleGeocoder


@pytest.mark.asyncio
async def test_geocode_parses_first_result() -> None:
    """Test that the first result's geometry becomes the coordinates."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "status": "OK",
                "results": [
                    {"geometry": {"location": {"lat": 13.7515, "lng": 100.4927}}},
                    {"geometry": {"location": {"lat": 0.0, "lng": 0.0}}},
                ],
            },
        )

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    geocoder = GoogleGeocoder(api_key="test-key", client=client)

    coords = await geocoder.geocode("Grand Palace, Bangkok")

    assert coords is not None
    assert coords.latitude == 13.7515
    assert coords.longitude == 100.4927
    assert seen[0].url.params["address"] == "Grand Palace, Bangkok"
    assert seen[0].url.params["key"] == "test-key"

    await client.aclose()


@pytest.mark.asyncio
async def test_geocode_no_results_returns_none() -> None:
    """Test that an empty result list is a miss, not an error."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": "ZERO_RESULTS", "results": []})

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    geocoder = GoogleGeocoder(api_key="test-key", client=client)

    assert await geocoder.geocode("Atlantis") is None

    await client.aclose()


@pytest.mark.asyncio
async def test_geocode_http_error_returns_none() -> None:
    """Test that server errors never escape the adapter."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="upstream down")

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    geocoder = GoogleGeocoder(api_key="test-key", client=client)

    assert await geocoder.geocode("Bangkok") is None

    await client.aclose()


@pytest.mark.asyncio
async def test_geocode_malformed_payload_returns_none() -> None:
    """Test that a result without geometry is treated as a failure."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"results": [{"formatted_address": "Bangkok"}]})

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    geocoder = GoogleGeocoder(api_key="test-key", client=client)

    assert await geocoder.geocode("Bangkok") is None

    await client.aclose()


@pytest.mark.asyncio
async def test_geocode_without_api_key_skips_request() -> None:
    """Test that a missing key short-circuits before any HTTP call."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    geocoder = GoogleGeocoder(api_key="", client=client)

    assert await geocoder.geocode("Bangkok") is None

    await client.aclose()


@pytest.mark.asyncio
@pytest.mark.parametrize("address", ["", "   "])
async def test_geocode_blank_address_returns_none(address: str) -> None:
    geocoder = GoogleGeocoder(api_key="test-key")

    assert await geocoder.geocode(address) is None
