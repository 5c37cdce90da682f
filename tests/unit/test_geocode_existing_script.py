"""Tests for the geocoding backfill command."""

import pytest

from backend.app.config import Settings
from backend.app.itinerary.backfill import BackfillReport
from scripts import geocode_existing


def test_missing_api_key_exits_non_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        geocode_existing,
        "get_settings",
        lambda: Settings(google_maps_api_key="", database_url="sqlite:///:memory:"),
    )

    assert geocode_existing.main() == 1


def test_missing_database_url_exits_non_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        geocode_existing,
        "get_settings",
        lambda: Settings(google_maps_api_key="key", database_url=""),
    )

    assert geocode_existing.main() == 1


def test_prints_summary(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    async def fake_run(settings: Settings) -> BackfillReport:
        return BackfillReport(activities_found=3, activities_geocoded=2, trips_found=1)

    monkeypatch.setattr(
        geocode_existing,
        "get_settings",
        lambda: Settings(google_maps_api_key="key", database_url="sqlite:///:memory:"),
    )
    monkeypatch.setattr(geocode_existing, "run", fake_run)

    assert geocode_existing.main() == 0
    out = capsys.readouterr().out
    assert "Activities: 3 found, 2 geocoded" in out
    assert "Trips: 1 found, 0 geocoded" in out
