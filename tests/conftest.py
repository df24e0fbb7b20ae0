"""Shared test fixtures."""

from datetime import timedelta

import pytest
from fastapi import FastAPI

from worldclock.api.routes import health, pages
from worldclock.scrapers.models import CityRecord, CityRecordSet, PageSnapshot, SortMode, utc_record


def _make_snapshot(
    source_uri: str,
    cities: dict[str, int],
    sort_mode: SortMode = SortMode.BY_NAME,
    last_updated: str = "",
) -> PageSnapshot:
    """Build a snapshot from {city name: offset in minutes}, plus the UTC entry."""
    records = CityRecordSet(sort_mode=sort_mode)
    for name, minutes in cities.items():
        records.add(
            CityRecord(
                name=name,
                url=f"https://www.timeanddate.com/worldclock/{name.lower()}",
                utc_offset=timedelta(minutes=minutes),
            )
        )
    records.add(utc_record(sort_mode))
    return PageSnapshot(source_uri=source_uri, city_records=records, last_updated=last_updated)


@pytest.fixture
def make_snapshot():
    """Factory for snapshots built from {city name: offset in minutes}."""
    return _make_snapshot


@pytest.fixture
def time_data() -> dict[str, PageSnapshot]:
    return {
        "Europa": _make_snapshot(
            "https://www.timeanddate.com/worldclock/?continent=europe",
            {"Amsterdam": 60, "London": 0},
        ),
        "Asia": _make_snapshot(
            "https://www.timeanddate.com/worldclock/?continent=asia",
            {"Kathmandu": 345, "Tokyo": 540},
        ),
    }


@pytest.fixture
def test_app(time_data: dict[str, PageSnapshot]) -> FastAPI:
    """Minimal FastAPI app without the APScheduler lifespan, for API tests."""
    app = FastAPI()
    app.include_router(health.router)
    app.include_router(pages.router, prefix="/api")
    app.state.time_data = time_data
    return app
