"""Tests for the scheduled time data refresh."""

from unittest.mock import AsyncMock, patch

from fastapi import FastAPI

from worldclock import main
from worldclock.exceptions import CacheStoreError


async def test_refresh_publishes_time_data(time_data) -> None:
    app = FastAPI()
    app.state.time_data = {}

    with patch.object(main, "fetch_time_data", AsyncMock(return_value=time_data)):
        await main.refresh_time_data(app)

    assert app.state.time_data is time_data


async def test_failed_refresh_is_logged_and_keeps_published_data(time_data, caplog) -> None:
    app = FastAPI()
    app.state.time_data = time_data

    with patch.object(main, "fetch_time_data", AsyncMock(side_effect=CacheStoreError("down"))):
        await main.refresh_time_data(app)

    assert app.state.time_data is time_data
    assert "Time data refresh failed" in caplog.text


async def test_refresh_records_when_it_last_succeeded(time_data) -> None:
    app = FastAPI()
    app.state.time_data = {}
    app.state.last_refresh = None

    with patch.object(main, "fetch_time_data", AsyncMock(return_value=time_data)):
        await main.refresh_time_data(app)
    refreshed_at = app.state.last_refresh

    with patch.object(main, "fetch_time_data", AsyncMock(side_effect=CacheStoreError("down"))):
        await main.refresh_time_data(app)

    assert refreshed_at is not None
    assert app.state.last_refresh == refreshed_at
