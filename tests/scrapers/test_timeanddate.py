"""Unit tests for the timeanddate.com world clock scraper."""

from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from worldclock.scrapers import TimeAndDateScraper, get_scraper
from worldclock.scrapers.models import SortMode

FIXTURE_DIR = Path(__file__).parent / "fixtures" / "timeanddate"
PAGE_URL = "https://www.timeanddate.com/worldclock/"
# Friday 23:30 UTC
UTC_NOW = datetime(2020, 1, 3, 23, 30, tzinfo=UTC)


@pytest.fixture
def scraper() -> TimeAndDateScraper:
    return TimeAndDateScraper()


@pytest.fixture
def fixture_html() -> str:
    return (FIXTURE_DIR / "worldclock.html").read_text()


def mock_client(response: MagicMock | None = None, error: Exception | None = None) -> AsyncMock:
    client = AsyncMock()
    if error is not None:
        client.get = AsyncMock(side_effect=error)
    else:
        client.get = AsyncMock(return_value=response)
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


# ---------------------------------------------------------------------------
# build_snapshot: pure parsing, no HTTP
# ---------------------------------------------------------------------------


class TestBuildSnapshot:
    def test_extracts_every_city_plus_utc(
        self, scraper: TimeAndDateScraper, fixture_html: str
    ) -> None:
        snapshot = scraper.build_snapshot(fixture_html, PAGE_URL, UTC_NOW)
        assert [r.name for r in snapshot.city_records] == [
            "Accra",
            "Adelaide",
            "Auckland",
            "Honolulu",
            "Kathmandu",
            "St John's",
            "UTC",
        ]

    def test_infers_offsets(self, scraper: TimeAndDateScraper, fixture_html: str) -> None:
        snapshot = scraper.build_snapshot(fixture_html, PAGE_URL, UTC_NOW)
        offsets = {r.name: r.offset_string for r in snapshot.city_records}
        assert offsets == {
            "Accra": "+00:00",
            "Adelaide": "+10:30",
            "Auckland": "+13:00",
            "Honolulu": "-10:00",
            "Kathmandu": "+05:45",
            "St John's": "-03:30",
            "UTC": "+00:00",
        }

    def test_reads_dst_marker(self, scraper: TimeAndDateScraper, fixture_html: str) -> None:
        snapshot = scraper.build_snapshot(fixture_html, PAGE_URL, UTC_NOW)
        dst = {r.name for r in snapshot.city_records if r.is_dst}
        assert dst == {"Adelaide", "Auckland"}

    def test_builds_absolute_city_urls(
        self, scraper: TimeAndDateScraper, fixture_html: str
    ) -> None:
        snapshot = scraper.build_snapshot(fixture_html, PAGE_URL, UTC_NOW)
        honolulu = snapshot.city_records.get("Honolulu")
        assert honolulu.url == "https://www.timeanddate.com/worldclock/usa/honolulu"
        assert honolulu.raw_time_string == "Fri 1:30 pm"

    def test_duplicate_city_keeps_first_listing(
        self, scraper: TimeAndDateScraper, fixture_html: str
    ) -> None:
        snapshot = scraper.build_snapshot(fixture_html, PAGE_URL, UTC_NOW)
        assert snapshot.city_records.get("Accra").raw_time_string == "Fri 11:30 pm"

    def test_sorts_by_offset(self, scraper: TimeAndDateScraper, fixture_html: str) -> None:
        snapshot = scraper.build_snapshot(fixture_html, PAGE_URL, UTC_NOW, SortMode.BY_OFFSET)
        assert snapshot.sort_mode is SortMode.BY_OFFSET
        assert [r.name for r in snapshot.city_records] == [
            "Accra",
            "UTC",
            "Kathmandu",
            "Adelaide",
            "Auckland",
            "St John's",
            "Honolulu",
        ]

    def test_snapshot_is_not_stamped(
        self, scraper: TimeAndDateScraper, fixture_html: str
    ) -> None:
        snapshot = scraper.build_snapshot(fixture_html, PAGE_URL, UTC_NOW)
        assert snapshot.source_uri == PAGE_URL
        assert snapshot.last_updated == ""

    def test_page_without_cities_still_has_utc(self, scraper: TimeAndDateScraper) -> None:
        snapshot = scraper.build_snapshot("<html><body></body></html>", PAGE_URL, UTC_NOW)
        assert [r.name for r in snapshot.city_records] == ["UTC"]


# ---------------------------------------------------------------------------
# get_snapshot: mocked HTTP
# ---------------------------------------------------------------------------


class TestGetSnapshot:
    async def test_returns_snapshot_from_mocked_response(self, fixture_html: str) -> None:
        scraper = TimeAndDateScraper()
        response = MagicMock()
        response.text = fixture_html
        response.raise_for_status = MagicMock()

        client = mock_client(response)
        with patch("httpx.AsyncClient", return_value=client):
            snapshot = await scraper.get_snapshot(PAGE_URL)

        client.get.assert_awaited_once_with(PAGE_URL)
        assert snapshot is not None
        assert len(snapshot.city_records) == 7
        assert "UTC" in snapshot.city_records

    async def test_returns_none_on_connection_error(self) -> None:
        scraper = TimeAndDateScraper()

        with patch("httpx.AsyncClient", return_value=mock_client(error=Exception("Connection refused"))):
            snapshot = await scraper.get_snapshot(PAGE_URL)

        assert snapshot is None

    async def test_returns_none_on_http_status_error(self) -> None:
        scraper = TimeAndDateScraper()
        request = httpx.Request("GET", PAGE_URL)
        response = MagicMock()
        response.raise_for_status = MagicMock(
            side_effect=httpx.HTTPStatusError(
                "503", request=request, response=httpx.Response(503, request=request)
            )
        )

        with patch("httpx.AsyncClient", return_value=mock_client(response)):
            snapshot = await scraper.get_snapshot(PAGE_URL)

        assert snapshot is None


class TestGetScraper:
    def test_timeanddate_host(self) -> None:
        assert isinstance(get_scraper(PAGE_URL), TimeAndDateScraper)

    def test_unknown_host_falls_back_to_timeanddate_layout(self) -> None:
        assert isinstance(get_scraper("https://clocks.example.com/"), TimeAndDateScraper)
