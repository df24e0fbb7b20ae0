"""timeanddate.com world clock scraper."""

import logging
from datetime import UTC, datetime

import httpx

from worldclock.config import settings
from worldclock.scrapers.base import BaseScraper
from worldclock.scrapers.extractor import parse_page
from worldclock.scrapers.models import PageSnapshot, SortMode, utc_record

logger = logging.getLogger(__name__)


class TimeAndDateScraper(BaseScraper):
    """
    Scraper for timeanddate.com world clock tables.

    Each table cell pair lists a city link with a DST marker and the city's
    relative local time. The pages are static HTML, so plain httpx +
    BeautifulSoup is enough.
    """

    def __init__(self, timeout: int | None = None) -> None:
        self.timeout = timeout or settings.scrape_timeout

    async def get_snapshot(
        self,
        url: str,
        sort_mode: SortMode = SortMode.BY_NAME,
    ) -> PageSnapshot | None:
        """Fetch a world clock page and build its snapshot."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                response = await client.get(url)
                response.raise_for_status()
                snapshot = self.build_snapshot(response.text, url, datetime.now(UTC), sort_mode)
        except Exception as e:
            logger.error(f"World clock scraper error for {url}: {e}", exc_info=True)
            return None

        logger.info(f"{url}: found {len(snapshot.city_records) - 1} cities")
        return snapshot

    def build_snapshot(
        self,
        html: str,
        url: str,
        utc_now: datetime,
        sort_mode: SortMode = SortMode.BY_NAME,
    ) -> PageSnapshot:
        """Extract the city records of ``html`` and add the UTC entry."""
        records = parse_page(html, url, utc_now, sort_mode)
        records.add(utc_record(sort_mode))
        return PageSnapshot(source_uri=url, city_records=records)
