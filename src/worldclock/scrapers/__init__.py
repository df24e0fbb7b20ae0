"""Scraper registry for mapping world clock hosts to scraper classes."""

from typing import Type
from urllib.parse import urlsplit

from worldclock.scrapers.base import BaseScraper
from worldclock.scrapers.models import CityRecord, CityRecordSet, PageSnapshot, SortMode
from worldclock.scrapers.timeanddate import TimeAndDateScraper

# Registry mapping page hosts to scraper classes
SCRAPER_REGISTRY: dict[str, Type[BaseScraper]] = {
    "www.timeanddate.com": TimeAndDateScraper,
    "timeanddate.com": TimeAndDateScraper,
}

DEFAULT_SCRAPER: Type[BaseScraper] = TimeAndDateScraper


def get_scraper(url: str) -> BaseScraper:
    """
    Get a scraper instance for a page URL.

    Pages on unknown hosts use the timeanddate.com layout.
    """
    host = urlsplit(url).netloc.lower()
    scraper_class = SCRAPER_REGISTRY.get(host, DEFAULT_SCRAPER)
    return scraper_class()


__all__ = [
    "SCRAPER_REGISTRY",
    "get_scraper",
    "BaseScraper",
    "CityRecord",
    "CityRecordSet",
    "PageSnapshot",
    "SortMode",
    "TimeAndDateScraper",
]
