"""Base scraper interface for world clock pages."""

from abc import ABC, abstractmethod

from worldclock.scrapers.models import PageSnapshot, SortMode


class BaseScraper(ABC):
    """
    Abstract base class for world clock page scrapers.

    A scraper turns one page URL into a PageSnapshot.
    """

    @abstractmethod
    async def get_snapshot(
        self,
        url: str,
        sort_mode: SortMode = SortMode.BY_NAME,
    ) -> PageSnapshot | None:
        """
        Fetch a page and extract its city records.

        Args:
            url: Page URL
            sort_mode: Ordering of the records in the snapshot

        Returns:
            Snapshot of the page, or None if the page could not be scraped

        Raises:
            Should NOT raise exceptions. Return None on errors and log warnings.
        """
        pass
