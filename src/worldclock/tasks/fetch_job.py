"""Fetch job: downloads every catalog page, optionally through the snapshot cache."""

import asyncio
import logging
from collections.abc import Mapping
from datetime import timedelta

from worldclock.catalog import load_catalog
from worldclock.config import settings
from worldclock.scrapers import get_scraper
from worldclock.scrapers.models import PageSnapshot, SortMode
from worldclock.services.cache_validity import evaluate_cache
from worldclock.services.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)


async def download_time_data(
    catalog: Mapping[str, str],
    sort_mode: SortMode = SortMode.BY_NAME,
    max_concurrency: int | None = None,
) -> dict[str, PageSnapshot]:
    """
    Scrape every page in the catalog concurrently.

    A page that fails is logged and left out; the others still complete.

    Args:
        catalog: Page name -> page URL
        sort_mode: Ordering of the records in each snapshot
        max_concurrency: Upper bound on simultaneous page fetches

    Returns:
        Page name -> snapshot for every page that could be scraped
    """
    semaphore = asyncio.Semaphore(max_concurrency or settings.scrape_max_concurrency)

    async def fetch(name: str, url: str) -> tuple[str, PageSnapshot | None]:
        async with semaphore:
            return name, await get_scraper(url).get_snapshot(url, sort_mode)

    results = await asyncio.gather(*(fetch(name, url) for name, url in catalog.items()))

    time_data: dict[str, PageSnapshot] = {}
    failures = 0
    for name, snapshot in results:
        if snapshot is None:
            logger.warning(f"No time data for page {name!r} ({catalog[name]})")
            failures += 1
            continue
        time_data[name] = snapshot

    logger.info(f"Downloaded {len(time_data)} pages, {failures} failed")
    return time_data


async def use_cache(
    catalog: Mapping[str, str],
    ttl: timedelta,
    store: SnapshotStore,
    sort_mode: SortMode = SortMode.BY_NAME,
) -> dict[str, PageSnapshot]:
    """
    Serve the cached time data, or refresh the whole cache when it is invalid.

    Store failures propagate as CacheStoreError; there is no fallback to a
    stale cache.
    """
    cached = await store.load_all()

    decision = evaluate_cache(cached, catalog, ttl)
    if decision.valid:
        logger.info("Serving up time data from cache")
        return cached

    logger.info("Refreshing cache: downloading all time data now")
    fresh = await download_time_data(catalog, sort_mode)
    return await store.replace_all(fresh)


async def fetch_time_data(
    catalog: Mapping[str, str] | None = None,
    use_cache_flag: bool | None = None,
    ttl: timedelta | None = None,
    sort_mode: SortMode | None = None,
    store: SnapshotStore | None = None,
) -> dict[str, PageSnapshot]:
    """
    Produce the time data for every catalog page.

    Arguments left as None are taken from settings. The catalog is loaded from
    ``settings.catalog_path``, which raises CatalogError if it is missing.
    """
    if catalog is None:
        catalog = load_catalog(settings.catalog_path)
    if use_cache_flag is None:
        use_cache_flag = settings.use_cache
    if ttl is None:
        ttl = settings.cache_ttl
    if sort_mode is None:
        sort_mode = SortMode(settings.sort_mode)

    if use_cache_flag:
        return await use_cache(catalog, ttl, store or SnapshotStore(), sort_mode)
    return await download_time_data(catalog, sort_mode)
