"""Fetch the time data once and print every page.

Run with a database-backed cache and a time-to-live of 8 hours:

    python -m worldclock.scripts.show_time_data --use-cache --ttl 480
"""

import argparse
import asyncio
import logging
import sys
from datetime import timedelta

from worldclock.catalog import load_catalog
from worldclock.config import settings
from worldclock.database import init_db
from worldclock.exceptions import CacheStoreError, CatalogError
from worldclock.scrapers.models import PageSnapshot, SortMode
from worldclock.tasks.fetch_job import fetch_time_data


async def show_time_data(
    catalog_path: str,
    use_cache: bool,
    ttl_minutes: int,
    sort_mode: SortMode,
) -> dict[str, PageSnapshot]:
    """Fetch the time data and print a report per page."""
    catalog = load_catalog(catalog_path)
    if use_cache:
        await init_db()

    time_data = await fetch_time_data(
        catalog,
        use_cache_flag=use_cache,
        ttl=timedelta(minutes=ttl_minutes),
        sort_mode=sort_mode,
    )

    for name in sorted(time_data):
        print(f"{name}:\n{time_data[name].describe()}\n")

    missing = sorted(set(catalog) - set(time_data))
    if missing:
        print(f"WARNING: no time data for {len(missing)} page(s):")
        for name in missing:
            print(f"  - {name}")
    return time_data


def main() -> None:
    parser = argparse.ArgumentParser(description="Print city times scraped from world clock pages.")
    parser.add_argument(
        "--catalog",
        default=settings.catalog_path,
        metavar="PATH",
        help=f"File with name=url lines (default: {settings.catalog_path})",
    )
    parser.add_argument(
        "--use-cache",
        action="store_true",
        default=settings.use_cache,
        help="Serve the time data from the database cache while it is valid",
    )
    parser.add_argument(
        "--ttl",
        type=int,
        default=settings.cache_ttl_minutes,
        metavar="MINUTES",
        help=f"Cache time-to-live in minutes (default: {settings.cache_ttl_minutes})",
    )
    parser.add_argument(
        "--sort",
        type=SortMode,
        choices=list(SortMode),
        default=SortMode(settings.sort_mode),
        help="Order cities by 'name' or 'offset'",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        asyncio.run(show_time_data(args.catalog, args.use_cache, args.ttl, args.sort))
    except (CatalogError, CacheStoreError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
