"""Decides whether cached page snapshots can be served or must be refreshed."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from worldclock.scrapers.models import PageSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheDecision:
    """Verdict on a cached dataset, with the reason for each failed check."""

    size_invalid: bool
    incomplete: bool
    expired: bool
    age: timedelta
    ttl: timedelta

    @property
    def valid(self) -> bool:
        return not (self.size_invalid or self.incomplete or self.expired)


def oldest_last_updated(
    cached: Mapping[str, PageSnapshot],
    now: datetime,
) -> datetime:
    """
    Earliest ``last_updated`` across the cached snapshots.

    Returns ``now`` for an empty cache. A snapshot whose timestamp is missing
    or unparseable counts as infinitely old.
    """
    oldest = now
    for name, snapshot in cached.items():
        try:
            updated = datetime.fromisoformat(snapshot.last_updated)
        except ValueError:
            logger.warning(
                f"Cached page {name!r} has an invalid last_updated {snapshot.last_updated!r}"
            )
            return datetime.min.replace(tzinfo=UTC)
        if updated.tzinfo is None:
            updated = updated.replace(tzinfo=UTC)
        oldest = min(oldest, updated)
    return oldest


def evaluate_cache(
    cached: Mapping[str, PageSnapshot],
    catalog: Mapping[str, str],
    ttl: timedelta,
    now: datetime | None = None,
) -> CacheDecision:
    """
    Check a cached dataset against the page catalog and the time-to-live.

    The cache is invalid when:
    1) it is empty or holds a different number of pages than the catalog
    2) not every catalog page is present in it
    3) its oldest page is older than ``ttl``

    Six catalog pages and six cached pages with a mismatching key are
    therefore still invalid.
    """
    now = now or datetime.now(UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    age = now - oldest_last_updated(cached, now)

    decision = CacheDecision(
        size_invalid=len(cached) == 0 or len(cached) != len(catalog),
        incomplete=any(key not in cached for key in catalog),
        expired=age > ttl,
        age=age,
        ttl=ttl,
    )

    logger.info(
        f"Cache age = {age}; TTL = {ttl}; cache expired: {decision.expired}. "
        f"Cache contains correct number of pages: {not decision.size_invalid}. "
        f"All URLs have been cached: {not decision.incomplete}."
    )
    return decision


def is_cache_invalid(
    cached: Mapping[str, PageSnapshot],
    catalog: Mapping[str, str],
    ttl: timedelta,
    now: datetime | None = None,
) -> bool:
    """True when the cached dataset must be refreshed as a whole."""
    return not evaluate_cache(cached, catalog, ttl, now).valid
