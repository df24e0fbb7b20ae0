"""Snapshot store: durable cache of page snapshots keyed by page name."""

import logging
import time
from collections.abc import Mapping
from datetime import UTC, datetime

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from worldclock.exceptions import CacheStoreError
from worldclock.models import PageSnapshotRow
from worldclock.schemas.city import CityRecordSchema
from worldclock.scrapers.models import CityRecordSet, PageSnapshot, SortMode

logger = logging.getLogger(__name__)


def snapshot_to_row(name: str, snapshot: PageSnapshot) -> PageSnapshotRow:
    return PageSnapshotRow(
        name=name,
        source_uri=snapshot.source_uri,
        sort_mode=snapshot.sort_mode.value,
        city_records=[
            CityRecordSchema.from_record(r).model_dump() for r in snapshot.city_records
        ],
        city_count=len(snapshot.city_records),
        last_updated=snapshot.last_updated,
    )


def row_to_snapshot(row: PageSnapshotRow) -> PageSnapshot:
    sort_mode = SortMode(row.sort_mode)
    records = CityRecordSet(
        (CityRecordSchema.model_validate(r).to_record(sort_mode) for r in row.city_records),
        sort_mode=sort_mode,
    )
    return PageSnapshot(
        source_uri=row.source_uri,
        city_records=records,
        last_updated=row.last_updated,
    )


class SnapshotStore:
    """
    Load-all / replace-all persistence of page snapshots.

    ``replace_all`` drops every stored page and writes the new ones inside a
    single transaction, so readers never see a half-replaced cache and pages
    no longer in the catalog do not linger.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None) -> None:
        if session_factory is None:
            from worldclock.database import AsyncSessionLocal

            session_factory = AsyncSessionLocal
        self._session_factory = session_factory

    async def load_all(self) -> dict[str, PageSnapshot]:
        """
        Read every stored page.

        Raises:
            CacheStoreError: If the store cannot be read
        """
        start = time.perf_counter()
        try:
            async with self._session_factory() as db:
                result = await db.execute(select(PageSnapshotRow))
                rows = result.scalars().all()
                snapshots = {row.name: row_to_snapshot(row) for row in rows}
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Error loading cached time data: {e}", exc_info=True)
            raise CacheStoreError("Could not load cached time data") from e

        logger.info(
            f"Loaded {len(snapshots)} cached pages in {time.perf_counter() - start:.3f}s"
        )
        return snapshots

    async def replace_all(
        self,
        snapshots: Mapping[str, PageSnapshot],
    ) -> dict[str, PageSnapshot]:
        """
        Replace the stored pages with ``snapshots``, stamping ``last_updated``.

        Returns:
            The snapshots as stored, with their ``last_updated`` set

        Raises:
            CacheStoreError: If the store cannot be written; nothing is replaced
        """
        start = time.perf_counter()
        now = datetime.now(UTC)
        stamped = {name: snapshot.stamped(now) for name, snapshot in snapshots.items()}

        try:
            async with self._session_factory() as db:
                async with db.begin():
                    await db.execute(delete(PageSnapshotRow))
                    db.add_all(snapshot_to_row(name, s) for name, s in stamped.items())
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Error storing time data: {e}", exc_info=True)
            raise CacheStoreError("Could not replace cached time data") from e

        logger.info(
            f"Stored {len(stamped)} pages in {time.perf_counter() - start:.3f}s"
        )
        return stamped
