"""Data models for scraped world clock pages."""

from bisect import bisect_left
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from enum import Enum

from worldclock.utils.offset import ZERO_OFFSET, format_offset

UTC_RECORD_NAME = "UTC"
UTC_RECORD_URL = "https://www.timeanddate.com/time/aboututc.html"


class SortMode(str, Enum):
    """Ordering of city records within a page."""

    BY_NAME = "name"
    BY_OFFSET = "offset"


def _by_name(record: "CityRecord") -> tuple[str, str]:
    return record.name, record.offset_string


def _by_offset(record: "CityRecord") -> tuple[str, str]:
    return record.offset_string, record.name


SORT_KEYS = {
    SortMode.BY_NAME: _by_name,
    SortMode.BY_OFFSET: _by_offset,
}


@dataclass(eq=False)
class CityRecord:
    """
    One city listed on a world clock page.

    Two records are equal when their names match, whatever their offsets.
    The ``id`` only links the page fragments together during extraction.
    """

    name: str = ""
    url: str = ""
    raw_time_string: str = ""  # e.g. "Thu 9:00 pm"
    utc_offset: timedelta = ZERO_OFFSET
    is_dst: bool = False
    sort_mode: SortMode = SortMode.BY_NAME
    id: int = -1

    @property
    def offset_string(self) -> str:
        return format_offset(self.utc_offset)

    def sort_key(self) -> tuple[str, str]:
        return SORT_KEYS[self.sort_mode](self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CityRecord):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __lt__(self, other: "CityRecord") -> bool:
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        season = "DST" if self.is_dst else "Winter Time"
        return (
            f"City Id {self.id} = {self.name}: {self.offset_string}, "
            f"{self.raw_time_string}, {season}. Url: {self.url}"
        )


class CityRecordSet:
    """
    Ordered set of city records, unique by name.

    Records are kept sorted by the set's sort mode. Adding a record whose
    name is already present is a no-op: the first record wins, even when
    the later one carries a different offset.
    """

    def __init__(
        self,
        records: Iterable[CityRecord] = (),
        sort_mode: SortMode = SortMode.BY_NAME,
    ) -> None:
        self.sort_mode = SortMode(sort_mode)
        self._key = SORT_KEYS[self.sort_mode]
        self._records: list[CityRecord] = []
        self._keys: list[tuple[str, str]] = []
        self._names: set[str] = set()
        for record in records:
            self.add(record)

    def add(self, record: CityRecord) -> bool:
        """Insert a copy of ``record``; return False if its name is already present."""
        if record.name in self._names:
            return False
        record = replace(record, sort_mode=self.sort_mode)
        key = self._key(record)
        index = bisect_left(self._keys, key)
        self._keys.insert(index, key)
        self._records.insert(index, record)
        self._names.add(record.name)
        return True

    def get(self, name: str) -> CityRecord | None:
        return next((r for r in self._records if r.name == name), None)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, CityRecord):
            return item.name in self._names
        return item in self._names

    def __iter__(self) -> Iterator[CityRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"CityRecordSet({[r.name for r in self._records]!r}, sort_mode={self.sort_mode.value!r})"


def utc_record(sort_mode: SortMode = SortMode.BY_NAME) -> CityRecord:
    """The synthetic UTC entry every page carries."""
    return CityRecord(
        name=UTC_RECORD_NAME,
        url=UTC_RECORD_URL,
        sort_mode=sort_mode,
        id=-1,
    )


@dataclass(frozen=True)
class PageSnapshot:
    """
    All city records scraped from one world clock page.

    ``last_updated`` (RFC3339) is only set when the snapshot is written to
    the snapshot store; freshly scraped snapshots leave it empty.
    """

    source_uri: str
    city_records: CityRecordSet = field(default_factory=CityRecordSet)
    last_updated: str = ""

    @property
    def sort_mode(self) -> SortMode:
        return self.city_records.sort_mode

    def stamped(self, when: datetime) -> "PageSnapshot":
        """Return a copy with ``last_updated`` set to ``when``."""
        return replace(self, last_updated=when.isoformat())

    def describe(self, now: datetime | None = None) -> str:
        """Human-readable dump of the page and its records."""
        now = now or datetime.now(UTC)
        lines = "\n".join(f"\t{record}" for record in self.city_records)
        return (
            f"Scanned Page: {self.source_uri}\n"
            f"Current UTC: {now.isoformat()}\n"
            f"City Times:\n{lines}"
        )


def merge_snapshots(
    snapshots: Iterable[PageSnapshot],
    sort_mode: SortMode = SortMode.BY_NAME,
) -> CityRecordSet:
    """Union the records of several pages; a city listed on several pages appears once."""
    merged = CityRecordSet(sort_mode=sort_mode)
    for snapshot in snapshots:
        for record in snapshot.city_records:
            merged.add(record)
    return merged
