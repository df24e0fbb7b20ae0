"""Pydantic schemas for city records and page snapshots."""

from pydantic import BaseModel

from worldclock.scrapers.models import CityRecord, PageSnapshot, SortMode
from worldclock.utils.offset import parse_offset


class CityRecordSchema(BaseModel):
    """A city record as stored in the cache and returned by the API."""

    name: str
    url: str
    raw_time_string: str
    utc_offset: str  # "+05:30"
    is_dst: bool

    @classmethod
    def from_record(cls, record: CityRecord) -> "CityRecordSchema":
        return cls(
            name=record.name,
            url=record.url,
            raw_time_string=record.raw_time_string,
            utc_offset=record.offset_string,
            is_dst=record.is_dst,
        )

    def to_record(self, sort_mode: SortMode = SortMode.BY_NAME) -> CityRecord:
        return CityRecord(
            name=self.name,
            url=self.url,
            raw_time_string=self.raw_time_string,
            utc_offset=parse_offset(self.utc_offset),
            is_dst=self.is_dst,
            sort_mode=sort_mode,
        )


class PageSnapshotResponse(BaseModel):
    """A world clock page with its cities."""

    name: str
    source_uri: str
    sort_mode: SortMode
    last_updated: str | None = None
    city_count: int
    cities: list[CityRecordSchema]

    @classmethod
    def from_snapshot(cls, name: str, snapshot: PageSnapshot) -> "PageSnapshotResponse":
        return cls(
            name=name,
            source_uri=snapshot.source_uri,
            sort_mode=snapshot.sort_mode,
            last_updated=snapshot.last_updated or None,
            city_count=len(snapshot.city_records),
            cities=[CityRecordSchema.from_record(r) for r in snapshot.city_records],
        )
