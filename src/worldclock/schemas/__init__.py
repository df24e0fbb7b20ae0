"""Pydantic schemas for API requests and responses."""

from worldclock.schemas.city import CityRecordSchema, PageSnapshotResponse

__all__ = ["CityRecordSchema", "PageSnapshotResponse"]
