"""Stored page snapshot model."""

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from worldclock.models.base import Base, TimestampMixin

JSONType = JSON().with_variant(JSONB(), "postgresql")


class PageSnapshotRow(Base, TimestampMixin):
    """
    One cached world clock page.

    The city records are kept as a JSON list; the page is only ever
    replaced as a whole, never updated record by record.
    """

    __tablename__ = "page_snapshots"

    name: Mapped[str] = mapped_column(String(200), primary_key=True)
    source_uri: Mapped[str] = mapped_column(Text, nullable=False)
    sort_mode: Mapped[str] = mapped_column(String(20), nullable=False, default="name")
    city_records: Mapped[list[dict]] = mapped_column(JSONType, nullable=False)
    city_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_updated: Mapped[str] = mapped_column(String(40), nullable=False)

    def __repr__(self) -> str:
        return f"<PageSnapshotRow(name={self.name!r}, city_count={self.city_count!r})>"
