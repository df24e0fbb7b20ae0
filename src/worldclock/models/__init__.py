"""SQLAlchemy ORM models."""

from worldclock.models.base import Base
from worldclock.models.page_snapshot import PageSnapshotRow

__all__ = ["Base", "PageSnapshotRow"]
