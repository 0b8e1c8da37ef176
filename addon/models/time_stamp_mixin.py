from datetime import UTC, datetime

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import Mapped, declared_attr


def utc_now() -> datetime:
    return datetime.now(UTC)


def _timestamp_column(**kwargs) -> Column:
    return Column(DateTime(timezone=True), **kwargs)


class TimeStampMixin:
    """``created_at`` set on insert, ``updated_at`` on every later update.

    Both are filled by SQLAlchemy at flush time, so they stay ``None`` on
    instances that were never written.
    """

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:  # noqa: N805
        return _timestamp_column(default=utc_now, nullable=False)

    @declared_attr
    def updated_at(cls) -> Mapped[datetime | None]:  # noqa: N805
        return _timestamp_column(nullable=True, onupdate=utc_now)
