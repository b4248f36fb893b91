"""Custom column types."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, Text
from sqlalchemy.engine import Dialect
from sqlalchemy.types import TypeDecorator


class OptionIdSet(TypeDecorator[frozenset[int]]):
    """Store a set of answer option ids as a comma-joined string.

    An empty set is stored as ``""`` so it stays distinguishable from NULL,
    which marks a row that carries no selection at all.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(
        self, value: frozenset[int] | set[int] | None, dialect: Dialect
    ) -> str | None:
        if value is None:
            return None
        return ",".join(str(option_id) for option_id in sorted(value))

    def process_result_value(
        self, value: str | None, dialect: Dialect
    ) -> frozenset[int] | None:
        if value is None:
            return None
        return frozenset(int(part) for part in value.split(",") if part.strip())


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to a naive timestamp or convert an aware one to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class UTCDateTime(TypeDecorator[datetime]):
    """Timezone-aware timestamp that always reads back in UTC.

    SQLite drops the offset on storage, so naive values coming back from
    the database are taken to be UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(
        self, value: datetime | None, dialect: Dialect
    ) -> datetime | None:
        return as_utc(value)

    def process_result_value(
        self, value: datetime | None, dialect: Dialect
    ) -> datetime | None:
        return as_utc(value)
