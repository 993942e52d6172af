"""Timestamp conversion between entities and SQLite TEXT columns."""

from datetime import UTC, datetime


def to_db(value: datetime | None) -> str | None:
    """Serialize as a fixed-width ISO-8601 UTC string, so text order is time order."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def from_db(value: str | None) -> datetime | None:
    """Parse a stored timestamp; values without an offset are UTC."""
    if value is None:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed
