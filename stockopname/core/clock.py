"""
Clock abstraction.

Every timestamp the core stamps (started_at, scanned_at, completed_at, report
generation time) comes from an injected IClock.
"""

from abc import ABC, abstractmethod
from datetime import UTC, datetime, timedelta


class IClock(ABC):
    """Source of the current instant."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as a timezone-aware UTC datetime."""
        pass


class SystemClock(IClock):
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedClock(IClock):
    """Clock frozen at a given instant until moved explicitly."""

    def __init__(self, instant: datetime):
        self._instant = _as_utc(instant)

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = _as_utc(instant)

    def advance(self, delta: timedelta | None = None, **kwargs: float) -> datetime:
        """Move forward by ``delta`` (or timedelta kwargs) and return the new instant."""
        self._instant += delta if delta is not None else timedelta(**kwargs)
        return self._instant


def _as_utc(value: datetime) -> datetime:
    # Naive datetimes are taken to be UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


_default_clock: IClock = SystemClock()


def get_clock() -> IClock:
    """Get the process-wide default clock."""
    return _default_clock


def utcnow() -> datetime:
    """Current UTC time from the default clock."""
    return _default_clock.now()
