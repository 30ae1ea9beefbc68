"""Time utilities shared by the services and models."""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def _aware(moment: datetime) -> datetime:
    # Naive datetimes are treated as UTC.
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


def to_millis(moment: datetime) -> int:
    """Return epoch milliseconds for ``moment``."""
    return int(_aware(moment).timestamp() * 1000)


def calendar_day(moment: datetime, tz_name: str = "UTC") -> str:
    """Return the ``YYYY-MM-DD`` calendar date of ``moment`` in ``tz_name``."""
    return _aware(moment).astimezone(ZoneInfo(tz_name)).date().isoformat()
