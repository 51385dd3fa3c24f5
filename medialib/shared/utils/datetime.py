"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the store are timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, date, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def parse_datetime(value: datetime | date | str | None) -> datetime | None:
    """
    Parse an ISO-8601 string (or date/datetime) into a UTC-aware datetime.

    Date-only values ('2025-03-10') map to midnight UTC. A trailing 'Z' is
    accepted. Returns None for None or empty strings.

    Args:
        value: ISO string, date, datetime or None

    Returns:
        UTC-aware datetime or None

    Raises:
        ValueError: If the string is not ISO-8601.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return ensure_utc(datetime.fromisoformat(text))


def to_iso(dt: datetime) -> str:
    """Return an ISO-8601 UTC string with a 'Z' suffix (millisecond precision)."""
    return ensure_utc(dt).isoformat(timespec="milliseconds").replace("+00:00", "Z")
