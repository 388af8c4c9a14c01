"""
UTC datetime utilities for consistent timezone handling.

Timestamps read from the store arrive as ISO-8601 strings; parse them
here so every datetime in the system is timezone-aware UTC.
"""

from datetime import UTC, datetime


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def parse_timestamp(value: object) -> datetime | None:
    """
    Parse a store timestamp into a UTC-aware datetime.

    Accepts datetime instances and ISO-8601 strings (a trailing 'Z' is
    accepted). Missing or unparseable values return None so callers can
    apply their own ordering for unknown times.

    Args:
        value: Raw column value

    Returns:
        UTC-aware datetime or None
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    text = str(value).strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return ensure_utc(datetime.fromisoformat(text))
    except ValueError:
        return None
