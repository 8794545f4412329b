"""Timestamp utilities for review bookkeeping.

Review timestamps are held as timezone-aware UTC datetimes inside the core and
exchanged with the persistence layer as Unix epoch milliseconds (the ``ts``
field of a translation unit record). This module provides:
- Getting current UTC time
- Converting timezone-naive to timezone-aware UTC
- Converting between datetimes and epoch milliseconds
- Formatting timestamps for reports and logs
"""

from datetime import datetime, timezone
from typing import Optional, Union


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Current UTC time with timezone info

    Example:
        >>> now = utc_now()
        >>> now.tzinfo == timezone.utc
        True
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Ensure a datetime is timezone-aware and in UTC.

    If the datetime is timezone-naive, it's treated as UTC.
    If the datetime has a different timezone, it's converted to UTC.

    Args:
        dt: Datetime to convert (can be None)

    Returns:
        Timezone-aware datetime in UTC, or None if input is None
    """
    if dt is None:
        return None

    # If timezone-naive, treat as UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def timestamp_to_unix_ms(dt: datetime) -> int:
    """Convert datetime to Unix epoch milliseconds.

    Args:
        dt: Datetime to convert

    Returns:
        Milliseconds since 1970-01-01 00:00:00 UTC
    """
    dt_utc = ensure_utc(dt)
    if dt_utc is None:
        return 0
    return int(round(dt_utc.timestamp() * 1000))


def unix_ms_to_timestamp(unix_ms: Union[int, float]) -> datetime:
    """Convert Unix epoch milliseconds to a UTC datetime.

    Args:
        unix_ms: Milliseconds since epoch

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.fromtimestamp(unix_ms / 1000, tz=timezone.utc)


def coerce_review_timestamp(value) -> Optional[datetime]:
    """Coerce a persisted review timestamp into a UTC datetime.

    Accepts epoch milliseconds (int/float), ISO 8601 strings, datetimes, or
    None. Zero, negative, boolean and unparseable values are treated as "not
    reviewed" rather than raising.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, (int, float)):
        if value <= 0:
            return None
        try:
            return unix_ms_to_timestamp(value)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        return parse_iso_datetime(value)
    return None


def parse_iso_datetime(iso_string: str) -> Optional[datetime]:
    """Parse an ISO 8601 datetime string to UTC datetime.

    Supports the 'Z' suffix, explicit offsets, naive timestamps and date-only
    strings.

    Args:
        iso_string: ISO 8601 formatted datetime string

    Returns:
        Timezone-aware datetime in UTC, or None if parsing fails
    """
    if not iso_string or not iso_string.strip():
        return None

    cleaned = iso_string.strip()
    if cleaned.endswith("Z"):
        cleaned = cleaned[:-1] + "+00:00"

    try:
        return ensure_utc(datetime.fromisoformat(cleaned))
    except ValueError:
        pass

    try:
        return ensure_utc(datetime.strptime(iso_string.strip(), "%Y-%m-%d"))
    except ValueError:
        return None


def format_timestamp(dt: datetime, include_microseconds: bool = False) -> str:
    """Format a datetime as ISO 8601 string in UTC.

    Args:
        dt: Datetime to format
        include_microseconds: Whether to include microseconds in output

    Returns:
        ISO 8601 formatted string with 'Z' suffix

    Example:
        >>> dt = datetime(2025, 11, 4, 12, 0, 0, tzinfo=timezone.utc)
        >>> format_timestamp(dt)
        '2025-11-04T12:00:00Z'
    """
    dt_utc = ensure_utc(dt)
    if dt_utc is None:
        return ""

    if include_microseconds:
        return dt_utc.strftime("%Y-%m-%dT%H:%M:%S.%fZ")
    return dt_utc.strftime("%Y-%m-%dT%H:%M:%SZ")
