"""Timestamp utilities for UTC handling and elapsed-time formatting."""

from datetime import datetime, timedelta, timezone
from typing import Optional


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Current UTC time with timezone info
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Ensure a datetime is timezone-aware and in UTC.

    Naive datetimes are treated as UTC; aware ones are converted.

    Args:
        dt: Datetime to convert (can be None)

    Returns:
        Timezone-aware datetime in UTC, or None if input is None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def parse_iso_datetime(iso_string: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 datetime string such as GitHub's started_at to UTC.

    Supports:
    - 2025-11-04T12:00:00Z
    - 2025-11-04T12:00:00.123Z
    - 2025-11-04T12:00:00+00:00

    Args:
        iso_string: ISO 8601 formatted datetime string

    Returns:
        Timezone-aware datetime in UTC, or None if missing or unparseable

    Example:
        >>> parse_iso_datetime("2025-11-04T12:00:00Z").hour
        12
    """
    if not iso_string or not iso_string.strip():
        return None

    cleaned = iso_string.strip()
    if cleaned.endswith("Z"):
        cleaned = cleaned[:-1] + "+00:00"

    try:
        return ensure_utc(datetime.fromisoformat(cleaned))
    except ValueError:
        return None


def format_elapsed(elapsed: timedelta) -> str:
    """Format a duration as 'H hour M min S sec', leaving out zero parts.

    Sub-second remainders are truncated, so anything under one second (or a
    negative duration from clock skew) renders as an empty string.

    Args:
        elapsed: Duration to format

    Returns:
        Formatted duration

    Example:
        >>> format_elapsed(timedelta(hours=1, minutes=1, seconds=1))
        '1 hour 1 min 1 sec'
        >>> format_elapsed(timedelta(minutes=5))
        '5 min'
    """
    total_seconds = int(elapsed.total_seconds())
    if total_seconds <= 0:
        return ""

    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    parts = []
    if hours > 0:
        parts.append(f"{hours} hour")
    if minutes > 0:
        parts.append(f"{minutes} min")
    if seconds > 0:
        parts.append(f"{seconds} sec")

    return " ".join(parts)
