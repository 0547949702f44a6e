"""
UTC-first datetime utilities for the Clinic Service API.

All timestamps written by the service are generated by the application in UTC
and stored as ISO 8601 strings with a 'Z' suffix (SQLite stores them as TEXT).

Usage:
    from core.datetime_utils import utc_now, format_iso

    created_at = format_iso(utc_now())  # "2024-01-15T05:00:00Z"
"""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Get current datetime in UTC with timezone info.

    Returns:
        datetime: Current time as timezone-aware datetime in UTC.
    """
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """
    Convert a datetime to UTC.

    - If datetime is naive (no timezone), assumes it's already UTC
    - If datetime has timezone, converts to UTC
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_iso(dt: datetime) -> str:
    """
    Format datetime to ISO 8601 string with UTC timezone.

    Example:
        >>> format_iso(datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc))
        '2024-01-15T10:30:00Z'
    """
    # Use 'Z' suffix instead of '+00:00' for cleaner output
    return to_utc(dt).strftime("%Y-%m-%dT%H:%M:%SZ")


def utc_timestamp() -> str:
    """Current UTC time formatted for storage and API responses."""
    return format_iso(utc_now())
