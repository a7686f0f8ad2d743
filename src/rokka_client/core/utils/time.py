"""
Time-related utilities for the client.

The API exchanges timestamps as ISO-8601 strings. User metadata dates are
always sent in UTC with millisecond precision and a literal ``Z`` suffix,
e.g. ``2024-01-15T10:42:31.123Z``.
"""

from datetime import datetime, timezone


def to_utc(value: datetime) -> datetime:
    """Return ``value`` converted to UTC.

    Naive datetimes are taken to already be in UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_api_precision(value: datetime) -> datetime:
    """Return ``value`` in UTC, truncated to whole milliseconds."""
    utc_value = to_utc(value)
    return utc_value.replace(microsecond=utc_value.microsecond // 1000 * 1000)


def format_api_datetime(value: datetime) -> str:
    """Format a datetime the way the API expects user metadata dates.

    Example:
        2024-01-15T10:42:31.123Z
    """
    utc_value = to_api_precision(value)
    return utc_value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc_value.microsecond // 1000:03d}Z"


def parse_api_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp returned by the API into an aware datetime."""
    parsed = datetime.fromisoformat(value.strip())
    return to_utc(parsed)
