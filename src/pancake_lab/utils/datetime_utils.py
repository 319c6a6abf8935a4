"""Datetime utilities for timezone-aware UTC timestamps.

Usage:
    from pancake_lab.utils.datetime_utils import utc_now, utc_timestamp

    record = f"[{utc_timestamp()}] something happened"
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime.

    This is the replacement for the deprecated datetime.utcnow().

    Returns:
        Current UTC datetime with timezone info
    """
    return datetime.now(timezone.utc)


def utc_timestamp() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return utc_now().isoformat()
