"""
UTC datetime utilities for consistent timezone handling.

All timestamps emitted by the pipeline (e.g. on error envelopes) are
timezone-aware UTC.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Use this instead of:
        - datetime.now() - naive, uses local timezone
        - datetime.utcnow() - naive, deprecated in Python 3.12

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def utc_now_iso() -> str:
    """Return the current UTC time as an ISO 8601 string (e.g. for envelope timestamps)."""
    return utc_now().isoformat()
