"""Datetime utilities for timezone-aware UTC timestamps.

Ledger timestamps are always stored and returned as aware UTC values.
Callers may supply their own clock value (tests, replayed imports); those
values are normalized here before they reach the database.

Usage:
    from src.utils.datetime_utils import utc_now, ensure_utc

    timestamp = utc_now()
    recorded_at = ensure_utc(supplied_value)
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize a datetime to aware UTC.

    Naive values are assumed to already be UTC (SQLite drops tzinfo on
    storage). Aware values in another zone are converted.

    Args:
        value: Datetime to normalize, or None

    Returns:
        Aware UTC datetime, or None if value was None
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
