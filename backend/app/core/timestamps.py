"""Timestamp helpers — UTC normalization and calendar keys.

Invariants:
    - Every datetime compared inside the core is timezone-aware UTC
    - Naive datetimes are interpreted as UTC (SQLite drops tzinfo on read)
"""

from datetime import datetime, timezone


def ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def ensure_utc_optional(value: datetime | None) -> datetime | None:
    return ensure_utc(value) if value is not None else None


def month_key(value: datetime) -> str:
    """'YYYY-MM' of the UTC month."""
    return ensure_utc(value).strftime("%Y-%m")
