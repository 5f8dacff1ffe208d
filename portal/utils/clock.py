"""
Clock helper - every timestamp in the portal is naive UTC.

Postgres `TIMESTAMP` columns and SQLite both hand back naive values, so
deadlines, applied_at and updated_at are compared without tzinfo.
"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current time as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are assumed UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
