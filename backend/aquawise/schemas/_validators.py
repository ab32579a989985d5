from datetime import datetime
from aquawise.timeutil import to_utc_naive


def utc_naive(v: datetime) -> datetime:
    """Stored timestamps are naive UTC; offsets are converted."""
    if v is None:
        return v
    return to_utc_naive(v)


def serialize_utc(dt: datetime):
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.isoformat() + 'Z'
    return dt
