from datetime import datetime, timezone

from aquawise.exceptions import InvalidTimeRange


def utcnow() -> datetime:
    """Naive UTC now; all stored timestamps are naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_iso(value: str) -> datetime:
    """Parse an ISO 8601 timestamp (a trailing 'Z' is accepted) into naive UTC."""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise InvalidTimeRange(f"Invalid ISO timestamp: {value!r}")
    return to_utc_naive(parsed)
