"""
Even distribution of a window's gallons over its duration.

Availability windows, orders and completed-order usage are all assumed to
draw water uniformly, so any sub-interval receives ``rate * overlap``.
"""

from datetime import date, datetime, timedelta
from typing import List

SECONDS_PER_HOUR = 3600


def duration_hours(start: datetime, end: datetime) -> int:
    """Whole hours between two timestamps, truncated, never less than 1."""
    hours = int((end - start).total_seconds() // SECONDS_PER_HOUR)
    return max(1, hours)


def hourly_rate(start: datetime, end: datetime, total_gallons: float) -> float:
    return total_gallons / duration_hours(start, end)


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """Half-open overlap of [a_start, a_end) and [b_start, b_end)."""
    return a_start < b_end and a_end > b_start


def rate_for_slice(
    start: datetime,
    end: datetime,
    total_gallons: float,
    slice_start: datetime,
    slice_end: datetime,
) -> float:
    """Hourly rate the window contributes to a slice, 0.0 if they don't overlap."""
    if not overlaps(slice_start, slice_end, start, end):
        return 0.0
    return hourly_rate(start, end, total_gallons)


def daily_slices(start: datetime, end: datetime) -> List[date]:
    """Calendar days touched by [start, end); an end at midnight adds no day."""
    days = []
    current = start.date()
    last = max(current, (end - timedelta(microseconds=1)).date())
    while current <= last:
        days.append(current)
        current += timedelta(days=1)
    return days


def daily_rate(start: datetime, end: datetime, total_gallons: float) -> float:
    return total_gallons / len(daily_slices(start, end))
