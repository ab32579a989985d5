"""
Capacity ledger: can a candidate water order be accepted?

The candidate's span is swept one hour at a time. For every hour slice the
hourly rates of all overlapping availability windows are summed into the
capacity, and the hourly rates of all overlapping approved/completed orders
into the committed demand. The candidate is rejected at the first hour where
``demand + requested_per_hour`` exceeds capacity.

Pending orders do not reserve capacity. The check performs no I/O and never
mutates its inputs; callers fetch windows and orders beforehand.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Optional

from aquawise.exceptions import InvalidQuantity, InvalidTimeRange
from aquawise.models.water_order import COMMITTED_STATUSES
from aquawise.services.interval_rate import hourly_rate, rate_for_slice

# Absorbs floating-point drift when demand exactly equals capacity
EPSILON = 1e-6

HOUR = timedelta(hours=1)


@dataclass(frozen=True)
class CapacityResult:
    ok: bool
    requested_per_hour: float
    infeasible_hour: Optional[datetime] = None
    capacity: Optional[float] = None
    demand: Optional[float] = None


def _validate_range(start: datetime, end: datetime, label: str) -> None:
    if start >= end:
        raise InvalidTimeRange(f"{label} must start before it ends ({start.isoformat()} >= {end.isoformat()})")


def _validate_gallons(gallons: float, label: str) -> None:
    if gallons is None or math.isnan(gallons) or math.isinf(gallons):
        raise InvalidQuantity(f"{label} gallons must be finite, got {gallons}")
    if gallons < 0:
        raise InvalidQuantity(f"{label} gallons must be non-negative, got {gallons}")


def check_capacity(
    start: datetime,
    end: datetime,
    total_gallons: float,
    windows: Iterable,
    orders: Iterable,
) -> CapacityResult:
    """
    Run the hour sweep for a candidate order spanning [start, end).

    Args:
        start, end: candidate span, naive UTC.
        total_gallons: candidate volume in canonical gallons.
        windows: objects with ``start_time``, ``end_time`` and ``gallons``.
        orders: objects with ``start_time``, ``end_time``, ``total_gallons``
            and ``status``; only approved/completed orders are counted.

    Returns:
        CapacityResult. On rejection it names the first infeasible hour and
        the capacity and demand seen in that hour.

    Raises:
        InvalidTimeRange: a span that does not start before it ends.
        InvalidQuantity: negative or non-finite gallons.
    """
    _validate_range(start, end, "Order")
    _validate_gallons(total_gallons, "Order")

    windows = list(windows)
    for window in windows:
        _validate_range(window.start_time, window.end_time, "Availability window")
        _validate_gallons(window.gallons, "Availability window")

    committed = [o for o in orders if o.status in COMMITTED_STATUSES]
    for order in committed:
        _validate_range(order.start_time, order.end_time, "Committed order")

    requested_per_hour = hourly_rate(start, end, total_gallons)

    hour_start = start
    while hour_start < end:
        hour_end = hour_start + HOUR

        capacity = sum(
            rate_for_slice(w.start_time, w.end_time, w.gallons, hour_start, hour_end)
            for w in windows
        )
        demand = sum(
            rate_for_slice(o.start_time, o.end_time, o.total_gallons, hour_start, hour_end)
            for o in committed
        )

        if demand + requested_per_hour > capacity + EPSILON:
            return CapacityResult(
                ok=False,
                requested_per_hour=requested_per_hour,
                infeasible_hour=hour_start,
                capacity=capacity,
                demand=demand,
            )

        hour_start = hour_end

    return CapacityResult(ok=True, requested_per_hour=requested_per_hour)
