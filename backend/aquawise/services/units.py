"""
Unit conversion for water volumes and flow rates.

Every amount a user enters (availability, orders) is normalized to US
gallons before it is stored or compared. Volume units convert with a fixed
multiplier; flow-rate units need the duration the flow runs for.

No database tables required -- pure calculation logic.
"""

import math
from typing import Optional

from aquawise.exceptions import InvalidUnitConversion


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

GALLONS_PER_KGAL = 1_000
GALLONS_PER_ACRE_FOOT = 325_851
GALLONS_PER_CUBIC_FOOT = 7.48051948

SECONDS_PER_HOUR = 3_600
MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24

# Volume: everything relative to gallons
VOLUME_TO_GALLONS = {
    "gallons":    1.0,
    "kgal":       float(GALLONS_PER_KGAL),
    "acre-feet":  float(GALLONS_PER_ACRE_FOOT),
    "cubic-feet": GALLONS_PER_CUBIC_FOOT,
}

# Rate units; the gallons they produce depend on how long the flow runs
RATE_UNITS = ("cfs", "gpm", "acre-feet-day")

SUPPORTED_UNITS = tuple(VOLUME_TO_GALLONS) + RATE_UNITS


def _validate_amount(amount: float) -> None:
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise InvalidUnitConversion(f"amount must be a number, got {type(amount).__name__}")
    if math.isnan(amount) or math.isinf(amount):
        raise InvalidUnitConversion(f"amount must be finite, got {amount}")
    if amount < 0:
        raise InvalidUnitConversion(f"amount must be non-negative, got {amount}")


def is_rate_unit(unit: str) -> bool:
    return unit in RATE_UNITS


def to_gallons(amount: float, unit: str, duration_hours: Optional[float] = None) -> float:
    """
    Convert an amount in ``unit`` to canonical gallons.

    ``duration_hours`` is required for rate units (cfs, gpm, acre-feet-day)
    and ignored for volume units.

    Raises InvalidUnitConversion for a negative amount, an unknown unit, or
    a rate unit without a positive finite duration.
    """
    _validate_amount(amount)

    if unit in VOLUME_TO_GALLONS:
        return amount * VOLUME_TO_GALLONS[unit]

    if unit not in RATE_UNITS:
        raise InvalidUnitConversion(
            f"Unknown unit '{unit}'. Supported: {', '.join(SUPPORTED_UNITS)}"
        )

    if duration_hours is None:
        raise InvalidUnitConversion(f"Rate unit '{unit}' requires a duration")
    if isinstance(duration_hours, bool) or not isinstance(duration_hours, (int, float)):
        raise InvalidUnitConversion(f"duration must be a number, got {type(duration_hours).__name__}")
    if math.isnan(duration_hours) or math.isinf(duration_hours) or duration_hours <= 0:
        raise InvalidUnitConversion(f"Rate unit '{unit}' requires a positive duration, got {duration_hours}")

    if unit == "cfs":
        return amount * GALLONS_PER_CUBIC_FOOT * duration_hours * SECONDS_PER_HOUR
    if unit == "gpm":
        return amount * duration_hours * MINUTES_PER_HOUR
    # acre-feet-day
    return amount * GALLONS_PER_ACRE_FOOT * (duration_hours / HOURS_PER_DAY)


def from_gallons(gallons: float, unit: str) -> float:
    """Express a gallons value in a volume unit (display only)."""
    if unit in RATE_UNITS:
        raise InvalidUnitConversion(f"Cannot express a volume in rate unit '{unit}'")
    if unit not in VOLUME_TO_GALLONS:
        raise InvalidUnitConversion(
            f"Unknown unit '{unit}'. Supported: {', '.join(VOLUME_TO_GALLONS)}"
        )
    return gallons / VOLUME_TO_GALLONS[unit]
