"""Tests for services/units.py: volume and flow-rate conversion to gallons."""

import math
import pytest

from aquawise.exceptions import InvalidUnitConversion
from aquawise.services.units import (
    GALLONS_PER_ACRE_FOOT, GALLONS_PER_CUBIC_FOOT, VOLUME_TO_GALLONS,
    from_gallons, is_rate_unit, to_gallons,
)


# ── Volume units ──

class TestVolumeUnits:
    def test_multipliers(self):
        assert to_gallons(3, "gallons") == 3
        assert to_gallons(2.5, "kgal") == 2_500
        assert to_gallons(1, "acre-feet") == 325_851
        assert to_gallons(10, "cubic-feet") == pytest.approx(74.8051948)

    @pytest.mark.parametrize("unit", list(VOLUME_TO_GALLONS))
    @pytest.mark.parametrize("x", [0, 1, 17.25, 1_234_567.891])
    def test_scaled_back_to_gallons(self, unit, x):
        multiplier = VOLUME_TO_GALLONS[unit]
        assert to_gallons(to_gallons(x, unit) / multiplier, "gallons") == pytest.approx(x, abs=1e-6)

    def test_duration_ignored_for_volume(self):
        assert to_gallons(5, "kgal", duration_hours=12) == 5_000
        assert to_gallons(5, "kgal", duration_hours=None) == 5_000

    def test_from_gallons(self):
        assert from_gallons(325_851, "acre-feet") == pytest.approx(1.0)
        assert from_gallons(7_500, "kgal") == pytest.approx(7.5)


# ── Rate units ──

class TestRateUnits:
    def test_one_cfs_for_one_hour(self):
        assert to_gallons(1, "cfs", duration_hours=1) == pytest.approx(26_929.87, abs=1e-3)
        assert to_gallons(1, "cfs", duration_hours=1) == pytest.approx(GALLONS_PER_CUBIC_FOOT * 3600)

    def test_gpm(self):
        assert to_gallons(100, "gpm", duration_hours=2) == pytest.approx(12_000)

    def test_acre_feet_per_day(self):
        assert to_gallons(2, "acre-feet-day", duration_hours=12) == pytest.approx(GALLONS_PER_ACRE_FOOT)

    def test_fractional_duration(self):
        assert to_gallons(60, "gpm", duration_hours=0.5) == pytest.approx(1_800)

    def test_is_rate_unit(self):
        assert is_rate_unit("cfs")
        assert is_rate_unit("acre-feet-day")
        assert not is_rate_unit("kgal")


# ── Errors ──

class TestConversionErrors:
    @pytest.mark.parametrize("unit", ["cfs", "gpm", "acre-feet-day"])
    def test_rate_without_duration(self, unit):
        with pytest.raises(InvalidUnitConversion):
            to_gallons(1, unit)

    @pytest.mark.parametrize("duration", [0, -1, math.nan, math.inf])
    def test_rate_with_unusable_duration(self, duration):
        with pytest.raises(InvalidUnitConversion):
            to_gallons(1, "gpm", duration_hours=duration)

    def test_negative_amount(self):
        with pytest.raises(InvalidUnitConversion):
            to_gallons(-1, "gallons")

    def test_non_finite_amount(self):
        with pytest.raises(InvalidUnitConversion):
            to_gallons(math.inf, "gallons")

    def test_unknown_unit(self):
        with pytest.raises(InvalidUnitConversion, match="Unknown unit"):
            to_gallons(1, "liters")

    def test_from_gallons_rejects_rate_unit(self):
        with pytest.raises(InvalidUnitConversion):
            from_gallons(100, "cfs")

    def test_is_a_value_error_family(self):
        # InvalidUnitConversion is an InvalidInput, answered with HTTP 400
        with pytest.raises(InvalidUnitConversion) as exc_info:
            to_gallons(1, "cfs")
        assert exc_info.value.status_code == 400
