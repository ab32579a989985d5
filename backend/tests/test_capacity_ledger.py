"""Tests for services/capacity_ledger.py: the hour-sweep capacity check."""

import copy
import math
from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from aquawise.exceptions import InvalidQuantity, InvalidTimeRange
from aquawise.services.capacity_ledger import check_capacity

D0 = datetime(2026, 6, 1, 0, 0, 0)
H = timedelta(hours=1)


def window(start, hours, gallons):
    return SimpleNamespace(start_time=start, end_time=start + hours * H, gallons=gallons)


def order(start, hours, gallons, status):
    return SimpleNamespace(start_time=start, end_time=start + hours * H, total_gallons=gallons, status=status)


@pytest.fixture
def day_window():
    # 10,000 gal/hr for 24 hours
    return window(D0, 24, 240_000)


# ── Acceptance and rejection ──

class TestCapacityCheck:
    def test_accepts_within_capacity(self, day_window):
        result = check_capacity(D0 + 5 * H, D0 + 6 * H, 5_000, [day_window], [])
        assert result.ok
        assert result.infeasible_hour is None
        assert result.requested_per_hour == 5_000

    def test_rejects_when_committed_demand_plus_request_exceeds(self, day_window):
        committed = order(D0, 24, 216_000, "approved")  # 9,000 gal/hr
        result = check_capacity(D0 + 5 * H, D0 + 6 * H, 2_000, [day_window], [committed])
        assert not result.ok
        assert result.infeasible_hour == D0 + 5 * H
        assert result.capacity == pytest.approx(10_000)
        assert result.demand == pytest.approx(9_000)

    def test_completed_orders_count_as_demand(self, day_window):
        committed = order(D0, 24, 216_000, "completed")
        assert not check_capacity(D0 + 5 * H, D0 + 6 * H, 2_000, [day_window], [committed]).ok

    @pytest.mark.parametrize("status", ["pending", "rejected"])
    def test_uncommitted_orders_do_not_reserve_capacity(self, day_window, status):
        existing = order(D0, 24, 216_000, status)
        assert check_capacity(D0 + 5 * H, D0 + 6 * H, 2_000, [day_window], [existing]).ok

    def test_exactly_full_hour_is_accepted(self, day_window):
        committed = order(D0, 24, 216_000, "approved")
        assert check_capacity(D0 + 5 * H, D0 + 6 * H, 1_000, [day_window], [committed]).ok

    def test_no_availability_rejects_positive_request(self):
        result = check_capacity(D0, D0 + H, 1, [], [])
        assert not result.ok
        assert result.capacity == 0

    def test_no_availability_accepts_zero_request(self):
        assert check_capacity(D0, D0 + H, 0, [], []).ok

    def test_rejects_at_first_uncovered_hour(self, day_window):
        # Runs two hours past the end of the only window
        result = check_capacity(D0 + 22 * H, D0 + 26 * H, 4_000, [day_window], [])
        assert not result.ok
        assert result.infeasible_hour == D0 + 24 * H

    def test_overlapping_windows_add_up(self):
        windows = [window(D0, 24, 240_000), window(D0 + 6 * H, 6, 30_000)]  # 10k + 5k during 06:00-12:00
        assert check_capacity(D0 + 7 * H, D0 + 8 * H, 14_000, windows, []).ok
        assert not check_capacity(D0 + 13 * H, D0 + 14 * H, 14_000, windows, []).ok

    def test_demand_only_counted_where_it_overlaps(self, day_window):
        committed = order(D0, 4, 36_000, "approved")  # 9,000 gal/hr until 04:00
        assert check_capacity(D0 + 4 * H, D0 + 8 * H, 32_000, [day_window], [committed]).ok
        assert not check_capacity(D0 + 3 * H, D0 + 7 * H, 32_000, [day_window], [committed]).ok

    def test_partial_last_hour_is_checked(self, day_window):
        # 90 minutes: the 23:00 slice is fine, the 00:00 slice is outside availability
        result = check_capacity(D0 + 23 * H, D0 + 24 * H + timedelta(minutes=30), 100, [day_window], [])
        assert not result.ok
        assert result.infeasible_hour == D0 + 24 * H


# ── Rate floor ──

class TestRequestedRate:
    def test_fifty_nine_minutes_counts_as_one_hour(self, day_window):
        result = check_capacity(D0, D0 + timedelta(minutes=59), 7_000, [day_window], [])
        assert result.requested_per_hour == 7_000
        assert result.ok

    def test_multi_hour_rate(self, day_window):
        result = check_capacity(D0, D0 + 4 * H, 20_000, [day_window], [])
        assert result.requested_per_hour == 5_000


# ── Purity ──

class TestStateless:
    def test_repeated_checks_agree_and_leave_inputs_untouched(self, day_window):
        committed = [order(D0, 24, 216_000, "approved")]
        windows = [day_window]
        before = (copy.deepcopy(windows), copy.deepcopy(committed))

        first = check_capacity(D0 + 2 * H, D0 + 3 * H, 1_500, windows, committed)
        second = check_capacity(D0 + 2 * H, D0 + 3 * H, 1_500, windows, committed)

        assert first == second
        assert (windows, committed) == before

    def test_accepts_generators(self, day_window):
        result = check_capacity(D0, D0 + H, 100, (w for w in [day_window]), iter([]))
        assert result.ok


# ── Malformed input ──

class TestMalformedInput:
    def test_start_after_end(self, day_window):
        with pytest.raises(InvalidTimeRange):
            check_capacity(D0 + 2 * H, D0 + H, 100, [day_window], [])

    def test_zero_length(self, day_window):
        with pytest.raises(InvalidTimeRange):
            check_capacity(D0, D0, 100, [day_window], [])

    @pytest.mark.parametrize("gallons", [-1, math.nan, math.inf])
    def test_bad_gallons(self, day_window, gallons):
        with pytest.raises(InvalidQuantity):
            check_capacity(D0, D0 + H, gallons, [day_window], [])

    def test_malformed_window(self):
        bad = SimpleNamespace(start_time=D0 + H, end_time=D0, gallons=100)
        with pytest.raises(InvalidTimeRange):
            check_capacity(D0, D0 + H, 10, [bad], [])
