"""
Unit tests for backend/core/dates.py
"""
from datetime import datetime

import pytest

from backend.core.dates import (
    Streaks,
    clamp,
    compute_streaks,
    diff_days,
    is_completed_day,
    local_iso_date,
    round_half_up,
)
from tests.fakes import history_entry

pytestmark = pytest.mark.unit


class TestDateHelpers:
    def test_local_iso_date_formats_fixed_width(self):
        assert local_iso_date(datetime(2024, 3, 5, 23, 59)) == "2024-03-05"

    def test_diff_days_across_month(self):
        assert diff_days("2024-03-01", "2024-02-28") == 2
        assert diff_days("2024-02-28", "2024-03-01") == -2

    def test_clamp(self):
        assert clamp(1.5, 0, 1) == 1
        assert clamp(-3, 0, 1) == 0
        assert clamp(0.4, 0, 1) == 0.4

    def test_round_half_up(self):
        assert round_half_up(62.5) == 63
        assert round_half_up(0.5) == 1
        assert round_half_up(99.4) == 99


class TestIsCompletedDay:
    def test_target_met(self):
        assert is_completed_day(50, 50) is True
        assert is_completed_day(60, 50) is True

    def test_zero_target_never_completes(self):
        assert is_completed_day(0, 0) is False
        assert is_completed_day(10, 0) is False

    def test_short_of_target(self):
        assert is_completed_day(49, 50) is False


class TestComputeStreaks:
    def test_empty_history(self):
        assert compute_streaks([]) == Streaks(current=0, best=0)

    def test_trailing_run_after_gap(self):
        history = [
            history_entry(1, 10, 10),
            history_entry(2, 10, 10),
            history_entry(3, 5, 10),
            history_entry(4, 10, 10),
        ]
        assert compute_streaks(history) == Streaks(current=1, best=2)

    def test_all_completed(self):
        history = [history_entry(day, 10, 10) for day in range(1, 4)]
        assert compute_streaks(history) == Streaks(current=3, best=3)

    def test_zero_target_breaks_run(self):
        history = [history_entry(1, 0, 0), history_entry(2, 10, 10)]
        assert compute_streaks(history) == Streaks(current=1, best=1)

    def test_order_is_by_day_number_not_input(self):
        history = [
            history_entry(3, 10, 10),
            history_entry(1, 10, 10),
            history_entry(2, 1, 10),
        ]
        assert compute_streaks(history) == Streaks(current=1, best=1)

    def test_skipped_day_resets_current(self):
        history = [
            history_entry(1, 10, 10),
            history_entry(2, 3, 10, skipped=True),
        ]
        assert compute_streaks(history) == Streaks(current=0, best=1)
