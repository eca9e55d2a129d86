"""Tests for listing date windows."""

from datetime import date

import pytest

from gamerly.services.date_ranges import resolve_date_range, trending_dates

TODAY = date(2024, 6, 15)


class TestRangePresets:
    @pytest.mark.parametrize(
        "range_name, expected",
        [
            ("today", ("2024-06-15", "2024-06-15")),
            ("week", ("2024-06-08", "2024-06-15")),
            ("year", ("2023-06-15", "2024-06-15")),
            ("upcoming", ("2024-06-15", "2024-09-13")),
            (None, ("2000-01-01", "2024-06-15")),
        ],
    )
    def test_preset_windows(self, range_name, expected):
        assert resolve_date_range(None, range_name, TODAY) == expected

    @pytest.mark.parametrize("range_name", ["today", "week", "year", "upcoming", None, "decade"])
    def test_start_never_after_end(self, range_name):
        start, end = resolve_date_range(None, range_name, TODAY)
        assert start <= end

    def test_unknown_range_uses_epoch_start(self):
        assert resolve_date_range(None, "decade", TODAY) == ("2000-01-01", "2024-06-15")

    def test_year_from_leap_day(self):
        assert resolve_date_range(None, "year", date(2024, 2, 29)) == ("2023-02-28", "2024-02-29")


class TestExplicitDates:
    def test_pair_passes_through(self):
        assert resolve_date_range("2024-01-01,2024-02-01", "week", TODAY) == ("2024-01-01", "2024-02-01")

    def test_missing_end_defaults_to_today(self):
        assert resolve_date_range("2024-01-01", None, TODAY) == ("2024-01-01", "2024-06-15")

    def test_empty_end_defaults_to_today(self):
        assert resolve_date_range("2024-01-01,", None, TODAY) == ("2024-01-01", "2024-06-15")

    def test_empty_dates_falls_back_to_range(self):
        assert resolve_date_range("", "today", TODAY) == ("2024-06-15", "2024-06-15")


def test_trending_dates():
    assert trending_dates(TODAY) == "2024-01-01,2024-06-15"
