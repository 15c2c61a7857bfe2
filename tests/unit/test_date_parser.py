"""
Unit tests for date_parser module.
"""

from datetime import datetime

from hdbtrends.utils.date_parser import (
    parse_month,
    to_month_key,
    shift_month,
    sort_months,
    format_month_year,
)


class TestParseMonth:
    """Tests for parse_month function."""

    def test_valid_month(self):
        assert parse_month("2024-07") == datetime(2024, 7, 1)

    def test_whitespace_is_stripped(self):
        assert parse_month(" 2024-07 ") == datetime(2024, 7, 1)

    def test_month_out_of_range(self):
        assert parse_month("2024-13") is None
        assert parse_month("2024-00") is None

    def test_wrong_format(self):
        assert parse_month("July 2024") is None
        assert parse_month("2024-7") is None
        assert parse_month("2024-07-01") is None

    def test_empty(self):
        assert parse_month("") is None
        assert parse_month(None) is None


class TestShiftMonth:
    """Tests for shift_month function."""

    def test_back_across_year(self):
        assert shift_month("2024-01", -1) == "2023-12"

    def test_forward_across_year(self):
        assert shift_month("2023-12", 1) == "2024-01"

    def test_two_years_back(self):
        assert shift_month("2024-05", -24) == "2022-05"

    def test_zero_offset(self):
        assert shift_month("2024-05", 0) == "2024-05"

    def test_invalid_month(self):
        assert shift_month("bad", -1) is None


class TestMonthHelpers:
    """Tests for to_month_key, sort_months and format_month_year."""

    def test_to_month_key_pads(self):
        assert to_month_key(datetime(2024, 3, 15)) == "2024-03"

    def test_sort_months_dedupes(self):
        assert sort_months(["2024-02", "2023-12", "2024-02", "2024-01"]) == [
            "2023-12",
            "2024-01",
            "2024-02",
        ]

    def test_format_month_year(self):
        assert format_month_year("2024-07") == "Jul 2024"

    def test_format_invalid(self):
        assert format_month_year("bad") == ""
