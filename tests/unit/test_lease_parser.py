"""
Unit tests for lease_parser module.
"""

import pytest

from hdbtrends.utils.lease_parser import parse_lease_years


class TestParseLeaseYears:
    """Tests for parse_lease_years function."""

    def test_years_and_months(self):
        assert parse_lease_years("69 years 04 months") == pytest.approx(69 + 4 / 12)

    def test_years_only(self):
        assert parse_lease_years("99 years") == 99.0

    def test_singular_units(self):
        assert parse_lease_years("1 year 1 month") == pytest.approx(1 + 1 / 12)

    def test_months_not_checked_against_twelve(self):
        assert parse_lease_years("70 years 15 months") == pytest.approx(71.25)

    def test_match_inside_longer_text(self):
        assert parse_lease_years("about 60 years 02 months left") == pytest.approx(60 + 2 / 12)

    def test_months_only_is_unparseable(self):
        assert parse_lease_years("11 months") is None

    def test_garbage(self):
        assert parse_lease_years("garbage") is None

    def test_empty(self):
        assert parse_lease_years("") is None
        assert parse_lease_years(None) is None
