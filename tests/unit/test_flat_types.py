"""
Unit tests for flat_types module.
"""

from hdbtrends.utils.flat_types import (
    FLAT_TYPE_ORDER,
    normalize_label,
    flat_type_rank,
    sort_flat_types,
    sort_towns,
)


class TestNormalizeLabel:
    """Tests for normalize_label function."""

    def test_uppercases_and_collapses_spaces(self):
        assert normalize_label("  4   room ") == "4 ROOM"

    def test_multi_generation_spelling(self):
        assert normalize_label("multi generation") == "MULTI-GENERATION"

    def test_empty(self):
        assert normalize_label(None) == ""
        assert normalize_label("") == ""


class TestSortFlatTypes:
    """Tests for flat type ordering."""

    def test_hdb_order(self):
        assert sort_flat_types(["EXECUTIVE", "3 ROOM", "4 ROOM", "3 ROOM"]) == [
            "3 ROOM",
            "4 ROOM",
            "EXECUTIVE",
        ]

    def test_unknown_types_sort_last(self):
        assert sort_flat_types(["STUDIO", "2 ROOM", ""]) == ["2 ROOM", "STUDIO"]

    def test_rank(self):
        assert flat_type_rank("1 ROOM") == 0
        assert flat_type_rank("UNKNOWN") == len(FLAT_TYPE_ORDER)


class TestSortTowns:
    """Tests for sort_towns function."""

    def test_alphabetical_distinct(self):
        assert sort_towns(["YISHUN", "BEDOK", "ANG MO KIO", "BEDOK", ""]) == [
            "ANG MO KIO",
            "BEDOK",
            "YISHUN",
        ]
