"""
Utility modules for HDB Resale Trends.

Provides unified implementations for common parsing and formatting operations.
"""

from hdbtrends.utils.date_parser import (
    format_month_year,
    parse_month,
    shift_month,
    sort_months,
)
from hdbtrends.utils.flat_types import (
    FLAT_TYPE_ORDER,
    sort_flat_types,
    sort_towns,
)
from hdbtrends.utils.lease_parser import parse_lease_years
from hdbtrends.utils.price_parser import (
    format_compact_currency,
    format_currency,
    format_number,
    format_percentage,
    format_psf,
    parse_decimal,
)

__all__ = [
    "format_month_year",
    "parse_month",
    "shift_month",
    "sort_months",
    "FLAT_TYPE_ORDER",
    "sort_flat_types",
    "sort_towns",
    "parse_lease_years",
    "format_compact_currency",
    "format_currency",
    "format_number",
    "format_percentage",
    "format_psf",
    "parse_decimal",
]
