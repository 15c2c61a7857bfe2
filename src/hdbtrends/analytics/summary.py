"""
Summary Statistics

Whole-selection point statistics for the summary cards.
"""

from typing import Sequence

from hdbtrends.core.constants import MILLION_PRICE
from hdbtrends.core.models import ResaleRecord, SummaryStats
from hdbtrends.analytics.normalizer import (
    derive_records,
    has_valid_area,
    has_valid_lease,
    has_valid_price,
    median,
)


def compute_summary_stats(records: Sequence[ResaleRecord]) -> SummaryStats:
    """Count, price/psf/price-per-lease ranges, gross value and million-dollar share.

    Price-per-sqft and price-per-lease statistics are each computed over
    their own subset: a record without an area still counts towards the
    lease statistics.

    Args:
        records: Selected resale records.

    Returns:
        SummaryStats; only ``count`` (0) is set when no record has a valid price.
    """
    priced = [d for d in derive_records(records) if has_valid_price(d)]
    if not priced:
        return SummaryStats(count=0)

    prices = sorted(d.price for d in priced)
    psf_values = sorted(d.price_psf for d in priced if has_valid_area(d))
    lease_values = sorted(d.price_per_lease_year for d in priced if has_valid_lease(d))

    million_count = sum(1 for p in prices if p >= MILLION_PRICE)

    return SummaryStats(
        count=len(prices),
        median_price=median(prices),
        min_price=prices[0],
        max_price=prices[-1],
        median_psf=median(psf_values),
        min_psf=psf_values[0] if psf_values else None,
        max_psf=psf_values[-1] if psf_values else None,
        median_price_per_lease=median(lease_values),
        min_price_per_lease=lease_values[0] if lease_values else None,
        max_price_per_lease=lease_values[-1] if lease_values else None,
        gross_transaction_value=float(sum(prices)),
        million_unit_percentage=million_count / len(prices) * 100,
    )
