"""
Price-Category Breakdown

Monthly transaction counts per fixed price band for the stacked bar chart.
Percentage mode is derived from the counts at display time.
"""

from typing import List, Sequence, Union

from hdbtrends.core.constants import (
    CATEGORY_COUNT_DOMAIN_PADDING,
    DEFAULT_CATEGORY_COUNT_DOMAIN,
    PRICE_BANDS,
    CategoryMode,
)
from hdbtrends.core.models import CategoryPoint, CategoryShare, ResaleRecord
from hdbtrends.analytics.box_plot import group_by_month
from hdbtrends.analytics.normalizer import derive_records, has_valid_price
from hdbtrends.exceptions import ValidationError


def price_band_index(price: float) -> int:
    """Index into PRICE_BANDS of the band holding ``price``.

    Bands are half-open [lower, upper); the first band also takes anything
    below its lower bound and the last band is unbounded above.
    """
    for index, band in enumerate(PRICE_BANDS):
        if band.upper is None or price < band.upper:
            return index
    return len(PRICE_BANDS) - 1


def compute_month_categories(month: str, records: Sequence[ResaleRecord]) -> CategoryPoint:
    counts = [0] * len(PRICE_BANDS)
    total = 0
    for derived in derive_records(records):
        if not has_valid_price(derived):
            continue
        total += 1
        counts[price_band_index(derived.price)] += 1
    return CategoryPoint(month=month, counts=tuple(counts), total_transactions=total)


def compute_category_breakdown(
    records: Sequence[ResaleRecord],
    month_domain: Sequence[str],
) -> List[CategoryPoint]:
    """Price band counts for each month of ``month_domain``.

    Records with an unparseable price are left out of both the bands and
    ``total_transactions``, so the band counts always sum to the total.

    Returns:
        One CategoryPoint per month, or an empty list when there are no records.
    """
    if not records:
        return []

    groups = group_by_month(records)
    return [compute_month_categories(month, groups.get(month, ())) for month in month_domain]


def category_percentages(points: Sequence[CategoryPoint]) -> List[CategoryShare]:
    """Convert band counts to percentage shares of each month's total.

    Shares sum to 100 for months with transactions and are all zero otherwise.
    """
    shares = []
    for point in points:
        total = point.total_transactions
        if total > 0:
            values = tuple(count / total * 100 for count in point.counts)
        else:
            values = (0.0,) * len(point.counts)
        shares.append(CategoryShare(month=point.month, shares=values, total_transactions=total))
    return shares


def category_count_domain(points: Sequence[CategoryPoint]):
    """Y-domain for count mode: (0, largest monthly total * 1.1), (0, 100) when empty."""
    if not points:
        return DEFAULT_CATEGORY_COUNT_DOMAIN
    max_total = max(p.total_transactions for p in points)
    return (0, max_total * CATEGORY_COUNT_DOMAIN_PADDING)


def resolve_mode(mode: Union[str, CategoryMode]) -> CategoryMode:
    """Coerce a mode name to CategoryMode.

    Raises:
        ValidationError: If the name is not a known mode.
    """
    if isinstance(mode, CategoryMode):
        return mode
    try:
        return CategoryMode(mode)
    except ValueError:
        raise ValidationError(
            f"Unknown category mode '{mode}' (expected 'count' or 'percentage')",
            field="mode",
            value=mode,
        )
