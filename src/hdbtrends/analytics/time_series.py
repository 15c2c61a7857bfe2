"""
Market Trend Time Series

One point per month of the requested window with transaction count, gross
transaction value, median price per sqft, median price per lease year and
the share of million-dollar transactions. Months without data stay in the
series as gaps so charts break the line instead of dipping to zero.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from hdbtrends.core.constants import (
    COUNT_DOMAIN_PADDING,
    DEFAULT_GROSS_VALUE_DOMAIN,
    DEFAULT_MEDIAN_PRICE_PER_LEASE_DOMAIN,
    DEFAULT_MEDIAN_PSF_DOMAIN,
    DEFAULT_MILLION_PERCENTAGE_DOMAIN,
    DEFAULT_TRANSACTION_COUNT_DOMAIN,
    MILLION_PRICE,
    VALUE_DOMAIN_PADDING,
)
from hdbtrends.core.models import ResaleRecord, TimeSeriesPoint, TimeSeriesResult
from hdbtrends.analytics.box_plot import group_by_month
from hdbtrends.analytics.normalizer import (
    derive_records,
    has_valid_area,
    has_valid_lease,
    has_valid_price,
    median,
)
from hdbtrends.logging_config import get_logger

logger = get_logger(__name__)


def compute_month_point(month: str, records: Sequence[ResaleRecord]) -> TimeSeriesPoint:
    """Trend metrics for one month; a gap point if no record has a valid price."""
    priced = [d for d in derive_records(records) if has_valid_price(d)]
    if not priced:
        return TimeSeriesPoint(month=month)

    prices = [d.price for d in priced]
    psf_values = sorted(d.price_psf for d in priced if has_valid_area(d))
    lease_values = sorted(d.price_per_lease_year for d in priced if has_valid_lease(d))
    million_count = sum(1 for p in prices if p >= MILLION_PRICE)

    return TimeSeriesPoint(
        month=month,
        transaction_count=len(prices),
        gross_transaction_value=float(sum(prices)),
        median_psf=median(psf_values),
        median_price_per_lease=median(lease_values),
        million_unit_percentage=million_count / len(prices) * 100,
    )


def padded_domain(values: Iterable[Optional[float]], padding: float) -> Tuple[float, float]:
    """(0, max * padding) over the defined values; (0, 0) if there are none."""
    defined = [v for v in values if v is not None]
    observed_max = max(defined) if defined else 0
    return (0, observed_max * padding)


def compute_time_series(
    records: Sequence[ResaleRecord],
    month_domain: Sequence[str],
) -> TimeSeriesResult:
    """Trend points and per-metric y-domains for ``month_domain``.

    Args:
        records: Selected resale records.
        month_domain: Months to report, in display order.

    Returns:
        TimeSeriesResult with exactly one point per month of ``month_domain``.
        With no records at all the point list is empty and fixed fallback
        domains are returned.
    """
    if not records:
        return TimeSeriesResult(
            points=(),
            transaction_count_domain=DEFAULT_TRANSACTION_COUNT_DOMAIN,
            gross_transaction_value_domain=DEFAULT_GROSS_VALUE_DOMAIN,
            median_psf_domain=DEFAULT_MEDIAN_PSF_DOMAIN,
            median_price_per_lease_domain=DEFAULT_MEDIAN_PRICE_PER_LEASE_DOMAIN,
            million_unit_percentage_domain=DEFAULT_MILLION_PERCENTAGE_DOMAIN,
        )

    groups = group_by_month(records)
    points: List[TimeSeriesPoint] = [
        compute_month_point(month, groups.get(month, ())) for month in month_domain
    ]
    gaps = sum(1 for p in points if p.is_gap)
    if gaps:
        logger.debug("%d of %d months have no priced transactions", gaps, len(points))

    return TimeSeriesResult(
        points=tuple(points),
        transaction_count_domain=padded_domain(
            (p.transaction_count for p in points), COUNT_DOMAIN_PADDING),
        gross_transaction_value_domain=padded_domain(
            (p.gross_transaction_value for p in points), VALUE_DOMAIN_PADDING),
        median_psf_domain=padded_domain(
            (p.median_psf for p in points), VALUE_DOMAIN_PADDING),
        median_price_per_lease_domain=padded_domain(
            (p.median_price_per_lease for p in points), VALUE_DOMAIN_PADDING),
        million_unit_percentage_domain=padded_domain(
            (p.million_unit_percentage for p in points), VALUE_DOMAIN_PADDING),
    )
