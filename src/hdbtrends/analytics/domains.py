"""
Global Axis Domains

Domains computed over the full, unfiltered snapshot so that axes and range
selectors stay put while the visible window or filters change.
"""

import math
from typing import Sequence, Tuple, Union

from hdbtrends.core.constants import (
    DEFAULT_LEASE_DOMAIN,
    DEFAULT_VALUE_DOMAIN,
    VALUE_DOMAIN_PADDING,
    BoxPlotMetric,
)
from hdbtrends.core.models import ResaleRecord
from hdbtrends.analytics.box_plot import compute_month_stats, group_by_month
from hdbtrends.analytics.normalizer import resolve_metric
from hdbtrends.utils.lease_parser import parse_lease_years


def compute_global_value_domain(
    records: Sequence[ResaleRecord],
    metric: Union[str, BoxPlotMetric] = BoxPlotMetric.RESALE_PRICE,
) -> Tuple[float, float]:
    """Y-axis domain covering every month's box plot and outliers.

    Args:
        records: The full record snapshot, not the filtered selection.
        metric: Metric plotted on the box plot.

    Returns:
        (0, highest whisker or outlier * 1.05); (0, 1_000_000) for no records.

    Raises:
        ValidationError: If ``metric`` is not a known metric.
    """
    metric = resolve_metric(metric)
    if not records:
        return DEFAULT_VALUE_DOMAIN

    global_max = 0.0
    for month, month_records in group_by_month(records).items():
        stats = compute_month_stats(month, month_records, metric)
        if stats is None:
            continue
        month_max = max([stats.max] + [o.value for o in stats.outliers])
        global_max = max(global_max, month_max)

    return (0, global_max * VALUE_DOMAIN_PADDING)


def compute_global_lease_domain(records: Sequence[ResaleRecord]) -> Tuple[int, int]:
    """Whole-year range of remaining lease across the snapshot.

    Returns:
        (floor(min), ceil(max)) of the parseable leases, or (0, 99) if none parse.
    """
    lease_years = [
        years
        for years in (parse_lease_years(r.remaining_lease) for r in records)
        if years is not None
    ]
    if not lease_years:
        return DEFAULT_LEASE_DOMAIN

    return (math.floor(min(lease_years)), math.ceil(max(lease_years)))
