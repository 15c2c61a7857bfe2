"""
Box-Plot Aggregation

Per-month quartile statistics with 1.5 IQR outlier fencing for a selectable
metric (resale price, price per square foot or price per lease year).
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence, Union

from hdbtrends.core.constants import (
    IQR_FENCE_MULTIPLIER,
    MIN_BOX_PLOT_SAMPLES,
    BoxPlotMetric,
)
from hdbtrends.core.models import BoxPlotStats, Outlier, ResaleRecord
from hdbtrends.analytics.normalizer import derive_record, metric_value, quantile, resolve_metric
from hdbtrends.logging_config import get_logger

logger = get_logger(__name__)


def group_by_month(records: Iterable[ResaleRecord]) -> Dict[str, List[ResaleRecord]]:
    """Group records by month key, preserving input order within each group."""
    groups: Dict[str, List[ResaleRecord]] = defaultdict(list)
    for record in records:
        groups[record.month].append(record)
    return groups


def compute_month_stats(
    month: str,
    records: Sequence[ResaleRecord],
    metric: BoxPlotMetric,
) -> Optional[BoxPlotStats]:
    """Box-plot statistics for the records of a single month.

    Records without a metric value, town or flat type are dropped first.

    Returns:
        BoxPlotStats, or None when fewer than MIN_BOX_PLOT_SAMPLES remain.
    """
    points = []
    for record in records:
        derived = derive_record(record)
        value = metric_value(derived, metric)
        if value is None or not record.town or not record.flat_type:
            continue
        points.append((value, derived))

    if len(points) < MIN_BOX_PLOT_SAMPLES:
        logger.debug("Skipping %s: %d valid records for %s", month, len(points), metric.value)
        return None

    values = sorted(value for value, _ in points)
    q1 = quantile(values, 0.25)
    median = quantile(values, 0.5)
    q3 = quantile(values, 0.75)
    iqr = q3 - q1
    lower_fence = q1 - IQR_FENCE_MULTIPLIER * iqr
    upper_fence = q3 + IQR_FENCE_MULTIPLIER * iqr

    outliers = []
    whiskers = []
    for value, derived in points:
        record = derived.record
        if value < lower_fence or value > upper_fence:
            outliers.append(Outlier(
                value=value,
                resale_price=derived.price,
                town=record.town,
                flat_type=record.flat_type,
                remaining_lease=record.remaining_lease,
                floor_area_sqm=record.floor_area_sqm,
            ))
        else:
            whiskers.append(value)

    # Whiskers never end inside the box. With interpolated quartiles the
    # nearest non-outlier can lie above q1 (or below q3) when its neighbour
    # is fenced out.
    lower_whisker = min(min(whiskers), q1) if whiskers else q1
    upper_whisker = max(max(whiskers), q3) if whiskers else q3

    return BoxPlotStats(
        month=month,
        min=lower_whisker,
        q1=q1,
        median=median,
        q3=q3,
        max=upper_whisker,
        outliers=tuple(outliers),
    )


def compute_box_plot_series(
    records: Sequence[ResaleRecord],
    month_domain: Sequence[str],
    metric: Union[str, BoxPlotMetric] = BoxPlotMetric.RESALE_PRICE,
) -> List[BoxPlotStats]:
    """Box-plot statistics for each month of ``month_domain``.

    Args:
        records: Resale records, in any order.
        month_domain: Months to compute, e.g. the visible chart window.
        metric: Metric to plot.

    Returns:
        One BoxPlotStats per month with enough data, in chronological order.
        Sparse months are omitted rather than zero-filled.

    Raises:
        ValidationError: If ``metric`` is not a known metric.
    """
    metric = resolve_metric(metric)
    if not records:
        return []

    groups = group_by_month(records)
    series = []
    for month in month_domain:
        month_records = groups.get(month)
        if not month_records:
            continue
        stats = compute_month_stats(month, month_records, metric)
        if stats is not None:
            series.append(stats)

    return sorted(series, key=lambda s: s.month)
