"""
Record Normalization

Derives numeric price, floor area and lease years from the string fields of
a ResaleRecord. Each aggregate composes the named predicates it needs, so a
record missing an area still counts towards lease-based aggregates and vice
versa.
"""

import math
from typing import Iterable, List, Optional, Union

import numpy as np

from hdbtrends.core.constants import BoxPlotMetric
from hdbtrends.core.models import DerivedRecord, ResaleRecord
from hdbtrends.exceptions import ValidationError
from hdbtrends.utils.lease_parser import parse_lease_years
from hdbtrends.utils.price_parser import parse_decimal

# Hyndman & Fan type 7, the default of numpy, R and d3
QUANTILE_METHOD = "linear"


def derive_record(record: ResaleRecord) -> DerivedRecord:
    """Parse the numeric fields of a record.

    Args:
        record: Raw resale record.

    Returns:
        DerivedRecord with NaN/None for fields that cannot be parsed.
    """
    area = parse_decimal(record.floor_area_sqm) if record.floor_area_sqm else math.nan
    return DerivedRecord(
        record=record,
        price=parse_decimal(record.resale_price),
        area_sqm=area,
        lease_years=parse_lease_years(record.remaining_lease),
    )


def derive_records(records: Iterable[ResaleRecord]) -> List[DerivedRecord]:
    """Derive every record; invalid rows are kept and filtered by predicates."""
    return [derive_record(r) for r in records]


def has_valid_price(derived: DerivedRecord) -> bool:
    return not math.isnan(derived.price)


def has_valid_area(derived: DerivedRecord) -> bool:
    return not math.isnan(derived.area_sqm) and derived.area_sqm > 0


def has_valid_lease(derived: DerivedRecord) -> bool:
    return derived.lease_years is not None and derived.lease_years > 0


def resolve_metric(metric: Union[str, BoxPlotMetric]) -> BoxPlotMetric:
    """Coerce a metric name to BoxPlotMetric.

    Raises:
        ValidationError: If the name is not a known metric.
    """
    if isinstance(metric, BoxPlotMetric):
        return metric
    try:
        return BoxPlotMetric(metric)
    except ValueError:
        valid = ", ".join(m.value for m in BoxPlotMetric)
        raise ValidationError(
            f"Unknown metric '{metric}' (expected one of: {valid})",
            field="metric",
            value=metric,
        )


def metric_value(derived: DerivedRecord, metric: BoxPlotMetric) -> Optional[float]:
    """Value of ``metric`` for a record, or None when its precondition fails."""
    if not has_valid_price(derived):
        return None
    if metric is BoxPlotMetric.RESALE_PRICE:
        return derived.price
    if metric is BoxPlotMetric.PRICE_PSF:
        return derived.price_psf
    if metric is BoxPlotMetric.PRICE_PER_LEASE:
        return derived.price_per_lease_year
    return None


def quantile(sorted_values: List[float], p: float) -> Optional[float]:
    """Linear-interpolation quantile of already sorted values; None when empty."""
    if not sorted_values:
        return None
    return float(np.quantile(np.asarray(sorted_values, dtype=float), p, method=QUANTILE_METHOD))


def median(sorted_values: List[float]) -> Optional[float]:
    return quantile(sorted_values, 0.5)
