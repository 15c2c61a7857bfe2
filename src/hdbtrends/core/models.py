"""
Data Models for HDB Resale Trends

Dataclass definitions for raw resale records and the aggregates derived from them.
All result types are frozen: aggregation calls build new values instead of
updating old ones.
"""

import math
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Tuple

from hdbtrends.core.constants import PRICE_BAND_LABELS, SQM_TO_SQFT


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    return str(value)


@dataclass(frozen=True)
class ResaleRecord:
    """A single resale transaction as published by data.gov.sg."""

    month: str  # "YYYY-MM"
    town: str
    flat_type: str
    resale_price: str
    floor_area_sqm: Optional[str] = None
    remaining_lease: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResaleRecord":
        """Build a record from an API row; unknown keys such as ``_id`` are ignored."""
        return cls(
            month=_optional_str(data.get("month")) or "",
            town=_optional_str(data.get("town")) or "",
            flat_type=_optional_str(data.get("flat_type")) or "",
            resale_price=_optional_str(data.get("resale_price")) or "",
            floor_area_sqm=_optional_str(data.get("floor_area_sqm")),
            remaining_lease=_optional_str(data.get("remaining_lease")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class DerivedRecord:
    """Numeric view of a ResaleRecord.

    ``price`` and ``area_sqm`` are NaN when the source field is missing or
    unparseable; ``lease_years`` is None in the same situation.
    """

    record: ResaleRecord
    price: float
    area_sqm: float
    lease_years: Optional[float]

    @property
    def price_psf(self) -> Optional[float]:
        """Price per square foot, or None without a valid price and positive area."""
        if math.isnan(self.price) or math.isnan(self.area_sqm) or self.area_sqm <= 0:
            return None
        return self.price / (self.area_sqm * SQM_TO_SQFT)

    @property
    def price_per_lease_year(self) -> Optional[float]:
        """Price per remaining lease year, or None without a valid price and positive lease."""
        if math.isnan(self.price) or self.lease_years is None or self.lease_years <= 0:
            return None
        return self.price / self.lease_years


@dataclass(frozen=True)
class Outlier:
    """A box-plot point beyond the 1.5 IQR fences, with tooltip context."""

    value: float  # the plotted metric
    resale_price: float
    town: str
    flat_type: str
    remaining_lease: Optional[str] = None
    floor_area_sqm: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class BoxPlotStats:
    """Quartile statistics for one month; min/max exclude outliers."""

    month: str
    min: float
    q1: float
    median: float
    q3: float
    max: float
    outliers: Tuple[Outlier, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["outliers"] = [o.to_dict() for o in self.outliers]
        return data


@dataclass(frozen=True)
class SummaryStats:
    """Point statistics over a whole selection of records."""

    count: int = 0
    median_price: Optional[float] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    median_psf: Optional[float] = None
    min_psf: Optional[float] = None
    max_psf: Optional[float] = None
    median_price_per_lease: Optional[float] = None
    min_price_per_lease: Optional[float] = None
    max_price_per_lease: Optional[float] = None
    gross_transaction_value: Optional[float] = None
    million_unit_percentage: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class TimeSeriesPoint:
    """Market trend metrics for one month. All metrics None marks a gap."""

    month: str
    transaction_count: Optional[int] = None
    gross_transaction_value: Optional[float] = None
    median_psf: Optional[float] = None
    median_price_per_lease: Optional[float] = None
    million_unit_percentage: Optional[float] = None

    @property
    def is_gap(self) -> bool:
        return self.transaction_count is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class TimeSeriesResult:
    """Trend points plus a padded y-domain per metric."""

    points: Tuple[TimeSeriesPoint, ...]
    transaction_count_domain: Tuple[float, float]
    gross_transaction_value_domain: Tuple[float, float]
    median_psf_domain: Tuple[float, float]
    median_price_per_lease_domain: Tuple[float, float]
    million_unit_percentage_domain: Tuple[float, float]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["points"] = [p.to_dict() for p in self.points]
        for key, value in data.items():
            if key.endswith("_domain"):
                data[key] = list(value)
        return data


@dataclass(frozen=True)
class CategoryPoint:
    """Transaction counts per price band for one month."""

    month: str
    counts: Tuple[int, ...] = field(default=(0,) * len(PRICE_BAND_LABELS))
    total_transactions: int = 0

    def count(self, label: str) -> int:
        """Count for the band with the given label."""
        return self.counts[PRICE_BAND_LABELS.index(label)]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary keyed by band label."""
        data: Dict[str, Any] = {"month": self.month}
        data.update(zip(PRICE_BAND_LABELS, self.counts))
        data["total_transactions"] = self.total_transactions
        return data


@dataclass(frozen=True)
class CategoryShare:
    """Percentage share of each price band for one month."""

    month: str
    shares: Tuple[float, ...]
    total_transactions: int

    def share(self, label: str) -> float:
        """Share for the band with the given label."""
        return self.shares[PRICE_BAND_LABELS.index(label)]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary keyed by band label."""
        data: Dict[str, Any] = {"month": self.month}
        data.update(zip(PRICE_BAND_LABELS, self.shares))
        data["total_transactions"] = self.total_transactions
        return data


def records_to_dicts(records: List[ResaleRecord]) -> List[Dict[str, Any]]:
    """Serialize records back to the API row shape."""
    return [r.to_dict() for r in records]
