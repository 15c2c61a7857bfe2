"""
Record Filters and Month Windows

Selection logic for the dashboard: town, flat type, date range and lease
range filters, and the month domain of the visible chart window.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from hdbtrends.core.models import ResaleRecord
from hdbtrends.analytics.domains import compute_global_lease_domain
from hdbtrends.exceptions import ValidationError
from hdbtrends.utils.date_parser import parse_month, sort_months
from hdbtrends.utils.flat_types import sort_flat_types, sort_towns
from hdbtrends.utils.lease_parser import parse_lease_years


@dataclass(frozen=True)
class RecordFilter:
    """User selection applied to the snapshot.

    Empty town and flat type selections match everything. ``date_range`` is
    an inclusive pair of month keys. When ``lease_range`` is set, only
    records with a parseable lease inside the inclusive range match.
    """

    towns: Tuple[str, ...] = ()
    flat_types: Tuple[str, ...] = ()
    date_range: Optional[Tuple[str, str]] = None
    lease_range: Optional[Tuple[float, float]] = None

    def __post_init__(self):
        # Normalize to tuples so the filter stays hashable
        object.__setattr__(self, "towns", tuple(self.towns))
        object.__setattr__(self, "flat_types", tuple(self.flat_types))
        if self.date_range is not None:
            start, end = self.date_range
            if parse_month(start) is None or parse_month(end) is None:
                raise ValidationError(
                    f"Invalid date range: {self.date_range!r}",
                    field="date_range",
                    value=self.date_range,
                )
            if start > end:
                raise ValidationError(
                    f"Date range start {start} is after end {end}",
                    field="date_range",
                    value=self.date_range,
                )
            object.__setattr__(self, "date_range", (start, end))
        if self.lease_range is not None:
            low, high = self.lease_range
            if low > high:
                raise ValidationError(
                    f"Lease range minimum {low} is above maximum {high}",
                    field="lease_range",
                    value=self.lease_range,
                )
            object.__setattr__(self, "lease_range", (low, high))

    def matches(self, record: ResaleRecord) -> bool:
        if self.date_range is not None:
            start, end = self.date_range
            if not start <= record.month <= end:
                return False
        if self.towns and record.town not in self.towns:
            return False
        if self.flat_types and record.flat_type not in self.flat_types:
            return False
        if self.lease_range is not None:
            lease_years = parse_lease_years(record.remaining_lease)
            if lease_years is None:
                return False
            low, high = self.lease_range
            if not low <= lease_years <= high:
                return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "towns": list(self.towns),
            "flat_types": list(self.flat_types),
            "date_range": list(self.date_range) if self.date_range else None,
            "lease_range": list(self.lease_range) if self.lease_range else None,
        }


def apply_filter(records: Iterable[ResaleRecord], record_filter: RecordFilter) -> List[ResaleRecord]:
    """Records matching ``record_filter``, in input order."""
    return [r for r in records if record_filter.matches(r)]


def all_months(records: Iterable[ResaleRecord]) -> List[str]:
    """Distinct months of the snapshot in chronological order."""
    return sort_months(r.month for r in records if r.month)


def chart_month_domain(months: Sequence[str], start: Optional[str], end: Optional[str]) -> List[str]:
    """Inclusive slice of ``months`` from ``start`` to ``end``.

    Returns:
        The window, or an empty list if either bound is missing or unknown.
    """
    if not start or not end or not months:
        return []
    try:
        start_index = list(months).index(start)
        end_index = list(months).index(end)
    except ValueError:
        return []
    return list(months[start_index:end_index + 1])


def default_filter(records: Sequence[ResaleRecord], window_months: int = 12) -> RecordFilter:
    """Initial selection: the latest ``window_months`` months and the full lease range."""
    months = all_months(records)
    date_range = None
    if months:
        start = months[max(0, len(months) - window_months)]
        date_range = (start, months[-1])
    return RecordFilter(
        date_range=date_range,
        lease_range=compute_global_lease_domain(records),
    )


def filter_options(records: Sequence[ResaleRecord]) -> Dict[str, Any]:
    """Values available to the filter widgets."""
    return {
        "towns": sort_towns(r.town for r in records),
        "flat_types": sort_flat_types(r.flat_type for r in records),
        "months": all_months(records),
        "lease_domain": list(compute_global_lease_domain(records)),
    }
