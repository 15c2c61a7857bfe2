"""
Dashboard Orchestration

Holds one immutable record snapshot and builds every chart's aggregates for
a given selection. The aggregation functions are pure; the only cache lives
here, as a bounded LRU keyed by (filter, metric).

Usage:
    from hdbtrends.analytics.dashboard import DashboardService

    service = DashboardService(records)
    view = service.build_view(service.default_filter(), "price_psf")
    view.summary.median_price
"""

import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from hdbtrends.config import get_config
from hdbtrends.core.constants import BoxPlotMetric
from hdbtrends.core.models import (
    BoxPlotStats,
    CategoryPoint,
    ResaleRecord,
    SummaryStats,
    TimeSeriesResult,
)
from hdbtrends.analytics.box_plot import compute_box_plot_series
from hdbtrends.analytics.categories import (
    category_count_domain,
    category_percentages,
    compute_category_breakdown,
)
from hdbtrends.analytics.domains import compute_global_lease_domain, compute_global_value_domain
from hdbtrends.analytics.filters import (
    RecordFilter,
    all_months,
    apply_filter,
    chart_month_domain,
    default_filter,
    filter_options,
)
from hdbtrends.analytics.normalizer import resolve_metric
from hdbtrends.analytics.summary import compute_summary_stats
from hdbtrends.analytics.time_series import compute_time_series
from hdbtrends.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DashboardView:
    """Every aggregate the dashboard renders for one selection."""

    record_filter: RecordFilter
    metric: BoxPlotMetric
    month_domain: Tuple[str, ...]
    record_count: int
    box_plot: Tuple[BoxPlotStats, ...]
    value_domain: Tuple[float, float]
    lease_domain: Tuple[int, int]
    summary: SummaryStats
    time_series: TimeSeriesResult
    categories: Tuple[CategoryPoint, ...]
    category_count_domain: Tuple[float, float]

    def to_dict(self, category_mode: str = "count") -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary.

        Args:
            category_mode: "count" for raw band counts, "percentage" for shares.
        """
        if category_mode == "percentage":
            categories = [s.to_dict() for s in category_percentages(self.categories)]
        else:
            categories = [p.to_dict() for p in self.categories]
        return {
            "filter": self.record_filter.to_dict(),
            "metric": self.metric.value,
            "months": list(self.month_domain),
            "record_count": self.record_count,
            "box_plot": [s.to_dict() for s in self.box_plot],
            "value_domain": list(self.value_domain),
            "lease_domain": list(self.lease_domain),
            "summary": self.summary.to_dict(),
            "time_series": self.time_series.to_dict(),
            "categories": categories,
            "category_mode": category_mode,
            "category_count_domain": list(self.category_count_domain),
        }


class DashboardService:
    """Aggregates for one record snapshot, memoized per selection."""

    def __init__(self, records: Sequence[ResaleRecord], cache_size: Optional[int] = None):
        """
        Args:
            records: The full snapshot. It is copied into a tuple and never changed.
            cache_size: Maximum number of memoized views; 0 disables caching.
                Defaults to the configured dashboard cache size.
        """
        config = get_config()
        self.records: Tuple[ResaleRecord, ...] = tuple(records)
        self.cache_size = config.dashboard.cache_size if cache_size is None else cache_size
        self.months: List[str] = all_months(self.records)
        self.lease_domain = compute_global_lease_domain(self.records)
        self._value_domains: Dict[BoxPlotMetric, Tuple[float, float]] = {}
        self._views: "OrderedDict[Tuple[RecordFilter, BoxPlotMetric], DashboardView]" = OrderedDict()
        # Guards _views and _value_domains; the service is shared by request threads
        self._lock = threading.Lock()

        logger.info(
            "Dashboard snapshot: %d records across %d months",
            len(self.records), len(self.months),
        )

    def default_filter(self, window_months: Optional[int] = None) -> RecordFilter:
        if window_months is None:
            window_months = get_config().dashboard.default_window_months
        return default_filter(self.records, window_months)

    def filter_options(self) -> Dict[str, Any]:
        return filter_options(self.records)

    def value_domain(self, metric: Union[str, BoxPlotMetric]) -> Tuple[float, float]:
        """Global box-plot domain for ``metric`` over the whole snapshot."""
        metric = resolve_metric(metric)
        with self._lock:
            domain = self._value_domains.get(metric)
        if domain is None:
            domain = compute_global_value_domain(self.records, metric)
            with self._lock:
                domain = self._value_domains.setdefault(metric, domain)
        return domain

    def month_domain(self, record_filter: RecordFilter) -> List[str]:
        """Visible months for a filter; the whole snapshot when no date range is set."""
        if record_filter.date_range is None:
            return list(self.months)
        start, end = record_filter.date_range
        return chart_month_domain(self.months, start, end)

    def build_view(
        self,
        record_filter: Optional[RecordFilter] = None,
        metric: Union[str, BoxPlotMetric] = BoxPlotMetric.RESALE_PRICE,
    ) -> DashboardView:
        """Aggregates for a selection, served from the cache when possible.

        Raises:
            ValidationError: If ``metric`` is not a known metric.
        """
        metric = resolve_metric(metric)
        if record_filter is None:
            record_filter = self.default_filter()

        key = (record_filter, metric)
        with self._lock:
            cached = self._views.get(key)
            if cached is not None:
                self._views.move_to_end(key)
                return cached

        view = self._compute_view(record_filter, metric)
        if self.cache_size > 0:
            with self._lock:
                # Another thread may have stored the same selection meanwhile
                view = self._views.setdefault(key, view)
                self._views.move_to_end(key)
                while len(self._views) > self.cache_size:
                    self._views.popitem(last=False)
        return view

    def clear_cache(self) -> None:
        with self._lock:
            self._views.clear()
            self._value_domains.clear()

    def _compute_view(self, record_filter: RecordFilter, metric: BoxPlotMetric) -> DashboardView:
        selected = apply_filter(self.records, record_filter)
        months = self.month_domain(record_filter)
        logger.debug(
            "Computing view for %d/%d records, %d months, metric=%s",
            len(selected), len(self.records), len(months), metric.value,
        )

        categories = compute_category_breakdown(selected, months)
        return DashboardView(
            record_filter=record_filter,
            metric=metric,
            month_domain=tuple(months),
            record_count=len(selected),
            box_plot=tuple(compute_box_plot_series(selected, months, metric)),
            value_domain=self.value_domain(metric),
            lease_domain=self.lease_domain,
            summary=compute_summary_stats(selected),
            time_series=compute_time_series(selected, months),
            categories=tuple(categories),
            category_count_domain=category_count_domain(categories),
        )
