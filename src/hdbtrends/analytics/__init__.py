"""
Aggregation pipeline for HDB resale dashboards.

Pure functions that turn a collection of resale records into box-plot
series, global axis domains, summary statistics, trend time series and
price-category breakdowns.
"""

from hdbtrends.analytics.box_plot import compute_box_plot_series
from hdbtrends.analytics.categories import (
    category_count_domain,
    category_percentages,
    compute_category_breakdown,
)
from hdbtrends.analytics.dashboard import DashboardService, DashboardView
from hdbtrends.analytics.domains import compute_global_lease_domain, compute_global_value_domain
from hdbtrends.analytics.filters import RecordFilter, apply_filter, default_filter
from hdbtrends.analytics.summary import compute_summary_stats
from hdbtrends.analytics.time_series import compute_time_series

__all__ = [
    "compute_box_plot_series",
    "category_count_domain",
    "category_percentages",
    "compute_category_breakdown",
    "DashboardService",
    "DashboardView",
    "compute_global_lease_domain",
    "compute_global_value_domain",
    "RecordFilter",
    "apply_filter",
    "default_filter",
    "compute_summary_stats",
    "compute_time_series",
]
