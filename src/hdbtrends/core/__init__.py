"""
Core modules for HDB Resale Trends.

Contains data models and shared constants.
"""

from hdbtrends.core.constants import (
    BoxPlotMetric,
    CategoryMode,
    PRICE_BANDS,
    PRICE_BAND_LABELS,
    SQM_TO_SQFT,
)
from hdbtrends.core.models import (
    BoxPlotStats,
    CategoryPoint,
    CategoryShare,
    DerivedRecord,
    Outlier,
    ResaleRecord,
    SummaryStats,
    TimeSeriesPoint,
    TimeSeriesResult,
)

__all__ = [
    "BoxPlotMetric",
    "CategoryMode",
    "PRICE_BANDS",
    "PRICE_BAND_LABELS",
    "SQM_TO_SQFT",
    "BoxPlotStats",
    "CategoryPoint",
    "CategoryShare",
    "DerivedRecord",
    "Outlier",
    "ResaleRecord",
    "SummaryStats",
    "TimeSeriesPoint",
    "TimeSeriesResult",
]
