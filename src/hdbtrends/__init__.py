"""
HDB Resale Trends

Aggregation pipeline and API for a dashboard of Singapore HDB resale
transactions published on data.gov.sg.

Main components:
- analytics: Box plots, global domains, summary stats, trends, price categories
- datasource: data.gov.sg client and offline snapshot loader
- api: Flask REST API server
- cli: Command-line interfaces

Usage:
    from hdbtrends.datasource import get_records
    from hdbtrends.analytics import DashboardService

    service = DashboardService(get_records())
    view = service.build_view()
"""

__version__ = "1.0.0"

from hdbtrends.config import get_config
from hdbtrends.logging_config import setup_logging

__all__ = [
    "__version__",
    "get_config",
    "setup_logging",
]
