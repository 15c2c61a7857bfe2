"""
Record sources for HDB Resale Trends.

Fetches resale transactions from data.gov.sg or loads them from a local snapshot.
"""

from typing import List, Optional

from hdbtrends.config import get_config
from hdbtrends.core.models import ResaleRecord
from hdbtrends.datasource.client import DataGovClient
from hdbtrends.datasource.loader import load_records, save_records


def get_records(snapshot_path: Optional[str] = None) -> List[ResaleRecord]:
    """Load the configured snapshot if there is one, otherwise fetch from the API.

    Raises:
        DataSourceError: If neither source yields a snapshot.
    """
    path = snapshot_path or get_config().data_source.snapshot_path
    if path:
        return load_records(path)
    return DataGovClient().fetch_all_records()


__all__ = [
    "DataGovClient",
    "get_records",
    "load_records",
    "save_records",
]
