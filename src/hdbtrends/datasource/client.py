"""
data.gov.sg Resale Dataset Client

Fetches the trailing window of HDB resale transactions from the data.gov.sg
datastore API.

Strategy:
- Ask for the single newest row to find the latest published month
- Walk back ``months_to_fetch`` months from there
- Fetch one month per request, ``chunk_size`` months concurrently, pausing
  ``request_delay`` seconds between chunks
- A month that keeps failing is logged and skipped; only failing to find
  the latest month is fatal

Usage:
    from hdbtrends.datasource.client import DataGovClient

    client = DataGovClient()
    records = client.fetch_all_records()
"""

import json
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

import requests

from hdbtrends.config import DataSourceConfig, get_config
from hdbtrends.core.constants import MONTH_QUERY_LIMIT, RECORD_FIELDS
from hdbtrends.core.models import ResaleRecord
from hdbtrends.exceptions import DataSourceError, NetworkError, ParsingError
from hdbtrends.logging_config import get_logger
from hdbtrends.utils.date_parser import parse_month, shift_month

logger = get_logger(__name__)

# Status codes worth retrying
RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}
INITIAL_BACKOFF_SECONDS = 1.0
BACKOFF_MULTIPLIER = 2.0


class DataGovClient:
    """Client for the HDB resale prices dataset on data.gov.sg."""

    def __init__(
        self,
        config: Optional[DataSourceConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            config: Data source settings. Defaults to the global config.
            session: HTTP session to use (injectable for tests).
        """
        self.config = config or get_config().data_source
        self._session = session or requests.Session()
        self._session.headers.update({
            "User-Agent": "hdbtrends/1.0 (resale market dashboard)",
        })

    # =========================================================================
    # HTTP
    # =========================================================================

    def _get_json(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """GET the datastore endpoint with retries.

        Raises:
            NetworkError: If the request still fails after all retries.
            ParsingError: If the response body is not JSON.
        """
        url = self.config.base_url
        backoff = INITIAL_BACKOFF_SECONDS
        last_error: Optional[NetworkError] = None

        for attempt in range(self.config.max_retries + 1):
            if attempt > 0:
                logger.debug("Retry %d for %s in %.1fs", attempt, params, backoff)
                time.sleep(backoff)
                backoff *= BACKOFF_MULTIPLIER

            try:
                response = self._session.get(url, params=params, timeout=self.config.request_timeout)
            except requests.RequestException as e:
                last_error = NetworkError(f"Request failed: {e}", url=url)
                continue

            if response.status_code in RETRYABLE_STATUS_CODES:
                last_error = NetworkError(
                    f"HTTP {response.status_code}: {response.reason}",
                    url=url,
                    status_code=response.status_code,
                )
                continue

            if not response.ok:
                raise NetworkError(
                    f"HTTP {response.status_code}: {response.reason}",
                    url=url,
                    status_code=response.status_code,
                )

            try:
                return response.json()
            except ValueError as e:
                raise ParsingError(f"Invalid JSON response: {e}", source=url)

        raise last_error

    @staticmethod
    def _extract_rows(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
        if not payload.get("success"):
            raise ParsingError("Datastore reported an unsuccessful query")
        result = payload.get("result") or {}
        rows = result.get("records")
        if not isinstance(rows, list):
            raise ParsingError("Datastore response has no record list")
        return rows

    # =========================================================================
    # Fetching
    # =========================================================================

    def fetch_latest_month(self) -> str:
        """Find the most recent month published in the dataset.

        Raises:
            DataSourceError: If the request fails or no month is returned.
        """
        params = {
            "resource_id": self.config.dataset_id,
            "limit": 1,
            "sort": "_id desc",
            "fields": "month",
        }
        try:
            rows = self._extract_rows(self._get_json(params))
        except DataSourceError as e:
            raise DataSourceError(f"Failed to fetch latest record: {e.message}")

        latest = rows[0].get("month") if rows else None
        if parse_month(latest) is None:
            raise DataSourceError("Could not determine the latest available month from the API.")
        return latest

    @staticmethod
    def months_to_fetch(latest_month: str, count: int) -> List[str]:
        """``count`` consecutive months ending at ``latest_month``, newest first.

        Example:
            >>> DataGovClient.months_to_fetch("2024-02", 3)
            ["2024-02", "2024-01", "2023-12"]
        """
        return [shift_month(latest_month, -offset) for offset in range(count)]

    def fetch_month(self, month: str) -> List[ResaleRecord]:
        """Fetch every transaction of one month.

        Failures are logged and yield an empty list so one bad month does not
        sink the whole snapshot.
        """
        params = {
            "resource_id": self.config.dataset_id,
            "filters": json.dumps({"month": month}),
            "limit": MONTH_QUERY_LIMIT,
            "fields": ",".join(RECORD_FIELDS),
        }
        try:
            rows = self._extract_rows(self._get_json(params))
        except DataSourceError as e:
            logger.warning("Could not fetch data for %s: %s", month, e.message)
            return []

        if len(rows) >= MONTH_QUERY_LIMIT:
            logger.warning("Month %s hit the %d row limit; data may be truncated", month, MONTH_QUERY_LIMIT)
        return [ResaleRecord.from_dict(row) for row in rows]

    def fetch_all_records(self) -> List[ResaleRecord]:
        """Fetch the configured trailing window of months.

        Returns:
            Records of every month that could be fetched, newest month first.

        Raises:
            DataSourceError: If the latest month cannot be determined.
        """
        latest = self.fetch_latest_month()
        months = self.months_to_fetch(latest, self.config.months_to_fetch)
        chunk_size = self.config.chunk_size
        logger.info(
            "Fetching %d months ending %s in chunks of %d",
            len(months), latest, chunk_size,
        )

        records: List[ResaleRecord] = []
        with ThreadPoolExecutor(max_workers=chunk_size, thread_name_prefix="month_fetch") as executor:
            for start in range(0, len(months), chunk_size):
                chunk = months[start:start + chunk_size]
                # map() keeps results in chunk order
                for month, month_records in zip(chunk, executor.map(self.fetch_month, chunk)):
                    logger.debug("Fetched %d records for %s", len(month_records), month)
                    records.extend(month_records)

                if start + chunk_size < len(months):
                    time.sleep(self.config.request_delay)

        logger.info("Fetched %d records", len(records))
        return records
