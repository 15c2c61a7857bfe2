"""
Unit tests for the data.gov.sg client.

The HTTP session is mocked; no network access is needed.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from hdbtrends.config import DataSourceConfig
from hdbtrends.core.constants import MONTH_QUERY_LIMIT, RECORD_FIELDS
from hdbtrends.datasource.client import DataGovClient
from hdbtrends.exceptions import DataSourceError


def _response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = "OK" if status_code < 400 else "Error"
    response.json.return_value = payload
    return response


def _rows_payload(rows):
    return {"success": True, "result": {"records": rows}}


def _row(month, price="500000"):
    return {
        "_id": 1,
        "month": month,
        "town": "ANG MO KIO",
        "flat_type": "4 ROOM",
        "resale_price": price,
        "floor_area_sqm": "92",
        "remaining_lease": "61 years 04 months",
    }


@pytest.fixture
def config():
    return DataSourceConfig(
        base_url="https://example.test/datastore_search",
        dataset_id="resale-dataset",
        months_to_fetch=3,
        chunk_size=2,
        request_delay=0,
        request_timeout=5,
        max_retries=0,
        snapshot_path=None,
    )


@pytest.fixture
def session():
    return MagicMock()


class TestMonthsToFetch:
    """Tests for DataGovClient.months_to_fetch."""

    def test_newest_first_across_year(self):
        assert DataGovClient.months_to_fetch("2024-02", 3) == ["2024-02", "2024-01", "2023-12"]

    def test_default_window_length(self):
        months = DataGovClient.months_to_fetch("2024-05", 24)
        assert len(months) == 24
        assert months[-1] == "2022-06"


class TestFetchLatestMonth:
    """Tests for DataGovClient.fetch_latest_month."""

    def test_returns_month(self, config, session):
        session.get.return_value = _response(payload=_rows_payload([{"month": "2024-05"}]))
        client = DataGovClient(config=config, session=session)

        assert client.fetch_latest_month() == "2024-05"

        params = session.get.call_args.kwargs["params"]
        assert params["resource_id"] == "resale-dataset"
        assert params["sort"] == "_id desc"
        assert params["limit"] == 1

    def test_empty_result_raises(self, config, session):
        session.get.return_value = _response(payload=_rows_payload([]))
        client = DataGovClient(config=config, session=session)

        with pytest.raises(DataSourceError):
            client.fetch_latest_month()

    def test_http_error_raises(self, config, session):
        session.get.return_value = _response(status_code=404)
        client = DataGovClient(config=config, session=session)

        with pytest.raises(DataSourceError) as exc_info:
            client.fetch_latest_month()
        assert "Failed to fetch latest record" in exc_info.value.message


class TestFetchMonth:
    """Tests for DataGovClient.fetch_month."""

    def test_parses_records(self, config, session):
        session.get.return_value = _response(payload=_rows_payload([_row("2024-05"), _row("2024-05", "610000")]))
        client = DataGovClient(config=config, session=session)

        records = client.fetch_month("2024-05")

        assert [r.resale_price for r in records] == ["500000", "610000"]
        assert records[0].remaining_lease == "61 years 04 months"

        params = session.get.call_args.kwargs["params"]
        assert json.loads(params["filters"]) == {"month": "2024-05"}
        assert params["limit"] == MONTH_QUERY_LIMIT
        assert params["fields"] == ",".join(RECORD_FIELDS)

    def test_failure_returns_empty(self, config, session):
        session.get.return_value = _response(status_code=500)
        client = DataGovClient(config=config, session=session)

        assert client.fetch_month("2024-05") == []

    def test_connection_error_returns_empty(self, config, session):
        session.get.side_effect = requests.ConnectionError("connection refused")
        client = DataGovClient(config=config, session=session)

        assert client.fetch_month("2024-05") == []

    def test_unsuccessful_payload_returns_empty(self, config, session):
        session.get.return_value = _response(payload={"success": False})
        client = DataGovClient(config=config, session=session)

        assert client.fetch_month("2024-05") == []

    @patch("hdbtrends.datasource.client.time.sleep")
    def test_retries_transient_errors(self, mock_sleep, config, session):
        config.max_retries = 1
        session.get.side_effect = [
            _response(status_code=503),
            _response(payload=_rows_payload([_row("2024-05")])),
        ]
        client = DataGovClient(config=config, session=session)

        records = client.fetch_month("2024-05")

        assert len(records) == 1
        assert session.get.call_count == 2
        mock_sleep.assert_called_once_with(1.0)


class TestFetchAllRecords:
    """Tests for DataGovClient.fetch_all_records."""

    @staticmethod
    def _router(failing_month=None):
        def get(url, params=None, timeout=None):
            if "sort" in params:
                return _response(payload=_rows_payload([{"month": "2024-02"}]))
            month = json.loads(params["filters"])["month"]
            if month == failing_month:
                return _response(status_code=500)
            return _response(payload=_rows_payload([_row(month)]))
        return get

    def test_fetches_window_newest_first(self, config, session):
        session.get.side_effect = self._router()
        client = DataGovClient(config=config, session=session)

        records = client.fetch_all_records()

        assert [r.month for r in records] == ["2024-02", "2024-01", "2023-12"]

    def test_failed_month_is_skipped(self, config, session):
        session.get.side_effect = self._router(failing_month="2024-01")
        client = DataGovClient(config=config, session=session)

        records = client.fetch_all_records()

        assert [r.month for r in records] == ["2024-02", "2023-12"]

    def test_latest_month_failure_raises(self, config, session):
        session.get.return_value = _response(status_code=500)
        client = DataGovClient(config=config, session=session)

        with pytest.raises(DataSourceError):
            client.fetch_all_records()
