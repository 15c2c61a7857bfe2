"""
Unit tests for summary statistics.
"""

import pytest

from hdbtrends.analytics.summary import compute_summary_stats
from hdbtrends.core.constants import SQM_TO_SQFT
from hdbtrends.core.models import SummaryStats


class TestComputeSummaryStats:
    """Tests for compute_summary_stats function."""

    def test_single_record(self, record_factory):
        stats = compute_summary_stats([record_factory(price="500000", area="100", lease="50 years")])

        assert stats.count == 1
        assert stats.median_price == stats.min_price == stats.max_price == 500000
        assert stats.median_psf == pytest.approx(500000 / (100 * SQM_TO_SQFT))
        assert stats.median_price_per_lease == pytest.approx(10000)
        assert stats.gross_transaction_value == 500000
        assert stats.million_unit_percentage == 0

    def test_price_range_and_gross(self, record_factory):
        records = [record_factory(price=p) for p in ("300000", "500000", "700000", "1100000")]

        stats = compute_summary_stats(records)

        assert stats.count == 4
        assert stats.median_price == pytest.approx(600000)
        assert stats.min_price == 300000
        assert stats.max_price == 1100000
        assert stats.gross_transaction_value == 2600000
        assert stats.million_unit_percentage == pytest.approx(25.0)

    def test_psf_and_lease_use_separate_subsets(self, record_factory):
        records = [
            record_factory(price="400000", area="80", lease=None),
            record_factory(price="600000", area=None, lease="60 years"),
        ]

        stats = compute_summary_stats(records)

        assert stats.count == 2
        assert stats.median_psf == pytest.approx(400000 / (80 * SQM_TO_SQFT))
        assert stats.min_psf == stats.max_psf == stats.median_psf
        assert stats.median_price_per_lease == pytest.approx(10000)

    def test_unparseable_prices_excluded(self, record_factory):
        records = [record_factory(price="n/a"), record_factory(price="450000")]
        stats = compute_summary_stats(records)
        assert stats.count == 1
        assert stats.median_price == 450000

    def test_no_valid_prices(self, record_factory):
        assert compute_summary_stats([record_factory(price="abc")]) == SummaryStats(count=0)

    def test_empty(self):
        stats = compute_summary_stats([])
        assert stats.count == 0
        assert stats.median_price is None
        assert stats.gross_transaction_value is None

    def test_no_area_anywhere(self, record_factory):
        stats = compute_summary_stats([record_factory(area=None)])
        assert stats.median_psf is None
        assert stats.min_psf is None
        assert stats.max_psf is None
