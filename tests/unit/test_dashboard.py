"""
Unit tests for the dashboard service.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from hdbtrends.analytics.box_plot import compute_box_plot_series
from hdbtrends.analytics.dashboard import DashboardService
from hdbtrends.analytics.filters import RecordFilter
from hdbtrends.analytics.summary import compute_summary_stats
from hdbtrends.core.constants import BoxPlotMetric
from hdbtrends.exceptions import ValidationError


@pytest.fixture
def service(test_config, sample_records):
    return DashboardService(sample_records, cache_size=4)


class TestDashboardService:
    """Tests for DashboardService."""

    def test_snapshot_properties(self, service):
        assert service.months == ["2024-01", "2024-02", "2024-03"]
        assert service.lease_domain == (55, 91)

    def test_view_matches_aggregators(self, service, sample_records):
        record_filter = RecordFilter(towns=["ANG MO KIO"])

        view = service.build_view(record_filter, "price_psf")

        selected = [r for r in sample_records if r.town == "ANG MO KIO"]
        assert view.record_count == len(selected)
        assert view.metric is BoxPlotMetric.PRICE_PSF
        assert view.month_domain == ("2024-01", "2024-02", "2024-03")
        assert list(view.box_plot) == compute_box_plot_series(selected, service.months, "price_psf")
        assert view.summary == compute_summary_stats(selected)
        assert len(view.time_series.points) == 3
        assert len(view.categories) == 3

    def test_value_domain_ignores_filter(self, service):
        narrow = service.build_view(RecordFilter(towns=["BEDOK"]))
        wide = service.build_view(RecordFilter())
        assert narrow.value_domain == wide.value_domain

    def test_date_range_limits_months(self, service):
        view = service.build_view(RecordFilter(date_range=("2024-02", "2024-03")))
        assert view.month_domain == ("2024-02", "2024-03")
        assert [p.month for p in view.time_series.points] == ["2024-02", "2024-03"]

    def test_default_filter_used_when_none(self, service):
        view = service.build_view()
        assert view.record_filter == service.default_filter()
        assert view.record_filter.lease_range == (55, 91)

    def test_views_are_cached(self, service):
        first = service.build_view(RecordFilter(), "resale_price")
        second = service.build_view(RecordFilter(), BoxPlotMetric.RESALE_PRICE)
        assert first is second

    def test_cache_eviction(self, test_config, sample_records):
        service = DashboardService(sample_records, cache_size=1)
        first = service.build_view(RecordFilter())
        service.build_view(RecordFilter(towns=["BEDOK"]))
        assert service.build_view(RecordFilter()) is not first

    def test_cache_disabled(self, test_config, sample_records):
        service = DashboardService(sample_records, cache_size=0)
        assert service.build_view(RecordFilter()) is not service.build_view(RecordFilter())

    def test_clear_cache(self, service):
        first = service.build_view(RecordFilter())
        service.clear_cache()
        second = service.build_view(RecordFilter())
        assert first is not second
        assert first == second

    def test_unknown_metric(self, service):
        with pytest.raises(ValidationError):
            service.build_view(RecordFilter(), "bogus")

    def test_to_dict_percentage_mode(self, service):
        data = service.build_view(RecordFilter()).to_dict(category_mode="percentage")
        assert data["category_mode"] == "percentage"
        assert data["months"] == ["2024-01", "2024-02", "2024-03"]
        jan = data["categories"][0]
        assert jan[">=1m"] == pytest.approx(100 / 6)
        assert data["value_domain"] == [0, pytest.approx(1260000)]

    def test_empty_snapshot(self, test_config):
        view = DashboardService([]).build_view()
        assert view.record_count == 0
        assert view.box_plot == ()
        assert view.categories == ()
        assert view.time_series.points == ()
        assert view.value_domain == (0, 1_000_000)
        assert view.category_count_domain == (0, 100)


class TestConcurrentAccess:
    """Tests for sharing one DashboardService between request threads."""

    def test_parallel_builds_with_eviction(self, test_config, sample_records):
        service = DashboardService(sample_records, cache_size=2)
        filters = [
            RecordFilter(),
            RecordFilter(towns=["BEDOK"]),
            RecordFilter(flat_types=["4 ROOM"]),
        ]
        expected = {f: DashboardService(sample_records, cache_size=0).build_view(f) for f in filters}

        def build(index):
            record_filter = filters[index % len(filters)]
            return record_filter, service.build_view(record_filter)

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(build, range(600)))

        for record_filter, view in results:
            assert view == expected[record_filter]
        assert len(service._views) <= 2

    def test_parallel_value_domains(self, test_config, sample_records):
        service = DashboardService(sample_records)
        metrics = [m.value for m in BoxPlotMetric] * 50

        with ThreadPoolExecutor(max_workers=8) as executor:
            domains = list(executor.map(service.value_domain, metrics))

        for metric, domain in zip(metrics, domains):
            assert domain == service.value_domain(metric)
        assert set(service._value_domains) == set(BoxPlotMetric)
