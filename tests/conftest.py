"""
Pytest Configuration and Fixtures

Provides shared fixtures for all tests.
"""

from pathlib import Path
from typing import Callable, List, Optional

import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from hdbtrends.core.models import ResaleRecord  # noqa: E402


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="function")
def test_config(monkeypatch):
    """Create test configuration with fast, offline-friendly settings.

    Yields:
        Config object configured for testing.
    """
    monkeypatch.setenv("HDBTRENDS_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("HDBTRENDS_REQUEST_DELAY", "0")
    monkeypatch.setenv("HDBTRENDS_MAX_RETRIES", "0")
    monkeypatch.delenv("HDBTRENDS_SNAPSHOT_PATH", raising=False)

    # Reset config singleton
    from hdbtrends.config import reset_config, get_config
    reset_config()

    config = get_config()
    yield config

    reset_config()


@pytest.fixture(scope="function")
def record_factory() -> Callable[..., ResaleRecord]:
    """Build ResaleRecords with sensible defaults."""

    def make_record(
        month: str = "2024-01",
        price: Optional[str] = "500000",
        town: str = "ANG MO KIO",
        flat_type: str = "4 ROOM",
        area: Optional[str] = "90",
        lease: Optional[str] = "70 years",
    ) -> ResaleRecord:
        return ResaleRecord(
            month=month,
            town=town,
            flat_type=flat_type,
            resale_price=price,
            floor_area_sqm=area,
            remaining_lease=lease,
        )

    return make_record


@pytest.fixture(scope="function")
def sample_records(record_factory) -> List[ResaleRecord]:
    """Three months of records.

    2024-01: six priced records, 1,200,000 is an upper outlier
    2024-02: three records (one unparseable price), too sparse for a box plot
    2024-03: five records in BEDOK, one without floor area
    """
    jan = [
        record_factory("2024-01", "400000", lease="60 years 06 months"),
        record_factory("2024-01", "420000", lease="65 years"),
        record_factory("2024-01", "450000", flat_type="3 ROOM", lease="70 years 03 months"),
        record_factory("2024-01", "480000", lease="75 years"),
        record_factory("2024-01", "500000", flat_type="5 ROOM", area="110", lease="80 years"),
        record_factory("2024-01", "1200000", flat_type="EXECUTIVE", area="140", lease="90 years 11 months"),
    ]
    feb = [
        record_factory("2024-02", "300000", flat_type="3 ROOM", area="67", lease="55 years"),
        record_factory("2024-02", "n/a"),
        record_factory("2024-02", "800000", flat_type="5 ROOM", area="120", lease=None),
    ]
    mar = [
        record_factory("2024-03", "350000", town="BEDOK", flat_type="3 ROOM", area="68", lease="58 years"),
        record_factory("2024-03", "520000", town="BEDOK", lease="62 years"),
        record_factory("2024-03", "540000", town="BEDOK", area=None, lease="63 years"),
        record_factory("2024-03", "610000", town="BEDOK", flat_type="5 ROOM", area="112", lease="71 years"),
        record_factory("2024-03", "1000000", town="BEDOK", flat_type="EXECUTIVE", area="145", lease="88 years"),
    ]
    return jan + feb + mar
