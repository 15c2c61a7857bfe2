"""
Shared Constants for HDB Resale Trends

Contains all constant values used across the application.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

# Area conversion: 1 square metre = 10.7639 square feet
SQM_TO_SQFT: float = 10.7639

# Box plot
MIN_BOX_PLOT_SAMPLES: int = 5
IQR_FENCE_MULTIPLIER: float = 1.5

# Threshold for "million dollar" transactions
MILLION_PRICE: float = 1_000_000

# Axis padding factors
VALUE_DOMAIN_PADDING: float = 1.05
COUNT_DOMAIN_PADDING: float = 1.2
CATEGORY_COUNT_DOMAIN_PADDING: float = 1.1

# Fallback domains used when there are no records at all
DEFAULT_VALUE_DOMAIN: Tuple[float, float] = (0, 1_000_000)
DEFAULT_LEASE_DOMAIN: Tuple[int, int] = (0, 99)
DEFAULT_TRANSACTION_COUNT_DOMAIN: Tuple[float, float] = (0, 100)
DEFAULT_GROSS_VALUE_DOMAIN: Tuple[float, float] = (0, 1_000_000)
DEFAULT_MEDIAN_PSF_DOMAIN: Tuple[float, float] = (0, 1000)
DEFAULT_MEDIAN_PRICE_PER_LEASE_DOMAIN: Tuple[float, float] = (0, 1000)
DEFAULT_MILLION_PERCENTAGE_DOMAIN: Tuple[float, float] = (0, 5)
DEFAULT_CATEGORY_COUNT_DOMAIN: Tuple[float, float] = (0, 100)

# Fields requested from the data.gov.sg datastore
RECORD_FIELDS: List[str] = [
    "month",
    "resale_price",
    "flat_type",
    "town",
    "floor_area_sqm",
    "remaining_lease",
]
REQUIRED_RECORD_FIELDS: List[str] = ["month", "town", "flat_type", "resale_price"]

# Maximum rows the datastore returns for a single month query
MONTH_QUERY_LIMIT: int = 10_000


class BoxPlotMetric(str, Enum):
    """Metric plotted on the box plot's y-axis."""

    RESALE_PRICE = "resale_price"
    PRICE_PSF = "price_psf"
    PRICE_PER_LEASE = "price_per_lease"


class CategoryMode(str, Enum):
    """Presentation mode of the price-category chart."""

    PERCENTAGE = "percentage"
    COUNT = "count"


@dataclass(frozen=True)
class PriceBand:
    """A half-open price interval [lower, upper); upper=None is unbounded."""

    label: str
    lower: float
    upper: Optional[float] = None


# Ascending, mutually exclusive, covering [0, inf)
PRICE_BANDS: Tuple[PriceBand, ...] = (
    PriceBand("0-300k", 0, 300_000),
    PriceBand("300-500k", 300_000, 500_000),
    PriceBand("500-800k", 500_000, 800_000),
    PriceBand("800k-1m", 800_000, 1_000_000),
    PriceBand(">=1m", 1_000_000, None),
)

PRICE_BAND_LABELS: Tuple[str, ...] = tuple(band.label for band in PRICE_BANDS)
