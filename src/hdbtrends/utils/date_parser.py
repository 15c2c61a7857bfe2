"""
Month Key Utilities

Resale records are keyed by month strings in "YYYY-MM" form. These helpers
parse, shift and format those keys.
"""

import re
from datetime import datetime
from typing import Iterable, List, Optional

from hdbtrends.logging_config import get_logger

logger = get_logger(__name__)

MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$", re.ASCII)


def parse_month(month_str: Optional[str]) -> Optional[datetime]:
    """Parse a "YYYY-MM" key into the first day of that month.

    Args:
        month_str: Month key to parse.

    Returns:
        datetime object or None if parsing fails.

    Example:
        >>> parse_month("2024-07")
        datetime(2024, 7, 1, 0, 0)
    """
    if not month_str:
        return None

    match = MONTH_PATTERN.match(str(month_str).strip())
    if not match:
        logger.debug("Could not parse month: %s", month_str)
        return None

    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        logger.debug("Month out of range: %s", month_str)
        return None
    return datetime(year, month, 1)


def to_month_key(dt: datetime) -> str:
    """Format a datetime as a "YYYY-MM" key."""
    return f"{dt.year:04d}-{dt.month:02d}"


def shift_month(month_str: str, offset: int) -> Optional[str]:
    """Move a month key by ``offset`` months (negative goes back).

    Example:
        >>> shift_month("2024-01", -1)
        "2023-12"
    """
    dt = parse_month(month_str)
    if dt is None:
        return None

    index = dt.year * 12 + (dt.month - 1) + offset
    year, month = divmod(index, 12)
    return f"{year:04d}-{month + 1:02d}"


def sort_months(months: Iterable[str]) -> List[str]:
    """Return the distinct month keys in chronological order."""
    return sorted(set(months))


def format_month_year(month_str: Optional[str]) -> str:
    """Format a month key for display.

    Example:
        >>> format_month_year("2024-07")
        "Jul 2024"
    """
    dt = parse_month(month_str)
    if dt is None:
        return ""
    return dt.strftime("%b %Y")
