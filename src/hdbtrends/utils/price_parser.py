"""
Price Parsing and Formatting Utilities

Numeric parsing for the string fields of resale records, and display
formatting for the values derived from them.

Provides consistent price handling across all modules.
"""

import math
import re
from typing import Optional, Union

from hdbtrends.logging_config import get_logger

logger = get_logger(__name__)

# Leading decimal number, optionally signed, with optional exponent
_DECIMAL_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII)

_COMPACT_UNITS = (
    (1e12, "T"),
    (1e9, "B"),
    (1e6, "M"),
    (1e3, "K"),
)

NOT_AVAILABLE = "N/A"


def parse_decimal(value: Union[str, int, float, None]) -> float:
    """Parse a decimal field leniently.

    The leading numeric part of a string is used, so "500000" and
    "500000.0 SGD" both parse; text without a leading number parses to NaN.

    Args:
        value: Raw field value.

    Returns:
        Parsed float, or NaN if no finite number can be read.

    Example:
        >>> parse_decimal("415000")
        415000.0
        >>> math.isnan(parse_decimal("n/a"))
        True
    """
    if value is None or isinstance(value, bool):
        return math.nan

    if isinstance(value, (int, float)):
        text = value
    else:
        match = _DECIMAL_PREFIX.match(str(value))
        if not match:
            return math.nan
        text = match.group(1)

    try:
        result = float(text)
    except (ValueError, OverflowError):
        logger.debug("Could not parse decimal from: %s", value)
        return math.nan

    # "1e400" overflows to inf
    if not math.isfinite(result):
        return math.nan
    return result


def _is_missing(value: Optional[float]) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def format_currency(value: Optional[float]) -> str:
    """Format a value as whole dollars.

    Example:
        >>> format_currency(1500000)
        "$1,500,000"
    """
    if _is_missing(value):
        return NOT_AVAILABLE

    rounded = int(round(value))
    if rounded < 0:
        return f"-${abs(rounded):,}"
    return f"${rounded:,}"


def format_compact_currency(value: Optional[float]) -> str:
    """Format a value in compact notation with up to two decimals.

    Example:
        >>> format_compact_currency(1500000)
        "$1.5M"
        >>> format_compact_currency(2345678901)
        "$2.35B"
    """
    if _is_missing(value):
        return NOT_AVAILABLE

    sign = "-" if value < 0 else ""
    magnitude = abs(value)

    suffix = ""
    scaled = magnitude
    for index, (threshold, unit) in enumerate(_COMPACT_UNITS):
        if magnitude >= threshold:
            scaled = magnitude / threshold
            suffix = unit
            # 999,999 rounds up to "1000K"; promote to the next unit
            if round(scaled, 2) >= 1000 and index > 0:
                threshold, suffix = _COMPACT_UNITS[index - 1]
                scaled = magnitude / threshold
            break
    else:
        if round(magnitude, 2) >= 1000:
            scaled, suffix = magnitude / 1e3, "K"

    text = f"{scaled:.2f}".rstrip("0").rstrip(".")
    return f"{sign}${text}{suffix}"


def format_psf(value: Optional[float]) -> str:
    """Format a price-per-square-foot value.

    Example:
        >>> format_psf(512.4)
        "$512/psf"
    """
    if _is_missing(value):
        return NOT_AVAILABLE
    return f"{format_currency(value)}/psf"


def format_number(value: Optional[float]) -> str:
    """Format a count or plain number with thousands separators."""
    if _is_missing(value):
        return NOT_AVAILABLE
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def format_percentage(value: Optional[float]) -> str:
    """Format a percentage with two decimals.

    Example:
        >>> format_percentage(25)
        "25.00%"
    """
    if _is_missing(value):
        return NOT_AVAILABLE
    return f"{value:.2f}%"
