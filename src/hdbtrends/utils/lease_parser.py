"""
Remaining Lease Parsing

HDB publishes the remaining lease as free text such as "69 years 04 months"
or "99 years". Anything that does not match is treated as missing.
"""

import re
from typing import Optional

from hdbtrends.logging_config import get_logger

logger = get_logger(__name__)

# Unanchored and lenient: no bound on years, months are not checked against 12.
LEASE_PATTERN = re.compile(r"(\d+)\s+years?(?:\s+(\d+)\s+months?)?", re.ASCII)


def parse_lease_years(lease_str: Optional[str]) -> Optional[float]:
    """Parse a remaining-lease string into fractional years.

    Args:
        lease_str: Lease text, e.g. "69 years 04 months".

    Returns:
        years + months / 12, or None if the text is absent or unparseable.

    Example:
        >>> parse_lease_years("69 years 04 months")
        69.33333333333333
        >>> parse_lease_years("99 years")
        99.0
        >>> parse_lease_years("garbage") is None
        True
    """
    if not lease_str:
        return None

    match = LEASE_PATTERN.search(str(lease_str))
    if not match:
        logger.debug("Could not parse remaining lease: %s", lease_str)
        return None

    years = int(match.group(1))
    months = int(match.group(2)) if match.group(2) else 0
    return years + months / 12
