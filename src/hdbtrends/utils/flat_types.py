"""
HDB Flat Type Utilities

Provides consistent ordering of flat types and towns for filter options.
"""

from typing import Iterable, List, Optional

# Flat types in the order HDB lists them (smallest to largest)
FLAT_TYPE_ORDER: List[str] = [
    "1 ROOM",
    "2 ROOM",
    "3 ROOM",
    "4 ROOM",
    "5 ROOM",
    "EXECUTIVE",
    "MULTI-GENERATION",
]


def normalize_label(label: Optional[str]) -> str:
    """Normalize a town or flat type label for comparison.

    Example:
        >>> normalize_label("  multi generation ")
        "MULTI-GENERATION"
    """
    if not label:
        return ""
    text = " ".join(str(label).split()).upper()
    if text == "MULTI GENERATION":
        return "MULTI-GENERATION"
    return text


def flat_type_rank(flat_type: Optional[str]) -> int:
    """Position of a flat type in FLAT_TYPE_ORDER; unknown types sort last."""
    normalized = normalize_label(flat_type)
    if normalized in FLAT_TYPE_ORDER:
        return FLAT_TYPE_ORDER.index(normalized)
    return len(FLAT_TYPE_ORDER)


def sort_flat_types(flat_types: Iterable[str]) -> List[str]:
    """Distinct, non-empty flat types in HDB order, unknown ones alphabetically after."""
    distinct = {f for f in flat_types if f}
    return sorted(distinct, key=lambda f: (flat_type_rank(f), f))


def sort_towns(towns: Iterable[str]) -> List[str]:
    """Distinct, non-empty towns in alphabetical order."""
    return sorted({t for t in towns if t})
