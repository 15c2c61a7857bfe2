"""
Offline Snapshot Loading

Reads record snapshots from a data.gov.sg CSV export or from a JSON list in
the API row shape, and writes JSON snapshots for later offline use.
"""

import json
from pathlib import Path
from typing import List, Sequence, Union

import pandas as pd

from hdbtrends.core.constants import REQUIRED_RECORD_FIELDS
from hdbtrends.core.models import ResaleRecord, records_to_dicts
from hdbtrends.exceptions import ParsingError
from hdbtrends.logging_config import get_logger

logger = get_logger(__name__)


def _load_csv(path: Path) -> List[ResaleRecord]:
    try:
        # Keep every column as text; the aggregators do their own parsing
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise ParsingError(f"Could not read CSV snapshot: {e}", source=str(path))

    missing = [c for c in REQUIRED_RECORD_FIELDS if c not in df.columns]
    if missing:
        raise ParsingError(
            f"CSV snapshot is missing columns: {', '.join(missing)}",
            source=str(path),
        )

    df = df.replace({"": None})
    return [ResaleRecord.from_dict(row) for row in df.to_dict(orient="records")]


def _load_json(path: Path) -> List[ResaleRecord]:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParsingError(f"Could not read JSON snapshot: {e}", source=str(path))

    if not isinstance(data, list) or not all(isinstance(row, dict) for row in data):
        raise ParsingError("JSON snapshot must be a list of objects", source=str(path))
    return [ResaleRecord.from_dict(row) for row in data]


def load_records(path: Union[str, Path]) -> List[ResaleRecord]:
    """Load a record snapshot from disk.

    Args:
        path: A ``.csv`` export or a ``.json`` list of rows.

    Returns:
        Records in file order.

    Raises:
        ParsingError: If the file is missing, malformed or of an unsupported type.
    """
    path = Path(path)
    if not path.exists():
        raise ParsingError(f"Snapshot not found: {path}", source=str(path))

    suffix = path.suffix.lower()
    if suffix == ".csv":
        records = _load_csv(path)
    elif suffix == ".json":
        records = _load_json(path)
    else:
        raise ParsingError(f"Unsupported snapshot format: {suffix or '(none)'}", source=str(path))

    logger.info("Loaded %d records from %s", len(records), path)
    return records


def save_records(records: Sequence[ResaleRecord], path: Union[str, Path]) -> Path:
    """Write records as a JSON snapshot, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(records_to_dicts(list(records)), f)
    logger.info("Saved %d records to %s", len(records), path)
    return path
