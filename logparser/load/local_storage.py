"""
Local Storage - Load Layer

Append-only JSON store for event records. Every save reads the whole file,
appends the new batch and rewrites the file. Duplicate ids across runs are
kept as-is. Not safe for concurrent writers: the load-merge-save sequence
has no locking.
"""

import json
import os
import logging
from typing import Iterable, List

from pydantic import ValidationError

from ..extract.models import Record

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = "logs.json"


def load_records(filepath: str) -> List[Record]:
    """
    Load all stored records

    Args:
        filepath: Path to the JSON store

    Returns:
        List[Record]: Stored records, or an empty list if the file is
        missing or unreadable
    """
    if not os.path.exists(filepath):
        return []

    try:
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"expected a JSON array, got {type(data).__name__}")
        records = [Record.model_validate(item) for item in data]
    except (OSError, ValueError, ValidationError) as e:
        logger.warning(f"Could not read store {filepath}, treating as empty: {e}")
        return []

    logger.debug(f"Loaded {len(records)} records from {filepath}")
    return records


def save_records(records: Iterable[Record], filepath: str) -> int:
    """
    Append records to the store

    Args:
        records: New records, appended after existing content
        filepath: Path to the JSON store

    Returns:
        int: Total number of records now stored
    """
    combined = load_records(filepath)
    combined.extend(records)

    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump([record.model_dump() for record in combined], f, indent=2)

    logger.debug(f"Saved {len(combined)} records to {filepath}")
    return len(combined)


class LocalEventStore:
    """Append-only store bound to a single JSON file"""

    def __init__(self, filepath: str = DEFAULT_STORE_PATH):
        self.filepath = filepath

    def load(self) -> List[Record]:
        return load_records(self.filepath)

    def save(self, records: Iterable[Record]) -> int:
        return save_records(records, self.filepath)
