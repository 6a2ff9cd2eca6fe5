"""
Record Filters - Transform Layer

Type filter is a case-insensitive exact match, actor filter a
case-insensitive substring match on the login, then an optional limit.
Order of the loaded records is preserved.
"""

import logging
from typing import List, Optional, Sequence

import polars as pl

from ..extract.models import Record
from .schemas import EVENTS_SCHEMA, ROW_INDEX

logger = logging.getLogger(__name__)

RULE_WIDTH = 51


def records_to_frame(records: Sequence[Record]) -> pl.DataFrame:
    """
    Flatten records into a DataFrame with EVENTS_SCHEMA plus a row index

    Args:
        records: Loaded records

    Returns:
        pl.DataFrame: One row per record, in input order
    """
    df = pl.DataFrame(
        {
            "id": [r.id for r in records],
            "type": [r.type for r in records],
            "actor_login": [r.actor.login for r in records],
        },
        schema=EVENTS_SCHEMA,
    )
    return df.with_row_index(ROW_INDEX)


def filter_records(
    records: Sequence[Record],
    event_type: Optional[str] = None,
    actor: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[Record]:
    """
    Filter records by type and actor, then truncate

    Args:
        records: Loaded records
        event_type: Exact type to keep, compared case-insensitively
        actor: Substring of the actor login, compared case-insensitively
        limit: Keep only the first N matches when > 0

    Returns:
        List[Record]: Matching records in their original order
    """
    df = records_to_frame(records)

    if event_type:
        df = df.filter(pl.col("type").str.to_lowercase() == event_type.lower())

    if actor:
        df = df.filter(
            pl.col("actor_login")
            .str.to_lowercase()
            .str.contains(actor.lower(), literal=True)
            .fill_null(False)
        )

    if limit is not None and limit > 0:
        df = df.head(limit)

    logger.debug(f"Filtered {len(records)} records down to {df.height}")
    return [records[i] for i in df[ROW_INDEX].to_list()]


def describe_filters(event_type: Optional[str], actor: Optional[str]) -> str:
    """Human-readable summary of the active filters"""
    filters = []
    if event_type:
        filters.append(f"type='{event_type}'")
    if actor:
        filters.append(f"actor contains '{actor}'")
    return ", ".join(filters)


def format_display(records: Sequence[Record], limit: Optional[int] = None) -> List[str]:
    """
    Lines to print for a filtered result

    Args:
        records: Records to show (already filtered and truncated)
        limit: The limit that was applied, if it truncated the result

    Returns:
        List[str]: Header, optional limit note, rule line, one line per record
    """
    lines = [f"Displaying {len(records)} log entries:"]
    if limit:
        lines.append(f"(Limited to {limit} entries)")
    lines.append("=" * RULE_WIDTH)
    lines.extend(str(record) for record in records)
    return lines
