"""
Page Parser

Turns a decoded JSON payload into Records. One bad element never aborts a
page: elements missing id/type are dropped silently, any other bad shape is
logged and skipped.
"""

import logging
from typing import Any, List, Optional

from .errors import MalformedPayloadError
from .models import Actor, Record

logger = logging.getLogger(__name__)

SCALAR_TYPES = (str, int, float, bool)


def _as_text(value: Any, field_name: str) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, SCALAR_TYPES):
        return str(value)
    raise ValueError(f"field '{field_name}' has unexpected type {type(value).__name__}")


def parse_actor(raw: Any) -> Actor:
    """Build an Actor; anything without a usable login yields an Actor with no login"""
    if not isinstance(raw, dict) or raw.get("login") is None:
        return Actor()
    return Actor(login=_as_text(raw["login"], "actor.login"))


def parse_record(raw: Any) -> Optional[Record]:
    """
    Build a Record from one array element

    Args:
        raw: Decoded JSON element

    Returns:
        Optional[Record]: The record, or None if id or type is missing

    Raises:
        ValueError: If the element has an unexpected shape
    """
    if not isinstance(raw, dict):
        return None
    if raw.get("id") is None or raw.get("type") is None:
        return None

    return Record(
        id=_as_text(raw["id"], "id"),
        type=_as_text(raw["type"], "type"),
        actor=parse_actor(raw.get("actor")),
    )


def parse_page(payload: Any) -> List[Record]:
    """
    Convert a JSON array payload into Records, preserving order

    Args:
        payload: Decoded JSON body

    Returns:
        List[Record]: Parsed records

    Raises:
        MalformedPayloadError: If the payload is not a JSON array
    """
    if not isinstance(payload, list):
        raise MalformedPayloadError(
            f"Expected JSON array in response, got {type(payload).__name__}"
        )

    records = []
    for index, raw in enumerate(payload):
        try:
            record = parse_record(raw)
        except Exception as e:
            logger.warning(f"Failed to parse record at index {index}: {e}")
            continue

        if record is not None:
            records.append(record)

    skipped = len(payload) - len(records)
    if skipped:
        logger.debug(f"Skipped {skipped} of {len(payload)} elements")
    return records
