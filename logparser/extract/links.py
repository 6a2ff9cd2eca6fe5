"""
Cursor Extractor

Pulls the next-page URL out of a Link header such as:

    <https://api.github.com/events?page=2>; rel="next", <...?page=5>; rel="last"

URLs may themselves contain commas, so entries are only split at a comma
that starts a new <...> target.
"""

import logging
import re
from typing import List, Optional

logger = logging.getLogger(__name__)

ENTRY_SEPARATOR = re.compile(r",\s*(?=<)")


def _relations(params: str) -> List[str]:
    # params end at the first comma; anything after it is a stray malformed entry
    params = params.split(",", 1)[0]
    rels = []
    for param in params.split(";"):
        key, sep, value = param.partition("=")
        if not sep or key.strip().lower() != "rel":
            continue
        rels.extend(value.strip().strip("\"'").split())
    return rels


def extract_next_url(link_header: Optional[str]) -> Optional[str]:
    """
    Find the URL of the first rel="next" entry in a Link header

    Args:
        link_header: Raw Link header value, may be None or empty

    Returns:
        Optional[str]: Next page URL, or None when there is no next page
    """
    if not link_header:
        return None

    for entry in ENTRY_SEPARATOR.split(link_header):
        start = entry.find("<")
        end = entry.find(">", start + 1)
        if start == -1 or end == -1:
            logger.debug(f"Skipping malformed Link entry: {entry!r}")
            continue

        if "next" in _relations(entry[end + 1 :]):
            return entry[start + 1 : end].strip()

    return None
