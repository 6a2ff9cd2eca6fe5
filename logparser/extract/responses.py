"""
Response Classifier

Maps an HTTP status code to the action the fetch loop takes, and computes
how long to wait when the API reports a rate limit.
"""

import enum
import logging
from typing import Mapping, Optional

from ..coreutils.time import dt_fromtimestamp, epoch_now

logger = logging.getLogger(__name__)

RATE_LIMIT_RESET_HEADER = "X-RateLimit-Reset"


class ResponseAction(enum.Enum):
    PARSE = "parse"
    RATE_LIMITED_RETRY = "rate_limited_retry"
    EMPTY_TERMINATE = "empty_terminate"
    FAIL = "fail"


def classify_response(status_code: int) -> ResponseAction:
    """
    Decide what to do with a response

    Args:
        status_code: HTTP status code

    Returns:
        ResponseAction: PARSE for 200, RATE_LIMITED_RETRY for 403,
        EMPTY_TERMINATE for 404, FAIL for anything else
    """
    if status_code == 200:
        return ResponseAction.PARSE
    if status_code == 403:
        return ResponseAction.RATE_LIMITED_RETRY
    if status_code == 404:
        return ResponseAction.EMPTY_TERMINATE
    return ResponseAction.FAIL


def parse_reset_timestamp(headers: Mapping[str, str]) -> Optional[int]:
    """Read the rate-limit reset header as epoch seconds, None if absent or invalid"""
    value = headers.get(RATE_LIMIT_RESET_HEADER)
    if value is None:
        return None

    try:
        return int(str(value).strip())
    except ValueError:
        logger.warning(f"Invalid {RATE_LIMIT_RESET_HEADER} header value: {value!r}")
        return None


def compute_rate_limit_wait(
    headers: Mapping[str, str],
    ceiling_seconds: int,
    now: Optional[int] = None,
) -> int:
    """
    Seconds to wait before retrying a rate-limited request

    With a valid reset header the wait is max(1, reset - now + 1), capped at
    the ceiling. Without one the ceiling itself is the wait.

    Args:
        headers: Response headers
        ceiling_seconds: Upper bound, and the fallback wait
        now: Current epoch seconds (defaults to the system clock)

    Returns:
        int: Whole seconds to wait
    """
    return wait_until_reset(parse_reset_timestamp(headers), ceiling_seconds, now=now)


def wait_until_reset(
    reset_at: Optional[int], ceiling_seconds: int, now: Optional[int] = None
) -> int:
    """Wait for an already-parsed reset timestamp (None means unknown)"""
    if reset_at is None:
        return ceiling_seconds

    if now is None:
        now = epoch_now()

    wait = max(1, reset_at - now + 1)
    return min(wait, ceiling_seconds)


def describe_reset(reset_at: Optional[int]) -> str:
    """Reset time rendered for log messages"""
    if reset_at is None:
        return "no reset time given"
    return f"resets at {dt_fromtimestamp(reset_at)} UTC"
