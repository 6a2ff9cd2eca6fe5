"""
Retry Executor

Run an operation and retry it on failure with exponential backoff.
Delays are base, 2x base, 4x base, ... with no jitter. Sleeping blocks the
calling thread.
"""

import logging
import time
from typing import Callable, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryExhaustedError(RuntimeError):
    """Raised when an operation still fails after the last allowed attempt"""

    def __init__(self, attempts: int, last_error: BaseException):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Operation failed after {attempts} attempts: {last_error}")


def backoff_delay_ms(base_delay_ms: int, attempt: int) -> int:
    """
    Delay before the retry that follows a failed attempt

    Args:
        base_delay_ms: Base delay in milliseconds
        attempt: 1-indexed number of the attempt that just failed

    Returns:
        int: Delay in milliseconds
    """
    return base_delay_ms * 2 ** (attempt - 1)


def execute_with_retry(
    operation: Callable[[], T],
    max_retries: int,
    base_delay_ms: int,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Invoke an operation, retrying failures with exponential backoff

    Args:
        operation: Zero-argument callable to run
        max_retries: Total number of attempts allowed (>= 1)
        base_delay_ms: Delay before the first retry in milliseconds
        retry_on: Exception types that count as a retryable failure
        sleep: Blocking sleep function taking seconds

    Returns:
        The operation's return value from the first successful attempt

    Raises:
        RetryExhaustedError: When every attempt failed; chained from the last error
    """
    if max_retries < 1:
        raise ValueError(f"max_retries must be >= 1, got {max_retries}")

    attempt = 0
    while True:
        try:
            return operation()
        except retry_on as e:
            attempt += 1
            if attempt >= max_retries:
                logger.error(f"❌ Attempt {attempt}/{max_retries} failed: {e}")
                raise RetryExhaustedError(attempt, e) from e

            delay_ms = backoff_delay_ms(base_delay_ms, attempt)
            logger.warning(
                f"Attempt {attempt}/{max_retries} failed: {e}. Retrying in {delay_ms} ms..."
            )
            sleep(delay_ms / 1000)
