"""
Module: retry.py
Description: Retry policy for requests that never reached the service.

Only failures to establish a connection are retried. Once a request may
have been received, its outcome is reported to the caller unchanged so a
message add is never silently repeated.
"""

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ironmq.utils.logger import get_logger

logger = get_logger(__name__)

RETRYABLE_ERRORS = (httpx.ConnectError, httpx.ConnectTimeout)


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Connection failed, retrying",
        attempt=retry_state.attempt_number,
        wait_seconds=retry_state.next_action.sleep if retry_state.next_action else 0,
        error=str(error),
        error_type=type(error).__name__
    )


def connect_retrying(attempts: int, backoff: float) -> AsyncRetrying:
    """
    Build a retry controller for connection-establishment failures.

    Args:
        attempts: Total attempts, including the first
        backoff: Multiplier for the exponential wait between attempts

    Returns:
        AsyncRetrying that re-raises the last error once attempts run out

    Raises:
        ValueError: If attempts is less than 1
    """
    if attempts < 1:
        raise ValueError("attempts must be at least 1")

    return AsyncRetrying(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=backoff, max=10),
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        before_sleep=_log_retry,
        reraise=True
    )
