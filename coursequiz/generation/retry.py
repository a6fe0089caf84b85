"""Retry policy for model calls: error classification and exponential backoff.

Only rate-limit / quota failures are worth retrying; everything else is
treated as fatal so the caller can fall back immediately.
"""

import logging
from collections.abc import Callable

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from coursequiz.errors import GenerationCancelled

logger = logging.getLogger(__name__)

RATE_LIMIT_STATUS = 429

# Case-insensitive substrings of an error message that signal rate limiting
# or quota exhaustion.
RATE_LIMIT_MARKERS: tuple[str, ...] = ("429", "rate", "quota", "resource_exhausted")

# SDK exception class names that always mean rate limiting.
RATE_LIMIT_ERROR_NAMES: frozenset[str] = frozenset(
    {"RateLimitError", "ResourceExhausted", "TooManyRequests"}
)


def get_status_code(exception: BaseException) -> int | None:
    """Extract an HTTP status code from an SDK exception, if it carries one."""
    status = getattr(exception, "status_code", None)
    if isinstance(status, int):
        return status

    code = getattr(exception, "code", None)
    if isinstance(code, int) and code >= 100:
        return code

    response = getattr(exception, "response", None)
    status = getattr(response, "status_code", None)
    if isinstance(status, int):
        return status

    return None


def is_retryable_error(exception: BaseException) -> bool:
    """Return True if the failure indicates rate limiting or quota exhaustion.

    Args:
        exception: Error raised by the model client.

    Returns:
        True for retryable (rate/quota) failures, False for fatal ones.
    """
    if isinstance(exception, GenerationCancelled):
        return False

    if get_status_code(exception) == RATE_LIMIT_STATUS:
        return True

    if type(exception).__name__ in RATE_LIMIT_ERROR_NAMES:
        return True

    message = str(exception).lower()
    return any(marker in message for marker in RATE_LIMIT_MARKERS)


def _log_backoff(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.info(
        "Rate limited on attempt %d (%s) - waiting %.1fs before retry",
        retry_state.attempt_number,
        exc,
        wait,
    )


def create_retrying(
    max_attempts: int,
    base_delay: float,
    sleep: Callable[[float], None],
) -> Retrying:
    """Build the retry controller for one model call.

    Attempt ``k`` that fails with a retryable error is followed by a wait of
    ``base_delay * 2 ** (k - 1)`` seconds. Fatal errors and the final retryable
    error are re-raised unchanged.

    Args:
        max_attempts: Total number of attempts, including the first.
        base_delay: Delay before the first retry, in seconds.
        sleep: Function performing the wait; may raise GenerationCancelled.

    Returns:
        A configured tenacity Retrying instance.
    """
    return Retrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=base_delay, exp_base=2),
        retry=retry_if_exception(is_retryable_error),
        before_sleep=_log_backoff,
        sleep=sleep,
        reraise=True,
    )
