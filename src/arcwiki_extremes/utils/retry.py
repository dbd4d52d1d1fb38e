# ABOUTME: Bounded retry for single remote calls using the tenacity library
# ABOUTME: Retries immediately (no backoff) and wraps the final failure in FetchExhausted

from collections.abc import Awaitable, Callable
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_none,
)

from arcwiki_extremes.utils.logging import get_logger

T = TypeVar("T")

DEFAULT_MAX_RETRIES = 2

logger = get_logger(__name__)


class FetchExhausted(Exception):
    """Raised when every attempt of a remote call has failed."""

    def __init__(self, attempts: int, last_error: BaseException | None):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Failed after {attempts} attempts: {last_error}")


def total_attempts(max_retries: int) -> int:
    """Number of calls made for a retry budget: the first try plus max_retries + 1 more."""
    return max_retries + 2


def _log_failed_attempt(retry_state: RetryCallState) -> None:
    outcome = retry_state.outcome
    error = outcome.exception() if outcome is not None else None
    logger.debug(
        "Remote call attempt failed",
        attempt=retry_state.attempt_number,
        error=str(error),
        error_type=type(error).__name__,
    )


async def attempt(fn: Callable[[], Awaitable[T]], max_retries: int = DEFAULT_MAX_RETRIES) -> T:
    """Run ``fn`` until it succeeds or the retry budget is spent.

    Args:
        fn: Zero-argument coroutine factory performing one remote call
        max_retries: Retry budget; ``fn`` is called at most ``max_retries + 2`` times

    Returns:
        The first successful result

    Raises:
        FetchExhausted: If every attempt raised
        ValueError: If max_retries is negative
    """
    if max_retries < 0:
        raise ValueError(f"max_retries must be >= 0, got {max_retries}")

    attempts = total_attempts(max_retries)

    try:
        async for retrying in AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=wait_none(),
            retry=retry_if_exception_type(Exception),
            after=_log_failed_attempt,
        ):
            with retrying:
                return await fn()
    except RetryError as e:
        last_error = e.last_attempt.exception()
        raise FetchExhausted(attempts, last_error) from last_error

    raise AssertionError("unreachable: tenacity exits by returning or raising")
