"""
Exponential backoff executor for unreliable remote calls.

Wraps a zero-argument async operation with the ``backoff`` library:
the first attempt runs immediately, each failure waits ``delay`` seconds
(doubling every time) before the next attempt, and once the budget is
spent the last exception propagates unchanged.
"""

from typing import Any, Awaitable, Callable, Dict, Optional, Tuple, Type, TypeVar

import backoff

from utils.logging import get_logger

T = TypeVar("T")

logger = get_logger("retry")


def _log_backoff(details: Dict[str, Any]) -> None:
    exc = details.get("exception")
    logger.warning(
        f"Attempt {details['tries']} failed: {type(exc).__name__}: {exc}. "
        f"Retrying in {details['wait']:.2f}s..."
    )


def _log_giveup(details: Dict[str, Any]) -> None:
    exc = details.get("exception")
    logger.error(
        f"Giving up after {details['tries']} attempt(s) "
        f"({details['elapsed']:.2f}s): {type(exc).__name__}: {exc}"
    )


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    retries: int = 3,
    delay: float = 4.0,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    giveup: Optional[Callable[[Exception], bool]] = None,
) -> T:
    """
    Run ``operation`` with exponential backoff.

    Args:
        operation: Zero-argument callable returning an awaitable
        retries: Extra attempts after the first one (>= 0)
        delay: Initial wait in seconds (> 0), doubled after each retry
        retry_on: Exception types eligible for retry
        giveup: Optional predicate; True means the error is terminal

    Returns:
        Result of the first successful attempt

    Raises:
        ValueError: On an invalid budget or delay
        Exception: The last failure, once attempts are exhausted or the
            error is not retryable
    """
    if retries < 0:
        raise ValueError(f"retries must be >= 0, got {retries}")
    if delay <= 0:
        raise ValueError(f"delay must be > 0, got {delay}")

    @backoff.on_exception(
        backoff.expo,
        retry_on,
        max_tries=retries + 1,
        giveup=giveup or (lambda e: False),
        jitter=None,
        factor=delay,
        on_backoff=_log_backoff,
        on_giveup=_log_giveup,
        logger=None,
    )
    async def _attempt() -> T:
        return await operation()

    return await _attempt()
