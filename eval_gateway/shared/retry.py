"""Fixed-delay retry for async calls.

A ``RetryPolicy`` holds the attempt bound and the delay between attempts;
``retry_with_fixed_delay`` applies it to any coroutine function. The sleep
function is injectable so callers can test the policy without waiting.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Tuple, Type

from tenacity import AsyncRetrying, RetryCallState, RetryError, retry_if_exception_type, stop_after_attempt, wait_fixed

from eval_gateway.const import DEFAULT_RETRY_DELAY, DEFAULT_RETRY_MAX_ATTEMPTS
from .exceptions import RetryExhaustedError
from .logging import LoggingManager

logger = LoggingManager.get_logger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt bound and constant delay (seconds) between attempts."""
    max_attempts: int = DEFAULT_RETRY_MAX_ATTEMPTS
    delay: float = DEFAULT_RETRY_DELAY

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.delay < 0:
            raise ValueError("delay must not be negative")

    @classmethod
    def from_config(cls, config) -> "RetryPolicy":
        return cls(max_attempts=config.retry_max_attempts, delay=config.retry_delay)


async def retry_with_fixed_delay(
    func: Callable[[], Awaitable[Any]],
    policy: RetryPolicy,
    sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    name: str = "operation",
) -> Any:
    """Call ``func`` until it succeeds or the policy's attempts run out.

    Args:
        func: Coroutine function taking no arguments.
        policy: Attempt bound and delay.
        sleep: Awaitable sleep used between attempts, asyncio.sleep by default.
        retry_on: Exception types that trigger another attempt; others propagate.
        name: Label used in log messages.

    Returns:
        The result of the first successful attempt.

    Raises:
        RetryExhaustedError: If every attempt failed with a retryable error.
    """
    def log_failed_attempt(retry_state: RetryCallState) -> None:
        logger.warning(
            f"{name} attempt {retry_state.attempt_number}/{policy.max_attempts} failed: "
            f"{retry_state.outcome.exception()}; retrying in {policy.delay}s"
        )

    retrying = AsyncRetrying(
        stop=stop_after_attempt(policy.max_attempts),
        wait=wait_fixed(policy.delay),
        retry=retry_if_exception_type(retry_on),
        sleep=sleep or asyncio.sleep,
        before_sleep=log_failed_attempt,
    )
    try:
        return await retrying(func)
    except RetryError as e:
        last_attempt = e.last_attempt
        last_error = last_attempt.exception()
        logger.error(f"{name} failed after {last_attempt.attempt_number} attempts: {last_error}")
        raise RetryExhaustedError(last_attempt.attempt_number, last_error) from last_error
