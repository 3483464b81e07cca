"""
Retry with exponential backoff for transient transport failures.

Only the lookup GET goes through this; the number of retries comes from
configuration and defaults to none.
"""

import time
from typing import Callable, Optional, Tuple, Type, TypeVar

T = TypeVar("T")


class RetryError(Exception):
    """Raised when all retry attempts are exhausted. The last error is __cause__."""

    def __init__(self, message: str, attempts: int):
        super().__init__(message)
        self.attempts = attempts


def call_with_backoff(
    func: Callable[[], T],
    max_retries: int = 0,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    exponential_base: float = 2.0,
    exceptions: Tuple[Type[BaseException], ...] = (Exception,),
    on_retry: Optional[Callable[[int, BaseException, float], None]] = None,
) -> T:
    """
    Call func, retrying on the given exceptions with growing delays.

    Args:
        func: Zero-argument callable
        max_retries: Retry attempts after the first call (0 = single call)
        base_delay: Delay before the first retry, in seconds
        max_delay: Upper bound for any single delay
        exponential_base: Multiplier applied to the delay after each retry
        exceptions: Exception types that trigger a retry
        on_retry: Optional callback(attempt, exception, delay) before sleeping

    Raises:
        RetryError: when every attempt failed with a retryable exception
    """
    if max_retries < 0:
        raise ValueError("max_retries must be >= 0")

    delay = base_delay
    for attempt in range(max_retries + 1):
        try:
            return func()
        except exceptions as e:
            if attempt == max_retries:
                raise RetryError(
                    f"Failed after {max_retries + 1} attempt(s): {e}",
                    attempts=max_retries + 1,
                ) from e
            current_delay = min(delay, max_delay)
            if on_retry:
                on_retry(attempt + 1, e, current_delay)
            time.sleep(current_delay)
            delay *= exponential_base
    raise AssertionError("unreachable")

