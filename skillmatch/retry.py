"""
Retry with exponential backoff for job-search API calls.

Timeouts, dropped connections, rate limiting and 5xx responses are
treated as transient and retried; everything else fails immediately.
"""

import time
import functools
from typing import Callable, Type, Tuple, Optional

# Request Timeout, Too Many Requests, and server errors
RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})


class RetryError(Exception):
    """Raised when all retry attempts are exhausted."""
    pass


class TransientHTTPError(Exception):
    """An HTTP response whose status code is worth retrying."""

    def __init__(self, status_code: int, message: str = ""):
        super().__init__(message or f"Retryable HTTP status {status_code}")
        self.status_code = status_code


def should_retry_http_status(status_code: int) -> bool:
    return status_code in RETRYABLE_STATUS_CODES


def raise_for_retryable_status(response) -> None:
    """Raise TransientHTTPError if the response status is retryable."""
    if should_retry_http_status(response.status_code):
        raise TransientHTTPError(response.status_code)


def exponential_backoff(
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    exponential_base: float = 2.0,
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
    on_retry: Optional[Callable] = None,
    sleep: Optional[Callable[[float], None]] = None,
):
    """
    Decorator for retrying functions with exponential backoff.

    Args:
        max_retries: Maximum number of retry attempts (0 = no retries)
        base_delay: Initial delay in seconds
        max_delay: Maximum delay between retries in seconds
        exponential_base: Multiplier applied to the delay after each attempt
        exceptions: Exception types that trigger a retry
        on_retry: Optional callback(attempt, exception, delay)
        sleep: Function used to wait between attempts (default: time.sleep)

    Raises:
        RetryError: After the last attempt fails with a retryable exception

    Example:
        @exponential_backoff(max_retries=3, exceptions=(requests.exceptions.Timeout,))
        def search(payload):
            return requests.post(url, json=payload, timeout=20)
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            delay = base_delay

            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if attempt == max_retries:
                        raise RetryError(
                            f"Failed after {max_retries + 1} attempts: {e}"
                        ) from e

                    current_delay = min(delay, max_delay)
                    if on_retry:
                        on_retry(attempt + 1, e, current_delay)
                    (sleep or time.sleep)(current_delay)
                    delay *= exponential_base

        return wrapper
    return decorator
