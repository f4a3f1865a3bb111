"""Retry utilities with exponential backoff."""

import logging
import time
from functools import wraps
from typing import Any, Callable, TypeVar

import requests


# Type variable for generic function signatures
F = TypeVar("F", bound=Callable[..., Any])

RETRYABLE_STATUS_CODES = (429, 500, 502, 503, 504)

logger = logging.getLogger(__name__)


def is_retryable(error: requests.exceptions.RequestException) -> bool:
    """Decide whether a failed HTTP request is worth retrying.

    Connection errors, timeouts, rate limits (429) and 5xx responses are
    transient; anything else is not.
    """
    if isinstance(
        error, (requests.exceptions.ConnectionError, requests.exceptions.Timeout)
    ):
        return True
    if isinstance(error, requests.exceptions.HTTPError):
        response = error.response
        return response is not None and response.status_code in RETRYABLE_STATUS_CODES
    return False


def exponential_backoff_retry(
    max_retries: int = 3,
    delays: list[int] | None = None,
) -> Callable[[F], F]:
    """Decorator for exponential backoff retry (2s, 4s, 8s).

    Only wraps HTTP calls. DNS lookups are never retried.

    Args:
        max_retries: Maximum number of retry attempts (default: 3).
        delays: List of delay seconds between retries (default: [2, 4, 8]).

    Returns:
        Callable: Decorated function with retry logic.

    Examples:
        >>> @exponential_backoff_retry()
        ... def fetch():
        ...     return requests.get(url, timeout=30)
    """
    if delays is None:
        delays = [2, 4, 8]

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except requests.exceptions.RequestException as e:
                    if is_retryable(e) and attempt < max_retries:
                        delay = delays[min(attempt, len(delays) - 1)]
                        logger.warning(
                            f"HTTP request failed ({e}), retrying in {delay}s..."
                        )
                        time.sleep(delay)
                        continue
                    # Non-retryable error or retries exhausted
                    raise
            raise RuntimeError(
                f"Max retries ({max_retries}) exhausted for {func.__name__}"
            )

        return wrapper  # type: ignore

    return decorator
