"""Retry policy for downloading remote ingredient data."""

import logging
import time
from functools import wraps
from typing import Any, Callable

import requests

logger = logging.getLogger(__name__)

TRANSIENT_ERRORS = (
    requests.exceptions.ConnectionError,
    requests.exceptions.Timeout,
    requests.exceptions.ChunkedEncodingError,
    ConnectionResetError,
)

# Server-side failures worth another attempt; other 4xx are the caller's fault.
RETRY_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


def is_transient(error: BaseException) -> bool:
    """Check if a download error is likely to go away on its own.

    Network failures and timeouts are transient. An ``HTTPError`` is
    transient only when its response carries one of RETRY_STATUS_CODES.
    """
    if isinstance(error, requests.exceptions.HTTPError):
        response = error.response
        return response is not None and response.status_code in RETRY_STATUS_CODES
    return isinstance(error, TRANSIENT_ERRORS)


def retry_transient_errors(
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    retry_if: Callable[[BaseException], bool] = is_transient,
) -> Callable:
    """Retry a download while it fails with transient errors.

    Args:
        max_attempts: Total number of calls, the first one included
        initial_delay: Seconds to wait before the second call; doubled
            after every further failure
        retry_if: Predicate deciding whether an error is retried

    Returns:
        Decorator. Errors rejected by ``retry_if`` propagate immediately;
        the last transient error propagates once attempts run out.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay
            attempt = 1
            while True:
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    if not retry_if(e):
                        raise
                    if attempt >= max_attempts:
                        logger.error(
                            f"{func.__name__} still failing after {attempt} attempts: {e}"
                        )
                        raise
                    logger.warning(
                        f"{func.__name__} attempt {attempt}/{max_attempts} failed ({e}); "
                        f"retrying in {delay}s"
                    )
                time.sleep(delay)
                delay *= 2
                attempt += 1

        return wrapper

    return decorator
