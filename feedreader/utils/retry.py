"""Retry utilities for handling transient fetch failures."""

import functools

import requests

from feedreader.config.settings import RETRYABLE_STATUS_CODES
from feedreader.core.errors import FeedError, FetchFailure, TimeoutFailure


def is_retryable_error(error):
    """Check if the error is retryable.

    Args:
        error: The exception object

    Returns:
        bool: True if the error should be retried
    """
    if isinstance(error, TimeoutFailure):
        return True

    if isinstance(error, FetchFailure):
        # No status code means the host was never reached
        if error.status_code is None:
            return True
        return error.status_code in RETRYABLE_STATUS_CODES

    # Configuration and parse failures are never transient
    if isinstance(error, FeedError):
        return False

    if isinstance(error, (requests.ConnectionError, requests.Timeout)):
        return True

    error_str = str(error).lower()

    # Retryable error patterns
    retryable_indicators = [
        'timeout',
        'timed out',
        'fetch failed',
        'connection',
        'temporarily unavailable'
    ]

    return any(indicator in error_str for indicator in retryable_indicators)


def retry_with_attempts(retries, should_retry=is_retryable_error):
    """Decorator factory retrying a call up to `retries` extra times without delay.

    The failure of the final attempt is re-raised unchanged.

    Args:
        retries: Number of additional attempts after the first one
        should_retry: Predicate deciding whether an exception is transient

    Returns:
        Decorator applying the retry loop
    """
    max_attempts = max(0, int(retries)) + 1

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            attempt = 0
            while True:
                attempt += 1
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    print(f"[WARNING] Request failed (attempt {attempt}/{max_attempts}): {e}")

                    if attempt >= max_attempts:
                        print(f"[ERROR] Maximum attempts ({max_attempts}) reached")
                        raise

                    if not should_retry(e):
                        print("[ERROR] Non-retryable error encountered")
                        raise

        return wrapper

    return decorator
