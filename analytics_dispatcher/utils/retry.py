# ==============================================================================
# Retry Configuration
# ==============================================================================
"""
Shared retry configuration for provider network calls.

Analytics delivery is best effort, so providers use a light budget:
3 attempts with exponential backoff capped at a few seconds. After the last
attempt the error is re-raised to the provider, which logs and drops the event.
"""

import logging
from typing import Tuple, Type

import requests
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

# ==============================================================================
# Retry Constants
# ==============================================================================

# Light retry configuration: 3 attempts, backoff 0.5s, 1s
RETRY_ATTEMPTS_LIGHT = 3
RETRY_WAIT_MIN = 0.5  # seconds
RETRY_WAIT_MAX = 4  # seconds (cap for exponential backoff)

HTTP_RETRY_EXCEPTIONS = (
    requests.exceptions.ConnectionError,
    requests.exceptions.Timeout,
)


# ==============================================================================
# Logging Callbacks
# ==============================================================================


def log_retry_attempt_light(logger: logging.Logger):
    """
    Create a callback that logs retry attempts for light retry.

    Args:
        logger: Logger instance to use for logging

    Returns:
        Callback function for tenacity's before_sleep parameter
    """

    def _log_retry(retry_state: RetryCallState) -> None:
        exception = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "Retry attempt %d/%d after error: %s",
            retry_state.attempt_number,
            RETRY_ATTEMPTS_LIGHT,
            exception,
        )

    return _log_retry


# ==============================================================================
# Retry Decorators
# ==============================================================================


def retry_light(
    logger: logging.Logger,
    exception_types: Tuple[Type[Exception], ...] = HTTP_RETRY_EXCEPTIONS,
):
    """
    Create a light retry decorator (3 attempts).

    Args:
        logger: Logger instance for retry logging
        exception_types: Tuple of exception types to retry on

    Returns:
        Tenacity retry decorator

    Example:
        @retry_light(logger)
        def _post(self, body):
            ...
    """
    return retry(
        stop=stop_after_attempt(RETRY_ATTEMPTS_LIGHT),
        wait=wait_exponential(multiplier=0.5, min=RETRY_WAIT_MIN, max=RETRY_WAIT_MAX),
        retry=retry_if_exception_type(exception_types),
        before_sleep=log_retry_attempt_light(logger),
        reraise=True,
    )
