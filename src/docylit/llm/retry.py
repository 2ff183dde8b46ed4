"""Shared retry configuration for tenacity-based retries.

Use tenacity directly with these constants instead of wrapper functions::

    from tenacity import AsyncRetrying, stop_after_attempt

    async for attempt in AsyncRetrying(stop=stop_after_attempt(n), wait=RETRY_WAIT, retry=RETRY_IF, reraise=True):
        with attempt:
            ...
"""

from google.api_core import exceptions as google_exceptions
from google.genai import errors as genai_errors
from tenacity import retry_if_exception_type, wait_random_exponential

# Exceptions that should trigger a retry
RETRYABLE_EXCEPTIONS = (
    google_exceptions.ResourceExhausted,
    google_exceptions.ServiceUnavailable,
    google_exceptions.InternalServerError,
    google_exceptions.GatewayTimeout,
    genai_errors.ServerError,
)

DEFAULT_INITIAL_DELAY = 0.5
DEFAULT_MAX_DELAY = 8.0

RETRY_WAIT = wait_random_exponential(multiplier=DEFAULT_INITIAL_DELAY, max=DEFAULT_MAX_DELAY)
RETRY_IF = retry_if_exception_type(RETRYABLE_EXCEPTIONS)

__all__ = [
    "DEFAULT_INITIAL_DELAY",
    "DEFAULT_MAX_DELAY",
    "RETRYABLE_EXCEPTIONS",
    "RETRY_IF",
    "RETRY_WAIT",
]
