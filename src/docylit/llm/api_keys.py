"""Environment variable utilities for the AI backend credential."""

from __future__ import annotations

import logging
import os

from docylit.config.exceptions import ApiKeyNotFoundError

logger = logging.getLogger(__name__)

_API_KEY_ENV_VARS = ("GOOGLE_API_KEY", "GEMINI_API_KEY")


def get_google_api_key() -> str:
    """Get the Gemini API key from environment.

    Checks GOOGLE_API_KEY first, then GEMINI_API_KEY.

    Returns:
        The API key string

    Raises:
        ApiKeyNotFoundError: If neither environment variable is set

    """
    for env_var in _API_KEY_ENV_VARS:
        api_key = os.environ.get(env_var)
        if api_key:
            return api_key
    msg = " or ".join(_API_KEY_ENV_VARS)
    raise ApiKeyNotFoundError(msg)


__all__ = ["get_google_api_key"]
