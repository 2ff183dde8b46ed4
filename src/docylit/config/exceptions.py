"""Custom exceptions for configuration handling."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from docylit.exceptions import DocylitError


class ConfigError(DocylitError):
    """Base exception for all configuration-related errors."""


class ConfigValidationError(ConfigError):
    """Raised when the configuration file fails validation."""

    def __init__(self, errors: Sequence[dict[str, Any]] | None = None) -> None:
        self.errors = list(errors or [])
        super().__init__(f"Configuration validation failed with {len(self.errors)} error(s).")


class ApiKeyNotFoundError(ConfigError):
    """Raised when a required API key is not found in environment variables."""

    def __init__(self, env_var: str) -> None:
        self.env_var = env_var
        super().__init__(f"API key environment variable not set: {env_var}")
