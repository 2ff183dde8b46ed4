"""Configuration facade: import everything configuration-related from here.

    from docylit.config import DocylitConfig, load_docylit_config
"""

from docylit.config.exceptions import ApiKeyNotFoundError, ConfigError, ConfigValidationError
from docylit.config.settings import (
    DEFAULT_MODEL,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_TEMPERATURE,
    AssistSettings,
    AutosaveSettings,
    DocylitConfig,
    StorageSettings,
    find_docylit_config,
    load_docylit_config,
    save_docylit_config,
)

__all__ = [
    "DEFAULT_MODEL",
    "DEFAULT_RETRY_ATTEMPTS",
    "DEFAULT_TEMPERATURE",
    "ApiKeyNotFoundError",
    "AssistSettings",
    "AutosaveSettings",
    "ConfigError",
    "ConfigValidationError",
    "DocylitConfig",
    "StorageSettings",
    "find_docylit_config",
    "load_docylit_config",
    "save_docylit_config",
]
