"""Centralized configuration for Docylit.

Configuration priority (highest to lowest):

1. Environment variables (``DOCYLIT_SECTION__KEY``)
2. Config file (``.docylit/docylit.toml``, searched upward)
3. Defaults
"""

from __future__ import annotations

import logging
import os
import tomllib
from copy import deepcopy
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from docylit.config.exceptions import ConfigValidationError
from docylit.constants import DEFAULT_AUTOSAVE_DELAY

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_RETRY_ATTEMPTS = 3
DEFAULT_STORE_DIR = Path(".docylit") / "store"

CONFIG_DIR_NAME = ".docylit"
CONFIG_FILE_NAME = "docylit.toml"
_ENV_PREFIX = "DOCYLIT_"


class AssistSettings(BaseModel):
    """AI backend configuration for the writing assistant."""

    model: str = Field(default=DEFAULT_MODEL, description="Gemini model id used for generation")
    temperature: float = Field(
        default=DEFAULT_TEMPERATURE,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for single-shot requests (streaming uses the model default)",
    )
    retry_attempts: int = Field(
        default=DEFAULT_RETRY_ATTEMPTS,
        ge=1,
        description="Total attempts for a single-shot request on transient backend errors",
    )
    prompts_dir: Path | None = Field(
        default=None,
        description="Optional directory with prompt template overrides",
    )


class AutosaveSettings(BaseModel):
    """Debounced persistence configuration."""

    delay_seconds: float = Field(
        default=DEFAULT_AUTOSAVE_DELAY,
        gt=0.0,
        description="Quiet period after the last edit before content is written",
    )


class StorageSettings(BaseModel):
    """Durable store location."""

    directory: Path = Field(default=DEFAULT_STORE_DIR, description="Directory of the durable key/value store")


class DocylitConfig(BaseSettings):
    """Root configuration for Docylit.

    Supports environment variable overrides with the pattern
    ``DOCYLIT_SECTION__KEY`` (e.g., ``DOCYLIT_ASSIST__MODEL``).
    """

    assist: AssistSettings = Field(default_factory=AssistSettings)
    autosave: AutosaveSettings = Field(default_factory=AutosaveSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)

    model_config = SettingsConfigDict(
        extra="forbid",
        validate_assignment=True,
        env_prefix=_ENV_PREFIX,
        env_nested_delimiter="__",
    )


def find_docylit_config(start_dir: Path) -> Path | None:
    """Search upward for ``.docylit/docylit.toml``.

    Args:
        start_dir: Starting directory for upward search

    Returns:
        Path to config file if found, else None

    """
    current = start_dir.expanduser().resolve()
    for candidate in (current, *current.parents):
        toml_path = candidate / CONFIG_DIR_NAME / CONFIG_FILE_NAME
        if toml_path.exists():
            return toml_path
    return None


def _collect_env_override_paths() -> set[tuple[str, ...]]:
    """Return the set of config paths defined via environment variables."""
    env_paths: set[tuple[str, ...]] = set()
    for key in os.environ:
        if not key.startswith(_ENV_PREFIX):
            continue
        parts = [part.lower() for part in key[len(_ENV_PREFIX) :].split("__") if part]
        if parts:
            env_paths.add(tuple(parts))
    return env_paths


def _merge_config(
    base: dict[str, Any],
    override: dict[str, Any],
    env_override_paths: set[tuple[str, ...]],
    current_path: tuple[str, ...] = (),
) -> dict[str, Any]:
    """Merge override into base, skipping keys provided via env vars."""
    merged = deepcopy(base)

    for key, value in override.items():
        path = (*current_path, str(key).lower())
        if path in env_override_paths:
            continue

        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge_config(merged[key], value, env_override_paths, path)
        else:
            merged[key] = value

    return merged


def load_docylit_config(root: Path | None = None) -> DocylitConfig:
    """Load configuration from ``.docylit/docylit.toml``.

    Args:
        root: Directory to start searching from. Defaults to the working directory.

    Returns:
        Validated DocylitConfig instance

    Raises:
        ConfigValidationError: If the config file contains invalid data

    """
    if root is None:
        root = Path.cwd()

    config_path = find_docylit_config(root)
    if config_path is None:
        logger.debug("No configuration file found above %s, using defaults", root)
        return DocylitConfig()

    logger.info("Loading config from %s", config_path)
    file_data = tomllib.loads(config_path.read_text(encoding="utf-8"))

    base_dict = DocylitConfig().model_dump(mode="json")
    merged = _merge_config(base_dict, file_data, _collect_env_override_paths())

    try:
        return DocylitConfig.model_validate(merged)
    except ValidationError as e:
        for error in e.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            logger.error("  %s: %s", loc, error["msg"])
        raise ConfigValidationError(e.errors()) from e


def _clean_nones(data: dict[str, Any]) -> dict[str, Any]:
    cleaned: dict[str, Any] = {}
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, dict):
            value = _clean_nones(value)
        cleaned[key] = value
    return cleaned


def save_docylit_config(config: DocylitConfig, root: Path) -> Path:
    """Save configuration to ``.docylit/docylit.toml`` under ``root``.

    Creates the ``.docylit/`` directory if it doesn't exist.

    Returns:
        Path to the saved config file

    """
    config_dir = root / CONFIG_DIR_NAME
    config_dir.mkdir(exist_ok=True, parents=True)
    config_path = config_dir / CONFIG_FILE_NAME

    # tomli_w cannot serialize None
    data = _clean_nones(config.model_dump(exclude_defaults=False, mode="json"))
    config_path.write_text(tomli_w.dumps(data), encoding="utf-8")
    logger.debug("Saved config to %s", config_path)
    return config_path
