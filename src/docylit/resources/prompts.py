"""Prompt template management.

Templates are resolved in priority order:

1. a user override directory (``assist.prompts_dir``)
2. ``src/docylit/prompts/`` (package defaults)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

logger = logging.getLogger(__name__)

PACKAGE_PROMPTS_DIR = Path(__file__).parents[1] / "prompts"


def resolve_search_paths(override_dir: Path | None = None) -> list[Path]:
    """Get the ordered list of directories to search for templates."""
    search_paths: list[Path] = []
    if override_dir is not None:
        if override_dir.is_dir():
            search_paths.append(override_dir)
            logger.debug("Using custom prompts from: %s", override_dir)
        else:
            logger.warning("Prompt override directory not found: %s", override_dir)

    if PACKAGE_PROMPTS_DIR.is_dir():
        search_paths.append(PACKAGE_PROMPTS_DIR)
    else:
        logger.warning("Package prompts directory not found at %s", PACKAGE_PROMPTS_DIR)
    return search_paths


class PromptManager:
    """Manages the Jinja2 environment for prompts with override support."""

    def __init__(self, override_dir: Path | None = None) -> None:
        self.search_paths = resolve_search_paths(override_dir)
        self.env = Environment(
            loader=FileSystemLoader(self.search_paths),
            autoescape=select_autoescape(enabled_extensions=()),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_name: str, **context: Any) -> str:
        """Render a prompt template.

        Args:
            template_name: Name of the template (e.g., "assist_task.jinja")
            **context: Variables to pass to the template

        """
        template = self.env.get_template(template_name)
        return template.render(**context)

