"""Toolbar formatting commands."""

from __future__ import annotations

import logging
from collections.abc import Callable

from docylit.constants import FormatCommand
from docylit.editor.surface import EditingSurface

logger = logging.getLogger(__name__)


class FormattingDispatcher:
    """Forwards formatting commands to the surface and reports a content change.

    A command the surface cannot apply is a no-op, but the change callback
    still runs: formatting counts as an edit even when no character changed.
    """

    def __init__(self, surface: EditingSurface, on_change: Callable[[], None]) -> None:
        self._surface = surface
        self._on_change = on_change

    def apply(self, command: FormatCommand | str, value: str | None = None) -> bool:
        """Run ``command`` on the surface.

        Args:
            command: One of :class:`FormatCommand`, or another surface command
                name such as ``"createLink"``.
            value: Optional argument (e.g. a link URL).

        Returns:
            True if the surface applied the command.

        """
        name = command.value if isinstance(command, FormatCommand) else str(command)
        applied = self._surface.exec_formatting_command(name, value)
        if not applied:
            logger.debug("Formatting command %s was not applied", name)
        self._surface.focus()
        self._on_change()
        return applied
