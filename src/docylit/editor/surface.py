"""Capability contract for the rich-text editing surface.

The core never renders anything; it drives whatever surface the
presentation layer provides through this protocol.
"""

from __future__ import annotations

from typing import Protocol


class EditingSurface(Protocol):
    """Operations the editor core needs from the user's canvas."""

    def get_plain_text(self) -> str: ...

    def get_markup(self) -> str: ...

    def set_markup(self, markup: str) -> None: ...

    def get_selection_text(self) -> str: ...

    def insert_text_at_cursor(self, text: str) -> None: ...

    def exec_formatting_command(self, command: str, value: str | None = None) -> bool:
        """Apply a named formatting operation; False when it could not be applied."""
        ...

    def focus(self) -> None: ...
