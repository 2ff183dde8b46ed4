"""The editor core: one document, its statistics and its persistence."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from docylit.constants import (
    DEFAULT_AUTOSAVE_DELAY,
    DEFAULT_TITLE,
    EMPTY_DOCUMENT_MARKUP,
    SAVE_FAILED_LABEL,
    SAVED_LABEL,
    SAVING_LABEL,
    FormatCommand,
    SaveStatus,
)
from docylit.editor.autosave import AutosaveScheduler
from docylit.editor.formatting import FormattingDispatcher
from docylit.editor.state import DocumentState
from docylit.stats import TextStats, compute_stats
from docylit.storage import DocumentStore

if TYPE_CHECKING:
    from docylit.config import DocylitConfig
    from docylit.editor.surface import EditingSurface

logger = logging.getLogger(__name__)


class DocumentEditor:
    """Owns the document state and routes every mutation through autosave.

    Content lives in the editing surface; the title lives here. Content is
    written by the debounced :class:`AutosaveScheduler`, the title is
    written through on every change.
    """

    def __init__(
        self,
        surface: EditingSurface,
        store: DocumentStore,
        *,
        autosave_delay: float = DEFAULT_AUTOSAVE_DELAY,
    ) -> None:
        self.surface = surface
        self.store = store
        self._title = DEFAULT_TITLE
        self._stats = TextStats()
        self.autosave = AutosaveScheduler(store, self._snapshot, delay=autosave_delay)
        self.formatting = FormattingDispatcher(surface, self.handle_input)

    @classmethod
    def from_config(cls, config: DocylitConfig, surface: EditingSurface) -> DocumentEditor:
        store = DocumentStore.open(config.storage.directory)
        return cls(surface, store, autosave_delay=config.autosave.delay_seconds)

    # -- state -----------------------------------------------------------

    @property
    def title(self) -> str:
        return self._title

    @property
    def stats(self) -> TextStats:
        return self._stats

    @property
    def save_status(self) -> SaveStatus:
        return self.autosave.status

    @property
    def status_label(self) -> str:
        if self.autosave.is_pending:
            return SAVING_LABEL
        if self.autosave.last_error is not None:
            return SAVE_FAILED_LABEL
        return SAVED_LABEL

    @property
    def document(self) -> DocumentState:
        return DocumentState(
            title=self._title,
            content=self.surface.get_markup(),
            last_saved=self.autosave.last_saved,
        )

    def _snapshot(self) -> tuple[str, str]:
        return self.surface.get_markup(), self._title

    def _refresh_stats(self) -> None:
        self._stats = compute_stats(self.surface.get_plain_text())

    # -- operations ------------------------------------------------------

    def open(self) -> DocumentState:
        """Load the saved document into the surface, or start an empty one."""
        saved = self.store.load()
        if saved is None:
            self._title = DEFAULT_TITLE
            self.surface.set_markup(EMPTY_DOCUMENT_MARKUP)
        else:
            self._title = saved.title or DEFAULT_TITLE
            self.surface.set_markup(saved.content or EMPTY_DOCUMENT_MARKUP)
        self._refresh_stats()
        return self.document

    def handle_input(self) -> None:
        """Record a content change: refresh stats and (re)start the autosave debounce."""
        self._refresh_stats()
        self.autosave.notify_edit()

    def set_title(self, title: str) -> None:
        """Rename the document; persisted immediately, independent of autosave.

        Raises:
            PersistenceError: If the store rejects the write.

        """
        self._title = title
        self.store.save_title(title)

    def format(self, command: FormatCommand | str, value: str | None = None) -> bool:
        return self.formatting.apply(command, value)

    def insert_text(self, text: str) -> None:
        """Insert ``text`` at the cursor as a content change."""
        self.surface.focus()
        self.surface.insert_text_at_cursor(text)
        self.handle_input()

    def context_text(self) -> str:
        """The current selection, or the whole visible text when nothing is selected."""
        return self.surface.get_selection_text() or self.surface.get_plain_text()

    def close(self) -> None:
        """Flush any pending save and release the store.

        Raises:
            PersistenceError: If the final write fails; the store stays open.

        """
        self.autosave.flush()
        self.store.close()
        logger.debug("Closed document %r", self._title)
