"""Durable title/content persistence for the editor."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from docylit.constants import CONTENT_KEY, TITLE_KEY
from docylit.exceptions import StoreKeyNotFoundError
from docylit.storage.backends import DiskCacheBackend, KeyValueBackend

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SavedDocument:
    """What the store held at load time. Empty values count as absent."""

    content: str | None = None
    title: str | None = None


class DocumentStore:
    """Reads and writes the two persisted document keys.

    Write failures propagate as :class:`~docylit.exceptions.StoreWriteError`;
    there is no retry at this layer.
    """

    def __init__(self, backend: KeyValueBackend) -> None:
        self.backend = backend

    @classmethod
    def open(cls, directory: Path) -> DocumentStore:
        """Open (or create) a diskcache-backed store under ``directory``."""
        directory.mkdir(parents=True, exist_ok=True)
        return cls(DiskCacheBackend(directory))

    def _read(self, key: str) -> str | None:
        try:
            value = self.backend.get(key)
        except StoreKeyNotFoundError:
            return None
        return value or None

    def load(self) -> SavedDocument | None:
        """Return the last saved document, or None when nothing was ever saved."""
        saved = SavedDocument(content=self._read(CONTENT_KEY), title=self._read(TITLE_KEY))
        if saved.content is None and saved.title is None:
            logger.info("No saved document found, starting fresh")
            return None
        logger.info("Loaded saved document %r", saved.title)
        return saved

    def save(self, content: str, title: str) -> None:
        """Overwrite both persisted keys."""
        self.backend.set(CONTENT_KEY, content)
        self.backend.set(TITLE_KEY, title)
        logger.debug("Persisted content (%d chars) and title %r", len(content), title)

    def save_title(self, title: str) -> None:
        """Write the title through immediately, independent of content saves."""
        self.backend.set(TITLE_KEY, title)
        logger.debug("Persisted title %r", title)

    def close(self) -> None:
        self.backend.close()
