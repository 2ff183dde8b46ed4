from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from docylit.assist.client import AssistanceClient
from docylit.editor import DocumentEditor, HtmlEditingSurface
from docylit.exceptions import StoreWriteError
from docylit.storage import DocumentStore, MemoryBackend
from tests.utils.streams import stream_of

FAST_AUTOSAVE_DELAY = 0.05


@pytest.fixture(autouse=True)
def clear_api_keys(monkeypatch):
    """Never let a developer's real key reach the backend."""
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)


class RecordingBackend(MemoryBackend):
    """Memory backend that remembers every write in order."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        super().__init__(initial)
        self.writes: list[tuple[str, str]] = []

    def set(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        super().set(key, value)


class FailingBackend(MemoryBackend):
    """Memory backend whose writes always fail."""

    def set(self, key: str, value: str) -> None:
        raise StoreWriteError(key, OSError("disk full"))


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def store(backend) -> DocumentStore:
    return DocumentStore(backend)


@pytest.fixture
def surface() -> HtmlEditingSurface:
    return HtmlEditingSurface()


@pytest.fixture
def editor(surface, store) -> DocumentEditor:
    doc_editor = DocumentEditor(surface, store, autosave_delay=FAST_AUTOSAVE_DELAY)
    doc_editor.open()
    return doc_editor


@pytest.fixture
def genai_client() -> MagicMock:
    """Stand-in for ``google.genai.Client`` with the async surface mocked."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=SimpleNamespace(text="Generated text."))
    client.aio.models.generate_content_stream = AsyncMock(return_value=stream_of("Hello", " world"))
    return client


@pytest.fixture
def assist_client(genai_client) -> AssistanceClient:
    return AssistanceClient(client=genai_client, model="gemini-test")


@pytest.fixture
def failing_store() -> DocumentStore:
    return DocumentStore(FailingBackend())
