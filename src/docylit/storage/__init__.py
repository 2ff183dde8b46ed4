"""Durable document storage."""

from docylit.storage.backends import DiskCacheBackend, KeyValueBackend, MemoryBackend
from docylit.storage.document_store import DocumentStore, SavedDocument

__all__ = [
    "DiskCacheBackend",
    "DocumentStore",
    "KeyValueBackend",
    "MemoryBackend",
    "SavedDocument",
]
