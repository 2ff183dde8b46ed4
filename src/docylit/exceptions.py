"""Centralized exceptions for the Docylit editor core."""


class DocylitError(Exception):
    """Base exception for all Docylit errors."""


class PersistenceError(DocylitError):
    """Base exception for durable store failures."""


class StoreKeyNotFoundError(PersistenceError):
    """Raised when a key is absent from the durable store."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Key not found in store: '{key}'")


class StoreWriteError(PersistenceError):
    """Raised when the durable store rejects a write."""

    def __init__(self, key: str, original_exception: Exception) -> None:
        self.key = key
        self.original_exception = original_exception
        super().__init__(f"Failed to write '{key}' to store: {original_exception}")
