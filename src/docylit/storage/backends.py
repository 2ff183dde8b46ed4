"""Low-level key/value backend protocols and implementations."""

from __future__ import annotations

import sqlite3
from typing import TYPE_CHECKING, Protocol

import diskcache

from docylit.exceptions import StoreKeyNotFoundError, StoreWriteError

if TYPE_CHECKING:
    from pathlib import Path

# Failures diskcache surfaces for a write it could not commit
_WRITE_FAILURES = (OSError, sqlite3.Error, diskcache.Timeout)


class KeyValueBackend(Protocol):
    """Abstract protocol for durable string stores."""

    def get(self, key: str) -> str: ...

    def set(self, key: str, value: str) -> None: ...

    def close(self) -> None: ...


class DiskCacheBackend:
    """Adapter for diskcache.Cache to match the KeyValueBackend protocol."""

    def __init__(self, directory: Path, **kwargs: object) -> None:
        self._cache = diskcache.Cache(str(directory), **kwargs)

    def get(self, key: str) -> str:
        try:
            return self._cache[key]
        except KeyError as e:
            raise StoreKeyNotFoundError(key) from e

    def set(self, key: str, value: str) -> None:
        try:
            self._cache.set(key, value)
        except _WRITE_FAILURES as e:
            raise StoreWriteError(key, e) from e

    def close(self) -> None:
        self._cache.close()


class MemoryBackend:
    """Process-local backend for headless sessions and tests."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str:
        try:
            return self._data[key]
        except KeyError as e:
            raise StoreKeyNotFoundError(key) from e

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def close(self) -> None:
        return None
