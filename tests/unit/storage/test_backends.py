import sqlite3
from unittest.mock import patch

import pytest

from docylit.exceptions import StoreKeyNotFoundError, StoreWriteError
from docylit.storage import DiskCacheBackend, MemoryBackend


@pytest.fixture
def disk_backend(tmp_path):
    backend = DiskCacheBackend(tmp_path / "store")
    yield backend
    backend.close()


class TestDiskCacheBackend:
    def test_set_then_get(self, disk_backend):
        disk_backend.set("docylit-title", "Notes")
        assert disk_backend.get("docylit-title") == "Notes"

    def test_missing_key_raises(self, disk_backend):
        with pytest.raises(StoreKeyNotFoundError) as exc_info:
            disk_backend.get("nope")
        assert exc_info.value.key == "nope"

    def test_values_survive_reopen(self, tmp_path):
        first = DiskCacheBackend(tmp_path / "store")
        first.set("docylit-content", "<p>kept</p>")
        first.close()

        second = DiskCacheBackend(tmp_path / "store")
        try:
            assert second.get("docylit-content") == "<p>kept</p>"
        finally:
            second.close()

    def test_write_failure_is_wrapped(self, disk_backend):
        with patch.object(disk_backend._cache, "set", side_effect=sqlite3.OperationalError("database is locked")):
            with pytest.raises(StoreWriteError) as exc_info:
                disk_backend.set("docylit-content", "<p>x</p>")
        assert exc_info.value.key == "docylit-content"
        assert isinstance(exc_info.value.original_exception, sqlite3.OperationalError)


class TestMemoryBackend:
    def test_initial_values(self):
        backend = MemoryBackend({"a": "1"})
        assert backend.get("a") == "1"

    def test_missing_key_raises(self):
        with pytest.raises(StoreKeyNotFoundError):
            MemoryBackend().get("a")
