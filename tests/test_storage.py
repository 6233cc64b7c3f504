"""Tests for the byte store implementations."""

import pytest

from debt_discipline.services.storage import (
    FileByteStore,
    InMemoryByteStore,
    NotFoundError,
    StorageError,
)


@pytest.fixture(params=["memory", "file"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryByteStore()
    return FileByteStore(tmp_path / "data")


class TestByteStores:
    """Behaviour shared by every byte store."""

    def test_missing_key(self, store):
        """Test that reading an unknown key gives None."""
        assert store.get("nothing_here") is None

    def test_put_then_get(self, store):
        """Test that stored bytes come back unchanged."""
        store.put("ledger_v3", b'[{"id": "a"}]')
        assert store.get("ledger_v3") == b'[{"id": "a"}]'

    def test_put_replaces(self, store):
        """Test that a second write replaces the first."""
        store.put("ledger_v3", b"[1]")
        store.put("ledger_v3", b"[2]")
        assert store.get("ledger_v3") == b"[2]"

    def test_delete(self, store):
        """Test deleting a key."""
        store.put("ledger_v3", b"[]")
        store.delete("ledger_v3")
        assert store.get("ledger_v3") is None

    def test_delete_missing(self, store):
        """Test that deleting an unknown key raises NotFoundError."""
        with pytest.raises(NotFoundError):
            store.delete("nothing_here")

    def test_not_found_is_storage_error(self):
        """Test the exception hierarchy."""
        assert issubclass(NotFoundError, StorageError)


class TestFileByteStore:
    """Tests specific to the directory-backed store."""

    def test_creates_directory_on_write(self, tmp_path):
        """Test that the data directory is created lazily."""
        directory = tmp_path / "nested" / "data"
        store = FileByteStore(directory)
        assert not directory.exists()

        store.put("ledger_v3", b"[]")
        assert (directory / "ledger_v3.json").read_bytes() == b"[]"

    def test_no_temp_files_left(self, tmp_path):
        """Test that writes leave only the target file behind."""
        store = FileByteStore(tmp_path)
        store.put("ledger_v3", b"[1]")
        store.put("ledger_v3", b"[2]")
        assert [p.name for p in tmp_path.iterdir()] == ["ledger_v3.json"]

    @pytest.mark.parametrize("key", ["", "../escape", "a/b", "..", "a\\b"])
    def test_rejects_unsafe_keys(self, tmp_path, key):
        """Test that keys cannot point outside the directory."""
        store = FileByteStore(tmp_path)
        with pytest.raises(StorageError):
            store.put(key, b"[]")

    def test_unwritable_location(self, tmp_path):
        """Test that an OS failure surfaces as StorageError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = FileByteStore(blocker / "data")
        with pytest.raises(StorageError):
            store.put("ledger_v3", b"[]")


class TestInMemoryByteStore:
    """Tests specific to the dict-backed store."""

    def test_initial_contents(self):
        """Test seeding the store."""
        store = InMemoryByteStore({"ledger_v3": b"[]"})
        assert store.get("ledger_v3") == b"[]"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
