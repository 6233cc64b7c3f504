"""
Local Byte Store Implementations

FileByteStore keeps one file per key in a directory. Writes go to a
temporary file first and are then moved into place, so a crash mid-write
leaves the previous snapshot intact.

InMemoryByteStore keeps everything in a dict. Used for tests and for
throwaway sessions.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import structlog

from debt_discipline.services.storage.interface import (
    ByteStoreInterface,
    NotFoundError,
    StorageError,
)


logger = structlog.get_logger(__name__)


class InMemoryByteStore(ByteStoreInterface):
    """Dict-backed byte store."""

    def __init__(self, initial: Optional[dict[str, bytes]] = None):
        self._data: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def put(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)

    def delete(self, key: str) -> None:
        try:
            del self._data[key]
        except KeyError:
            raise NotFoundError(f"Key not found: {key}")


class FileByteStore(ByteStoreInterface):
    """
    Directory-backed byte store.

    Each key maps to `<directory>/<key>.json`.
    """

    SUFFIX = ".json"

    def __init__(self, directory: Union[str, Path]):
        self._directory = Path(directory).expanduser()

    @property
    def directory(self) -> Path:
        return self._directory

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in (".", ".."):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self._directory / f"{key}{self.SUFFIX}"

    def get(self, key: str) -> Optional[bytes]:
        path = self._path(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Could not read {path}: {e}") from e

    def put(self, key: str, value: bytes) -> None:
        path = self._path(key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._directory,
                prefix=f".{key}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Could not write {path}: {e}") from e

        logger.debug("byte_store_write", key=key, path=str(path), size=len(value))

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            raise NotFoundError(f"Key not found: {key}")
        except OSError as e:
            raise StorageError(f"Could not delete {path}: {e}") from e
