"""Services package."""

from debt_discipline.services.storage import (
    ByteStoreInterface,
    FileByteStore,
    InMemoryByteStore,
    NotFoundError,
    StorageError,
)

__all__ = [
    "ByteStoreInterface",
    "FileByteStore",
    "InMemoryByteStore",
    "NotFoundError",
    "StorageError",
]
