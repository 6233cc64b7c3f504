"""
Storage Services Package

Provides the abstract byte store interface and local implementations.
The ledger is kept in a local file by default, but the backend is swappable.
"""

from debt_discipline.services.storage.interface import (
    ByteStoreInterface,
    NotFoundError,
    StorageError,
)
from debt_discipline.services.storage.local import (
    FileByteStore,
    InMemoryByteStore,
)

__all__ = [
    # Interface
    "ByteStoreInterface",
    # Exceptions
    "NotFoundError",
    "StorageError",
    # Local implementations
    "FileByteStore",
    "InMemoryByteStore",
]
