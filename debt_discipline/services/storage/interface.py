"""
Abstract Storage Interface

DESIGN DECISION: The ledger only needs a key-value byte store.
Keeping the interface this small allows us to:
1. Keep the ledger in a local file for everyday use
2. Use in-memory storage for testing
3. Swap in another local store later without touching ledger logic

The ledger store decides what the bytes mean (a JSON array of debts).
Byte stores never parse what they hold.
"""

from abc import ABC, abstractmethod
from typing import Optional


class ByteStoreInterface(ABC):
    """
    Abstract interface for a keyed byte store.

    Any storage implementation (local file, memory, ...)
    must implement these methods.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """
        Read the value stored at a key.

        Args:
            key: Storage key

        Returns:
            The stored bytes, or None if the key is missing

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def put(self, key: str, value: bytes) -> None:
        """
        Store a value, replacing whatever was at the key.

        Args:
            key: Storage key
            value: Bytes to store

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """
        Remove a key.

        Raises:
            NotFoundError: If the key does not exist
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Key not found in storage."""
    pass
