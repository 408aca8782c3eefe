"""
Abstract Storage Interface

DESIGN DECISION: We define abstract interfaces for storage operations.
This allows us to:
1. Swap the JSON file store for another durable backend later
2. Use in-memory storage for testing
3. Keep the ledger decoupled from how bytes reach the disk

There are two layers:
- KeyValueStoreInterface: a dumb durable map of string keys to string blobs
- TransactionStoreInterface: the persistence adapter the ledger talks to,
  which keeps the whole transaction collection as one blob under one key

The interface is intentionally simple. Every call is synchronous.
"""

from abc import ABC, abstractmethod
from typing import Optional

from personal_ledger.errors import (
    CorruptDataError,
    StorageError,
    StorageUnavailableError,
)
from personal_ledger.models.transaction import Transaction


class KeyValueStoreInterface(ABC):
    """
    Abstract interface for a durable, process-local key-value store.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Returns:
            The stored text, or None if the key is absent

        Raises:
            StorageUnavailableError: If the store cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store a value under a key, overwriting any prior value.

        Raises:
            StorageUnavailableError: If the store rejects the write
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if the key existed
        """
        pass


class TransactionStoreInterface(ABC):
    """
    Abstract interface for persisting the full transaction collection.
    """

    @abstractmethod
    def save(self, transactions: list[Transaction]) -> None:
        """
        Replace the stored collection with the given transactions.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def load(self) -> Optional[list[Transaction]]:
        """
        Read the stored collection.

        Returns:
            The transactions in stored order, or None if nothing was saved yet

        Raises:
            CorruptDataError: If the stored blob is not a valid collection
            StorageUnavailableError: If the store cannot be read
        """
        pass


__all__ = [
    "CorruptDataError",
    "KeyValueStoreInterface",
    "StorageError",
    "StorageUnavailableError",
    "TransactionStoreInterface",
]
