"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Currently implements a JSON file store as the durable backend, but designed
to be swappable.
"""

from personal_ledger.services.storage.interface import (
    CorruptDataError,
    KeyValueStoreInterface,
    StorageError,
    StorageUnavailableError,
    TransactionStoreInterface,
)
from personal_ledger.services.storage.key_value import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
)
from personal_ledger.services.storage.transaction_store import (
    DEFAULT_STORAGE_KEY,
    KeyValueTransactionStore,
)

__all__ = [
    # Interfaces
    "KeyValueStoreInterface",
    "TransactionStoreInterface",
    # Exceptions
    "CorruptDataError",
    "StorageError",
    "StorageUnavailableError",
    # Implementations
    "DEFAULT_STORAGE_KEY",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueTransactionStore",
]
