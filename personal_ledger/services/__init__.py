"""Services package."""

from personal_ledger.services.storage import (
    CorruptDataError,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStoreInterface,
    KeyValueTransactionStore,
    StorageError,
    StorageUnavailableError,
    TransactionStoreInterface,
)

__all__ = [
    # Storage services
    "CorruptDataError",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStoreInterface",
    "KeyValueTransactionStore",
    "StorageError",
    "StorageUnavailableError",
    "TransactionStoreInterface",
]
