"""
Transaction Persistence Adapter

The whole ledger is stored as a single JSON array under one fixed key:

    [
        {"id": 1718000000000, "date": "2024-06-10",
         "description": "Salary", "value": 2500.0, "kind": "income"},
        ...
    ]

DESIGN DECISION: On load, nothing read from storage is trusted. The blob
is parsed (floats as Decimal, so amounts come back exact) and every record
is validated against the Transaction model. Any mismatch makes the whole
blob corrupt. There is no partial recovery.
"""

import json
from decimal import Decimal
from typing import Optional

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from personal_ledger.models.transaction import Transaction
from personal_ledger.services.storage.interface import (
    CorruptDataError,
    KeyValueStoreInterface,
    StorageError,
    StorageUnavailableError,
    TransactionStoreInterface,
)
from personal_ledger.services.storage.key_value import validate_key


DEFAULT_STORAGE_KEY = "financialTransactions"

_TRANSACTION_LIST = TypeAdapter(list[Transaction])


class KeyValueTransactionStore(TransactionStoreInterface):
    """
    Persists the transaction collection in a key-value store.
    """

    def __init__(
        self,
        store: KeyValueStoreInterface,
        key: str = DEFAULT_STORAGE_KEY,
    ):
        self._store = store
        self._key = validate_key(key)

    @property
    def key(self) -> str:
        return self._key

    def serialize(self, transactions: list[Transaction]) -> str:
        """Convert transactions to the stored JSON blob."""
        return json.dumps(
            [transaction.to_record() for transaction in transactions],
            ensure_ascii=False,
        )

    def deserialize(self, blob: str) -> list[Transaction]:
        """
        Convert a stored JSON blob back to transactions.

        Raises:
            CorruptDataError: If the blob is not a valid transaction array
        """
        try:
            data = json.loads(blob, parse_float=Decimal)
        except (ValueError, RecursionError, TypeError) as e:
            raise CorruptDataError(f"Stored ledger is not valid JSON: {e}")

        if not isinstance(data, list):
            raise CorruptDataError(
                f"Stored ledger must be an array, got {type(data).__name__}"
            )

        try:
            transactions = _TRANSACTION_LIST.validate_python(data)
        except PydanticValidationError as e:
            raise CorruptDataError(
                f"Stored ledger has {e.error_count()} invalid field(s): {e}"
            )

        seen_ids = set()
        for transaction in transactions:
            if transaction.id in seen_ids:
                raise CorruptDataError(f"Duplicate transaction id: {transaction.id}")
            seen_ids.add(transaction.id)

        return transactions

    def save(self, transactions: list[Transaction]) -> None:
        """Write the full collection, overwriting the previous blob."""
        try:
            blob = self.serialize(transactions)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Failed to serialize ledger: {e}")

        try:
            self._store.set(self._key, blob)
        except StorageError:
            raise
        except Exception as e:
            raise StorageUnavailableError(f"Failed to save ledger: {e}")

    def load(self) -> Optional[list[Transaction]]:
        """Read the collection. None means nothing was saved yet."""
        try:
            blob = self._store.get(self._key)
        except StorageError:
            raise
        except Exception as e:
            raise StorageUnavailableError(f"Failed to load ledger: {e}")

        if blob is None:
            return None

        return self.deserialize(blob)
