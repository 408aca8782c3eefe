"""
Transaction Ledger

The ledger owns the in-memory collection of transactions and is the only
thing the presentation layer talks to.

GUARANTEES:
- Invalid input is rejected before any state change
- Every successful mutation is pushed to storage right away
- Storage failures never crash the ledger: a failed load starts from an
  empty ledger, a failed save keeps the in-memory state for this session
- Ids are unique and strictly increasing for the lifetime of the ledger
"""

import datetime
import time
from decimal import Decimal
from typing import Callable, Optional, Union

from personal_ledger.errors import StorageError, ValidationError
from personal_ledger.logger import get_logger
from personal_ledger.models.transaction import (
    KindFilter,
    LedgerSummary,
    Transaction,
    TransactionKind,
)
from personal_ledger.services.storage import TransactionStoreInterface
from personal_ledger.validation import TransactionValidator


def current_time_millis() -> int:
    """Wall clock in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


class IdAllocator:
    """
    Hands out transaction ids derived from the creation timestamp.

    If the clock has not moved past the last id (two adds within the same
    millisecond, or the clock stepping back), the next id is last + 1.
    """

    def __init__(self, clock: Callable[[], int] = current_time_millis, last_id: int = 0):
        self._clock = clock
        self._last_id = last_id

    @property
    def last_id(self) -> int:
        return self._last_id

    def observe(self, transaction_id: int) -> None:
        """Make sure future ids are greater than an existing id."""
        if transaction_id > self._last_id:
            self._last_id = transaction_id

    def next_id(self) -> int:
        candidate = int(self._clock())
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate


class Ledger:
    """
    Insertion-ordered collection of transactions mirrored to storage.

    Construct once per session and call load() before use, or use
    personal_ledger.factory.create_ledger() which does both.
    """

    def __init__(
        self,
        store: TransactionStoreInterface,
        validator: Optional[TransactionValidator] = None,
        clock: Callable[[], int] = current_time_millis,
    ):
        """
        Initialize ledger.

        Args:
            store: Persistence adapter holding the transaction collection
            validator: Input validator. Defaults to ',' as decimal separator.
            clock: Millisecond clock used to derive transaction ids
        """
        self._store = store
        self._validator = validator or TransactionValidator()
        self._ids = IdAllocator(clock=clock)
        self._transactions: dict[int, Transaction] = {}
        self._last_storage_error: Optional[StorageError] = None
        self._logger = get_logger(__name__)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    @property
    def last_storage_error(self) -> Optional[StorageError]:
        """Error from the most recent save, or None if it succeeded."""
        return self._last_storage_error

    def load(self) -> int:
        """
        Replace the in-memory collection with the stored one.

        Missing or unreadable data gives an empty ledger.

        Returns:
            Number of transactions loaded
        """
        try:
            stored = self._store.load()
        except StorageError as e:
            self._logger.warning(
                "ledger_load_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            stored = None

        self._transactions = {}
        self._last_storage_error = None
        for transaction in stored or []:
            self._transactions[transaction.id] = transaction
            self._ids.observe(transaction.id)

        self._logger.info(
            "ledger_loaded",
            transaction_count=len(self._transactions),
            found_data=stored is not None,
        )
        return len(self._transactions)

    def _persist(self) -> bool:
        """Push the full collection to storage. Failures are recorded, not raised."""
        try:
            self._store.save(list(self._transactions.values()))
        except StorageError as e:
            self._last_storage_error = e
            self._logger.error(
                "ledger_save_failed",
                error=str(e),
                error_type=type(e).__name__,
                transaction_count=len(self._transactions),
            )
            return False

        self._last_storage_error = None
        return True

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add(
        self,
        date: Union[str, datetime.date, None],
        description: Optional[str],
        value: Union[str, int, float, Decimal, None],
        kind: Union[str, TransactionKind],
    ) -> Transaction:
        """
        Record a new transaction.

        Args:
            date: Date object or YYYY-MM-DD text
            description: What the entry was for
            value: Amount as typed by the user ("12,50" or "12.50")
            kind: income or expense

        Returns:
            The stored transaction

        Raises:
            ValidationError: If any input is missing or invalid
        """
        try:
            draft = self._validator.validate(date, description, value, kind)
        except ValidationError as e:
            self._logger.info(
                "transaction_rejected",
                reason=e.reason,
                field=e.field,
            )
            raise

        transaction = Transaction(
            id=self._ids.next_id(),
            date=draft.date,
            description=draft.description,
            value=draft.value,
            kind=draft.kind,
        )
        self._transactions[transaction.id] = transaction

        self._logger.info(
            "transaction_added",
            transaction_id=transaction.id,
            kind=transaction.kind.value,
            value=str(transaction.value),
        )
        self._persist()
        return transaction

    def remove(self, transaction_id: int) -> bool:
        """
        Delete a transaction by id.

        Unknown ids are ignored, so calling this twice is harmless.

        Returns:
            True if a transaction was removed
        """
        if transaction_id not in self._transactions:
            return False

        del self._transactions[transaction_id]
        self._logger.info("transaction_removed", transaction_id=transaction_id)
        self._persist()
        return True

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get(self, transaction_id: int) -> Optional[Transaction]:
        """Retrieve a transaction by id."""
        return self._transactions.get(transaction_id)

    def list_transactions(
        self,
        kind_filter: Union[str, KindFilter] = KindFilter.ALL,
    ) -> list[Transaction]:
        """
        List transactions in insertion order.

        The returned list is a fresh copy. Sorting for display is up to
        the caller.

        Raises:
            ValueError: If kind_filter is not all, income or expense
        """
        kind_filter = KindFilter(kind_filter)
        return [
            transaction
            for transaction in self._transactions.values()
            if kind_filter.matches(transaction.kind)
        ]

    def balance(self) -> Decimal:
        """Income minus expenses over the whole ledger."""
        return sum(
            (transaction.signed_value for transaction in self._transactions.values()),
            Decimal("0"),
        )

    def summary(self) -> LedgerSummary:
        """Totals over the whole ledger."""
        income_total = Decimal("0")
        expense_total = Decimal("0")
        for transaction in self._transactions.values():
            if transaction.kind is TransactionKind.INCOME:
                income_total += transaction.value
            else:
                expense_total += transaction.value

        return LedgerSummary(
            income_total=income_total,
            expense_total=expense_total,
            transaction_count=len(self._transactions),
        )

    def __len__(self) -> int:
        return len(self._transactions)

    def __contains__(self, transaction_id: object) -> bool:
        return transaction_id in self._transactions
