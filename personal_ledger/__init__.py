"""
Personal Ledger - Source Package

Record income and expense entries and keep a running balance.

DESIGN PRINCIPLES:
1. Invalid input is rejected before anything changes
2. Every change is saved immediately
3. Storage trouble never takes the ledger down
4. Storage layer is swappable
"""

from personal_ledger.errors import (
    CorruptDataError,
    LedgerError,
    StorageError,
    StorageUnavailableError,
    ValidationError,
)
from personal_ledger.factory import create_ledger
from personal_ledger.ledger import Ledger
from personal_ledger.models import (
    KindFilter,
    LedgerSummary,
    Transaction,
    TransactionKind,
)

__version__ = "1.0.0"

__all__ = [
    "CorruptDataError",
    "KindFilter",
    "Ledger",
    "LedgerError",
    "LedgerSummary",
    "StorageError",
    "StorageUnavailableError",
    "Transaction",
    "TransactionKind",
    "ValidationError",
    "create_ledger",
]
