"""
Data Models Package

This package contains the Pydantic models used by the ledger.
Every transaction held in memory or written to storage conforms to these schemas.
"""

from personal_ledger.models.transaction import (
    KindFilter,
    LedgerSummary,
    Transaction,
    TransactionDraft,
    TransactionKind,
)

__all__ = [
    "KindFilter",
    "LedgerSummary",
    "Transaction",
    "TransactionDraft",
    "TransactionKind",
]
