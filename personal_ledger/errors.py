"""
Exception hierarchy for Personal Ledger.

Two families only:
- ValidationError: the user typed something the ledger cannot accept.
- StorageError: the durable store could not be read or written.
"""

from typing import Optional


class LedgerError(Exception):
    """Base exception for all ledger errors."""
    pass


class ValidationError(LedgerError):
    """
    User input rejected before any state change.

    Attributes:
        field: Name of the offending input field, if known
        reason: One of the REASON_* constants
    """

    REASON_MISSING_FIELD = "missing field"
    REASON_INVALID_AMOUNT = "invalid amount"
    REASON_INVALID_DATE = "invalid date"
    REASON_INVALID_KIND = "invalid kind"
    REASON_INVALID_DESCRIPTION = "invalid description"

    def __init__(self, reason: str, field: Optional[str] = None, detail: Optional[str] = None):
        self.reason = reason
        self.field = field
        self.detail = detail
        message = reason
        if field:
            message = f"{message}: {field}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class StorageError(LedgerError):
    """Base exception for storage operations."""
    pass


class StorageUnavailableError(StorageError):
    """The key-value store rejected a read or write."""
    pass


class CorruptDataError(StorageError):
    """Stored data could not be turned back into transactions."""
    pass
