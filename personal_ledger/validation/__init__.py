"""Input validation package."""

from personal_ledger.validation.validator import (
    AmountParser,
    TransactionValidator,
    get_user_friendly_message,
)

__all__ = [
    "AmountParser",
    "TransactionValidator",
    "get_user_friendly_message",
]
