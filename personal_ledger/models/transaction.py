"""
Core Data Models for Personal Ledger

These models define the strict schemas for every transaction held in
memory and written to storage. They are designed to:
1. Enforce the transaction invariants at construction time
2. Be serializable to the persisted record layout
3. Reject malformed records coming back from storage

DESIGN DECISION: Transactions are frozen. A recorded entry is never edited,
only created or deleted, so handing the same object to the presentation
layer cannot corrupt ledger state.
"""

import datetime
import math
import re
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    field_serializer,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionKind(str, Enum):
    """Direction of a transaction."""
    INCOME = "income"
    EXPENSE = "expense"


class KindFilter(str, Enum):
    """Filter accepted when listing transactions."""
    ALL = "all"
    INCOME = "income"
    EXPENSE = "expense"

    def matches(self, kind: TransactionKind) -> bool:
        """Check whether a transaction of the given kind passes this filter."""
        if self is KindFilter.ALL:
            return True
        return self.value == kind.value


ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def fits_json_number(value: Decimal) -> bool:
    """
    Check that an amount survives being written as a JSON number.

    Amounts are stored as floats, so anything that overflows or needs
    more significant digits than a float carries would come back changed.
    """
    as_float = float(value)
    return math.isfinite(as_float) and Decimal(repr(as_float)) == value


# Values written by the first version of the app, before kinds were renamed
LEGACY_KIND_VALUES = {
    "receita": TransactionKind.INCOME,
    "despesa": TransactionKind.EXPENSE,
}


# =============================================================================
# CORE TRANSACTION MODEL
# =============================================================================

class TransactionDraft(BaseModel):
    """
    A validated transaction that has not been given an id yet.

    Produced by the validator from raw form input.
    """
    model_config = ConfigDict(frozen=True)

    date: datetime.date
    description: str = Field(..., min_length=1)
    value: Decimal = Field(..., gt=0, allow_inf_nan=False)
    kind: TransactionKind


class Transaction(BaseModel):
    """
    One recorded income or expense entry.

    The same model is used to read records back from storage, so every
    field is checked again on load.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: StrictInt = Field(
        ...,
        ge=0,
        description="Unique id derived from the creation timestamp (ms)"
    )
    date: datetime.date = Field(
        ...,
        description="Calendar date of the entry"
    )
    description: str = Field(
        ...,
        min_length=1,
        description="What the entry was for"
    )
    value: Decimal = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Positive amount, currency agnostic"
    )
    kind: TransactionKind = Field(
        ...,
        validation_alias=AliasChoices("kind", "type"),
        description="income or expense"
    )

    @field_validator('date', mode='before')
    @classmethod
    def require_iso_date(cls, v: Any) -> Any:
        """Dates are date objects or YYYY-MM-DD strings, never timestamps."""
        if isinstance(v, datetime.datetime):
            raise ValueError("Date must not carry a time component")
        if isinstance(v, datetime.date):
            return v
        if isinstance(v, str) and ISO_DATE_PATTERN.match(v):
            return v
        raise ValueError(f"Date must be formatted YYYY-MM-DD, got {v!r}")

    @field_validator('value', mode='before')
    @classmethod
    def require_numeric_value(cls, v: Any) -> Any:
        """Amounts are numbers. Text is only accepted through the validator."""
        if isinstance(v, bool) or not isinstance(v, (int, float, Decimal)):
            raise ValueError(f"Value must be a number, got {type(v).__name__}")
        return v

    @field_validator('value')
    @classmethod
    def require_storable_value(cls, v: Decimal) -> Decimal:
        """The amount must come back unchanged after a save."""
        if not fits_json_number(v):
            raise ValueError(f"Value {v} cannot be stored exactly")
        return v

    @field_validator('kind', mode='before')
    @classmethod
    def accept_legacy_kind(cls, v: Any) -> Any:
        """Map kind values from the legacy record layout."""
        if isinstance(v, str) and v in LEGACY_KIND_VALUES:
            return LEGACY_KIND_VALUES[v]
        return v

    @field_serializer('value', when_used='json')
    def serialize_value(self, value: Decimal) -> float:
        """Persisted records carry the amount as a JSON number."""
        return float(value)

    @property
    def signed_value(self) -> Decimal:
        """Value with expenses negated, as it contributes to the balance."""
        if self.kind is TransactionKind.EXPENSE:
            return -self.value
        return self.value

    def to_record(self) -> dict[str, Any]:
        """Convert to the persisted record layout."""
        return self.model_dump(mode="json")


# =============================================================================
# AGGREGATES
# =============================================================================

class LedgerSummary(BaseModel):
    """Totals over the entire ledger."""
    model_config = ConfigDict(frozen=True)

    income_total: Decimal = Field(default=Decimal("0"))
    expense_total: Decimal = Field(default=Decimal("0"))
    transaction_count: int = Field(default=0, ge=0)

    @property
    def balance(self) -> Decimal:
        """Income minus expenses."""
        return self.income_total - self.expense_total
