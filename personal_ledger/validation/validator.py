"""
Transaction Input Validation

DESIGN DECISION: Raw form input is checked in a fixed order before a
transaction is ever created:

1. PRESENCE - date, description and value must all be filled in, and the
               description must be text
2. AMOUNT   - value is normalized and parsed as a positive decimal
3. DATE     - date must name a real calendar day
4. KIND     - kind must be income or expense

The first failing check raises. Nothing is mutated and nothing is
silently corrected.

Amount normalization lives in AmountParser so a different locale can be
plugged in without touching the ledger.
"""

import datetime
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Optional, Union

from personal_ledger.errors import ValidationError
from personal_ledger.models.transaction import (
    ISO_DATE_PATTERN,
    TransactionDraft,
    TransactionKind,
    fits_json_number,
)


# Plain decimal literal after normalization: optional sign, digits, one dot
AMOUNT_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")


class AmountParser:
    """
    Turns user-typed amount text into a Decimal.

    Every configured separator is replaced by '.', so "12,50" and
    "12.50" both parse as Decimal("12.50"). Thousands grouping is not
    supported: "1.234,56" is rejected rather than guessed at.
    """

    def __init__(self, decimal_separators: Iterable[str] = (",",)):
        self._separators = [sep for sep in decimal_separators if sep and sep != "."]

    def normalize(self, raw: str) -> str:
        """Trim the text and replace locale separators with '.'."""
        text = raw.strip()
        for sep in self._separators:
            text = text.replace(sep, ".")
        return text

    def parse(self, raw: Union[str, int, float, Decimal]) -> Decimal:
        """
        Parse an amount.

        Raises:
            ValidationError: If the text is not a decimal number or is not > 0
        """
        if isinstance(raw, bool):
            raise ValidationError(
                ValidationError.REASON_INVALID_AMOUNT,
                field="value",
                detail=f"not a number: {raw!r}",
            )

        text = self.normalize(str(raw))
        if not AMOUNT_PATTERN.match(text):
            raise ValidationError(
                ValidationError.REASON_INVALID_AMOUNT,
                field="value",
                detail=f"not a number: {raw!r}",
            )

        try:
            amount = Decimal(text)
        except InvalidOperation:
            raise ValidationError(
                ValidationError.REASON_INVALID_AMOUNT,
                field="value",
                detail=f"not a number: {raw!r}",
            )

        if amount <= 0:
            raise ValidationError(
                ValidationError.REASON_INVALID_AMOUNT,
                field="value",
                detail="must be greater than zero",
            )

        if not fits_json_number(amount):
            raise ValidationError(
                ValidationError.REASON_INVALID_AMOUNT,
                field="value",
                detail="too large or too many digits",
            )

        return amount


class TransactionValidator:
    """
    Validates raw transaction input and produces a TransactionDraft.

    The ledger assigns the id afterwards.
    """

    def __init__(self, amount_parser: Optional[AmountParser] = None):
        self._amount_parser = amount_parser or AmountParser()

    @staticmethod
    def _is_missing(value: Any) -> bool:
        if value is None:
            return True
        if isinstance(value, str) and not value.strip():
            return True
        return False

    def _check_presence(self, date: Any, description: Any, value: Any) -> None:
        """Stage 1: all required fields must be filled in, description as text."""
        for field, raw in (("date", date), ("description", description), ("value", value)):
            if self._is_missing(raw):
                raise ValidationError(ValidationError.REASON_MISSING_FIELD, field=field)

        if not isinstance(description, str):
            raise ValidationError(
                ValidationError.REASON_INVALID_DESCRIPTION,
                field="description",
                detail=f"expected text, got {type(description).__name__}",
            )

    def _parse_date(self, raw: Union[str, datetime.date]) -> datetime.date:
        """Stage 3: accept a date object or an ISO YYYY-MM-DD string."""
        if isinstance(raw, datetime.datetime):
            return raw.date()
        if isinstance(raw, datetime.date):
            return raw

        text = str(raw).strip()
        if not ISO_DATE_PATTERN.match(text):
            raise ValidationError(
                ValidationError.REASON_INVALID_DATE,
                field="date",
                detail=f"expected YYYY-MM-DD, got {raw!r}",
            )
        try:
            return datetime.date.fromisoformat(text)
        except ValueError:
            raise ValidationError(
                ValidationError.REASON_INVALID_DATE,
                field="date",
                detail=f"no such day: {text}",
            )

    def _parse_kind(self, raw: Union[str, TransactionKind]) -> TransactionKind:
        """Stage 4: only income and expense are accepted."""
        try:
            return TransactionKind(raw)
        except ValueError:
            raise ValidationError(
                ValidationError.REASON_INVALID_KIND,
                field="kind",
                detail=f"expected income or expense, got {raw!r}",
            )

    def validate(
        self,
        date: Union[str, datetime.date, None],
        description: Optional[str],
        value: Union[str, int, float, Decimal, None],
        kind: Union[str, TransactionKind],
    ) -> TransactionDraft:
        """
        Run all checks in order.

        Returns:
            TransactionDraft with the parsed date, value and kind

        Raises:
            ValidationError: On the first failed check
        """
        self._check_presence(date, description, value)
        amount = self._amount_parser.parse(value)
        parsed_date = self._parse_date(date)
        parsed_kind = self._parse_kind(kind)

        return TransactionDraft(
            date=parsed_date,
            description=description,
            value=amount,
            kind=parsed_kind,
        )


def get_user_friendly_message(error: ValidationError) -> str:
    """
    Generate a message for the entry form.

    This is what we show to the user next to the form.
    """
    if error.reason == ValidationError.REASON_MISSING_FIELD:
        return "Please fill in all fields!"
    if error.reason == ValidationError.REASON_INVALID_AMOUNT:
        return "Please enter a valid amount greater than zero."
    if error.reason == ValidationError.REASON_INVALID_DATE:
        return "Please enter a valid date."
    if error.reason == ValidationError.REASON_INVALID_KIND:
        return "Please choose income or expense."
    if error.reason == ValidationError.REASON_INVALID_DESCRIPTION:
        return "Please enter a text description."
    return str(error)
