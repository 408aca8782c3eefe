"""Tests for amount parsing and transaction input validation."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from personal_ledger.errors import ValidationError
from personal_ledger.models.transaction import TransactionKind
from personal_ledger.validation import (
    AmountParser,
    TransactionValidator,
    get_user_friendly_message,
)


class TestAmountParser:
    """Tests for AmountParser."""

    @pytest.mark.parametrize("raw, expected", [
        ("100", Decimal("100")),
        ("12.50", Decimal("12.50")),
        ("12,50", Decimal("12.50")),
        ("  7,5 ", Decimal("7.5")),
        (",5", Decimal("0.5")),
        ("0.01", Decimal("0.01")),
        (Decimal("3.10"), Decimal("3.10")),
        (42, Decimal("42")),
    ])
    def test_parses_valid_amounts(self, raw, expected):
        """Test that dot and comma amounts parse to the same decimal."""
        assert AmountParser().parse(raw) == expected

    @pytest.mark.parametrize("raw", ["0", "0,00", "-5", "-0.01"])
    def test_rejects_non_positive(self, raw):
        """Test that zero and negative amounts are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            AmountParser().parse(raw)
        assert exc_info.value.reason == "invalid amount"

    @pytest.mark.parametrize("raw", ["abc", "12abc", "1.234,56", "1e5", "NaN", "inf", ".", "", True])
    def test_rejects_unparsable(self, raw):
        """Test that anything but a plain decimal literal is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            AmountParser().parse(raw)
        assert exc_info.value.reason == "invalid amount"
        assert exc_info.value.field == "value"

    @pytest.mark.parametrize("raw", [
        "1" + "0" * 400,
        "12345678901234567.89",
        "0.1234567890123456789",
    ])
    def test_rejects_amounts_that_would_change_on_save(self, raw):
        """Test that amounts a JSON number cannot carry exactly are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            AmountParser().parse(raw)
        assert exc_info.value.reason == "invalid amount"

    def test_accepts_largest_exact_amounts(self):
        """Test that fifteen significant digits still parse."""
        assert AmountParser().parse("1234567890123,45") == Decimal("1234567890123.45")

    def test_normalize(self):
        """Test comma to dot normalization."""
        assert AmountParser().normalize(" 12,50 ") == "12.50"

    def test_custom_separators(self):
        """Test that another locale's separator can be plugged in."""
        parser = AmountParser(decimal_separators=["'"])
        assert parser.parse("12'5") == Decimal("12.5")
        with pytest.raises(ValidationError):
            parser.parse("12,5")

    def test_dot_only_parser(self):
        """Test a parser with no extra separators."""
        parser = AmountParser(decimal_separators=[])
        assert parser.parse("12.5") == Decimal("12.5")
        with pytest.raises(ValidationError):
            parser.parse("12,5")


class TestTransactionValidator:
    """Tests for TransactionValidator."""

    def test_valid_input(self):
        """Test a complete valid form."""
        draft = TransactionValidator().validate("2024-06-10", "Salary", "2500,00", "income")
        assert draft.date == date(2024, 6, 10)
        assert draft.description == "Salary"
        assert draft.value == Decimal("2500.00")
        assert draft.kind == TransactionKind.INCOME

    def test_accepts_date_objects(self):
        """Test date and datetime inputs."""
        validator = TransactionValidator()
        draft = validator.validate(date(2024, 1, 2), "Rent", "900", TransactionKind.EXPENSE)
        assert draft.date == date(2024, 1, 2)
        draft = validator.validate(datetime(2024, 1, 2, 15, 0), "Rent", "900", "expense")
        assert draft.date == date(2024, 1, 2)

    @pytest.mark.parametrize("field, kwargs", [
        ("date", {"date": ""}),
        ("date", {"date": None}),
        ("description", {"description": ""}),
        ("description", {"description": "   "}),
        ("value", {"value": ""}),
        ("value", {"value": None}),
    ])
    def test_missing_fields(self, field, kwargs):
        """Test that empty required fields are reported as missing."""
        inputs = {"date": "2024-06-10", "description": "Salary", "value": "10", "kind": "income"}
        inputs.update(kwargs)
        with pytest.raises(ValidationError) as exc_info:
            TransactionValidator().validate(**inputs)
        assert exc_info.value.reason == "missing field"
        assert exc_info.value.field == field

    def test_missing_checked_before_amount(self):
        """Test that a missing field wins over an invalid amount."""
        with pytest.raises(ValidationError) as exc_info:
            TransactionValidator().validate("2024-06-10", "", "abc", "income")
        assert exc_info.value.reason == "missing field"

    def test_amount_checked_before_date(self):
        """Test that an invalid amount wins over an invalid date."""
        with pytest.raises(ValidationError) as exc_info:
            TransactionValidator().validate("10/06/2024", "Salary", "-5", "income")
        assert exc_info.value.reason == "invalid amount"

    @pytest.mark.parametrize("raw", ["10/06/2024", "2024-02-30", "2024-6-1", "yesterday"])
    def test_invalid_dates(self, raw):
        """Test that malformed or impossible dates are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            TransactionValidator().validate(raw, "Salary", "10", "income")
        assert exc_info.value.reason == "invalid date"

    @pytest.mark.parametrize("raw", ["transfer", "receita", "", "all"])
    def test_invalid_kind(self, raw):
        """Test that only income and expense are accepted."""
        with pytest.raises(ValidationError) as exc_info:
            TransactionValidator().validate("2024-06-10", "Salary", "10", raw)
        assert exc_info.value.reason == "invalid kind"

    def test_uses_injected_parser(self):
        """Test that the amount parser can be replaced."""
        validator = TransactionValidator(AmountParser(decimal_separators=[]))
        with pytest.raises(ValidationError):
            validator.validate("2024-06-10", "Salary", "10,5", "income")

    @pytest.mark.parametrize("description", [5, 12.5, ["Salary"]])
    def test_non_text_description(self, description):
        """Test that a description that is not text is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            TransactionValidator().validate("2024-06-10", description, "10", "income")
        assert exc_info.value.reason == "invalid description"
        assert exc_info.value.field == "description"


class TestValidationError:
    """Tests for the ValidationError exception."""

    def test_message(self):
        """Test that the message carries the reason and field."""
        error = ValidationError("missing field", field="date")
        assert str(error) == "missing field: date"

    def test_user_friendly_messages(self):
        """Test the messages shown next to the form."""
        assert get_user_friendly_message(
            ValidationError(ValidationError.REASON_MISSING_FIELD, field="date")
        ) == "Please fill in all fields!"
        assert "valid amount" in get_user_friendly_message(
            ValidationError(ValidationError.REASON_INVALID_AMOUNT, field="value")
        )
        assert get_user_friendly_message(
            ValidationError(ValidationError.REASON_INVALID_DESCRIPTION, field="description")
        ) == "Please enter a text description."


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
