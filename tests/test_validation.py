"""Tests for create/edit input validation."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from expenzo.validation import ExpenseValidationError, ExpenseValidator


@pytest.fixture
def validator():
    return ExpenseValidator()


class TestExpenseValidator:
    """Tests for ExpenseValidator.validate."""

    def test_valid_input_is_normalized(self, validator):
        """Test whitespace trimming and type conversion."""
        draft = validator.validate("  Lunch ", "12.50", "Food", "2024-01-05", "  with team ")
        assert draft.description == "Lunch"
        assert draft.amount == Decimal("12.50")
        assert draft.category == "Food"
        assert draft.spent_on == date(2024, 1, 5)
        assert draft.note == "with team"
        assert draft.warnings == []

    def test_float_amount_keeps_decimal_value(self, validator):
        """Test that 0.1 becomes Decimal('0.1'), not its binary expansion."""
        draft = validator.validate("x", 0.1, "Food", date(2024, 1, 1))
        assert draft.amount == Decimal("0.1")

    def test_missing_note_is_empty(self, validator):
        """Test that a None note becomes an empty string."""
        draft = validator.validate("x", 1, "Food", date(2024, 1, 1), None)
        assert draft.note == ""

    def test_datetime_uses_calendar_day(self, validator):
        """Test that a datetime input keeps only its date."""
        draft = validator.validate("x", 1, "Food", datetime(2024, 1, 1, 23, 59))
        assert draft.spent_on == date(2024, 1, 1)

    @pytest.mark.parametrize("description", ["", "   ", None])
    def test_empty_description_rejected(self, validator, description):
        """Test that a description is required."""
        with pytest.raises(ExpenseValidationError) as excinfo:
            validator.validate(description, 10, "Food", "2024-01-01")
        assert [i.field for i in excinfo.value.errors] == ["description"]

    @pytest.mark.parametrize("amount", [None, "", 0, "0", -5, "-0.01", "abc", "NaN", True])
    def test_bad_amount_rejected(self, validator, amount):
        """Test that the amount must be a positive number."""
        with pytest.raises(ExpenseValidationError) as excinfo:
            validator.validate("x", amount, "Food", "2024-01-01")
        assert [i.field for i in excinfo.value.errors] == ["amount"]

    @pytest.mark.parametrize("amount", [
        "1e400",
        "1000000000000.01",
        "1e-400",
        "0.001",
        "0.12345678901234567891",
    ])
    def test_amount_outside_storable_range_rejected(self, validator, amount):
        """Test that amounts too large or finer than a cent are refused, not rounded."""
        with pytest.raises(ExpenseValidationError) as excinfo:
            validator.validate("x", amount, "Food", "2024-01-01")
        (issue,) = excinfo.value.errors
        assert issue.field == "amount"
        assert issue.issue_type == "invalid_value"

    def test_sub_cent_amount_suggests_rounded_value(self, validator):
        """Test the suggested fix for too many decimal places."""
        with pytest.raises(ExpenseValidationError) as excinfo:
            validator.validate("x", "10.005", "Food", "2024-01-01")
        assert excinfo.value.errors[0].suggested_fix == "Use 10.01"

    @pytest.mark.parametrize("amount, expected", [
        ("12.500", Decimal("12.50")),
        ("7", Decimal("7.00")),
        ("1000000000000", Decimal("1000000000000.00")),
    ])
    def test_amount_kept_in_cents(self, validator, amount, expected):
        """Test that accepted amounts carry exactly two decimal places."""
        draft = validator.validate("x", amount, "Food", "2024-01-01")
        assert draft.amount == expected
        assert draft.amount.as_tuple().exponent == -2

    def test_empty_category_rejected(self, validator):
        """Test that a category is required."""
        with pytest.raises(ExpenseValidationError) as excinfo:
            validator.validate("x", 10, "", "2024-01-01")
        assert excinfo.value.errors[0].field == "category"

    @pytest.mark.parametrize("spent_on", [None, "", "2024-13-01", "yesterday"])
    def test_bad_date_rejected(self, validator, spent_on):
        """Test that a real calendar date is required."""
        with pytest.raises(ExpenseValidationError) as excinfo:
            validator.validate("x", 10, "Food", spent_on)
        assert excinfo.value.errors[0].field == "spent_on"

    def test_all_errors_reported_together(self, validator):
        """Test that every problem is collected in one pass."""
        with pytest.raises(ExpenseValidationError) as excinfo:
            validator.validate("", 0, "", "")
        fields = {issue.field for issue in excinfo.value.errors}
        assert fields == {"description", "amount", "category", "spent_on"}
        assert "Please enter a description" in str(excinfo.value)

    def test_unknown_category_is_warning(self, validator):
        """Test that unknown categories pass with a warning."""
        draft = validator.validate("x", 10, "Groceries", "2024-01-01")
        assert draft.category == "Groceries"
        assert len(draft.warnings) == 1
        assert draft.warnings[0].severity == "warning"
        assert draft.warnings[0].issue_type == "unknown_category"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
