"""Input validation package."""

from expenzo.validation.validator import (
    ExpenseDraft,
    ExpenseValidationError,
    ExpenseValidator,
)

__all__ = ["ExpenseDraft", "ExpenseValidationError", "ExpenseValidator"]
