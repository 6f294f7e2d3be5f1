"""
Query/Filter Engine

Narrows an expense sequence before aggregation. Filtering never reorders;
ordering is the separate sort_by_date_desc step.

Months are 0-based throughout (0 = January, 11 = December).
"""

from collections.abc import Sequence
from datetime import date
from typing import Optional

from expenzo.formatting import month_label
from expenzo.models.expense import Expense, ExpenseFilter


def _check_month(month: int) -> None:
    if not 0 <= month <= 11:
        raise ValueError(f"Month must be between 0 and 11, got {month}")


def matches(expense: Expense, criteria: ExpenseFilter) -> bool:
    """True when the expense satisfies every criterion that is set."""
    if criteria.text_query:
        needle = criteria.text_query.lower()
        if needle not in expense.description.lower() and needle not in expense.note.lower():
            return False

    if criteria.category and expense.category != criteria.category:
        return False

    if criteria.date_from and expense.spent_on < criteria.date_from:
        return False
    if criteria.date_to and expense.spent_on > criteria.date_to:
        return False

    if criteria.month is not None and not _in_month(expense, criteria.month, criteria.year):
        return False

    return True


def filter_expenses(
    expenses: Sequence[Expense],
    criteria: Optional[ExpenseFilter] = None,
) -> list[Expense]:
    """
    Expenses matching all criteria, in input order.

    No criteria (or an empty filter) returns a copy of the input.
    """
    if criteria is None or criteria.is_empty:
        return list(expenses)
    return [expense for expense in expenses if matches(expense, criteria)]


def sort_by_date_desc(expenses: Sequence[Expense]) -> list[Expense]:
    """Newest first. Equal dates keep their input (insertion) order."""
    return sorted(expenses, key=lambda expense: expense.spent_on, reverse=True)


def recent_expenses(expenses: Sequence[Expense], limit: int = 5) -> list[Expense]:
    """The `limit` newest expenses."""
    return sort_by_date_desc(expenses)[:limit]


# =============================================================================
# MONTHLY BUCKETING
# =============================================================================

def _in_month(expense: Expense, month: int, year: int) -> bool:
    return expense.spent_on.month - 1 == month and expense.spent_on.year == year


def select_month(expenses: Sequence[Expense], month: int, year: int) -> list[Expense]:
    """Expenses dated within the given month (0-11) of the given year."""
    _check_month(month)
    return [expense for expense in expenses if _in_month(expense, month, year)]


def shift_month(month: int, year: int, delta: int) -> tuple[int, int]:
    """
    Move `delta` months from (month, year), wrapping across years.

    shift_month(0, 2024, -1) == (11, 2023)
    shift_month(11, 2024, 1) == (0, 2025)
    """
    _check_month(month)
    new_year, new_month = divmod(year * 12 + month + delta, 12)
    return new_month, new_year


class MonthCursor:
    """
    The month currently shown by a monthly view.

    Holds only (month, year); shifting is delegated to shift_month.
    """

    def __init__(self, month: int, year: int):
        _check_month(month)
        self.month = month
        self.year = year

    @classmethod
    def from_date(cls, day: Optional[date] = None) -> "MonthCursor":
        """Cursor on the month containing `day` (default: today)."""
        day = day or date.today()
        return cls(day.month - 1, day.year)

    @property
    def position(self) -> tuple[int, int]:
        return self.month, self.year

    @property
    def label(self) -> str:
        return month_label(self.month, self.year)

    def shift(self, delta: int) -> tuple[int, int]:
        """Move by `delta` months and return the new (month, year)."""
        self.month, self.year = shift_month(self.month, self.year, delta)
        return self.position

    def previous(self) -> tuple[int, int]:
        return self.shift(-1)

    def next(self) -> tuple[int, int]:
        return self.shift(1)

    def select(self, expenses: Sequence[Expense]) -> list[Expense]:
        """Expenses in the cursor's month."""
        return select_month(expenses, self.month, self.year)

    def __repr__(self) -> str:
        return f"MonthCursor(month={self.month}, year={self.year})"
