"""
Aggregation Engine

Pure functions over a sequence of expenses. None of them mutate their
input, keep state, or log; callers recompute on demand.

The functions assume records that passed validation (amount > 0).

TIE-BREAKS (first-seen order):
- group_by_category: categories with equal totals keep the order in which
  each category first appeared in the input.
- max_spending_day: among days with equal totals, the day that first
  appeared in the input wins.
Both fall out of accumulating into an insertion-ordered dict and then
using a stable sort / strict comparison.
"""

from collections.abc import Sequence
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from expenzo.models.expense import Expense
from expenzo.models.summary import CategoryTotal, DayTotal


ZERO = Decimal("0")
ONE_PLACE = Decimal("0.1")
HUNDRED = Decimal("100")


class AggregationError(ValueError):
    """An aggregation is undefined for the given input."""
    pass


def sum_amounts(expenses: Sequence[Expense]) -> Decimal:
    """Sum of amounts; 0 for no expenses."""
    return sum((expense.amount for expense in expenses), ZERO)


def group_by_category(expenses: Sequence[Expense]) -> list[CategoryTotal]:
    """
    Total per category present in the input, largest total first.

    Only categories that occur appear in the result.
    """
    totals: dict[str, Decimal] = {}
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, ZERO) + expense.amount

    # sorted() is stable, also with reverse=True
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [CategoryTotal(category, total) for category, total in ranked]


def group_by_day(expenses: Sequence[Expense]) -> dict[date, Decimal]:
    """Total per calendar day, in first-seen order."""
    totals: dict[date, Decimal] = {}
    for expense in expenses:
        totals[expense.spent_on] = totals.get(expense.spent_on, ZERO) + expense.amount
    return totals


def count_by_category(expenses: Sequence[Expense]) -> dict[str, int]:
    """Number of entries per category, in first-seen order."""
    counts: dict[str, int] = {}
    for expense in expenses:
        counts[expense.category] = counts.get(expense.category, 0) + 1
    return counts


def unique_day_count(expenses: Sequence[Expense]) -> int:
    """
    Number of distinct days with spending, floored at 1.

    The floor only keeps average() defined for empty input.
    """
    return len({expense.spent_on for expense in expenses}) or 1


def average(expenses: Sequence[Expense]) -> Decimal:
    """Average spend per active day; 0 for no expenses."""
    return sum_amounts(expenses) / unique_day_count(expenses)


def top_category(expenses: Sequence[Expense]) -> Optional[CategoryTotal]:
    """Category with the largest total, or None for no expenses."""
    ranked = group_by_category(expenses)
    return ranked[0] if ranked else None


def max_spending_day(expenses: Sequence[Expense]) -> Optional[DayTotal]:
    """Day with the largest total, or None for no expenses."""
    best: Optional[DayTotal] = None
    for day, total in group_by_day(expenses).items():
        if best is None or total > best.total:
            best = DayTotal(day, total)
    return best


def per_category_average(expenses: Sequence[Expense], category: str) -> Decimal:
    """
    Average amount per entry within one category.

    Raises:
        AggregationError: If no expense has that category
    """
    amounts = [expense.amount for expense in expenses if expense.category == category]
    if not amounts:
        raise AggregationError(f"No expenses in category '{category}'")
    return sum(amounts, ZERO) / len(amounts)


def percentage(part: Decimal, total: Decimal) -> Decimal:
    """
    part / total * 100, rounded half-up to one decimal place.

    A zero total yields 0.0 instead of dividing by zero.
    """
    if not total:
        return Decimal("0.0")
    return (Decimal(part) / Decimal(total) * HUNDRED).quantize(ONE_PLACE, rounding=ROUND_HALF_UP)
