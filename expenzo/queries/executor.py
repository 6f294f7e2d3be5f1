"""
Query Execution Engine

Composes the filter engine and the aggregation engine into the views the
app shows: dashboard, monthly, categories and the filtered expense list.

DESIGN DECISION: Every view is computed from a fresh store snapshot on
each call. Nothing is cached, so there is nothing to invalidate when the
store changes.
"""

from collections.abc import Sequence
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from expenzo.formatting import month_label
from expenzo.models.expense import Expense, ExpenseFilter
from expenzo.models.summary import (
    CategoryAnalysis,
    CategoryShare,
    DashboardSummary,
    ExpenseListing,
    MonthlySummary,
)
from expenzo.queries.aggregations import (
    average,
    count_by_category,
    group_by_category,
    group_by_day,
    max_spending_day,
    per_category_average,
    percentage,
    sum_amounts,
    top_category,
    unique_day_count,
)
from expenzo.queries.filters import (
    filter_expenses,
    recent_expenses,
    select_month,
    sort_by_date_desc,
)

if TYPE_CHECKING:
    from expenzo.store import ExpenseStore


class QueryExecutionError(Exception):
    """Error during query execution."""
    pass


class AggregationKind(str, Enum):
    """Statistics available through aggregate()."""
    SUM = "sum"
    BY_CATEGORY = "by_category"
    BY_DAY = "by_day"
    UNIQUE_DAYS = "unique_days"
    AVERAGE = "average"
    TOP_CATEGORY = "top_category"
    MAX_DAY = "max_day"


_AGGREGATIONS: dict[AggregationKind, Callable[[Sequence[Expense]], Any]] = {
    AggregationKind.SUM: sum_amounts,
    AggregationKind.BY_CATEGORY: group_by_category,
    AggregationKind.BY_DAY: group_by_day,
    AggregationKind.UNIQUE_DAYS: unique_day_count,
    AggregationKind.AVERAGE: average,
    AggregationKind.TOP_CATEGORY: top_category,
    AggregationKind.MAX_DAY: max_spending_day,
}


def aggregate(expenses: Sequence[Expense], kind: Union[AggregationKind, str]) -> Any:
    """
    Compute one statistic by name.

    Raises:
        QueryExecutionError: If `kind` is not an AggregationKind
    """
    try:
        kind = AggregationKind(kind)
    except ValueError as e:
        raise QueryExecutionError(f"Unknown aggregation: {kind}") from e
    return _AGGREGATIONS[kind](expenses)


def category_breakdown(expenses: Sequence[Expense]) -> list[CategoryShare]:
    """Per-category totals with their share of the overall total."""
    total = sum_amounts(expenses)
    return [
        CategoryShare(category=category, total=amount, percent=percentage(amount, total))
        for category, amount in group_by_category(expenses)
    ]


class QueryExecutor:
    """
    Builds summary views over an ExpenseStore.

    GUARANTEES:
    - Only reads; never mutates the store
    - Empty data produces zeros and None, never errors
    """

    def __init__(self, store: "ExpenseStore", recent_limit: int = 5):
        self._store = store
        self._recent_limit = recent_limit

    def dashboard(self, today: Optional[date] = None) -> DashboardSummary:
        """Overall totals plus the current month, for the landing page."""
        today = today or date.today()
        expenses = self._store.snapshot()
        this_month = select_month(expenses, today.month - 1, today.year)

        return DashboardSummary(
            total=sum_amounts(expenses),
            count=len(expenses),
            month_total=sum_amounts(this_month),
            month_count=len(this_month),
            top_category=top_category(expenses),
            daily_average=average(expenses),
            recent=recent_expenses(expenses, self._recent_limit),
            breakdown=category_breakdown(expenses),
        )

    def monthly(self, month: int, year: int) -> MonthlySummary:
        """Statistics for one month (0-11)."""
        expenses = select_month(self._store.snapshot(), month, year)

        return MonthlySummary(
            month=month,
            year=year,
            label=month_label(month, year),
            total=sum_amounts(expenses),
            count=len(expenses),
            average=average(expenses),
            max_day=max_spending_day(expenses),
            breakdown=category_breakdown(expenses),
            expenses=sort_by_date_desc(expenses),
        )

    def categories(self) -> list[CategoryAnalysis]:
        """One card per category present, largest total first."""
        expenses = self._store.snapshot()
        total = sum_amounts(expenses)
        counts = count_by_category(expenses)

        return [
            CategoryAnalysis(
                category=category,
                total=amount,
                percent=percentage(amount, total),
                count=counts[category],
                average=per_category_average(expenses, category),
            )
            for category, amount in group_by_category(expenses)
        ]

    def list_expenses(self, criteria: Optional[ExpenseFilter] = None) -> ExpenseListing:
        """Filtered expenses, newest first, with their total."""
        matched = sort_by_date_desc(filter_expenses(self._store.snapshot(), criteria))
        return ExpenseListing(expenses=matched, total=sum_amounts(matched))

