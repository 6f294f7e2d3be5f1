"""Query, filter and aggregation package."""

from expenzo.queries.aggregations import (
    AggregationError,
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
from expenzo.queries.executor import (
    AggregationKind,
    QueryExecutionError,
    QueryExecutor,
    aggregate,
    category_breakdown,
)
from expenzo.queries.filters import (
    MonthCursor,
    filter_expenses,
    recent_expenses,
    select_month,
    shift_month,
    sort_by_date_desc,
)

__all__ = [
    # Aggregations
    "AggregationError",
    "average",
    "count_by_category",
    "group_by_category",
    "group_by_day",
    "max_spending_day",
    "per_category_average",
    "percentage",
    "sum_amounts",
    "top_category",
    "unique_day_count",
    # Executor
    "AggregationKind",
    "QueryExecutionError",
    "QueryExecutor",
    "aggregate",
    "category_breakdown",
    # Filters
    "MonthCursor",
    "filter_expenses",
    "recent_expenses",
    "select_month",
    "shift_month",
    "sort_by_date_desc",
]
