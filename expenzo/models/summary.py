"""
Summary View Models

Results produced by the query executor for the dashboard, monthly and
category views. These are plain read models: computed on demand from a
snapshot of the store, never cached.
"""

from datetime import date
from decimal import Decimal
from typing import NamedTuple, Optional

from pydantic import BaseModel, Field

from expenzo.models.expense import Expense


class CategoryTotal(NamedTuple):
    """Sum of amounts for one category."""
    category: str
    total: Decimal


class DayTotal(NamedTuple):
    """Sum of amounts for one calendar day."""
    day: date
    total: Decimal


class CategoryShare(BaseModel):
    """One row of a category breakdown bar chart."""

    category: str
    total: Decimal
    percent: Decimal = Field(
        ...,
        description="Share of the breakdown's total, one decimal place"
    )


class CategoryAnalysis(CategoryShare):
    """Category card: share plus entry count and per-entry average."""

    count: int = Field(ge=1)
    average: Decimal = Field(
        ...,
        description="Average amount per entry in this category"
    )


class DashboardSummary(BaseModel):
    """Headline numbers for the dashboard."""

    total: Decimal
    count: int
    month_total: Decimal
    month_count: int
    top_category: Optional[CategoryTotal] = None
    daily_average: Decimal
    recent: list[Expense] = Field(default_factory=list)
    breakdown: list[CategoryShare] = Field(default_factory=list)


class MonthlySummary(BaseModel):
    """Statistics for one calendar month."""

    month: int = Field(ge=0, le=11)
    year: int
    label: str
    total: Decimal
    count: int
    average: Decimal = Field(
        ...,
        description="Total divided by the number of days with spending"
    )
    max_day: Optional[DayTotal] = None
    breakdown: list[CategoryShare] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)


class ExpenseListing(BaseModel):
    """Filtered, date-sorted expense list with its total."""

    expenses: list[Expense] = Field(default_factory=list)
    total: Decimal

    @property
    def count(self) -> int:
        return len(self.expenses)
