"""
Data Models Package

This package contains all Pydantic models used in Expenzo.
All data flowing through the system must conform to these schemas.
"""

from expenzo.models.expense import (
    CATEGORY_CONFIGS,
    MAX_AMOUNT,
    CategoryConfig,
    Expense,
    ExpenseCategory,
    ExpenseFilter,
    ValidationIssue,
    category_choices,
    get_category_config,
    resolve_category,
)
from expenzo.models.summary import (
    CategoryAnalysis,
    CategoryShare,
    CategoryTotal,
    DashboardSummary,
    DayTotal,
    ExpenseListing,
    MonthlySummary,
)

__all__ = [
    # Expense models
    "CATEGORY_CONFIGS",
    "MAX_AMOUNT",
    "CategoryConfig",
    "Expense",
    "ExpenseCategory",
    "ExpenseFilter",
    "ValidationIssue",
    "category_choices",
    "get_category_config",
    "resolve_category",
    # Summary models
    "CategoryAnalysis",
    "CategoryShare",
    "CategoryTotal",
    "DashboardSummary",
    "DayTotal",
    "ExpenseListing",
    "MonthlySummary",
]
