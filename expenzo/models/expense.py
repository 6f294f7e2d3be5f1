"""
Core Data Models for Expenzo

These models define the strict schemas for all data flowing through the system.
They are designed to:
1. Enforce type safety at runtime
2. Be serializable to the persisted JSON layout
3. Be immutable, so snapshots handed out by the store stay read-only

DESIGN DECISION: The persisted layout uses short camelCase keys
(desc, date, createdAt). Python code uses descriptive field names and
the persisted keys are declared as aliases.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)


# =============================================================================
# CATEGORIES
# =============================================================================

class ExpenseCategory(str, Enum):
    """
    Supported expense categories.

    Values are the display names as they appear in persisted data.
    """
    FOOD = "Food"
    TRAVEL = "Travel"
    RENT = "Rent"
    STUDY = "Study"
    SHOPPING = "Shopping"
    HEALTH = "Health"
    ENTERTAINMENT = "Entertainment"
    BILLS = "Bills"
    OTHER = "Other"


class CategoryConfig(BaseModel):
    """Display metadata for a category."""
    model_config = ConfigDict(frozen=True)

    category: ExpenseCategory
    emoji: str
    color: str
    bg: str


CATEGORY_CONFIGS: dict[ExpenseCategory, CategoryConfig] = {
    config.category: config
    for config in (
        CategoryConfig(category=ExpenseCategory.FOOD, emoji="🍔", color="#e8821a", bg="#fef3e2"),
        CategoryConfig(category=ExpenseCategory.TRAVEL, emoji="✈️", color="#3b7dd8", bg="#e8f0fc"),
        CategoryConfig(category=ExpenseCategory.RENT, emoji="🏠", color="#7c4dbb", bg="#f1eaf9"),
        CategoryConfig(category=ExpenseCategory.STUDY, emoji="📚", color="#2d9e6b", bg="#e8f7f1"),
        CategoryConfig(category=ExpenseCategory.SHOPPING, emoji="🛍️", color="#e85d4a", bg="#fef0ee"),
        CategoryConfig(category=ExpenseCategory.HEALTH, emoji="💊", color="#0ea5a0", bg="#e6f7f7"),
        CategoryConfig(category=ExpenseCategory.ENTERTAINMENT, emoji="🎮", color="#d45db7", bg="#faeef8"),
        CategoryConfig(category=ExpenseCategory.BILLS, emoji="⚡", color="#c2860a", bg="#fdf4e0"),
        CategoryConfig(category=ExpenseCategory.OTHER, emoji="📦", color="#6b7280", bg="#f3f4f6"),
    )
}


def resolve_category(name: Optional[str]) -> ExpenseCategory:
    """
    Map a stored category string to a known category.

    Unknown, empty or missing names resolve to OTHER.
    """
    if name:
        try:
            return ExpenseCategory(name)
        except ValueError:
            return ExpenseCategory.OTHER
    return ExpenseCategory.OTHER


def get_category_config(name: Optional[str]) -> CategoryConfig:
    """Display config for a category name, defaulting to OTHER's config."""
    return CATEGORY_CONFIGS[resolve_category(name)]


def category_choices(current: Optional[str] = None) -> list[str]:
    """
    Category names to offer in a picker.

    A stored category outside ExpenseCategory is appended so an edit can
    keep it instead of replacing it with Other.
    """
    choices = [c.value for c in ExpenseCategory]
    if current and current not in choices:
        choices.append(current)
    return choices


# =============================================================================
# EXPENSE RECORD
# =============================================================================

# Amounts are stored as JSON numbers; cents up to this bound survive a
# float round trip exactly.
MAX_AMOUNT = Decimal("1000000000000")
CENT = Decimal("0.01")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Expense(BaseModel):
    """
    A single expense entry.

    CRITICAL: Records are frozen. An edit produces a new Expense that
    replaces the old one in the store; id and created_at carry over.

    The category is kept as the raw string so values this version does not
    know about survive a load/save cycle. Use display_category for anything
    shown to a user.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        frozen=True,
        populate_by_name=True,
    )

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier"
    )
    description: str = Field(
        ...,
        alias="desc",
        min_length=1,
        description="What the money was spent on"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        le=MAX_AMOUNT,
        description="Amount in currency units"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Category name (see ExpenseCategory)"
    )
    spent_on: date = Field(
        ...,
        alias="date",
        description="Calendar day of the expense"
    )
    note: str = Field(
        default="",
        description="Optional free text"
    )
    created_at: datetime = Field(
        default_factory=_utcnow,
        alias="createdAt",
        description="When the record was created (informational only)"
    )

    @field_validator('note', mode='before')
    @classmethod
    def missing_note_is_empty(cls, v: Optional[str]) -> str:
        """Older blobs may carry null or omit the note."""
        return "" if v is None else v

    @field_serializer('amount', when_used='json')
    def amount_as_number(self, v: Decimal) -> float:
        """Persist amounts as JSON numbers, not strings."""
        return float(v)

    @property
    def display_category(self) -> ExpenseCategory:
        """Category to show; unknown values display as OTHER."""
        return resolve_category(self.category)

    @property
    def category_config(self) -> CategoryConfig:
        return get_category_config(self.category)

    def to_record(self) -> dict:
        """Export in the persisted layout (camelCase keys, JSON types)."""
        return self.model_dump(by_alias=True, mode="json")


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'unknown_category')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


# =============================================================================
# QUERY MODELS
# =============================================================================

class ExpenseFilter(BaseModel):
    """
    Filter criteria for listing expenses.

    All given criteria must hold (logical AND). Empty or blank values
    disable the corresponding filter.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    text_query: Optional[str] = Field(
        default=None,
        description="Case-insensitive substring of description or note"
    )
    category: Optional[str] = Field(
        default=None,
        description="Exact category match"
    )
    date_from: Optional[date] = Field(
        default=None,
        description="Inclusive lower bound"
    )
    date_to: Optional[date] = Field(
        default=None,
        description="Inclusive upper bound"
    )
    month: Optional[int] = Field(
        default=None,
        ge=0,
        le=11,
        description="Calendar month, 0 = January"
    )
    year: Optional[int] = Field(
        default=None,
        ge=1,
        le=9999,
    )

    @field_validator('text_query', 'category', 'date_from', 'date_to', mode='before')
    @classmethod
    def blank_is_absent(cls, v):
        """Form inputs send empty strings for untouched fields."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode='after')
    def validate_month_pair(self) -> 'ExpenseFilter':
        """Month and year only make sense together."""
        if (self.month is None) != (self.year is None):
            raise ValueError("month and year must be given together")
        return self

    @property
    def is_empty(self) -> bool:
        """True when no criterion is set."""
        return not any((
            self.text_query,
            self.category,
            self.date_from,
            self.date_to,
            self.month is not None,
        ))
