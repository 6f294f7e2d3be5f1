"""
Display Formatting

String helpers for the presentation layer. Currency uses Indian digit
grouping (1,23,456.78) with two decimals; dates use English month names
independent of the process locale.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from expenzo.models.expense import get_category_config, resolve_category


MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
WEEKDAY_NAMES = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)

Number = Union[Decimal, int, float]
DateLike = Union[date, str]


def _group_indian(digits: str) -> str:
    """Group an integer digit string as 12,34,567 (last three, then pairs)."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(amount: Number, symbol: str = "₹") -> str:
    """
    Format an amount like ₹1,23,456.78.

    Negative values put the sign before the symbol: -₹50.00
    """
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    whole, fraction = f"{abs(value):.2f}".split(".")
    return f"{sign}{symbol}{_group_indian(whole)}.{fraction}"


def _as_date(value: DateLike) -> date:
    return value if isinstance(value, date) else date.fromisoformat(value)


def format_date(value: DateLike) -> str:
    """'2024-01-05' -> '5 Jan 2024'"""
    day = _as_date(value)
    return f"{day.day} {MONTH_NAMES[day.month - 1][:3]} {day.year}"


def format_long_date(value: DateLike) -> str:
    """'2024-01-05' -> 'Friday, 5 January 2024'"""
    day = _as_date(value)
    return f"{WEEKDAY_NAMES[day.weekday()]}, {day.day} {MONTH_NAMES[day.month - 1]} {day.year}"


def format_percentage(value: Number) -> str:
    """One decimal place: 12.5%"""
    return f"{Decimal(str(value)):.1f}%"


def month_label(month: int, year: int) -> str:
    """(0, 2024) -> 'January 2024'"""
    if not 0 <= month <= 11:
        raise ValueError(f"Month must be between 0 and 11, got {month}")
    return f"{MONTH_NAMES[month]} {year}"


def pluralize(count: int, noun: str) -> str:
    """'1 transaction', '3 transactions'"""
    return f"{count} {noun}{'' if count == 1 else 's'}"


def category_badge(name: Optional[str]) -> str:
    """
    Emoji plus category name.

    Unknown categories get the Other emoji next to their own name, so they
    stay distinguishable from Other itself. A missing name shows as Other.
    """
    label = name or resolve_category(name).value
    return f"{get_category_config(name).emoji} {label}"
