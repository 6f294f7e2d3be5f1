"""
Expense Input Validation

Runs at the create/edit boundary, before the store changes anything.
The aggregation engine downstream assumes what this module guarantees:
a non-empty description, a positive amount in whole cents no larger
than MAX_AMOUNT, a non-empty category and a real calendar date.

IMPORTANT: Validation NEVER silently fixes issues.
Every problem is reported back to the caller as a ValidationIssue.
Only whitespace is trimmed, and a missing note becomes "".

Severity:
- error   -> blocks the create/edit (ExpenseValidationError)
- warning -> allowed through, reported for display
             (currently: a category outside ExpenseCategory, which
             displays as Other)
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union

from pydantic import BaseModel, Field

from expenzo.models.expense import CENT, MAX_AMOUNT, ExpenseCategory, ValidationIssue


AmountInput = Union[Decimal, int, float, str, None]
DateInput = Union[date, str, None]


class ExpenseValidationError(Exception):
    """Create/edit input was rejected. Carries every issue found."""

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = issues
        super().__init__("; ".join(issue.message for issue in self.errors) or "Invalid expense")

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "error"]


class ExpenseDraft(BaseModel):
    """Validated, normalized input for a create or edit."""

    description: str
    amount: Decimal
    category: str
    spent_on: date
    note: str = ""
    warnings: list[ValidationIssue] = Field(default_factory=list)


class ExpenseValidator:
    """
    Validates raw expense input.

    Collects all issues in one pass so a form can show every problem
    at once instead of one per submit.
    """

    def validate(
        self,
        description: Optional[str],
        amount: AmountInput,
        category: Optional[str],
        spent_on: DateInput,
        note: Optional[str] = "",
    ) -> ExpenseDraft:
        """
        Validate input and return the normalized draft.

        Raises:
            ExpenseValidationError: If any error-level issue was found
        """
        issues: list[ValidationIssue] = []

        clean_description = (description or "").strip()
        if not clean_description:
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="Please enter a description",
                severity="error",
            ))

        parsed_amount, amount_issue = self._parse_amount(amount)
        if amount_issue:
            issues.append(amount_issue)

        clean_category = (category or "").strip()
        if not clean_category:
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                message="Please select a category",
                severity="error",
            ))
        elif clean_category not in {c.value for c in ExpenseCategory}:
            issues.append(ValidationIssue(
                field="category",
                issue_type="unknown_category",
                message=f"Unknown category '{clean_category}' will be shown as Other",
                severity="warning",
                suggested_fix="Pick one of: " + ", ".join(c.value for c in ExpenseCategory),
            ))

        parsed_date, date_issue = self._parse_date(spent_on)
        if date_issue:
            issues.append(date_issue)

        if any(issue.severity == "error" for issue in issues):
            raise ExpenseValidationError(issues)

        return ExpenseDraft(
            description=clean_description,
            amount=parsed_amount,
            category=clean_category,
            spent_on=parsed_date,
            note=(note or "").strip(),
            warnings=issues,
        )

    def _parse_amount(
        self,
        amount: AmountInput,
    ) -> tuple[Optional[Decimal], Optional[ValidationIssue]]:
        """Parse an amount, returning (value, None) or (None, issue)."""
        if amount is None or (isinstance(amount, str) and not amount.strip()):
            return None, ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Please enter a valid amount",
                severity="error",
            )

        if isinstance(amount, bool):
            value = None
        elif isinstance(amount, Decimal):
            value = amount
        else:
            try:
                # str() first so 0.1 becomes Decimal("0.1"), not its binary expansion
                value = Decimal(str(amount).strip())
            except InvalidOperation:
                value = None

        if value is None or not value.is_finite():
            return None, ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=f"Amount '{amount}' is not a number",
                severity="error",
            )

        if value <= 0:
            return None, ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
                severity="error",
            )

        if value > MAX_AMOUNT:
            return None, ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message=f"Amount must not exceed {MAX_AMOUNT:,}",
                severity="error",
            )

        cents = value.quantize(CENT)
        if cents != value:
            return None, ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount can have at most two decimal places",
                severity="error",
                suggested_fix=f"Use {value.quantize(CENT, rounding=ROUND_HALF_UP)}",
            )

        return cents, None

    def _parse_date(
        self,
        spent_on: DateInput,
    ) -> tuple[Optional[date], Optional[ValidationIssue]]:
        """Parse a calendar date, returning (value, None) or (None, issue)."""
        if isinstance(spent_on, datetime):
            return spent_on.date(), None
        if isinstance(spent_on, date):
            return spent_on, None

        if spent_on is None or not str(spent_on).strip():
            return None, ValidationIssue(
                field="spent_on",
                issue_type="missing",
                message="Please select a date",
                severity="error",
            )

        try:
            return date.fromisoformat(str(spent_on).strip()), None
        except ValueError:
            return None, ValidationIssue(
                field="spent_on",
                issue_type="invalid_format",
                message=f"Date '{spent_on}' is not a valid YYYY-MM-DD date",
                severity="error",
                suggested_fix="Use the form YYYY-MM-DD, e.g. 2024-01-31",
            )
