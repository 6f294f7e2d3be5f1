"""
Expense Store

The single owner of the expense collection for a process.

Lifecycle:
1. open()   -> construct and load the persisted blob
2. add / update / delete -> validate, change memory, persist the whole list
3. close()  -> final flush

DESIGN DECISION: Memory is authoritative for the session.
Each mutation is applied in memory BEFORE it is written out. If the write
fails, PersistenceError is raised but the change stays: the caller must
tell the user it may not survive a restart. There is no retry.

Readers get snapshots (new lists of frozen Expense objects), so nothing
outside the store can change what it holds.
"""

import time
from datetime import datetime, timezone
from typing import Callable, Optional

from expenzo.log import get_logger
from expenzo.models.expense import Expense, ExpenseFilter
from expenzo.queries.filters import filter_expenses, select_month
from expenzo.services.storage import (
    CorruptDataError,
    ExpenseStorageInterface,
    NotFoundError,
    PersistenceError,
    StorageError,
    deserialize_expenses,
    serialize_expenses,
)
from expenzo.validation import ExpenseValidator
from expenzo.validation.validator import AmountInput, DateInput


logger = get_logger(__name__)


class MonotonicIdFactory:
    """
    Millisecond-timestamp ids that never repeat within a process.

    Two calls in the same millisecond (or a clock that steps backwards)
    get last_id + 1 instead of a duplicate.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._last = 0

    def observe(self, expense_id: str) -> None:
        """Never issue an id at or below an existing numeric id."""
        if expense_id.isdigit():
            self._last = max(self._last, int(expense_id))

    def __call__(self) -> str:
        candidate = int(self._clock() * 1000)
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return str(candidate)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExpenseStore:
    """
    In-memory ordered collection of expenses backed by a blob storage.

    Insertion order is kept; an edit replaces the record at the same
    position.
    """

    def __init__(
        self,
        storage: ExpenseStorageInterface,
        id_factory: Optional[Callable[[], str]] = None,
        validator: Optional[ExpenseValidator] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._storage = storage
        self._id_factory = id_factory or MonotonicIdFactory()
        self._validator = validator or ExpenseValidator()
        self._clock = clock
        self._expenses: list[Expense] = []

    @classmethod
    def open(cls, storage: ExpenseStorageInterface, **kwargs) -> "ExpenseStore":
        """Create a store and load whatever `storage` holds."""
        store = cls(storage, **kwargs)
        store.load()
        return store

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def load(self) -> None:
        """
        Replace the in-memory collection with the persisted one.

        Raises:
            StorageError: If the backend cannot be read
            CorruptDataError: If the blob is malformed or has duplicate ids
        """
        blob = self._storage.load()
        expenses = deserialize_expenses(blob) if blob else []

        seen: set[str] = set()
        for expense in expenses:
            if expense.id in seen:
                raise CorruptDataError(f"Duplicate expense id in storage: {expense.id}")
            seen.add(expense.id)
            if isinstance(self._id_factory, MonotonicIdFactory):
                self._id_factory.observe(expense.id)

        self._expenses = expenses
        logger.info("expenses_loaded", key=self._storage.key, count=len(expenses))

    def flush(self) -> None:
        """Write the full collection to storage."""
        self._persist(expense_id=None)

    def close(self) -> None:
        """Final flush at shutdown."""
        self.flush()
        logger.info("store_closed", count=len(self._expenses))

    def __enter__(self) -> "ExpenseStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_expense(
        self,
        description: Optional[str],
        amount: AmountInput,
        category: Optional[str],
        spent_on: DateInput,
        note: Optional[str] = "",
    ) -> Expense:
        """
        Create a new expense with a fresh id and creation timestamp.

        Raises:
            ExpenseValidationError: If the input is invalid (store unchanged)
            PersistenceError: If the write failed (expense IS added)
        """
        draft = self._validator.validate(description, amount, category, spent_on, note)
        self._log_warnings(draft.warnings)

        expense = Expense(
            id=self._new_id(),
            description=draft.description,
            amount=draft.amount,
            category=draft.category,
            spent_on=draft.spent_on,
            note=draft.note,
            created_at=self._clock(),
        )
        self._expenses.append(expense)
        logger.info(
            "expense_added",
            expense_id=expense.id,
            category=expense.category,
            amount=str(expense.amount),
        )

        self._persist(expense.id)
        return expense

    def update_expense(
        self,
        expense_id: str,
        description: Optional[str],
        amount: AmountInput,
        category: Optional[str],
        spent_on: DateInput,
        note: Optional[str] = "",
    ) -> Expense:
        """
        Replace every editable field of an expense.

        id and created_at are preserved; the record keeps its position.

        Raises:
            NotFoundError: If no expense has `expense_id` (store unchanged)
            ExpenseValidationError: If the input is invalid (store unchanged)
            PersistenceError: If the write failed (change IS applied)
        """
        position = self._position(expense_id)
        draft = self._validator.validate(description, amount, category, spent_on, note)
        self._log_warnings(draft.warnings)

        original = self._expenses[position]
        updated = Expense(
            id=original.id,
            description=draft.description,
            amount=draft.amount,
            category=draft.category,
            spent_on=draft.spent_on,
            note=draft.note,
            created_at=original.created_at,
        )
        self._expenses[position] = updated
        logger.info("expense_updated", expense_id=expense_id)

        self._persist(expense_id)
        return updated

    def delete_expense(self, expense_id: str) -> None:
        """
        Remove an expense.

        Raises:
            NotFoundError: If no expense has `expense_id` (store unchanged)
            PersistenceError: If the write failed (expense IS removed)
        """
        position = self._position(expense_id)
        del self._expenses[position]
        logger.info("expense_deleted", expense_id=expense_id)

        self._persist(expense_id)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_expense(self, expense_id: str) -> Expense:
        """
        Raises:
            NotFoundError: If no expense has `expense_id`
        """
        return self._expenses[self._position(expense_id)]

    def snapshot(self) -> list[Expense]:
        """All expenses in insertion order, as a new list."""
        return list(self._expenses)

    def list_expenses(self, criteria: Optional[ExpenseFilter] = None) -> list[Expense]:
        """Expenses matching `criteria` (all when None), insertion order."""
        return filter_expenses(self._expenses, criteria)

    def select_month(self, month: int, year: int) -> list[Expense]:
        """Expenses in month (0-11) of year."""
        return select_month(self._expenses, month, year)

    def __len__(self) -> int:
        return len(self._expenses)

    def __contains__(self, expense_id: object) -> bool:
        return any(expense.id == expense_id for expense in self._expenses)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _position(self, expense_id: str) -> int:
        for position, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                return position
        raise NotFoundError(expense_id)

    def _new_id(self) -> str:
        """Next id from the factory that no held expense already uses."""
        taken = {expense.id for expense in self._expenses}
        expense_id = self._id_factory()
        while expense_id in taken:
            expense_id = self._id_factory()
        return expense_id

    def _persist(self, expense_id: Optional[str]) -> None:
        """
        Write the collection, refusing a blob that would not load back.

        A blob that decodes to different records is never written, so one
        bad record cannot make the stored collection unreadable.
        """
        try:
            blob = serialize_expenses(self._expenses)
            if deserialize_expenses(blob) != self._expenses:
                raise CorruptDataError("Encoded expenses do not decode to the same records")
            self._storage.save(blob)
        except StorageError as e:
            logger.error(
                "persist_failed",
                key=self._storage.key,
                expense_id=expense_id,
                error=str(e),
            )
            raise PersistenceError(
                "Your change is kept for this session but could not be saved: "
                f"{e}",
                expense_id=expense_id,
            ) from e

    def _log_warnings(self, warnings) -> None:
        for issue in warnings:
            logger.warning(
                "expense_input_warning",
                field=issue.field,
                issue_type=issue.issue_type,
                message=issue.message,
            )
