"""Shared fixtures for Expenzo tests."""

from datetime import date, datetime, timezone
from decimal import Decimal
from itertools import count

import pytest

from expenzo.models.expense import Expense
from expenzo.services.storage import InMemoryStorage
from expenzo.store import ExpenseStore


@pytest.fixture
def make_expense():
    """Factory building Expense records with sequential ids."""
    ids = count(1)

    def _make(
        category: str = "Food",
        amount="10",
        spent_on="2024-01-01",
        description: str = "Something",
        note: str = "",
    ) -> Expense:
        return Expense(
            id=str(next(ids)),
            description=description,
            amount=Decimal(str(amount)),
            category=category,
            spent_on=date.fromisoformat(spent_on),
            note=note,
            created_at=datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc),
        )

    return _make


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def store(storage):
    """Empty store with predictable ids: 1, 2, 3, ..."""
    ids = count(1)
    return ExpenseStore.open(storage, id_factory=lambda: str(next(ids)))
