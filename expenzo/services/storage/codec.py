"""
Expense Collection Codec

Converts between the in-memory list of Expense records and the persisted
JSON blob. The layout is a JSON array of objects:

    {"id": "1704096000000", "desc": "Morning Coffee", "amount": 3.5,
     "category": "Food", "date": "2024-01-01", "note": "",
     "createdAt": "2024-01-01T08:00:00Z"}

Order is preserved in both directions.
"""

from pydantic import TypeAdapter, ValidationError

from expenzo.models.expense import Expense
from expenzo.services.storage.interface import CorruptDataError


_EXPENSE_LIST = TypeAdapter(list[Expense])


def serialize_expenses(expenses: list[Expense]) -> str:
    """Encode the collection as a JSON array using the persisted keys."""
    return _EXPENSE_LIST.dump_json(expenses, by_alias=True).decode("utf-8")


def deserialize_expenses(blob: str) -> list[Expense]:
    """
    Decode a persisted blob.

    Raises:
        CorruptDataError: If the blob is not a valid expense array
    """
    try:
        return _EXPENSE_LIST.validate_json(blob)
    except ValidationError as e:
        raise CorruptDataError(
            f"Stored expense data is invalid ({e.error_count()} problem(s)): {e}"
        ) from e
