"""
Abstract Storage Interface

DESIGN DECISION: The store only needs a key-value blob provider.
This allows us to:
1. Keep the JSON file as the default backend
2. Use in-memory storage for testing
3. Swap in another backend later without touching the store

The whole expense collection is stored as ONE serialized blob under ONE
key. It is read once at startup and rewritten wholesale after every
mutation; there is no incremental persistence.
"""

from abc import ABC, abstractmethod
from typing import Optional


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for the persisted expense blob.

    Any storage implementation must implement these methods.
    Both are synchronous.
    """

    @property
    @abstractmethod
    def key(self) -> str:
        """The well-known key the blob lives under."""
        pass

    @abstractmethod
    def load(self) -> Optional[str]:
        """
        Read the stored blob.

        Returns:
            The serialized collection, or None if nothing was stored yet

        Raises:
            StorageError: If the backend exists but cannot be read
        """
        pass

    @abstractmethod
    def save(self, blob: str) -> None:
        """
        Replace the stored blob.

        Args:
            blob: The serialized collection

        Raises:
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """No expense with the given id."""

    def __init__(self, expense_id: str):
        self.expense_id = expense_id
        super().__init__(f"Expense {expense_id} not found")


class PersistenceError(StorageError):
    """
    The in-memory change succeeded but writing it to storage failed.

    The change is NOT rolled back: memory stays authoritative for the
    session. Callers should tell the user it may not survive a restart.
    """

    def __init__(self, message: str, expense_id: Optional[str] = None):
        self.expense_id = expense_id
        super().__init__(message)


class CorruptDataError(StorageError):
    """The stored blob could not be decoded into expenses."""
    pass
