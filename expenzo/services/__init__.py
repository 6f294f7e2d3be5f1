"""Services package."""

from expenzo.services.storage import (
    CorruptDataError,
    ExpenseStorageInterface,
    InMemoryStorage,
    JsonFileStorage,
    NotFoundError,
    PersistenceError,
    StorageError,
)

__all__ = [
    "CorruptDataError",
    "ExpenseStorageInterface",
    "InMemoryStorage",
    "JsonFileStorage",
    "NotFoundError",
    "PersistenceError",
    "StorageError",
]
