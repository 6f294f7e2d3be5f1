"""
Storage Services Package

Provides the abstract blob storage interface, the record codec and the
concrete JSON-file and in-memory backends.
"""

from expenzo.services.storage.interface import (
    CorruptDataError,
    ExpenseStorageInterface,
    NotFoundError,
    PersistenceError,
    StorageError,
)
from expenzo.services.storage.codec import (
    deserialize_expenses,
    serialize_expenses,
)
from expenzo.services.storage.json_file import JsonFileStorage
from expenzo.services.storage.memory import InMemoryStorage

__all__ = [
    # Interface
    "ExpenseStorageInterface",
    # Exceptions
    "CorruptDataError",
    "NotFoundError",
    "PersistenceError",
    "StorageError",
    # Codec
    "deserialize_expenses",
    "serialize_expenses",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
]
