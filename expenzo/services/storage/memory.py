"""
In-Memory Storage Implementation

Used by tests and by the app when no data directory is usable.
`fail_writes` simulates a broken backend so the store's
"memory is authoritative" policy can be exercised.
"""

from typing import Optional

from expenzo.services.storage.interface import ExpenseStorageInterface, StorageError


class InMemoryStorage(ExpenseStorageInterface):
    """Keeps blobs in a dict keyed by storage key."""

    def __init__(
        self,
        blob: Optional[str] = None,
        key: str = "expenzo_data",
        fail_writes: bool = False,
    ):
        self._key = key
        self._blobs: dict[str, str] = {}
        if blob is not None:
            self._blobs[key] = blob
        self.fail_writes = fail_writes
        self.save_count = 0

    @property
    def key(self) -> str:
        return self._key

    @property
    def blob(self) -> Optional[str]:
        """Last successfully saved blob."""
        return self._blobs.get(self._key)

    def load(self) -> Optional[str]:
        return self._blobs.get(self._key)

    def save(self, blob: str) -> None:
        if self.fail_writes:
            raise StorageError("Simulated storage write failure")
        self._blobs[self._key] = blob
        self.save_count += 1
