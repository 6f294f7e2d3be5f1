"""
JSON File Storage Implementation

DESIGN DECISION: A single local JSON file is the default backend because:
1. Personal data volumes are tiny (hundreds of records)
2. No database setup required
3. The file is human readable and easy to back up

Writes go to a temporary file in the same directory which then replaces
the target, so a crash mid-write never leaves a half-written blob behind.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from expenzo.config import get_settings
from expenzo.log import get_logger
from expenzo.services.storage.interface import ExpenseStorageInterface, StorageError


logger = get_logger(__name__)


class JsonFileStorage(ExpenseStorageInterface):
    """Stores the blob for `key` in `<directory>/<key>.json`."""

    def __init__(self, directory: Union[str, Path], key: str = "expenzo_data"):
        if not key:
            raise ValueError("Storage key must not be empty")
        self._directory = Path(directory).expanduser()
        self._key = key

    @classmethod
    def from_settings(cls) -> "JsonFileStorage":
        """Build the storage configured through AppSettings."""
        settings = get_settings()
        return cls(settings.data_dir, settings.storage_key)

    @property
    def key(self) -> str:
        return self._key

    @property
    def path(self) -> Path:
        return self._directory / f"{self._key}.json"

    def load(self) -> Optional[str]:
        """Read the blob, or None when the file does not exist yet."""
        if not self.path.exists():
            logger.info("storage_empty", path=str(self.path))
            return None
        try:
            return self.path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error("storage_read_failed", path=str(self.path), error=str(e))
            raise StorageError(f"Could not read {self.path}: {e}") from e

    def save(self, blob: str) -> None:
        """Atomically replace the file with `blob`."""
        tmp_name = None
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._directory,
                prefix=f".{self._key}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(blob)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            logger.error("storage_write_failed", path=str(self.path), error=str(e))
            raise StorageError(f"Could not write {self.path}: {e}") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
