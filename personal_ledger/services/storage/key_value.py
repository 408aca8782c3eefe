"""
Key-Value Store Implementations

JsonFileKeyValueStore keeps one file per key inside a data directory:

    <data_dir>/financialTransactions.json

TRADEOFFS:
- One process owns the directory; there is no locking
- A write replaces the whole file (temp file + rename), so a crash leaves
  either the old blob or the new one, never half of each

InMemoryKeyValueStore is used by tests and by the "memory" backend.
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Optional, Union

from personal_ledger.services.storage.interface import (
    KeyValueStoreInterface,
    StorageError,
    StorageUnavailableError,
)


KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-][A-Za-z0-9_.-]*$")


def validate_key(key: str) -> str:
    """Keys become file names, so only a safe character set is allowed."""
    if not isinstance(key, str) or not KEY_PATTERN.match(key):
        raise StorageError(f"Invalid storage key: {key!r}")
    return key


class InMemoryKeyValueStore(KeyValueStoreInterface):
    """Dict-backed store. Data lives as long as the object."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(validate_key(key))

    def set(self, key: str, value: str) -> None:
        self._data[validate_key(key)] = value

    def delete(self, key: str) -> bool:
        return self._data.pop(validate_key(key), None) is not None

    def keys(self) -> list[str]:
        """Get all stored keys."""
        return list(self._data)


class JsonFileKeyValueStore(KeyValueStoreInterface):
    """
    File-backed store.

    The directory is created on the first write, not on construction,
    so pointing the app at a read-only location only fails when saving.
    """

    FILE_SUFFIX = ".json"

    def __init__(self, data_dir: Union[str, Path]):
        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, key: str) -> Path:
        """Get the file path a key is stored at."""
        return self._data_dir / f"{validate_key(key)}{self.FILE_SUFFIX}"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageUnavailableError(f"Failed to read {path}: {e}")

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{path.stem}-",
                suffix=".tmp",
                dir=self._data_dir,
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageUnavailableError(f"Failed to write {path}: {e}")

    def delete(self, key: str) -> bool:
        path = self.path_for(key)
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageUnavailableError(f"Failed to delete {path}: {e}")
