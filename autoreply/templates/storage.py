"""Key-value persistence for the template library.

Each blob (templates, favorites, recent ids) is stored independently
under its own key as a JSON-encoded string.
"""

import logging
import os
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from .exceptions import StorageError

logger = logging.getLogger(__name__)

_SAFE_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")

DEFAULT_DATA_DIR = Path.home() / ".autoreply"


class KeyValueStore(ABC):
    """Interface for string blob storage.

    Implementations:
    - InMemoryKeyValueStore: For testing, nothing survives the process
    - JsonFileKeyValueStore: One file per key in a data directory
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Read the stored value.

        Args:
            key: Blob key

        Returns:
            Stored string, or None if the key was never written
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""
        pass


class InMemoryKeyValueStore(KeyValueStore):
    """In-memory implementation for testing."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        """Remove all keys. Useful for testing."""
        self._data.clear()


class JsonFileKeyValueStore(KeyValueStore):
    """Stores each key as <data_dir>/<key>.json.

    The data directory defaults to the AUTOREPLY_DATA_DIR env var, or
    ~/.autoreply. It is created on first write.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        if data_dir:
            self._data_dir = Path(data_dir)
        elif os.environ.get("AUTOREPLY_DATA_DIR"):
            self._data_dir = Path(os.environ["AUTOREPLY_DATA_DIR"])
        else:
            self._data_dir = DEFAULT_DATA_DIR

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _path_for(self, key: str) -> Path:
        if not _SAFE_KEY_PATTERN.match(key):
            raise StorageError(key, "key contains unsupported characters")
        return self._data_dir / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(key, str(e)) from e

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            # Write then rename so a crash never leaves a truncated blob
            tmp_path = path.with_suffix(".json.tmp")
            tmp_path.write_text(value, encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            raise StorageError(key, str(e)) from e
        logger.debug("Wrote %d bytes to %s", len(value), path)

    def delete(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(key, str(e)) from e
