"""Key/value storage backends underneath the local submission store."""

import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from loguru import logger


class KeyValueStorage(Protocol):
    """
    A protocol that defines the interface for durable string storage.

    Any implementation (a directory of files, an in-memory dict, ...) can back
    the local submission store as long as a value written under a key is
    returned whole by the next read of that key.
    """

    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under ``key``.

        Returns:
            The stored string, or None if nothing was stored.
        """
        ...

    def set_item(self, key: str, value: str) -> None:
        """Replace the value stored under ``key``."""
        ...


class MemoryKeyValueStorage:
    """Process-local storage, used for ephemeral runs and tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class FileKeyValueStorage:
    """
    Directory-backed storage with one JSON file per key.

    Writes go to a temporary sibling file that is then renamed over the
    target, so readers never observe a partially written value.
    """

    SUFFIX = ".json"

    def __init__(self, data_dir: Union[str, Path]):
        """
        Initialize the storage with a directory path.

        Args:
            data_dir: Directory holding one file per key (created on first write)
        """
        self.data_dir = Path(data_dir)

    def path_for(self, key: str) -> Path:
        """Location of the file holding ``key``."""
        if not key or key.startswith(".") or os.sep in key or "/" in key:
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.data_dir / f"{key}{self.SUFFIX}"

    def get_item(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set_item(self, key: str, value: str) -> None:
        path = self.path_for(key)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        logger.debug(f"Wrote {len(value)} characters to {path}")
