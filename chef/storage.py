"""
Key/value persistence backends for the recipe history store.

The history store needs something shaped like browser localStorage: string
values under string keys, where a missing key and an empty value mean the same
thing. Two backends are provided:

- MemoryStorage: process-local dict, used in tests and as a fallback
- JsonFileStorage: one JSON object on disk, replaced atomically on every write

Both raise PersistenceReadError / PersistenceWriteError on I/O or parse
problems; recovery is the caller's job (see chef.history).
"""

import json
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

from chef.errors import PersistenceReadError, PersistenceWriteError

# One lock per file, shared by every JsonFileStorage in the process (Streamlit
# runs each browser session in its own thread).
_FILE_LOCKS: Dict[str, threading.Lock] = {}
_FILE_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = str(path.resolve())
    with _FILE_LOCKS_GUARD:
        return _FILE_LOCKS.setdefault(key, threading.Lock())


class BaseStorage(ABC):
    """Minimal string key/value store."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored string for key, or None if absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete key. Removing a missing key is not an error."""


class MemoryStorage(BaseStorage):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStorage(BaseStorage):
    """
    Storage backed by a single JSON object file.

    The whole file is read on every access and rewritten through a temp file
    plus os.replace on every change, so a crash mid-write never leaves a
    truncated file behind. Read-modify-write cycles on the same file are
    serialised, so concurrent set_item calls for different keys never drop
    each other'"'"'s values.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = _lock_for(self.path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise PersistenceReadError(f"Could not read {self.path}: {e}") from e
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceReadError(f"Corrupt storage file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceReadError(f"Storage file {self.path} does not hold a JSON object")
        return {str(k): str(v) for k, v in data.items()}

    def _write_all(self, items: Dict[str, str]) -> None:
        payload = json.dumps(items, ensure_ascii=False, indent=2)
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".tmp-", dir=str(self.path.parent))
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise PersistenceWriteError(f"Could not write {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            try:
                items = self._read_all()
            except PersistenceReadError:
                # A corrupt file is overwritten rather than blocking every future write.
                items = {}
            items[key] = value
            self._write_all(items)

    def remove_item(self, key: str) -> None:
        with self._lock:
            try:
                items = self._read_all()
            except PersistenceReadError:
                items = {}
            if key not in items:
                return
            items.pop(key, None)
            self._write_all(items)
