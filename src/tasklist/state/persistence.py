"""Key-value storage for task list state, backed by atomic JSON files."""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..errors import PersistenceError

logger = logging.getLogger(__name__)


class Persistence:
    """Handles atomic JSON file operations."""

    @staticmethod
    def load_json(file_path: Path) -> Dict[str, Any]:
        """Load JSON from file, return {} if not found or invalid."""
        if not file_path.exists():
            return {}

        try:
            with file_path.open("r", encoding="utf-8") as fp:
                data = json.load(fp)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable store file %s: %s", file_path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    @staticmethod
    def save_json(file_path: Path, data: Dict[str, Any]) -> None:
        """Atomically save JSON to file."""
        Persistence.ensure_dir(file_path.parent)
        tmp_fd, tmp_path = tempfile.mkstemp(dir=file_path.parent, suffix=".tmp")
        try:
            with os.fdopen(tmp_fd, "w", encoding="utf-8") as fp:
                json.dump(data, fp, indent=2)
                fp.flush()
                os.fsync(fp.fileno())
            shutil.move(tmp_path, file_path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    @staticmethod
    def ensure_dir(dir_path: Path) -> None:
        """Create directory if it doesn't exist."""
        dir_path.mkdir(parents=True, exist_ok=True)


class KeyValueStore(ABC):
    """Named key-value store holding JSON-serialized values.

    ``load`` never raises: a missing key or a value that fails to
    deserialize comes back as ``None``. ``save`` raises
    :class:`PersistenceError` when the value cannot be serialized or written.
    """

    def load(self, key: str) -> Optional[Any]:
        raw = self._get_raw(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, json.JSONDecodeError) as exc:
            logger.warning("Discarding undecodable value for key %r: %s", key, exc)
            return None

    def save(self, key: str, value: Any) -> None:
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError) as exc:
            raise PersistenceError(f"Cannot serialize value for key {key!r}: {exc}") from exc
        self._set_raw(key, serialized)

    @abstractmethod
    def _get_raw(self, key: str) -> Optional[str]:
        """Return the serialized value stored under key, if any."""

    @abstractmethod
    def _set_raw(self, key: str, serialized: str) -> None:
        """Store a serialized value under key."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key from the store (missing keys are ignored)."""

    @abstractmethod
    def keys(self) -> List[str]:
        """List stored keys."""


class MemoryStore(KeyValueStore):
    """Process-local store; values are still serialized so callers never share objects."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def _get_raw(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def _set_raw(self, key: str, serialized: str) -> None:
        self._data[key] = serialized

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data)


class JsonFileStore(KeyValueStore):
    """Store kept as a single JSON document mapping keys to serialized strings."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path).expanduser()

    @property
    def logs_dir(self) -> Path:
        return self.path.parent / "logs"

    def _get_raw(self, key: str) -> Optional[str]:
        raw = Persistence.load_json(self.path).get(key)
        if raw is not None and not isinstance(raw, str):
            logger.warning("Discarding non-string entry for key %r in %s", key, self.path)
            return None
        return raw

    def _set_raw(self, key: str, serialized: str) -> None:
        data = Persistence.load_json(self.path)
        data[key] = serialized
        self._write(data)

    def delete(self, key: str) -> None:
        data = Persistence.load_json(self.path)
        if key in data:
            del data[key]
            self._write(data)

    def keys(self) -> List[str]:
        return list(Persistence.load_json(self.path))

    def _write(self, data: Dict[str, Any]) -> None:
        try:
            Persistence.save_json(self.path, data)
        except OSError as exc:
            raise PersistenceError(f"Cannot write store {self.path}: {exc}") from exc
