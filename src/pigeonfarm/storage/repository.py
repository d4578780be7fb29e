"""Persistence for the client's small amount of state."""
from __future__ import annotations

import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from ..models import NO_MESSAGE_ID

logger = logging.getLogger(__name__)

LAST_ID_KEY = "last_message_id"
LAUNCHED_BEFORE_KEY = "launched_before"


class StateRepository(ABC):
    """Key-value store holding the last shown id and the first-launch flag."""

    @abstractmethod
    def load(self) -> dict[str, Any]:
        """Return all stored values."""

    @abstractmethod
    def save(self, values: dict[str, Any]) -> None:
        """Replace all stored values."""

    def last_id(self) -> int:
        value = self.load().get(LAST_ID_KEY)
        if isinstance(value, bool) or not isinstance(value, int):
            return NO_MESSAGE_ID
        return value

    def set_last_id(self, message_id: int) -> None:
        values = self.load()
        values[LAST_ID_KEY] = message_id
        self.save(values)

    def launched_before(self) -> bool:
        return bool(self.load().get(LAUNCHED_BEFORE_KEY, False))

    def mark_launched(self) -> None:
        values = self.load()
        values[LAUNCHED_BEFORE_KEY] = True
        self.save(values)


class MemoryStateRepository(StateRepository):
    """Volatile repository, state lives as long as the object."""

    def __init__(self, values: dict[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(values or {})

    def load(self) -> dict[str, Any]:
        return dict(self._values)

    def save(self, values: dict[str, Any]) -> None:
        self._values = dict(values)


class JsonStateRepository(StateRepository):
    """Persists state to a JSON file."""

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load(self) -> dict[str, Any]:
        with self._lock:
            if not self._file_path.exists():
                return {}
            try:
                data = json.loads(self._file_path.read_text(encoding="utf-8"))
            except (OSError, ValueError):
                logger.warning("Ignoring unreadable state file %s", self._file_path)
                return {}
        return data if isinstance(data, dict) else {}

    def save(self, values: dict[str, Any]) -> None:
        """Write ``values`` through a temporary file so readers never see half a file."""

        with self._lock:
            tmp_path = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(values, indent=2, sort_keys=True), encoding="utf-8")
            tmp_path.replace(self._file_path)
