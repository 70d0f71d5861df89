"""
File-backed key/value storage for client state.

Every slot holds a string, exactly like browser localStorage. The whole
backing file is a JSON object of slot name -> string and is rewritten
atomically on every write.
"""

from __future__ import annotations

import contextlib
import json
import os
import tempfile
from pathlib import Path

from todoq.observability.logging import get_logger
from todoq.observability.telemetry import counter

logger = get_logger(__name__)


class LocalStorage:
    """Named string slots persisted to a single JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def get_item(self, key: str) -> str | None:
        """Return the string stored under key, or None if the slot is empty."""
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        """
        Store value under key, replacing whatever was there.

        Side Effects:
            - Rewrites the backing file
        """
        if not isinstance(value, str):
            raise TypeError(f"LocalStorage values must be str, got {type(value).__name__}")
        slots = self._read_all()
        slots[key] = value
        self._write_all(slots)

    def remove_item(self, key: str) -> None:
        """
        Delete a slot. Missing slots are ignored.

        Side Effects:
            - Rewrites the backing file if the slot existed
        """
        slots = self._read_all()
        if key in slots:
            del slots[key]
            self._write_all(slots)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            counter("storage.backing_file_unreadable")
            logger.warning("Storage file %s unreadable, treating as empty: %s", self.path, e)
            return {}

        if not isinstance(data, dict):
            logger.warning("Storage file %s is not a JSON object, treating as empty", self.path)
            return {}

        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, slots: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".storage-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(slots, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise
