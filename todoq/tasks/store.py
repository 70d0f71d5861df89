"""
Task Store - the persisted, ordered list of task records.

The entire list is the unit of persistence: load() reads the whole slot and
save() overwrites it. There is no merge and no versioning.
"""

from __future__ import annotations

import json
from collections.abc import Iterable

from todoq.config import STORAGE_SLOT
from todoq.observability.logging import get_logger
from todoq.observability.telemetry import counter, log_event
from todoq.storage.local import LocalStorage
from todoq.tasks.models import Task

logger = get_logger(__name__)


class TaskStore:
    """In-memory task list backed by one LocalStorage slot."""

    def __init__(self, storage: LocalStorage, slot: str = STORAGE_SLOT):
        self.storage = storage
        self.slot = slot
        self._tasks: list[Task] = []

    @property
    def tasks(self) -> list[Task]:
        """Current tasks in insertion order (a copy; mutate through replace())."""
        return list(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def replace(self, tasks: Iterable[Task]) -> None:
        """Swap in a new collection. Does not persist."""
        self._tasks = list(tasks)

    def load(self) -> list[Task]:
        """
        Load the task list from storage.

        Corrupted payloads are discarded and the slot cleared; malformed
        records are dropped and the cleaned list written back. Never raises
        for bad stored data.

        Side Effects:
            - May remove or rewrite the storage slot
            - Logs a warning when data is discarded
        """
        raw = self.storage.get_item(self.slot)
        if raw is None:
            self._tasks = []
            return self.tasks

        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as e:
            counter("tasks.store.corrupted")
            logger.warning("Stored task list is corrupted, starting empty: %s", e)
            self._tasks = []
            self.storage.remove_item(self.slot)
            return self.tasks

        not_array = not isinstance(parsed, list)
        if not_array:
            logger.warning("Stored task list is not an array, starting empty")
            parsed = []

        tasks = [task for task in (Task.from_record(r) for r in parsed) if task is not None]
        self._tasks = tasks

        dropped = len(parsed) - len(tasks)
        if dropped or not_array:
            counter("tasks.store.filtered", dropped)
            logger.warning("Filtered out %d invalid task record(s) from storage", dropped)
            self.save()

        log_event("tasks.store.loaded", count=len(tasks), dropped=dropped)
        return self.tasks

    def save(self) -> None:
        """
        Serialize the full collection into the slot, overwriting prior state.

        Side Effects:
            - Writes the storage backing file
        """
        payload = json.dumps([task.to_record() for task in self._tasks], ensure_ascii=False)
        self.storage.set_item(self.slot, payload)
        logger.debug("Saved %d task(s)", len(self._tasks))
