"""
Task List Controller - create/toggle/delete/clear over the Task Store.

The controller never persists on its own. Callers run one or more mutations
and then call save() once, so a batch of AI-extracted tasks is written in a
single pass.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from todoq.observability.logging import get_logger
from todoq.observability.telemetry import counter
from todoq.tasks.models import Task, mint_task_id
from todoq.tasks.store import TaskStore
from todoq.utils.redaction import redact_text

logger = get_logger(__name__)

COMPLETED_MARK = "✓ "
COMPLETE_ACTION = "Complete"
CLEAR_ALL_PROMPT = "Are you sure you want to clear ALL tasks? This cannot be undone."


class ClearOutcome(str, Enum):
    """Result of a clear-all request."""

    CLEARED = "cleared"
    CANCELLED = "cancelled"  # User declined the confirmation
    ALREADY_EMPTY = "already_empty"


@dataclass(frozen=True)
class TaskRow:
    """
    What a UI shows for one task.

    Activating anywhere on the row toggles completion. Incomplete rows also
    carry a "Complete" action; completed rows are marked and offer no action
    beyond toggling back.
    """

    task_id: float
    label: str
    completed: bool
    action: str | None


class TaskListController:
    """Owns the TaskStore and applies task-list operations to it."""

    def __init__(self, store: TaskStore):
        self.store = store

    @property
    def tasks(self) -> list[Task]:
        return self.store.tasks

    def load(self) -> list[Task]:
        return self.store.load()

    def save(self) -> None:
        self.store.save()

    def create(self, text: str) -> bool:
        """
        Append a new incomplete task.

        Returns:
            False (without raising) if the trimmed text is empty or already
            present case-insensitively, True otherwise.
        """
        trimmed = (text or "").strip()
        if not trimmed:
            return False

        tasks = self.store.tasks
        if any(task.matches_text(trimmed) for task in tasks):
            counter("tasks.create.duplicate")
            logger.info("Task already exists: %s", redact_text(trimmed))
            return False

        existing_ids = {task.id for task in tasks}
        task_id = mint_task_id()
        while task_id in existing_ids:
            task_id = mint_task_id()

        tasks.append(Task(id=task_id, text=trimmed))
        self.store.replace(tasks)
        return True

    def toggle(self, task_id: float) -> None:
        """Flip completed on the matching task. Unknown ids are ignored."""
        self.store.replace(
            task.toggled() if task.id == task_id else task for task in self.store.tasks
        )

    def delete(self, task_id: float) -> None:
        """Remove the matching task. Unknown ids are ignored."""
        self.store.replace(task for task in self.store.tasks if task.id != task_id)

    def clear_all(self, confirm: Callable[[str], bool]) -> ClearOutcome:
        """
        Empty the list after interactive confirmation.

        Args:
            confirm: Asked with CLEAR_ALL_PROMPT; the list is only cleared if
                it returns True. Not called when the list is already empty.
        """
        if len(self.store) == 0:
            return ClearOutcome.ALREADY_EMPTY

        if not confirm(CLEAR_ALL_PROMPT):
            return ClearOutcome.CANCELLED

        self.store.replace([])
        logger.info("All tasks cleared")
        return ClearOutcome.CLEARED

    def rows(self) -> list[TaskRow]:
        """Row view models in insertion order."""
        return [
            TaskRow(
                task_id=task.id,
                label=f"{COMPLETED_MARK}{task.text}" if task.completed else task.text,
                completed=task.completed,
                action=None if task.completed else COMPLETE_ACTION,
            )
            for task in self.store.tasks
        ]
