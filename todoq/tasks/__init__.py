"""Task list domain: records, persistence, controller, and summary."""

from __future__ import annotations

from todoq.tasks.controller import ClearOutcome, TaskListController, TaskRow
from todoq.tasks.models import Task
from todoq.tasks.store import TaskStore
from todoq.tasks.summary import NO_COMPLETED_MESSAGE, PendingEmailJob, compile_summary

__all__ = [
    "ClearOutcome",
    "NO_COMPLETED_MESSAGE",
    "PendingEmailJob",
    "Task",
    "TaskListController",
    "TaskRow",
    "TaskStore",
    "compile_summary",
]
