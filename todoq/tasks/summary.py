"""
Completed-task summary compilation.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from todoq.tasks.models import Task

NO_COMPLETED_MESSAGE = "No tasks completed today."
SUMMARY_HEADER = "Today's Completed Tasks:"
SUMMARY_RULE = "-" * 26


@dataclass(frozen=True)
class PendingEmailJob:
    """A summary waiting to be dispatched. Never persisted."""

    summary_text: str
    recipient_email: str


def compile_summary(tasks: Iterable[Task]) -> str:
    """
    Build the plain-text report of completed tasks, in list order.

    Returns NO_COMPLETED_MESSAGE when nothing is completed.
    """
    completed = [task for task in tasks if task.completed]
    if not completed:
        return NO_COMPLETED_MESSAGE

    lines = [SUMMARY_HEADER, SUMMARY_RULE]
    lines.extend(f"- {task.text}" for task in completed)
    lines.append(SUMMARY_RULE)
    return "\n".join(lines)
