"""Unit tests for completed-task summary compilation"""

from __future__ import annotations

from todoq.tasks.models import Task
from todoq.tasks.summary import NO_COMPLETED_MESSAGE, compile_summary


def test_no_completed_tasks():
    tasks = [Task(id=1, text="A"), Task(id=2, text="B")]
    assert compile_summary(tasks) == NO_COMPLETED_MESSAGE
    assert compile_summary([]) == "No tasks completed today."


def test_completed_tasks_listed_in_order():
    tasks = [
        Task(id=1, text="A", completed=True),
        Task(id=2, text="skipped"),
        Task(id=3, text="B", completed=True),
    ]

    summary = compile_summary(tasks)

    assert summary == (
        "Today's Completed Tasks:\n"
        "--------------------------\n"
        "- A\n"
        "- B\n"
        "--------------------------"
    )
    lines = summary.splitlines()
    assert lines.index("- A") < lines.index("- B")
    assert "skipped" not in summary


def test_summary_is_deterministic():
    tasks = [Task(id=1, text="A", completed=True), Task(id=2, text="B", completed=True)]
    assert compile_summary(tasks) == compile_summary(list(tasks))
