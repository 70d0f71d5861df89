"""todoq - to-do list with AI task extraction and emailed summaries"""

from __future__ import annotations

__version__ = "1.0.0"


# Lazy imports so `import todoq` does not pull in FastAPI or the Gemini SDKs
def __getattr__(name: str):
    if name in ("Task", "TaskStore", "TaskListController", "compile_summary"):
        from todoq import tasks

        return getattr(tasks, name)

    if name == "extract_tasks":
        from todoq.ingestion.service import extract_tasks

        return extract_tasks

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "Task",
    "TaskListController",
    "TaskStore",
    "compile_summary",
    "extract_tasks",
]
