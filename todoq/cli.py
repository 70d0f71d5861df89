#!/usr/bin/env python3
"""
todoq command line.

Usage:
    todoq list
    todoq add "Buy milk"
    todoq toggle 2
    todoq delete 2
    todoq clear [--yes]
    todoq parse --text "Notes from the meeting..." | --file minutes.docx
    todoq summary
    todoq send someone@example.com
    todoq serve

Only warnings are logged unless -v is given; `serve` logs at TODOQ_LOG_LEVEL.

Row numbers are the 1-based positions shown by `todoq list`.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from dotenv import load_dotenv

from todoq.client.api_client import TodoqApiClient
from todoq.client.commands import TodoApp
from todoq.config import api_url, storage_path
from todoq.observability.logging import configure_logging
from todoq.storage.local import LocalStorage
from todoq.tasks.controller import TaskListController, TaskRow
from todoq.tasks.store import TaskStore


def _notify(message: str) -> None:
    print(message)


def _confirm(prompt: str) -> bool:
    try:
        answer = input(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def _always_yes(prompt: str) -> bool:  # noqa: ARG001
    return True


def build_app(
    storage_file: str | None = None,
    base_url: str | None = None,
    assume_yes: bool = False,
) -> TodoApp:
    """Wire storage, controller and API client into a TodoApp."""
    storage = LocalStorage(storage_file or storage_path())
    controller = TaskListController(TaskStore(storage))
    api = TodoqApiClient(base_url=base_url or api_url())
    return TodoApp(
        controller,
        api,
        notify=_notify,
        confirm=_always_yes if assume_yes else _confirm,
    )


def render(rows: Sequence[TaskRow]) -> str:
    if not rows:
        return "(no tasks)"
    lines = []
    for index, row in enumerate(rows, start=1):
        label = row.label if row.completed else f"[ ] {row.label}"
        lines.append(f"{index:>3}. {label}")
    return "\n".join(lines)


def _row_task_id(app: TodoApp, number: int) -> float | None:
    rows = app.rows()
    if not 1 <= number <= len(rows):
        app.notify(f"No task #{number}. Run `todoq list` to see row numbers.")
        return None
    return rows[number - 1].task_id


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="todoq", description="To-do list with AI task extraction")
    parser.add_argument("--storage", help="Path to the local storage file")
    parser.add_argument("--api-url", help="Backend base URL (default: $TODOQ_API_URL)")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show log output (quiet by default)"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="Show tasks")

    add = sub.add_parser("add", help="Add a task")
    add.add_argument("text", nargs="+")

    toggle = sub.add_parser("toggle", help="Mark a task complete / incomplete")
    toggle.add_argument("number", type=int)

    delete = sub.add_parser("delete", help="Delete a task")
    delete.add_argument("number", type=int)

    clear = sub.add_parser("clear", help="Delete all tasks")
    clear.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    parse = sub.add_parser("parse", help="Extract tasks from text or a .txt/.docx file with AI")
    parse.add_argument("--text", default=None)
    parse.add_argument("--file", default=None)

    sub.add_parser("summary", help="Print the completed-task summary")

    send = sub.add_parser("send", help="Email the completed-task summary")
    send.add_argument("recipient")

    sub.add_parser("serve", help="Run the backend API")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    if args.verbose:
        configure_logging("DEBUG")
    elif args.command != "serve":
        configure_logging("WARNING")

    if args.command == "serve":
        from todoq.api.app import main as serve

        serve()
        return 0

    app = build_app(args.storage, args.api_url, assume_yes=getattr(args, "yes", False))
    app.start()

    if args.command == "add":
        ok = app.add_task(" ".join(args.text))
        print(render(app.rows()))
        return 0 if ok else 1

    if args.command in ("toggle", "delete"):
        task_id = _row_task_id(app, args.number)
        if task_id is None:
            return 1
        if args.command == "toggle":
            app.toggle_task(task_id)
        else:
            app.delete_task(task_id)
        print(render(app.rows()))
        return 0

    if args.command == "clear":
        app.clear_all()
        return 0

    if args.command == "parse":
        added = app.parse_input(text=args.text, file_path=args.file)
        if added:
            print(render(app.rows()))
        return 0 if added is not None else 1

    if args.command == "summary":
        print(app.compile_summary())
        return 0

    if args.command == "send":
        return 0 if app.send_summary(args.recipient) else 1

    print(render(app.rows()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
