"""
Command handlers binding user actions to the task list and the backend.

TodoApp is what a UI calls: it validates input, runs controller operations,
persists once per action, talks to the backend, and reports back through
the notify/confirm callbacks it was built with. It holds no rendering code.
"""

from __future__ import annotations

import contextlib
import mimetypes
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

from todoq.client.api_client import ApiResult, TodoqApiClient
from todoq.ingestion.text_extraction import DOCX_MIME, TEXT_MIME
from todoq.observability.logging import get_logger
from todoq.tasks.controller import ClearOutcome, TaskListController, TaskRow
from todoq.tasks.summary import PendingEmailJob, compile_summary
from todoq.utils.validators import ValidationError, validate_recipient_email

logger = get_logger(__name__)

ALLOWED_UPLOAD_TYPES = (TEXT_MIME, DOCX_MIME)
ALLOWED_UPLOAD_SUFFIXES = (".txt", ".docx")

# Controls that issue network requests; each may have one request in flight
PARSE_CONTROL = "parse"
SEND_CONTROL = "send"


@dataclass
class FeedbackForm:
    """The two ingestion inputs: pasted text and a selected file."""

    text: str = ""
    file_path: str | None = None

    def clear(self) -> None:
        self.text = ""
        self.file_path = None


@dataclass(frozen=True)
class FeedbackInput:
    """The input chosen for one parse request."""

    kind: str  # "file" or "text"
    value: str


class ControlBusyError(RuntimeError):
    """Raised when a control is triggered while its request is in flight."""


class TodoApp:
    """UI-independent command layer for the to-do list."""

    def __init__(
        self,
        controller: TaskListController,
        api: TodoqApiClient,
        notify: Callable[[str], None],
        confirm: Callable[[str], bool],
    ):
        self.controller = controller
        self.api = api
        self.notify = notify
        self.confirm = confirm
        self.form = FeedbackForm()
        self._busy: set[str] = set()

    # ------------------------------------------------------------------
    # Busy-control discipline
    # ------------------------------------------------------------------

    def is_busy(self, control: str) -> bool:
        return control in self._busy

    @contextlib.contextmanager
    def _busy_control(self, control: str) -> Iterator[None]:
        """Disable control for the duration of one request, always re-enabling it."""
        if control in self._busy:
            raise ControlBusyError(control)
        self._busy.add(control)
        try:
            yield
        finally:
            self._busy.discard(control)

    # ------------------------------------------------------------------
    # Task list
    # ------------------------------------------------------------------

    def start(self) -> list[TaskRow]:
        """Load persisted tasks and return the rows to render."""
        self.controller.load()
        return self.controller.rows()

    def rows(self) -> list[TaskRow]:
        return self.controller.rows()

    def add_task(self, text: str) -> bool:
        """Manual add: reject blank input with a prompt, duplicates with a notice."""
        if not text or not text.strip():
            self.notify("Please enter a task!")
            return False

        if not self.controller.create(text):
            self.notify("Task might be empty or already exist.")
            return False

        self.controller.save()
        return True

    def toggle_task(self, task_id: float) -> None:
        self.controller.toggle(task_id)
        self.controller.save()

    def delete_task(self, task_id: float) -> None:
        self.controller.delete(task_id)
        self.controller.save()

    def clear_all(self) -> ClearOutcome:
        outcome = self.controller.clear_all(self.confirm)
        if outcome is ClearOutcome.ALREADY_EMPTY:
            self.notify("Task list is already empty!")
        elif outcome is ClearOutcome.CLEARED:
            self.controller.save()
        return outcome

    # ------------------------------------------------------------------
    # AI ingestion
    # ------------------------------------------------------------------

    def select_input(self) -> FeedbackInput | None:
        """
        Choose between the selected file and the pasted text.

        A file wins and clears the text; otherwise text is used and the file
        selection is cleared. Unsupported files are rejected before any
        request is made.
        """
        text = self.form.text.strip()

        if self.form.file_path:
            path = Path(self.form.file_path)
            mime = mimetypes.guess_type(path.name)[0]
            if mime in ALLOWED_UPLOAD_TYPES or path.suffix.lower() in ALLOWED_UPLOAD_SUFFIXES:
                self.form.text = ""
                return FeedbackInput(kind="file", value=str(path))

            self.notify("Please select a valid file type (.txt or .docx).")
            self.form.file_path = None
            return None

        if text:
            self.form.file_path = None
            return FeedbackInput(kind="text", value=text)

        self.notify("Please paste text or select a .txt/.docx file.")
        return None

    def parse_input(self, text: str | None = None, file_path: str | None = None) -> int | None:
        """
        Send the chosen input to the backend and add the returned tasks.

        Returns:
            Number of tasks added, or None if nothing was submitted or the
            request failed.
        """
        if text is not None:
            self.form.text = text
        if file_path is not None:
            self.form.file_path = file_path

        source = self.select_input()
        if source is None:
            return None

        try:
            with self._busy_control(PARSE_CONTROL):
                if source.kind == "file":
                    result = self.api.parse_file(source.value)
                else:
                    result = self.api.parse_text(source.value)
        except ControlBusyError:
            self.notify("Parsing is already in progress.")
            return None

        if not result.ok:
            logger.error("AI parsing failed: %s", result.message)
            self.notify(f"Error contacting AI parser: {result.message}")
            return None

        return self._add_parsed_tasks(result)

    def _add_parsed_tasks(self, result: ApiResult) -> int:
        if not result.tasks:
            self.notify("AI did not find any actionable tasks in the provided text.")
            return 0

        added = sum(1 for task_text in result.tasks if self.controller.create(task_text))
        self.controller.save()
        self.form.clear()
        self.notify(f"AI added {added} tasks.")
        return added

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    def compile_summary(self) -> str:
        return compile_summary(self.controller.tasks)

    def send_summary(self, recipient_email: str) -> bool:
        """Validate the recipient locally, then ask the backend to email the summary."""
        try:
            recipient = validate_recipient_email(recipient_email)
        except ValidationError as e:
            self.notify(str(e))
            return False

        job = PendingEmailJob(summary_text=self.compile_summary(), recipient_email=recipient)

        try:
            with self._busy_control(SEND_CONTROL):
                result = self.api.send_summary(job.summary_text, job.recipient_email)
        except ControlBusyError:
            self.notify("A summary is already being sent.")
            return False

        if not result.ok:
            logger.error("Error sending summary: %s", result.message)
            self.notify(f"Error sending summary: {result.message}")
            return False

        self.notify(result.message)
        return True
