"""
Unit tests for the TodoApp command layer.

The backend is replaced by StubApi, which returns queued ApiResults and
records every call.
"""

from __future__ import annotations

import pytest

from todoq.client.api_client import ApiResult
from todoq.client.commands import PARSE_CONTROL, SEND_CONTROL, TodoApp
from todoq.tasks.controller import ClearOutcome, TaskListController
from todoq.tasks.store import TaskStore


class StubApi:
    def __init__(self, result: ApiResult | None = None):
        self.result = result or ApiResult.success(tasks=[])
        self.calls: list[tuple] = []
        self.on_call = None

    def _record(self, *call):
        self.calls.append(call)
        if self.on_call is not None:
            self.on_call()
        if isinstance(self.result, Exception):
            raise self.result
        return self.result

    def parse_text(self, text):
        return self._record("text", text)

    def parse_file(self, path):
        return self._record("file", path)

    def send_summary(self, summary_text, recipient_email):
        return self._record("send", summary_text, recipient_email)


@pytest.fixture
def notices():
    return []


@pytest.fixture
def api():
    return StubApi()


@pytest.fixture
def app(controller, api, notices):
    app = TodoApp(controller, api, notify=notices.append, confirm=lambda prompt: True)
    app.start()
    return app


class TestTaskCommands:
    def test_add_persists(self, app, storage):
        assert app.add_task("Buy milk") is True
        assert [t.text for t in TaskStore(storage).load()] == ["Buy milk"]

    def test_add_blank_prompts(self, app, notices):
        assert app.add_task("   ") is False
        assert notices == ["Please enter a task!"]

    def test_add_duplicate_notifies(self, app, notices):
        app.add_task("Buy milk")
        assert app.add_task("BUY MILK") is False
        assert notices == ["Task might be empty or already exist."]

    def test_toggle_and_delete_persist(self, app, storage):
        app.add_task("a")
        app.add_task("b")
        first, second = app.controller.tasks

        app.toggle_task(first.id)
        app.delete_task(second.id)

        [stored] = TaskStore(storage).load()
        assert stored.text == "a" and stored.completed is True

    def test_clear_all_empty(self, app, notices):
        assert app.clear_all() is ClearOutcome.ALREADY_EMPTY
        assert notices == ["Task list is already empty!"]

    def test_clear_all_persists(self, app, storage):
        app.add_task("a")
        assert app.clear_all() is ClearOutcome.CLEARED
        assert TaskStore(storage).load() == []

    def test_start_loads_saved_tasks(self, storage, api, notices):
        seeded = TaskListController(TaskStore(storage))
        seeded.create("from last session")
        seeded.save()

        app = TodoApp(TaskListController(TaskStore(storage)), api, notices.append, lambda p: True)

        assert [row.label for row in app.start()] == ["from last session"]


class TestSelectInput:
    def test_file_wins_and_clears_text(self, app):
        app.form.text = "pasted"
        app.form.file_path = "notes.docx"

        source = app.select_input()

        assert (source.kind, source.value) == ("file", "notes.docx")
        assert app.form.text == ""

    def test_text_used_and_file_cleared(self, app):
        app.form.text = "  pasted  "
        source = app.select_input()
        assert (source.kind, source.value) == ("text", "pasted")
        assert app.form.file_path is None

    def test_invalid_file_type(self, app, api, notices):
        assert app.parse_input(file_path="slides.pdf") is None
        assert notices == ["Please select a valid file type (.txt or .docx)."]
        assert api.calls == []

    def test_nothing_to_submit(self, app, api, notices):
        assert app.parse_input(text="   ") is None
        assert notices == ["Please paste text or select a .txt/.docx file."]
        assert api.calls == []


class TestParseInput:
    def test_batch_added_and_counted(self, app, api, notices, storage):
        app.add_task("Send report")
        api.result = ApiResult.success(tasks=["send REPORT", "Book room", "Book room", "Call Bob"])

        added = app.parse_input(text="meeting notes")

        assert added == 2
        assert notices[-1] == "AI added 2 tasks."
        assert api.calls == [("text", "meeting notes")]
        assert [t.text for t in TaskStore(storage).load()] == ["Send report", "Book room", "Call Bob"]
        assert app.form.text == ""

    def test_no_tasks_found(self, app, api, notices):
        api.result = ApiResult.success(tasks=[])
        assert app.parse_input(text="hello") == 0
        assert notices == ["AI did not find any actionable tasks in the provided text."]

    def test_failure_reported_and_control_released(self, app, api, notices):
        api.result = ApiResult.failure("AI parsing failed: AI service request failed.", 500)

        assert app.parse_input(text="x") is None

        assert notices == ["Error contacting AI parser: AI parsing failed: AI service request failed."]
        assert app.is_busy(PARSE_CONTROL) is False
        assert app.form.text == "x"

    def test_control_released_when_request_raises(self, app, api):
        api.result = RuntimeError("unexpected")

        with pytest.raises(RuntimeError):
            app.parse_input(text="x")

        assert app.is_busy(PARSE_CONTROL) is False

    def test_control_busy_during_request(self, app, api):
        seen = []
        api.on_call = lambda: seen.append(app.is_busy(PARSE_CONTROL))

        app.parse_input(text="x")

        assert seen == [True]
        assert app.is_busy(PARSE_CONTROL) is False

    def test_reentrant_parse_rejected(self, app, api, notices):
        nested = []
        api.on_call = lambda: nested.append(app.parse_input(text="again")) if not nested else None

        app.parse_input(text="first")

        assert nested == [None]
        assert "Parsing is already in progress." in notices
        assert len(api.calls) == 1


class TestSendSummary:
    def test_invalid_email_makes_no_request(self, app, api, notices):
        assert app.send_summary("not-an-email") is False
        assert notices == ["Please enter a valid email address format."]
        assert api.calls == []

    def test_missing_email(self, app, api, notices):
        assert app.send_summary("  ") is False
        assert notices == ["Please enter a recipient email address."]
        assert api.calls == []

    def test_sends_compiled_summary(self, app, api, notices):
        app.add_task("A")
        app.toggle_task(app.controller.tasks[0].id)
        api.result = ApiResult.success("Email summary sent successfully!")

        assert app.send_summary(" to@example.com ") is True

        [(_, summary, recipient)] = api.calls
        assert recipient == "to@example.com"
        assert "- A" in summary
        assert notices[-1] == "Email summary sent successfully!"
        assert app.is_busy(SEND_CONTROL) is False

    def test_send_failure(self, app, api, notices):
        api.result = ApiResult.failure("Failed to send email summary.", 500)

        assert app.send_summary("to@example.com") is False
        assert notices == ["Error sending summary: Failed to send email summary."]
        assert app.is_busy(SEND_CONTROL) is False
