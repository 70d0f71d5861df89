"""
Pytest configuration for todoq tests

Provides environment isolation plus fake Gemini and SMTP backends shared
across unit and integration tests.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Any

import pytest

from todoq.observability import telemetry

_ISOLATED_ENV = [
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "GOOGLE_CLOUD_PROJECT",
    "GEMINI_MODEL",
    "SMTP_HOST",
    "SMTP_PORT",
    "SMTP_USER",
    "SMTP_PASSWORD",
    "SMTP_FROM_EMAIL",
    "SMTP_FROM_NAME",
    "EMAIL_HOST",
    "EMAIL_PORT",
    "EMAIL_USER",
    "EMAIL_PASS",
    "TODOQ_API_URL",
]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Start every test without credentials and with a private storage file."""
    from todoq.llm.gemini import clear_model_cache

    for name in _ISOLATED_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TODOQ_STORAGE_PATH", str(tmp_path / "storage.json"))

    telemetry.reset()
    clear_model_cache()
    yield
    clear_model_cache()


@pytest.fixture
def storage(tmp_path):
    from todoq.storage.local import LocalStorage

    return LocalStorage(tmp_path / "storage.json")


@pytest.fixture
def store(storage):
    from todoq.tasks.store import TaskStore

    return TaskStore(storage)


@pytest.fixture
def controller(store):
    from todoq.tasks.controller import TaskListController

    return TaskListController(store)


# ============================================================================
# Documents
# ============================================================================


def _docx_bytes(*paragraphs: str) -> bytes:
    from docx import Document

    document = Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def make_docx():
    """Build an in-memory .docx with one paragraph per argument."""
    return _docx_bytes


# ============================================================================
# Fake Gemini
# ============================================================================


@dataclass
class FakeResponse:
    text: str


@dataclass
class FakeGeminiModel:
    """Stands in for GenerativeModel: records prompts, returns a canned reply."""

    reply: str = "[]"
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    def generate_content(self, prompt: str, generation_config: dict | None = None) -> FakeResponse:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return FakeResponse(text=self.reply)


@pytest.fixture
def fake_model(monkeypatch):
    """Replace the shared Gemini model with a FakeGeminiModel."""
    model = FakeGeminiModel()
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.setattr("todoq.llm.client.get_gemini_model", lambda: model)
    return model


# ============================================================================
# Fake SMTP
# ============================================================================


class FakeSMTP:
    """Records what would have been sent instead of opening a socket."""

    instances: list[FakeSMTP] = []
    fail_with: Exception | None = None

    def __init__(self, host: str, port: int, *args: Any, **kwargs: Any):
        self.host = host
        self.port = port
        self.started_tls = False
        self.logged_in_as: str | None = None
        self.sent: list[Any] = []
        FakeSMTP.instances.append(self)

    def __enter__(self) -> FakeSMTP:
        return self

    def __exit__(self, *exc: Any) -> None:
        return None

    def starttls(self) -> None:
        self.started_tls = True

    def login(self, user: str, password: str) -> None:
        self.logged_in_as = user

    def send_message(self, msg: Any) -> None:
        if FakeSMTP.fail_with is not None:
            raise FakeSMTP.fail_with
        self.sent.append(msg)


@pytest.fixture
def fake_smtp(monkeypatch):
    """Patch smtplib.SMTP / SMTP_SSL and configure a complete SMTP environment."""
    FakeSMTP.instances = []
    FakeSMTP.fail_with = None
    monkeypatch.setattr("todoq.delivery.smtp.smtplib.SMTP", FakeSMTP)
    monkeypatch.setattr("todoq.delivery.smtp.smtplib.SMTP_SSL", FakeSMTP)
    monkeypatch.setenv("SMTP_HOST", "smtp.example.com")
    monkeypatch.setenv("SMTP_PORT", "587")
    monkeypatch.setenv("SMTP_USER", "sender@example.com")
    monkeypatch.setenv("SMTP_PASSWORD", "app-password")
    return FakeSMTP
