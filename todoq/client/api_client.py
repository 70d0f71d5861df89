"""
HTTP client for the todoq backend.

Each call is one unit of work that returns an ApiResult instead of raising:
network errors, non-2xx statuses and malformed bodies all become failures
carrying a user-facing message. Requests cannot be cancelled once sent.
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import requests

from todoq.config import HTTP_TIMEOUT_SECONDS, TEXT_FIELD, UPLOAD_FIELD, api_url
from todoq.observability.logging import get_logger
from todoq.observability.telemetry import counter
from todoq.utils.redaction import redact_email

logger = get_logger(__name__)

UNKNOWN_ERROR_MESSAGE = "Unknown error fetching data"


@dataclass
class ApiResult:
    """Outcome of one backend request."""

    ok: bool
    message: str = ""
    status_code: int | None = None
    tasks: list[str] = field(default_factory=list)
    payload: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(cls, message: str = "", status_code: int = 200, **kwargs: Any) -> ApiResult:
        """Factory for a successful result."""
        return cls(ok=True, message=message, status_code=status_code, **kwargs)

    @classmethod
    def failure(cls, message: str, status_code: int | None = None) -> ApiResult:
        """Factory for a failed result."""
        return cls(ok=False, message=message, status_code=status_code)


class TodoqApiClient:
    """Talks to /api/parse-email-ai and /api/send-summary."""

    def __init__(
        self,
        base_url: str | None = None,
        session: requests.Session | None = None,
        timeout: float = HTTP_TIMEOUT_SECONDS,
    ):
        self.base_url = (base_url or api_url()).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def parse_text(self, text: str) -> ApiResult:
        """Ask the backend to extract tasks from pasted text."""
        return self._parse(json={TEXT_FIELD: text})

    def parse_file(self, path: str | Path) -> ApiResult:
        """Upload a .txt/.docx file for task extraction."""
        path = Path(path)
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        try:
            with open(path, "rb") as f:
                return self._parse(files={UPLOAD_FIELD: (path.name, f, content_type)})
        except OSError as e:
            logger.error("Could not read %s: %s", path, e)
            return ApiResult.failure(f"Could not read file: {path.name}")

    def send_summary(self, summary_text: str, recipient_email: str) -> ApiResult:
        """Ask the backend to email summary_text to recipient_email."""
        logger.info("Sending summary via backend to %s", redact_email(recipient_email))
        result = self._post(
            "/api/send-summary",
            json={"summaryText": summary_text, "recipientEmail": recipient_email},
        )
        if result.ok and not result.message:
            result.message = "Summary sent successfully!"
        return result

    def _parse(self, **kwargs: Any) -> ApiResult:
        result = self._post("/api/parse-email-ai", **kwargs)
        if not result.ok:
            result.message = f"AI parsing failed: {result.message}"
            return result

        tasks = result.payload.get("tasks")
        if not isinstance(tasks, list) or not all(isinstance(t, str) for t in tasks):
            counter("client.parse.bad_payload")
            return ApiResult.failure(
                "Invalid response format from AI parser.", status_code=result.status_code
            )
        result.tasks = tasks
        return result

    def _post(self, path: str, **kwargs: Any) -> ApiResult:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.post(url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            counter("client.request.network_error")
            logger.error("Request to %s failed: %s", url, e)
            return ApiResult.failure(f"Could not reach the server at {self.base_url}.")

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if not response.ok:
            counter("client.request.http_error")
            message = body.get("message") or UNKNOWN_ERROR_MESSAGE
            logger.warning("%s returned %s: %s", path, response.status_code, message)
            return ApiResult.failure(message, status_code=response.status_code)

        return ApiResult.success(
            message=body.get("message", ""),
            status_code=response.status_code,
            payload=body,
        )
