"""Client side of todoq: backend HTTP client and UI command handlers."""

from __future__ import annotations

from todoq.client.api_client import ApiResult, TodoqApiClient
from todoq.client.commands import TodoApp

__all__ = ["ApiResult", "TodoApp", "TodoqApiClient"]
