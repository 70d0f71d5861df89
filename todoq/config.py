"""Centralized configuration for todoq.

Re-exports everything from todoq.infrastructure.settings, then adds typed
constants for the ingestion pipeline, summary delivery, and the client.
Values that tests or operators change at runtime (credentials, SMTP) are read
through the helpers below at call time instead of at import.
"""

from __future__ import annotations

import os

from todoq.infrastructure.settings import *  # noqa: F401, F403 - re-export


class ConfigurationError(ValueError):
    """Raised when an environment setting is present but unusable."""


def _env(new_key: str, old_key: str, default: str | None = None) -> str | None:
    """Read env var with the todoq name primary and the legacy name as fallback."""
    return os.getenv(new_key) or os.getenv(old_key) or default


# --- App ---
APP_VERSION: str = "1.0.0"
SERVICE_NAME: str = "todoq"

# --- Ingestion ---
MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024
UPLOAD_FIELD: str = "feedbackFile"
TEXT_FIELD: str = "emailText"

# --- Summary ---
SUMMARY_SUBJECT: str = "Your To-Do List Summary"

# --- Client ---
STORAGE_SLOT: str = "tasks"
HTTP_TIMEOUT_SECONDS: float = float(os.getenv("TODOQ_HTTP_TIMEOUT", "120"))

# --- CORS ---
ALLOWED_ORIGINS: list[str] = [
    origin.strip()
    for origin in os.getenv("TODOQ_ALLOWED_ORIGINS", "*").split(",")
    if origin.strip()
]


def gemini_api_key() -> str | None:
    """API key for google-generativeai (GEMINI_API_KEY, then GOOGLE_API_KEY)."""
    return _env("GEMINI_API_KEY", "GOOGLE_API_KEY")


def google_cloud_project() -> str | None:
    return os.getenv("GOOGLE_CLOUD_PROJECT")


def smtp_settings() -> dict[str, str | int | None]:
    """
    Current SMTP settings, SMTP_* primary with EMAIL_* fallback.

    Raises:
        ConfigurationError: If the port is not an integer
    """
    port = _env("SMTP_PORT", "EMAIL_PORT", str(SMTP_DEFAULT_PORT))
    try:
        port_number = int(port) if port else SMTP_DEFAULT_PORT
    except ValueError:
        raise ConfigurationError(f"SMTP_PORT must be an integer, got {port!r}") from None

    user = _env("SMTP_USER", "EMAIL_USER")
    return {
        "host": _env("SMTP_HOST", "EMAIL_HOST"),
        "port": port_number,
        "user": user,
        "password": _env("SMTP_PASSWORD", "EMAIL_PASS"),
        "from_email": os.getenv("SMTP_FROM_EMAIL") or user,
        "from_name": os.getenv("SMTP_FROM_NAME", SMTP_FROM_NAME),
    }


def api_url() -> str:
    return os.getenv("TODOQ_API_URL", DEFAULT_API_URL).rstrip("/")


def storage_path() -> str:
    return os.getenv("TODOQ_STORAGE_PATH", str(DEFAULT_STORAGE_PATH))
