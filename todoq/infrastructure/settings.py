"""
Application-wide settings read from the environment at import
"""

from __future__ import annotations

import os
from pathlib import Path

# Environment
ENV = os.getenv("TODOQ_ENV", "development")

# API Configuration
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "3000"))
LOG_LEVEL = os.getenv("TODOQ_LOG_LEVEL", "INFO")

# Gemini (credentials are read at call time, see todoq.config)
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash-001")
GEMINI_LOCATION = os.getenv("GEMINI_LOCATION", "us-central1")
GEMINI_MAX_TOKENS = int(os.getenv("GEMINI_MAX_TOKENS", "2048"))
GEMINI_TEMPERATURE = float(os.getenv("GEMINI_TEMPERATURE", "0.2"))

# SMTP (EMAIL_* names kept for .env files written for the old Node backend)
SMTP_DEFAULT_PORT = 587
SMTP_SSL_PORT = 465
SMTP_FROM_NAME = "To-Do App"

# Client
DEFAULT_API_URL = "http://localhost:3000"
DEFAULT_STORAGE_PATH = Path.home() / ".todoq" / "storage.json"


def is_production() -> bool:
    return ENV == "production"
