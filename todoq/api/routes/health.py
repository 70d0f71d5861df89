"""Health check endpoint for the todoq API.

Provides a liveness probe plus credential readiness (presence only).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter

from todoq.config import APP_VERSION, SERVICE_NAME, ConfigurationError, smtp_settings
from todoq.llm.gemini import llm_credentials_configured, model_name

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """Health check endpoint.

    Returns service status, version, and whether the Gemini credential and
    SMTP sender are configured (does not call either service).
    """
    try:
        smtp = smtp_settings()
        smtp_status = {"host_set": bool(smtp["host"]), "sender_set": bool(smtp["from_email"])}
    except ConfigurationError as e:
        smtp_status = {"host_set": False, "sender_set": False, "error": str(e)}

    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": APP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "llm": {
            "ready": llm_credentials_configured(),
            "model": model_name(),
        },
        "smtp": smtp_status,
    }
