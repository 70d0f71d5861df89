"""FastAPI server for todoq"""

from __future__ import annotations

from typing import Any

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from todoq.api.errors import register_exception_handlers
from todoq.api.routes.health import router as health_router
from todoq.api.routes.ingest import router as ingest_router
from todoq.api.routes.summary import router as summary_router
from todoq.config import ALLOWED_ORIGINS, APP_VERSION, SERVICE_NAME
from todoq.infrastructure.settings import is_production
from todoq.llm.gemini import llm_credentials_configured
from todoq.observability.logging import get_logger
from todoq.observability.telemetry import log_event

# Load environment variables from .env file
load_dotenv()

app = FastAPI(title="todoq API", version=APP_VERSION)

logger = get_logger(__name__)

register_exception_handlers(app)

# CORS - the browser client is served from a different origin than the API
if is_production() and "*" in ALLOWED_ORIGINS:
    logger.warning("TODOQ_ALLOWED_ORIGINS is '*' in production; any origin can call the API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials="*" not in ALLOWED_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
)

app.include_router(health_router)
app.include_router(ingest_router)
app.include_router(summary_router)


# ============================================================================
# STARTUP VALIDATION
# ============================================================================
@app.on_event("startup")
async def validate_llm_configuration() -> None:
    """Refuse to start without a Gemini credential (fail fast).

    Side Effects:
        - Logs validation results via logger.info() and logger.critical()
        - Raises RuntimeError when no credential is configured (crashes the app)
    """
    if not llm_credentials_configured():
        logger.critical("GEMINI_API_KEY (or GOOGLE_CLOUD_PROJECT) is not set")
        raise RuntimeError(
            "LLM misconfiguration: set GEMINI_API_KEY or GOOGLE_CLOUD_PROJECT "
            "before starting the API."
        )
    logger.info("Gemini credential present")
    log_event("api.startup", service=SERVICE_NAME, version=APP_VERSION)


@app.get("/")
def root() -> dict[str, Any]:
    return {
        "service": SERVICE_NAME,
        "version": APP_VERSION,
        "status": "running",
        "endpoints": {
            "health": "/health",
            "parse": "/api/parse-email-ai",
            "send_summary": "/api/send-summary",
        },
    }


def main() -> None:
    """Run the API with uvicorn (console script: todoq-api)."""
    import uvicorn

    from todoq.infrastructure.settings import API_HOST, API_PORT, LOG_LEVEL

    uvicorn.run("todoq.api.app:app", host=API_HOST, port=API_PORT, log_level=LOG_LEVEL.lower())
