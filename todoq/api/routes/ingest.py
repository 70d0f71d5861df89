"""AI task extraction endpoint.

Accepts either a multipart upload (field "feedbackFile") or a JSON body with
"emailText", runs the ingestion pipeline, and returns {"tasks": [...]}.
Nothing is stored server-side.
"""

from __future__ import annotations

import json

from fastapi import APIRouter, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException

from todoq.api.errors import GENERIC_ERROR_MESSAGE
from todoq.api.models import ParseResponse, ParseTextRequest
from todoq.config import MAX_UPLOAD_BYTES, TEXT_FIELD, UPLOAD_FIELD
from todoq.ingestion.errors import FileTooLargeError, IngestionError
from todoq.ingestion.service import UploadedDocument, extract_tasks
from todoq.observability.logging import get_logger
from todoq.observability.telemetry import counter, log_event

router = APIRouter(prefix="/api", tags=["ingest"])
logger = get_logger(__name__)


async def _read_multipart(request: Request) -> tuple[str | None, UploadedDocument | None]:
    form = await request.form()
    text = form.get(TEXT_FIELD)
    upload = form.get(UPLOAD_FIELD)

    document = None
    if isinstance(upload, UploadFile):
        data = await upload.read(MAX_UPLOAD_BYTES + 1)
        if len(data) > MAX_UPLOAD_BYTES:
            raise FileTooLargeError()
        document = UploadedDocument(
            filename=upload.filename,
            content_type=upload.content_type,
            data=data,
        )

    return (text if isinstance(text, str) else None), document


async def _read_json(request: Request) -> str | None:
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        body = ParseTextRequest.model_validate(json.loads(raw))
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
        logger.warning("Rejected malformed JSON body: %s", e)
        raise HTTPException(status_code=400, detail="Invalid JSON body.") from None
    return body.email_text


@router.post("/parse-email-ai", response_model=ParseResponse)
async def parse_email_ai(request: Request) -> ParseResponse:
    """
    Extract actionable tasks from pasted text or an uploaded .txt/.docx file.

    Side Effects:
        - Calls Gemini API once
        - Logs telemetry events
    """
    logger.info("Received request on /api/parse-email-ai")
    content_type = request.headers.get("content-type", "").lower()

    try:
        if content_type.startswith("multipart/form-data"):
            text, document = await _read_multipart(request)
        else:
            text, document = await _read_json(request), None

        tasks = await run_in_threadpool(extract_tasks, text=text, upload=document)

    except StarletteHTTPException:
        # Includes Starlette's own 400 for malformed multipart bodies
        raise
    except IngestionError as e:
        counter("api.parse.failed")
        log_event("api.parse.failed", error_type=type(e).__name__)
        raise HTTPException(status_code=500, detail=e.message) from None
    except Exception as e:
        counter("api.parse.error")
        logger.exception("Error in /api/parse-email-ai: %s", e)
        raise HTTPException(status_code=500, detail=GENERIC_ERROR_MESSAGE) from None

    return ParseResponse(tasks=tasks)
