"""
Ingestion service - turns pasted text or an uploaded document into tasks.

Pipeline:
    1. Text extraction (docx/txt) or the pasted text as-is
    2. Empty-input check
    3. One Gemini call with the extraction prompt
    4. JSON array extraction + strict validation

Any failure raises an IngestionError subclass whose message is safe to show
the user; nothing partial is returned.
"""

from __future__ import annotations

from dataclasses import dataclass

from todoq.ingestion.errors import (
    EmptyInputError,
    ModelCallError,
    ModelRateLimitedError,
    ModelTimeoutError,
    ModelUnavailableError,
    NoInputError,
)
from todoq.ingestion.prompts import build_task_extraction_prompt
from todoq.ingestion.response_parser import parse_task_list
from todoq.ingestion.text_extraction import extract_text
from todoq.llm.client import (
    LLMRateLimitError,
    LLMTimeoutError,
    LLMUnavailableError,
    call_llm,
)
from todoq.llm.gemini import GeminiInitializationError, model_name
from todoq.observability.logging import get_logger
from todoq.observability.telemetry import counter, log_event
from todoq.utils.redaction import redact_text

logger = get_logger(__name__)


@dataclass(frozen=True)
class UploadedDocument:
    """A file received from the client, held in memory."""

    filename: str | None
    content_type: str | None
    data: bytes


def resolve_input_text(text: str | None, upload: UploadedDocument | None) -> str:
    """
    Pick the input text: an uploaded file wins over pasted text.

    Raises:
        NoInputError: Neither a file nor text was supplied
        EmptyInputError: The chosen input is empty or whitespace
        UnsupportedFileTypeError, FileTooLargeError, DocumentExtractionError
    """
    if upload is not None:
        logger.info("Processing uploaded file: %s", upload.filename)
        input_text = extract_text(upload.data, upload.filename, upload.content_type)
    elif text is not None:
        logger.info("Processing text from JSON body")
        input_text = text
    else:
        raise NoInputError()

    if not input_text or not input_text.strip():
        counter("ingest.empty_input")
        raise EmptyInputError()

    return input_text


def extract_tasks(
    text: str | None = None,
    upload: UploadedDocument | None = None,
) -> list[str]:
    """
    Run the full ingestion pipeline.

    Args:
        text: Pasted text (ignored when upload is given)
        upload: Uploaded .txt/.docx document

    Returns:
        Validated list of task strings (possibly empty)

    Raises:
        IngestionError: On any input, model, or parsing failure

    Side Effects:
        - Calls Gemini API once
        - Logs ingestion events and increments counters
    """
    input_text = resolve_input_text(text, upload)
    prompt = build_task_extraction_prompt(input_text)

    logger.info("Sending %d chars to %s: %s", len(input_text), model_name(), redact_text(input_text))
    try:
        reply = call_llm(prompt, counter_prefix="ingest")
    except LLMTimeoutError as e:
        raise ModelTimeoutError() from e
    except LLMRateLimitError as e:
        raise ModelRateLimitedError() from e
    except LLMUnavailableError as e:
        raise ModelUnavailableError() from e
    except GeminiInitializationError as e:
        logger.error("Gemini not initialized: %s", e)
        raise ModelCallError() from e
    except Exception as e:
        logger.error("Gemini request failed: %s", e)
        raise ModelCallError() from e

    tasks = parse_task_list(reply)

    counter("ingest.success")
    log_event(
        "ingest.tasks_extracted",
        source="file" if upload is not None else "text",
        input_chars=len(input_text),
        task_count=len(tasks),
        model=model_name(),
    )
    return tasks
