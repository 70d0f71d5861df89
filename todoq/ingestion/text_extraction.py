"""
Plain-text extraction from uploaded documents.

Supports plain text (decoded as UTF-8) and Word .docx documents (paragraph
text via python-docx). Anything else is rejected.
"""

from __future__ import annotations

import io
import zipfile

from todoq.config import MAX_UPLOAD_BYTES
from todoq.ingestion.errors import (
    DocumentExtractionError,
    FileTooLargeError,
    UnsupportedFileTypeError,
)
from todoq.observability.logging import get_logger
from todoq.observability.telemetry import counter

logger = get_logger(__name__)

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT_MIME = "text/plain"

DOCX_EXTENSIONS = (".docx",)
TEXT_EXTENSIONS = (".txt",)


def detect_kind(filename: str | None, content_type: str | None) -> str | None:
    """
    Classify an upload as "docx", "text", or None (unsupported).

    The declared content type wins; the filename extension is the fallback
    for clients that send application/octet-stream.

    Examples:
        >>> detect_kind("notes.txt", "application/octet-stream")
        'text'

        >>> detect_kind("minutes.docx", None)
        'docx'

        >>> detect_kind("slides.pdf", "application/pdf")
    """
    mime = (content_type or "").split(";")[0].strip().lower()
    name = (filename or "").lower()

    if mime == DOCX_MIME or name.endswith(DOCX_EXTENSIONS):
        return "docx"
    if mime == TEXT_MIME or name.endswith(TEXT_EXTENSIONS):
        return "text"
    return None


def extract_text(data: bytes, filename: str | None, content_type: str | None) -> str:
    """
    Extract plain text from an uploaded file.

    Args:
        data: Raw file bytes
        filename: Original filename as uploaded
        content_type: Declared MIME type

    Returns:
        Extracted text (may be empty; emptiness is checked by the caller)

    Raises:
        FileTooLargeError: If data exceeds MAX_UPLOAD_BYTES
        UnsupportedFileTypeError: If the file is neither .txt nor .docx
        DocumentExtractionError: If a .docx cannot be read
    """
    if len(data) > MAX_UPLOAD_BYTES:
        counter("ingest.upload.too_large")
        raise FileTooLargeError()

    kind = detect_kind(filename, content_type)
    if kind == "docx":
        text = _extract_docx(data)
        logger.info("Extracted text from docx (%d chars)", len(text))
        return text
    if kind == "text":
        text = data.decode("utf-8", errors="replace")
        logger.info("Read text from txt (%d chars)", len(text))
        return text

    counter("ingest.upload.unsupported")
    logger.warning("Unsupported upload: filename=%s content_type=%s", filename, content_type)
    raise UnsupportedFileTypeError()


def _extract_docx(data: bytes) -> str:
    """Return paragraph text of a .docx, one paragraph per line."""
    from docx import Document
    from docx.opc.exceptions import PackageNotFoundError

    try:
        document = Document(io.BytesIO(data))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as e:
        counter("ingest.upload.docx_error")
        logger.error("Failed to read docx upload: %s", e)
        raise DocumentExtractionError() from e

    paragraphs = [paragraph.text for paragraph in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            paragraphs.extend(cell.text for cell in row.cells)

    return "\n".join(paragraphs)
