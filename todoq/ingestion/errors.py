"""
Ingestion error types.

Every error carries a message that is safe to return to the client as-is;
underlying causes are chained and logged server-side only.
"""

from __future__ import annotations


class IngestionError(Exception):
    """Base class for failures anywhere in the ingestion pipeline."""

    default_message = "An internal server error occurred."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NoInputError(IngestionError):
    default_message = "No input text or supported file provided."


class UnsupportedFileTypeError(IngestionError):
    default_message = "Unsupported file type uploaded. Please use .txt or .docx."


class FileTooLargeError(IngestionError):
    default_message = "Uploaded file is too large. Maximum size is 10 MB."


class DocumentExtractionError(IngestionError):
    default_message = "Could not extract text from the uploaded document."


class EmptyInputError(IngestionError):
    default_message = "Input text is empty after extraction or not provided."


class ModelCallError(IngestionError):
    default_message = "AI service request failed."


class ModelTimeoutError(ModelCallError):
    default_message = "AI service request timed out. Please try again."


class ModelUnavailableError(ModelCallError):
    default_message = "AI service is temporarily unavailable. Please try again later."


class ModelRateLimitedError(ModelCallError):
    default_message = "AI service is busy (rate limit reached). Please try again later."


class InvalidResponseFormatError(IngestionError):
    default_message = "AI response format was invalid. Could not find JSON array."


class ResponseParseError(IngestionError):
    default_message = "Failed to parse AI response."
