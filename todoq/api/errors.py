"""Exception handlers that give every error response a {"message": ...} body."""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from todoq.observability.logging import get_logger
from todoq.observability.telemetry import counter
from todoq.utils.redaction import redact

logger = get_logger(__name__)

GENERIC_ERROR_MESSAGE = "An internal server error occurred."
INVALID_REQUEST_MESSAGE = "Invalid request format. Please check your request and try again."


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render HTTPException detail as {"message": detail}."""
    message = exc.detail if isinstance(exc.detail, str) else GENERIC_ERROR_MESSAGE
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Report request validation failures as 400 without leaking validation rules.

    Side Effects:
        - Logs detailed validation errors for debugging
        - Increments validation error counter
    """
    logger.warning("Validation error on %s: %s", redact(str(request.url)), exc.errors())
    counter("api.validation_errors")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": INVALID_REQUEST_MESSAGE},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last-resort handler so unexpected failures still answer with {"message": ...}.

    Side Effects:
        - Logs the exception with traceback
        - Increments unhandled error counter
    """
    logger.error(
        "Unhandled error on %s %s: %s",
        request.method,
        redact(str(request.url)),
        exc,
        exc_info=exc,
    )
    counter("api.unhandled_errors")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": GENERIC_ERROR_MESSAGE},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
