"""Completed-task summary delivery endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool

from todoq.api.models import MessageResponse, SendSummaryRequest
from todoq.config import ConfigurationError
from todoq.delivery.smtp import SummaryDelivery
from todoq.observability.logging import get_logger
from todoq.observability.telemetry import counter, log_event
from todoq.utils.redaction import redact_email
from todoq.utils.validators import is_valid_email

router = APIRouter(prefix="/api", tags=["summary"])
logger = get_logger(__name__)

SENT_MESSAGE = "Email summary sent successfully!"
FAILED_MESSAGE = "Failed to send email summary."
CONFIG_ERROR_MESSAGE = "Server configuration error: Invalid SMTP settings."


def get_delivery() -> SummaryDelivery:
    """SMTP delivery built from the current environment."""
    try:
        return SummaryDelivery()
    except ConfigurationError as e:
        logger.error("SMTP configuration is invalid: %s", e)
        raise HTTPException(status_code=500, detail=CONFIG_ERROR_MESSAGE) from None


@router.post("/send-summary", response_model=MessageResponse)
async def send_summary(
    request: SendSummaryRequest,
    delivery: SummaryDelivery = Depends(get_delivery),
) -> MessageResponse:
    """
    Email a compiled summary to the requested recipient.

    Side Effects:
        - Opens an SMTP connection and sends one message
        - Logs telemetry events
    """
    logger.info("Received request on /api/send-summary")

    if not request.summary_text:
        raise HTTPException(status_code=400, detail="Missing summaryText in request body.")
    if not request.recipient_email:
        raise HTTPException(status_code=400, detail="Missing recipientEmail in request body.")
    if not is_valid_email(request.recipient_email):
        counter("summary.invalid_recipient")
        raise HTTPException(status_code=400, detail="Invalid recipient email format provided.")

    if not delivery.has_sender:
        logger.error("Sender identity is not configured (SMTP_USER / SMTP_FROM_EMAIL)")
        raise HTTPException(
            status_code=500, detail="Server configuration error: Sender email missing."
        )

    sent = await run_in_threadpool(
        delivery.send_summary, request.recipient_email, request.summary_text
    )
    if not sent:
        log_event("api.summary.failed", to=redact_email(request.recipient_email))
        raise HTTPException(status_code=500, detail=FAILED_MESSAGE)

    return MessageResponse(message=SENT_MESSAGE)
