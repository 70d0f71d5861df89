"""Pydantic request/response models for the todoq API.

Field names on the wire are camelCase to match the browser client
(emailText, summaryText, recipientEmail).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class MessageResponse(BaseModel):
    """Body of every non-task response, success or error."""

    message: str


class ParseTextRequest(BaseModel):
    """JSON body for /api/parse-email-ai."""

    model_config = ConfigDict(populate_by_name=True)

    email_text: str | None = Field(default=None, alias="emailText")


class ParseResponse(BaseModel):
    """Tasks extracted by the model."""

    tasks: list[str]


class SendSummaryRequest(BaseModel):
    """
    JSON body for /api/send-summary.

    Both fields are optional at the schema level so the route can report
    which one is missing with a specific message.
    """

    model_config = ConfigDict(populate_by_name=True)

    summary_text: str | None = Field(default=None, alias="summaryText")
    recipient_email: str | None = Field(default=None, alias="recipientEmail")
