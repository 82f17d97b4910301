"""Argument models shared by the Gmail and Outlook tool sets."""

from __future__ import annotations

from pydantic import BaseModel, Field

EMAIL_BODY_DESCRIPTION = (
    "COMPLETE email body with greeting, message (2-4 paragraphs), and professional "
    "closing including the sender name. Cannot be empty."
)


class EmailDraftArgs(BaseModel):
    to: str = Field(..., description="Recipient email address")
    subject: str = Field(..., description="Email subject line")
    body: str = Field(..., description=EMAIL_BODY_DESCRIPTION)


class SendEmailArgs(BaseModel):
    to: str = Field(..., description="Recipient email address")
    subject: str = Field(..., description="Email subject line")
    body: str = Field(..., description="Email body content (HTML supported)")
