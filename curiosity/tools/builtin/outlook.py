from __future__ import annotations

from pydantic import BaseModel, Field

from curiosity.integrations.collaborator import ToolCollaborator
from curiosity.tools.core.types import ActivitySpec, Integration, ToolDefinition

from .base import define_tool
from .email_text import prepare_email
from .mail import EmailDraftArgs, SendEmailArgs


class OutlookCalendarEventArgs(BaseModel):
    subject: str = Field(..., description="Event subject/title")
    start: str = Field(..., description="Start date/time in ISO 8601 format")
    end: str = Field(..., description="End date/time in ISO 8601 format")
    body: str | None = Field(None, description="Event description/body")
    attendees: list[str] | None = Field(
        None, description="Attendee email addresses"
    )
    location: str | None = Field(None, description="Meeting location")


class SearchOutlookArgs(BaseModel):
    # Empty means "all emails", but the model must still send the field
    query: str = Field(
        "", description="Search text for email subject, sender, or content"
    )
    limit: int = Field(5, description="Maximum number of emails to return")


def outlook_tools(collaborator: ToolCollaborator) -> list[ToolDefinition]:
    outlook = Integration.OUTLOOK
    return [
        define_tool(
            collaborator,
            name="create_email_draft",
            description=(
                "Create an email draft in Outlook with COMPLETE email content. The draft "
                "is saved to the Outlook Drafts folder. Always include greeting, body and closing."
            ),
            args_schema=EmailDraftArgs,
            integration=outlook,
            prepare=prepare_email,
            activity=ActivitySpec(
                action_type="email_draft_created",
                resource_type="email",
                provider="outlook",
                detail_fields=("to", "subject"),
            ),
        ),
        define_tool(
            collaborator,
            name="send_email",
            description=(
                "Send an email immediately via Outlook when the user explicitly wants "
                "to send it right away."
            ),
            args_schema=SendEmailArgs,
            integration=outlook,
            prepare=prepare_email,
            activity=ActivitySpec(
                action_type="email_sent",
                resource_type="email",
                provider="outlook",
                detail_fields=("to", "subject"),
            ),
        ),
        define_tool(
            collaborator,
            name="create_calendar_event",
            description="Create a calendar event in Outlook Calendar to schedule a meeting.",
            args_schema=OutlookCalendarEventArgs,
            integration=outlook,
            activity=ActivitySpec(
                action_type="meeting_scheduled",
                resource_type="calendar_event",
                provider="outlook",
                detail_fields=("subject", "start"),
            ),
        ),
        define_tool(
            collaborator,
            name="search_emails",
            description=(
                "Search the user's Outlook mailbox for emails matching a query. "
                "For all emails, use an empty query."
            ),
            args_schema=SearchOutlookArgs,
            integration=outlook,
            required_fields=("query",),
        ),
    ]
