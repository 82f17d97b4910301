from __future__ import annotations

from pydantic import BaseModel, Field

from curiosity.integrations.collaborator import ToolCollaborator
from curiosity.tools.core.types import ActivitySpec, Integration, ToolDefinition
from curiosity.tools.policies import DefaultArgumentsPolicy

from .base import define_tool
from .email_text import prepare_email
from .mail import EmailDraftArgs, SendEmailArgs


class GoogleCalendarEventArgs(BaseModel):
    title: str = Field(..., description="Event title/summary")
    start: str = Field(
        ..., description="Start date/time in ISO 8601 format (e.g., 2025-10-15T14:00:00)"
    )
    end: str = Field(..., description="End date/time in ISO 8601 format")
    description: str | None = Field(None, description="Event description or agenda")
    attendees: list[str] | None = Field(
        None, description="Attendee email addresses"
    )
    location: str | None = Field(
        None, description="Meeting location (physical or virtual link)"
    )


class SearchGmailArgs(BaseModel):
    query: str = Field(
        ...,
        description=(
            'Gmail search query (e.g. "from:john@example.com", "subject:proposal", '
            '"is:unread"). Use " " for all emails.'
        ),
    )
    max_results: int = Field(10, description="Maximum number of emails to return")


class SearchCalendarArgs(BaseModel):
    time_min: str | None = Field(
        None, description="Start time in ISO 8601 format. Defaults to now."
    )
    time_max: str | None = Field(
        None, description="End time in ISO 8601 format. Defaults to 30 days from now."
    )
    max_results: int = Field(10, description="Maximum number of events to return")


def gmail_tools(collaborator: ToolCollaborator) -> list[ToolDefinition]:
    gmail = Integration.GMAIL
    return [
        define_tool(
            collaborator,
            name="create_gmail_draft",
            description=(
                "Create an email draft in Gmail with COMPLETE email content. The draft is "
                "saved to the Gmail Drafts folder. Always include greeting, body and closing."
            ),
            args_schema=EmailDraftArgs,
            integration=gmail,
            prepare=prepare_email,
            activity=ActivitySpec(
                action_type="email_draft_created",
                resource_type="email",
                provider="gmail",
                detail_fields=("to", "subject"),
            ),
        ),
        define_tool(
            collaborator,
            name="send_gmail_email",
            description=(
                "Send an email immediately via Gmail. Use this only when the user "
                "explicitly wants to send rather than draft."
            ),
            args_schema=SendEmailArgs,
            integration=gmail,
            prepare=prepare_email,
            activity=ActivitySpec(
                action_type="email_sent",
                resource_type="email",
                provider="gmail",
                detail_fields=("to", "subject"),
            ),
        ),
        define_tool(
            collaborator,
            name="create_google_calendar_event",
            description=(
                "Create a calendar event in Google Calendar when the user wants to "
                "schedule a meeting or add an event."
            ),
            args_schema=GoogleCalendarEventArgs,
            integration=gmail,
            activity=ActivitySpec(
                action_type="meeting_scheduled",
                resource_type="calendar_event",
                provider="google_calendar",
                detail_fields=("title", "start"),
            ),
        ),
        define_tool(
            collaborator,
            name="search_gmail_emails",
            description=(
                "Search the user's Gmail for emails matching a query. Supports Gmail "
                'search syntax. For all emails use a single space " " as the query.'
            ),
            args_schema=SearchGmailArgs,
            integration=gmail,
            required_fields=("query",),
        ),
        define_tool(
            collaborator,
            name="search_calendar_events",
            description=(
                "Search the user's Google Calendar for events in a time range. Use this "
                "when the user asks about their calendar, meetings, or schedule."
            ),
            args_schema=SearchCalendarArgs,
            integration=gmail,
            default_arguments=DefaultArgumentsPolicy(
                {"max_results": 10}, description="List the next upcoming events"
            ),
        ),
    ]
