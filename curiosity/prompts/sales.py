"""System prompt for the sales assistant.

Only integrations that are actually connected are described, so the model is
not tempted to promise actions it has no tool for.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel

from curiosity.tools.core.types import IntegrationFlags

SALES_PERSONA = (
    "You are Curiosity Engine, an AI sales assistant. You help sales professionals "
    "research prospects, manage their CRM, write outreach and organize their schedule."
)

INTEGRATION_SECTIONS = {
    "salesforce": (
        "Salesforce CRM is connected. You can:\n"
        "- Search, create and update contacts and leads\n"
        "- List recent leads, contacts and opportunities with query_crm\n"
        "- Add notes, create tasks and view activity"
    ),
    "monday": (
        "Monday.com CRM is connected. You can:\n"
        "- Search for a specific contact by name or email\n"
        "- Create new contacts on the CRM board"
    ),
    "gmail": (
        "Gmail and Google Calendar are connected. You can:\n"
        "- Create drafts with create_gmail_draft and send with send_gmail_email\n"
        "- Search emails and calendar events\n"
        "- Create Google Calendar events"
    ),
    "outlook": (
        "Outlook is connected. You can:\n"
        "- Create drafts with create_email_draft and send with send_email\n"
        "- Search emails\n"
        "- Create Outlook calendar events"
    ),
}

NO_INTEGRATIONS = (
    "No CRM or email integrations are connected. You can give general sales advice "
    "and research the web, and you can suggest connecting integrations in Settings."
)

GUIDELINES = (
    "Guidelines:\n"
    "- Be concise, professional, and action-oriented.\n"
    "- Always pass every required argument when calling a tool; never call a tool "
    "with empty arguments.\n"
    "- When asked for an email draft, save it with the draft tool of the connected "
    "mailbox. Write the complete email: greeting, 2-4 short paragraphs and a closing "
    "with the sender's name.\n"
    "- Use ISO 8601 date-times for calendar events and keep the user's time zone.\n"
    "- Never show raw tool output; summarize what was found or done."
)


class UserProfile(BaseModel):
    full_name: str | None = None
    job_title: str | None = None
    company_name: str | None = None
    company_url: str | None = None
    tone: str | None = None


def _profile_section(profile: UserProfile) -> str:
    lines = [
        "User Profile:",
        f"- Name: {profile.full_name or 'Not set'}",
        f"- Role: {profile.job_title or 'Not set'}",
        f"- Company: {profile.company_name or 'Not set'}",
        f"- Website: {profile.company_url or 'Not set'}",
    ]
    if profile.tone:
        lines.append(f"- Preferred tone: {profile.tone}")
    return "\n".join(lines)


def build_system_prompt(
    flags: IntegrationFlags,
    profile: UserProfile | None = None,
    user_context: dict[str, Any] | None = None,
) -> str:
    sections = [SALES_PERSONA]

    connected = [
        text for name, text in INTEGRATION_SECTIONS.items() if getattr(flags, name)
    ]
    sections.extend(connected or [NO_INTEGRATIONS])
    if flags.web:
        sections.append("Web search and page browsing are available for research.")

    sections.append(GUIDELINES)

    if profile is not None:
        sections.append(_profile_section(profile))
    if user_context:
        sections.append(
            "User Context:\n"
            + json.dumps(user_context, indent=2, ensure_ascii=False, default=str)
        )
    return "\n\n".join(sections)
