from __future__ import annotations

from pydantic import BaseModel, Field

from curiosity.integrations.collaborator import ToolCollaborator
from curiosity.tools.core.types import ActivitySpec, Integration, ToolDefinition

from .base import define_tool


class SearchMondayArgs(BaseModel):
    name: str | None = Field(
        None, description="Full or partial name to search for (required if no email)"
    )
    email: str | None = Field(
        None, description="Email address to search for (required if no name)"
    )


class CreateMondayContactArgs(BaseModel):
    first_name: str | None = Field(None, description="First name")
    last_name: str = Field(..., description="Last name")
    email: str | None = Field(None, description="Email address")
    title: str | None = Field(None, description="Job title")
    company: str | None = Field(None, description="Company name")


def monday_tools(collaborator: ToolCollaborator) -> list[ToolDefinition]:
    return [
        define_tool(
            collaborator,
            name="search_monday",
            description=(
                "Search for a specific contact in Monday.com CRM boards by name or email. "
                "Use when the user asks about a specific person."
            ),
            args_schema=SearchMondayArgs,
            integration=Integration.MONDAY,
        ),
        define_tool(
            collaborator,
            name="create_monday_contact",
            description="Create a new contact in a Monday.com CRM board.",
            args_schema=CreateMondayContactArgs,
            integration=Integration.MONDAY,
            activity=ActivitySpec(
                action_type="contact_created",
                resource_type="contact",
                provider="monday",
                detail_fields=("first_name", "last_name", "company", "email"),
            ),
        ),
    ]
