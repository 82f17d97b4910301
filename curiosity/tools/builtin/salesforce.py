from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from curiosity.config.constants import RECENT_LEADS_QUERY
from curiosity.integrations.collaborator import ToolCollaborator
from curiosity.tools.core.types import ActivitySpec, Integration, ToolDefinition
from curiosity.tools.policies import DefaultArgumentsPolicy, QuerySafetyPolicy

from .base import define_tool

QUERY_CRM_DESCRIPTION = """Query Salesforce CRM to list leads, contacts, or opportunities.

Use when the user asks to show, check, review or list leads, contacts or deals.
Always pass a complete SOQL query in "query"; never call this tool with empty arguments.

Example queries (no WHERE clauses):
- Leads: SELECT Id, Name, Email, Company, Status FROM Lead ORDER BY CreatedDate DESC LIMIT 10
- Contacts: SELECT Id, Name, Email, Title FROM Contact ORDER BY CreatedDate DESC LIMIT 10
- Opportunities: SELECT Id, Name, Amount, StageName FROM Opportunity ORDER BY CreatedDate DESC LIMIT 10

Do not filter with quoted values (WHERE Status = 'Open'); use search_salesforce
for filtered lookups, or list records and filter them in your answer."""


class SearchSalesforceArgs(BaseModel):
    name: str | None = Field(None, description="Full or partial name to search for")
    email: str | None = Field(None, description="Email address to search for")
    company: str | None = Field(None, description="Company name to search for")


class QueryCrmArgs(BaseModel):
    query: str = Field(
        ...,
        description=(
            "Complete SOQL query without WHERE clauses, e.g. "
            f'"{RECENT_LEADS_QUERY}". Lead uses Status; StageName exists only on Opportunity.'
        ),
    )


class CreateLeadArgs(BaseModel):
    first_name: str = Field(..., description="First name of the lead")
    last_name: str = Field(..., description="Last name of the lead")
    company: str = Field(..., description="Company name")
    email: str | None = Field(None, description="Email address")
    title: str | None = Field(None, description="Job title")
    phone: str | None = Field(None, description="Phone number")


class CreateContactArgs(BaseModel):
    first_name: str = Field(..., description="First name of the contact")
    last_name: str = Field(..., description="Last name of the contact")
    email: str | None = Field(None, description="Email address")
    title: str | None = Field(None, description="Job title")
    phone: str | None = Field(None, description="Phone number")
    company: str | None = Field(None, description="Company/Account name")


class AddNoteArgs(BaseModel):
    record_id: str = Field(..., description="Salesforce record ID (contact or lead)")
    note: str = Field(..., description="Note content to add")


class CreateTaskArgs(BaseModel):
    subject: str = Field(..., description="Task subject/description")
    related_to_id: str | None = Field(
        None, description="Related record ID (contact, lead, or opportunity)"
    )
    due_date: str | None = Field(None, description="Due date in YYYY-MM-DD format")
    priority: Literal["High", "Normal", "Low"] | None = Field(
        None, description="Task priority"
    )


# Hand-written JSON schemas, kept in the form the CRM team maintains them
UPDATE_RECORD_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "record_id": {
            "type": "string",
            "description": "The Salesforce ID of the contact or lead to update",
        },
        "record_type": {
            "type": "string",
            "enum": ["Contact", "Lead"],
            "description": "Whether this is a Contact or Lead",
        },
        "updates": {
            "type": "object",
            "description": "Field names and new values, e.g. {\"Title\": \"VP Sales\"}",
            "additionalProperties": {"type": "string"},
        },
    },
    "required": ["record_id", "record_type", "updates"],
}

GET_ACTIVITY_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "record_id": {
            "type": "string",
            "description": "The Salesforce ID of the contact or lead",
        },
    },
    "required": ["record_id"],
}


def salesforce_tools(collaborator: ToolCollaborator) -> list[ToolDefinition]:
    crm = Integration.SALESFORCE
    return [
        define_tool(
            collaborator,
            name="search_salesforce",
            description=(
                "Search for contacts or leads in Salesforce CRM by name, email, or company. "
                "Use this when the user asks about finding a person or checking if someone exists."
            ),
            args_schema=SearchSalesforceArgs,
            integration=crm,
        ),
        define_tool(
            collaborator,
            name="query_crm",
            description=QUERY_CRM_DESCRIPTION,
            args_schema=QueryCrmArgs,
            integration=crm,
            required_fields=("query",),
            default_arguments=DefaultArgumentsPolicy(
                {"query": RECENT_LEADS_QUERY},
                description="List the most recent leads",
            ),
            query_safety=QuerySafetyPolicy(),
        ),
        define_tool(
            collaborator,
            name="create_lead",
            description=(
                "Create a new lead in Salesforce. Use this for prospects who are not yet customers."
            ),
            args_schema=CreateLeadArgs,
            integration=crm,
            activity=ActivitySpec(
                action_type="lead_created",
                resource_type="lead",
                provider="salesforce",
                detail_fields=("first_name", "last_name", "company", "email"),
            ),
        ),
        define_tool(
            collaborator,
            name="create_contact",
            description=(
                "Create a new contact in Salesforce. Use this for established relationships or customers."
            ),
            args_schema=CreateContactArgs,
            integration=crm,
            activity=ActivitySpec(
                action_type="contact_created",
                resource_type="contact",
                provider="salesforce",
                detail_fields=("first_name", "last_name", "company", "email"),
            ),
        ),
        define_tool(
            collaborator,
            name="update_record",
            description=(
                "Update an existing contact or lead in Salesforce when the user wants "
                "to change information about a person in their CRM."
            ),
            args_schema=UPDATE_RECORD_SCHEMA,
            integration=crm,
        ),
        define_tool(
            collaborator,
            name="add_note",
            description=(
                "Add a note to a Salesforce contact or lead to log conversations, "
                "meetings, or important information."
            ),
            args_schema=AddNoteArgs,
            integration=crm,
            activity=ActivitySpec(
                action_type="note_added",
                resource_type="note",
                provider="salesforce",
                detail_fields=("record_id",),
            ),
        ),
        define_tool(
            collaborator,
            name="create_task",
            description="Create a follow-up task in Salesforce for reminders or action items.",
            args_schema=CreateTaskArgs,
            integration=crm,
            activity=ActivitySpec(
                action_type="task_created",
                resource_type="task",
                provider="salesforce",
                detail_fields=("subject", "due_date"),
            ),
        ),
        define_tool(
            collaborator,
            name="get_activity",
            description=(
                "Get recent tasks, events and notes for a contact or lead. Use this when "
                "the user asks about interaction history with someone."
            ),
            args_schema=GET_ACTIVITY_SCHEMA,
            integration=crm,
        ),
    ]
