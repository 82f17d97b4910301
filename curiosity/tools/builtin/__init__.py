"""Builtin tool factories, one per integration.

Static export for registry building: maps each integration to the function
that builds its tools around a collaborator.
"""

from __future__ import annotations

from collections.abc import Callable

from curiosity.integrations.collaborator import ToolCollaborator
from curiosity.tools.core.types import Integration, ToolDefinition

from .gmail import gmail_tools
from .monday import monday_tools
from .outlook import outlook_tools
from .salesforce import salesforce_tools
from .web import web_tools

ToolFactory = Callable[[ToolCollaborator], list[ToolDefinition]]

TOOL_FACTORIES: dict[Integration, ToolFactory] = {
    Integration.SALESFORCE: salesforce_tools,
    Integration.MONDAY: monday_tools,
    Integration.GMAIL: gmail_tools,
    Integration.OUTLOOK: outlook_tools,
    Integration.WEB: web_tools,
}

__all__ = [
    "TOOL_FACTORIES",
    "ToolFactory",
    "gmail_tools",
    "monday_tools",
    "outlook_tools",
    "salesforce_tools",
    "web_tools",
]
