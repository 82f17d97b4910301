"""Build the per-session tool registry from integration flags."""

from __future__ import annotations

from curiosity.integrations.collaborator import ToolCollaborator
from curiosity.tools.builtin import TOOL_FACTORIES
from curiosity.tools.core.types import IntegrationFlags, ToolDefinition
from curiosity.tools.registry import ToolRegistry


def build_tools(
    flags: IntegrationFlags, collaborator: ToolCollaborator
) -> list[ToolDefinition]:
    """Tools for every enabled integration; no network access happens here."""
    tools: list[ToolDefinition] = []
    for integration in flags.enabled():
        tools.extend(TOOL_FACTORIES[integration](collaborator))
    return tools


def build_registry(
    flags: IntegrationFlags, collaborator: ToolCollaborator
) -> ToolRegistry:
    return ToolRegistry(build_tools(flags, collaborator))
