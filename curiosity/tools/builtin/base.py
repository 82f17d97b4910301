"""Helpers shared by builtin tool factories."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel

from curiosity.integrations.collaborator import ToolCollaborator
from curiosity.tools.core.types import Integration, ToolDefinition, ToolInvoke

Prepare = Callable[[dict[str, Any]], dict[str, Any]]


def delegate(
    collaborator: ToolCollaborator, name: str, prepare: Prepare | None = None
) -> ToolInvoke:
    """Invoke that forwards prepared arguments to the collaborator."""

    async def invoke(arguments: dict[str, Any]) -> Any:
        payload = prepare(arguments) if prepare else arguments
        return await collaborator.execute(name, payload)

    return invoke


def define_tool(
    collaborator: ToolCollaborator,
    *,
    name: str,
    description: str,
    args_schema: type[BaseModel] | dict[str, Any],
    integration: Integration,
    prepare: Prepare | None = None,
    **options: Any,
) -> ToolDefinition:
    return ToolDefinition(
        name=name,
        description=description,
        args_schema=args_schema,
        invoke=delegate(collaborator, name, prepare),
        integration=integration,
        **options,
    )
