from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ToolCollaborator(Protocol):
    """Executes a named platform action (CRM, mailbox, calendar, web).

    How the action reaches its platform is the collaborator's business;
    failures are raised and turned into text by the tool executor.
    """

    async def execute(
        self, name: str, arguments: dict[str, Any]
    ) -> str | dict[str, Any] | list[Any]: ...
