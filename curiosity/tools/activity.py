"""Activity audit for tools that create or send something.

Recording happens in the background; a recorder failure is logged by the
task manager and never changes the tool result.
"""

from __future__ import annotations

from typing import Any, Protocol

from curiosity.core.background_tasks import BackgroundTaskManager
from curiosity.tools.core.types import ToolDefinition
from curiosity.utils.logger import get_logger

activity_logger = get_logger("curiosity.activity")


class ActivityRecorder(Protocol):
    async def record(
        self, action_type: str, resource_type: str, details: dict[str, Any]
    ) -> None: ...


class LoggingActivityRecorder:
    """Writes activity records to the structured log."""

    async def record(
        self, action_type: str, resource_type: str, details: dict[str, Any]
    ) -> None:
        activity_logger.info(
            "Activity recorded",
            action_type=action_type,
            resource_type=resource_type,
            **details,
        )


def activity_details(tool: ToolDefinition, arguments: dict[str, Any]) -> dict[str, Any]:
    spec = tool.activity
    if spec is None:
        return {}
    details: dict[str, Any] = {"provider": spec.provider, "tool": tool.name}
    for name in spec.detail_fields:
        if arguments.get(name) not in (None, ""):
            details[name] = arguments[name]
    return details


def schedule_activity(
    manager: BackgroundTaskManager,
    recorder: ActivityRecorder,
    tool: ToolDefinition,
    arguments: dict[str, Any],
) -> None:
    spec = tool.activity
    if spec is None:
        return
    manager.create_task(
        recorder.record(
            spec.action_type, spec.resource_type, activity_details(tool, arguments)
        ),
        name=f"activity:{tool.name}",
    )
