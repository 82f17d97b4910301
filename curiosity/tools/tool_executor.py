"""Executes one normalized tool call and always returns text."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ValidationError

from curiosity.core.background_tasks import (
    BackgroundTaskManager,
    get_background_manager,
)
from curiosity.tools.activity import ActivityRecorder, schedule_activity
from curiosity.tools.core.result import (
    execution_failed,
    invalid_arguments,
    missing_arguments,
    render_result,
    tool_not_found,
)
from curiosity.tools.core.types import ToolDefinition
from curiosity.tools.normalizer import ArgumentShape
from curiosity.tools.registry import ToolRegistry
from curiosity.utils.logger import tool_logger


class ToolExecutor:
    """Runs tools from a registry, applying each tool's recovery policies.

    ``execute`` never raises: unknown names, missing arguments, validation
    problems and collaborator failures all come back as result text.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        activity_recorder: ActivityRecorder | None = None,
        background: BackgroundTaskManager | None = None,
    ) -> None:
        self.registry = registry
        self.activity_recorder = activity_recorder
        self._background = background

    @property
    def background(self) -> BackgroundTaskManager:
        return self._background or get_background_manager()

    async def execute(
        self,
        name: str,
        arguments: dict[str, Any],
        *,
        shape: ArgumentShape = ArgumentShape.OBJECT,
        source: str | None = None,
    ) -> str:
        tool = self.registry.get(name)
        if tool is None:
            tool_logger.warning(
                "Tool not found", tool=name, available=self.registry.names()
            )
            return tool_not_found(name)

        args = dict(arguments)
        if not args:
            if tool.default_arguments is None:
                tool_logger.warning(
                    "Tool called without arguments",
                    tool=tool.name,
                    shape=shape.value,
                    source=source,
                )
                return missing_arguments(tool.name, shape.value, source)
            args = tool.default_arguments.defaults()
            tool_logger.info(
                "Substituted default arguments",
                tool=tool.name,
                policy=tool.default_arguments.name,
                arguments=args,
            )

        if tool.query_safety is not None:
            original = args.get(tool.query_safety.field)
            args, rewritten = tool.query_safety.apply(args)
            if rewritten:
                tool_logger.info(
                    "Rewrote unsafe query",
                    tool=tool.name,
                    policy=tool.query_safety.name,
                    original=original,
                    rewritten=args[tool.query_safety.field],
                )

        validated = self._validate(tool, args)
        if isinstance(validated, str):
            return validated

        tool_logger.info("Executing tool", tool=tool.name, arguments=validated)
        try:
            result = await tool.invoke(validated)
        except Exception as e:
            tool_logger.error(
                "Tool execution failed", tool=tool.name, error=str(e), exc_info=True
            )
            return execution_failed(tool.name, str(e) or type(e).__name__)

        if self.activity_recorder is not None and tool.activity is not None:
            schedule_activity(self.background, self.activity_recorder, tool, validated)

        return render_result(result)

    def _validate(self, tool: ToolDefinition, args: dict[str, Any]) -> dict[str, Any] | str:
        """Return validated arguments, or error text when they do not fit."""
        schema = tool.args_schema
        if isinstance(schema, type) and issubclass(schema, BaseModel):
            try:
                return schema.model_validate(args).model_dump(exclude_none=True)
            except ValidationError as e:
                tool_logger.warning(
                    "Tool arguments failed validation",
                    tool=tool.name,
                    errors=e.error_count(),
                )
                return invalid_arguments(tool.name, e.errors(include_url=False))

        required = [*schema.get("required", []), *tool.required_fields]
        missing = [field for field in required if args.get(field) in (None, "")]
        if missing:
            return invalid_arguments(
                tool.name,
                [{"loc": (field,), "msg": "Field required"} for field in missing],
            )
        return args
