from .result import (
    execution_failed,
    invalid_arguments,
    missing_arguments,
    render_result,
    tool_not_found,
)
from .types import (
    ActivitySpec,
    Integration,
    IntegrationFlags,
    ToolCall,
    ToolDefinition,
    ToolInvoke,
)

__all__ = [
    "ActivitySpec",
    "Integration",
    "IntegrationFlags",
    "ToolCall",
    "ToolDefinition",
    "ToolInvoke",
    "execution_failed",
    "invalid_arguments",
    "missing_arguments",
    "render_result",
    "tool_not_found",
]
