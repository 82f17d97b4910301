from .build_registry import build_registry, build_tools
from .core.types import Integration, IntegrationFlags, ToolCall, ToolDefinition
from .normalizer import ArgumentShape, NormalizedArguments, extract_tool_calls, normalize
from .registry import ToolRegistry
from .tool_executor import ToolExecutor

__all__ = [
    "ArgumentShape",
    "Integration",
    "IntegrationFlags",
    "NormalizedArguments",
    "ToolCall",
    "ToolDefinition",
    "ToolExecutor",
    "ToolRegistry",
    "build_registry",
    "build_tools",
    "extract_tool_calls",
    "normalize",
]
