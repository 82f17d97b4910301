"""Textual tool results fed back to the model.

Every outcome, including failures, becomes a string so the conversation
always receives a tool message to reason about.
"""

from __future__ import annotations

import json
from typing import Any

__all__ = [
    "execution_failed",
    "invalid_arguments",
    "missing_arguments",
    "render_result",
    "tool_not_found",
]


def tool_not_found(name: str) -> str:
    return f"Error: Tool '{name}' not found"


def execution_failed(name: str, message: str) -> str:
    return f"Error executing {name}: {message}"


def missing_arguments(name: str, shape: str, source: str | None = None) -> str:
    """Diagnostic for an empty call to a tool that has no safe default."""
    received = f"{shape} arguments"
    if source:
        received += f" under '{source}'"
    return (
        f"Error: Tool '{name}' was called without its required arguments "
        f"(received {received}). Call {name} again with every required field filled in."
    )


def invalid_arguments(name: str, errors: list[dict[str, Any]]) -> str:
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ())) or 'arguments'}: {err.get('msg', 'invalid')}"
        for err in errors
    )
    return f"Error: Invalid arguments for {name}: {problems}"


def render_result(value: Any) -> str:
    """Convert a collaborator return value into text for a tool message."""
    if isinstance(value, str):
        return value if value.strip() else "(empty result)"
    if value is None:
        return "(empty result)"
    return json.dumps(value, ensure_ascii=False, default=str)
