from __future__ import annotations

from typing import Any, Literal, TypedDict, TypeGuard

# --- Type aliases for LangChain content ---
ContentBlock = str | dict[str, Any]
MessageContent = str | list[ContentBlock]


class TextContentBlock(TypedDict, total=False):
    """Text content block in AIMessage.content list."""

    type: Literal["text"]
    text: str
    index: int


# --- Raw tool call shapes emitted by model backends ---
# Backends disagree on where tool arguments live. Each known placement is
# listed here; anything else is treated as unknown by the normalizer.


class ObjectArgsCall(TypedDict, total=False):
    """LangChain ToolCall: arguments already parsed into a dict."""

    name: str
    id: str | None
    args: dict[str, Any]
    type: Literal["tool_call"]


class StringArgsCall(TypedDict, total=False):
    """Arguments left as an encoded JSON string (invalid_tool_calls, raw kwargs)."""

    name: str
    id: str | None
    arguments: str
    args: str
    error: str | None


class NestedParametersCall(TypedDict, total=False):
    """Arguments nested one level down under "parameters" or "tool_input"."""

    name: str
    id: str | None
    parameters: dict[str, Any] | str
    tool_input: dict[str, Any] | str


class FunctionPayload(TypedDict, total=False):
    name: str
    arguments: str | dict[str, Any]


class FunctionToolCall(TypedDict, total=False):
    """OpenAI wire format as found in additional_kwargs["tool_calls"]."""

    id: str
    type: Literal["function"]
    function: FunctionPayload


RawToolCallPayload = (
    ObjectArgsCall
    | StringArgsCall
    | NestedParametersCall
    | FunctionToolCall
    | str
    | None
)


class ToolCallPayload(TypedDict):
    """Normalized tool call as recorded on the assistant message."""

    name: str
    args: dict[str, Any]
    id: str


# --- Type guards ---


def is_text_content_block(block: dict[str, Any]) -> TypeGuard[TextContentBlock]:
    """Type guard to check if a dict is a TextContentBlock."""
    return "text" in block and block.get("type", "text") == "text"


def is_function_tool_call(payload: Any) -> TypeGuard[FunctionToolCall]:
    return isinstance(payload, dict) and isinstance(payload.get("function"), dict)


def content_to_text(content: MessageContent | None) -> str:
    """Flatten LangChain message content (string or block list) into text."""
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    parts: list[str] = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and is_text_content_block(block):
            parts.append(str(block.get("text") or ""))
    return "".join(parts)
