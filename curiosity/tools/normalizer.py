"""Argument normalization for model tool calls.

Different model backends put tool arguments in different places: a parsed
dict under ``args``, an encoded JSON string under ``arguments``, a nested
``parameters`` object, the OpenAI ``function.arguments`` envelope, or
nothing at all. Everything is reduced to a plain string-keyed dict here,
once, so the executor and the loop never see the raw shapes.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from langchain_core.messages import AIMessage
from pydantic import BaseModel

from curiosity.llm.providers.types import RawToolCallPayload, is_function_tool_call
from curiosity.tools.core.types import ToolCall
from curiosity.utils.logger import tool_logger

# Fields that hold arguments, in lookup order
ARGUMENT_FIELDS = ("args", "arguments", "parameters", "tool_input")
NESTED_FIELDS = frozenset({"parameters", "tool_input"})
# Envelope keys that may sit next to the argument field in a raw call
ENVELOPE_FIELDS = frozenset({"name", "id", "type", "function", "error", "index"})
MAX_DEPTH = 4


class ArgumentShape(str, Enum):
    OBJECT = "object"
    STRINGIFIED = "stringified"
    NESTED = "nested_parameters"
    EMPTY = "empty"
    MALFORMED = "malformed"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class NormalizedArguments:
    arguments: dict[str, Any] = field(default_factory=dict)
    shape: ArgumentShape = ArgumentShape.EMPTY
    # Field the arguments were found under, for diagnostics
    source: str | None = None


def normalize(raw: RawToolCallPayload | Any) -> NormalizedArguments:
    """Normalize raw tool-call arguments. Never raises."""
    try:
        return _normalize(raw, 0)
    except Exception as e:
        tool_logger.warning(
            "Unexpected tool argument payload",
            error=str(e),
            payload_type=type(raw).__name__,
        )
        return NormalizedArguments(shape=ArgumentShape.UNKNOWN)


def normalize_arguments(raw: RawToolCallPayload | Any) -> dict[str, Any]:
    return normalize(raw).arguments


def _normalize(raw: Any, depth: int) -> NormalizedArguments:
    if depth > MAX_DEPTH:
        tool_logger.warning("Tool arguments nested too deeply", depth=depth)
        return NormalizedArguments(shape=ArgumentShape.UNKNOWN)

    if raw is None:
        return NormalizedArguments()

    if isinstance(raw, (str, bytes, bytearray)):
        return _normalize_encoded(raw, depth)

    if isinstance(raw, BaseModel):
        raw = raw.model_dump()
    elif not isinstance(raw, Mapping):
        found = {f: getattr(raw, f) for f in ARGUMENT_FIELDS if hasattr(raw, f)}
        if not found:
            tool_logger.warning(
                "Unsupported tool argument type", payload_type=type(raw).__name__
            )
            return NormalizedArguments(shape=ArgumentShape.UNKNOWN)
        raw = found

    if _is_envelope(raw):
        unwrapped = _unwrap(raw, depth)
        if not _holds_own_arguments(raw, unwrapped):
            return unwrapped

    arguments = {str(k): v for k, v in raw.items()}
    return NormalizedArguments(
        arguments, ArgumentShape.OBJECT if arguments else ArgumentShape.EMPTY
    )


def _normalize_encoded(raw: str | bytes | bytearray, depth: int) -> NormalizedArguments:
    text = raw.decode("utf-8", errors="replace") if not isinstance(raw, str) else raw
    if not text.strip():
        return NormalizedArguments()
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        tool_logger.warning(
            "Failed to parse tool arguments", error=str(e), payload=text[:200]
        )
        return NormalizedArguments(shape=ArgumentShape.MALFORMED)

    if isinstance(parsed, str):
        # Double-encoded payload
        inner = _normalize(parsed, depth + 1)
    elif isinstance(parsed, Mapping):
        inner = _normalize(parsed, depth + 1)
    else:
        tool_logger.warning(
            "Tool arguments are not an object", payload_type=type(parsed).__name__
        )
        return NormalizedArguments(shape=ArgumentShape.MALFORMED)

    if inner.shape in (ArgumentShape.MALFORMED, ArgumentShape.UNKNOWN):
        return inner
    shape = ArgumentShape.STRINGIFIED if inner.arguments else ArgumentShape.EMPTY
    return NormalizedArguments(inner.arguments, shape, inner.source)


def _is_envelope(raw: Mapping[str, Any]) -> bool:
    """True when the mapping wraps arguments rather than being the arguments."""
    keys = set(raw)
    wrapper_keys = keys & (set(ARGUMENT_FIELDS) | {"function"})
    if not wrapper_keys:
        return False
    if "function" in wrapper_keys and not is_function_tool_call(raw):
        wrapper_keys.discard("function")
        if not wrapper_keys:
            return False
    return keys <= set(ARGUMENT_FIELDS) | ENVELOPE_FIELDS


def _holds_own_arguments(
    raw: Mapping[str, Any], unwrapped: NormalizedArguments
) -> bool:
    """True when a bare argument-field mapping is itself the argument record.

    A record like ``{"arguments": "x"}`` carries no envelope keys and its
    value is not an argument payload, so unwrapping it would drop real data.
    A record whose only field holds a nested mapping or JSON object is still
    unwrapped, so such records are not stable under repeated normalization.
    """
    if unwrapped.arguments or set(raw) & ENVELOPE_FIELDS:
        return False
    if any(isinstance(value, Mapping) for _, value in _candidates(raw)):
        return False
    return unwrapped.shape in (ArgumentShape.MALFORMED, ArgumentShape.UNKNOWN)


def _candidates(raw: Mapping[str, Any]) -> list[tuple[str, Any]]:
    found = [(f, raw[f]) for f in ARGUMENT_FIELDS if raw.get(f) is not None]
    if is_function_tool_call(raw) and raw["function"].get("arguments") is not None:
        found.append(("function.arguments", raw["function"]["arguments"]))
    return found


def _unwrap(raw: Mapping[str, Any], depth: int) -> NormalizedArguments:
    worst: NormalizedArguments | None = None
    for source, value in _candidates(raw):
        inner = _normalize(value, depth + 1)
        if inner.arguments:
            if source in NESTED_FIELDS:
                shape = ArgumentShape.NESTED
            elif isinstance(value, (str, bytes, bytearray)):
                shape = ArgumentShape.STRINGIFIED
            else:
                shape = inner.shape
            return NormalizedArguments(inner.arguments, shape, inner.source or source)
        # Keep the most informative empty result for diagnostics
        if worst is None or inner.shape != ArgumentShape.EMPTY:
            worst = NormalizedArguments(shape=inner.shape, source=source)
    return worst or NormalizedArguments()


def extract_tool_calls(message: AIMessage) -> list[ToolCall]:
    """Collect tool calls from a model reply in the order they were produced.

    Parsed calls come first, then calls whose arguments failed to parse, and
    only when neither exists the raw provider payload is consulted.
    """
    calls: list[ToolCall] = []
    for tc in message.tool_calls or []:
        calls.append(
            ToolCall(id=tc.get("id") or "", name=tc.get("name") or "", raw_arguments=tc)
        )
    for tc in message.invalid_tool_calls or []:
        calls.append(
            ToolCall(id=tc.get("id") or "", name=tc.get("name") or "", raw_arguments=tc)
        )
    if calls:
        return calls

    raw_calls = (message.additional_kwargs or {}).get("tool_calls") or []
    for raw in raw_calls:
        if not isinstance(raw, Mapping):
            continue
        function = raw.get("function") if is_function_tool_call(raw) else {}
        name = function.get("name") or raw.get("name") or ""
        calls.append(ToolCall(id=raw.get("id") or "", name=name, raw_arguments=raw))
    return calls
