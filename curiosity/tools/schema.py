"""Conversion of tool definitions into the function schema the model API expects."""

from __future__ import annotations

from collections.abc import Iterable
from copy import deepcopy
from typing import Any

from pydantic import BaseModel

from curiosity.tools.core.types import ToolDefinition

# Converter artifacts that model APIs reject
SCHEMA_ARTIFACT_KEYS = frozenset({"$schema"})


def strip_schema_artifacts(schema: Any) -> Any:
    """Recursively drop meta-schema markers, returning a new structure."""
    if isinstance(schema, dict):
        return {
            k: strip_schema_artifacts(v)
            for k, v in schema.items()
            if k not in SCHEMA_ARTIFACT_KEYS
        }
    if isinstance(schema, list):
        return [strip_schema_artifacts(item) for item in schema]
    return schema


def force_required(schema: dict[str, Any], fields: Iterable[str]) -> dict[str, Any]:
    """Ensure ``fields`` appear in the top-level ``required`` list."""
    fields = list(fields)
    if not fields:
        return schema
    result = dict(schema)
    required = list(result.get("required") or [])
    properties = result.get("properties")
    for name in fields:
        if isinstance(properties, dict) and name not in properties:
            continue
        if name not in required:
            required.append(name)
    result["required"] = required
    return result


def parameters_schema(tool: ToolDefinition) -> dict[str, Any]:
    if isinstance(tool.args_schema, type) and issubclass(tool.args_schema, BaseModel):
        schema = tool.args_schema.model_json_schema()
    else:
        schema = deepcopy(tool.args_schema)
    schema = strip_schema_artifacts(schema)
    schema.setdefault("type", "object")
    schema.setdefault("properties", {})
    return force_required(schema, tool.required_fields)


def to_model_schema(tool: ToolDefinition) -> dict[str, Any]:
    return {
        "type": "function",
        "function": {
            "name": tool.name,
            "description": tool.description,
            "parameters": parameters_schema(tool),
        },
    }


def to_model_schemas(tools: Iterable[ToolDefinition]) -> list[dict[str, Any]]:
    return [to_model_schema(tool) for tool in tools]
