from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from curiosity.tools.policies import (
    DefaultArgumentsPolicy,
    QuerySafetyPolicy,
    RecoveryPolicy,
)

__all__ = [
    "ActivitySpec",
    "Integration",
    "IntegrationFlags",
    "ToolCall",
    "ToolDefinition",
    "ToolInvoke",
]

# Tool implementations receive validated arguments and return text or JSON
ToolInvoke = Callable[[dict[str, Any]], Awaitable[str | dict[str, Any] | list[Any]]]


class Integration(str, Enum):
    SALESFORCE = "salesforce"
    MONDAY = "monday"
    GMAIL = "gmail"
    OUTLOOK = "outlook"
    WEB = "web"


class IntegrationFlags(BaseModel):
    """Which external connections exist for the current user."""

    salesforce: bool = False
    monday: bool = False
    gmail: bool = False
    outlook: bool = False
    web: bool = True

    def enabled(self) -> list[Integration]:
        return [i for i in Integration if getattr(self, i.value)]


class ActivitySpec(BaseModel):
    """Audit record emitted after a tool creates or sends something."""

    model_config = ConfigDict(frozen=True)

    action_type: str
    resource_type: str
    provider: str
    detail_fields: tuple[str, ...] = ()


class ToolDefinition(BaseModel):
    """A named action the model may call.

    Immutable once built; registries are rebuilt per session instead.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    description: str
    args_schema: type[BaseModel] | dict[str, Any]
    invoke: ToolInvoke
    integration: Integration
    # Fields the emitted schema must mark required even if the converter did not
    required_fields: tuple[str, ...] = ()
    default_arguments: DefaultArgumentsPolicy | None = None
    query_safety: QuerySafetyPolicy | None = None
    activity: ActivitySpec | None = None

    @property
    def policies(self) -> list[RecoveryPolicy]:
        return [p for p in (self.default_arguments, self.query_safety) if p]

    @property
    def has_safe_default(self) -> bool:
        return self.default_arguments is not None


@dataclass(frozen=True)
class ToolCall:
    """One tool request extracted from a model reply.

    ``raw_arguments`` is whatever the backend produced and must go through
    the normalizer before use.
    """

    id: str
    name: str
    raw_arguments: Any = None
