"""Named recovery policies attached to tool definitions.

Models frequently drop arguments or produce queries that break the CRM
transport. Rather than scattering special cases through the executor, each
work-around is a small policy object carried by the tool that needs it, so
they can be enumerated and tested on their own.
"""

from __future__ import annotations

import re
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, ClassVar

from curiosity.config.constants import DEFAULT_QUERY_LIMIT, DEFAULT_QUERY_OBJECT

# Quoted literal inside a filter clause; these break argument serialization
UNSAFE_FILTER_PATTERN = re.compile(r"WHERE\s+.*['\"]", re.IGNORECASE | re.DOTALL)
_SELECT_PATTERN = re.compile(
    r"^\s*SELECT\s+(?P<fields>.+?)\s+FROM\s+(?P<object>[A-Za-z_][\w]*)",
    re.IGNORECASE | re.DOTALL,
)


@dataclass(frozen=True)
class DefaultArgumentsPolicy:
    """Arguments substituted when a call arrives with none at all."""

    name: ClassVar[str] = "default_arguments"

    values: dict[str, Any] = field(default_factory=dict)
    description: str = ""

    def defaults(self) -> dict[str, Any]:
        return deepcopy(self.values)


@dataclass(frozen=True)
class QuerySafetyPolicy:
    """Rewrite filtered queries with quoted literals into bounded listings.

    ``SELECT Id, Name FROM Lead WHERE Status = 'Open'`` becomes
    ``SELECT Id, Name FROM Lead ORDER BY CreatedDate DESC LIMIT 10``.
    """

    name: ClassVar[str] = "query_safety"

    field: str = "query"
    limit: int = DEFAULT_QUERY_LIMIT
    fallback_object: str = DEFAULT_QUERY_OBJECT
    fallback_fields: str = "Id, Name"

    def is_unsafe(self, query: Any) -> bool:
        return isinstance(query, str) and bool(UNSAFE_FILTER_PATTERN.search(query))

    def rewrite(self, query: str) -> str:
        match = _SELECT_PATTERN.match(query)
        if match:
            fields = " ".join(match.group("fields").split())
            sobject = match.group("object")
        else:
            fields, sobject = self.fallback_fields, self.fallback_object
        return f"SELECT {fields} FROM {sobject} ORDER BY CreatedDate DESC LIMIT {self.limit}"

    def apply(self, arguments: dict[str, Any]) -> tuple[dict[str, Any], bool]:
        """Return (arguments, rewritten). The input mapping is never mutated."""
        query = arguments.get(self.field)
        if not self.is_unsafe(query):
            return arguments, False
        updated = dict(arguments)
        updated[self.field] = self.rewrite(query)
        return updated, True


RecoveryPolicy = DefaultArgumentsPolicy | QuerySafetyPolicy
