from __future__ import annotations

from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, Field

from curiosity.integrations.collaborator import ToolCollaborator
from curiosity.tools.core.types import Integration, ToolDefinition

from .base import define_tool


class WebSearchArgs(BaseModel):
    query: str = Field(
        ..., description="The search query; be specific and include relevant keywords"
    )


class BrowseUrlArgs(BaseModel):
    url: str = Field(
        ..., description="Full URL to open (must start with http:// or https://)"
    )
    question: str | None = Field(
        None, description="What specific information to look for on the page"
    )


def require_http_url(arguments: dict[str, Any]) -> dict[str, Any]:
    url = str(arguments.get("url", "")).strip()
    if urlparse(url).scheme not in ("http", "https"):
        raise ValueError("URL must start with http:// or https://")
    return {**arguments, "url": url}


def web_tools(collaborator: ToolCollaborator) -> list[ToolDefinition]:
    return [
        define_tool(
            collaborator,
            name="web_search",
            description=(
                "Search the web for real-time information: news, company information, "
                "industry research, or anything not in your training data."
            ),
            args_schema=WebSearchArgs,
            integration=Integration.WEB,
            required_fields=("query",),
        ),
        define_tool(
            collaborator,
            name="browse_url",
            description=(
                "Open a specific URL and read its content, e.g. a company website, "
                "pricing page or article."
            ),
            args_schema=BrowseUrlArgs,
            integration=Integration.WEB,
            prepare=require_http_url,
        ),
    ]
