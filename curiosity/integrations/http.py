"""HTTP bridge to the integrations service that owns provider credentials."""

from __future__ import annotations

from typing import Any

import httpx

from curiosity.utils.logger import tool_logger


class HttpToolCollaborator:
    """Runs tools by POSTing to ``{base_url}/tools/{name}``.

    A JSON reply returns its ``result`` field (or the whole body when absent);
    any other reply returns its text. Non-2xx statuses raise
    ``httpx.HTTPStatusError``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = dict(headers or {})
        self._transport = transport

    def with_headers(self, headers: dict[str, str]) -> HttpToolCollaborator:
        """Copy with extra headers, e.g. the caller's user id."""
        return HttpToolCollaborator(
            self.base_url,
            timeout=self.timeout,
            headers={**self.headers, **headers},
            transport=self._transport,
        )

    async def execute(
        self, name: str, arguments: dict[str, Any]
    ) -> str | dict[str, Any] | list[Any]:
        url = f"{self.base_url}/tools/{name}"
        tool_logger.debug("Calling integration", tool=name, url=url)
        async with httpx.AsyncClient(
            timeout=self.timeout, headers=self.headers, transport=self._transport
        ) as client:
            response = await client.post(url, json={"arguments": arguments})
            response.raise_for_status()

        content_type = response.headers.get("content-type", "")
        if "json" in content_type:
            body = response.json()
            if isinstance(body, dict) and "result" in body:
                return body["result"]
            return body
        return response.text
