"""SSE adapter utilities.

Provides `stream_response` to wrap async generators of dicts into
EventSourceResponse.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import Any

from sse_starlette.sse import EventSourceResponse

from curiosity.domain.events import EventFactory
from curiosity.utils.logger import api_logger


def stream_response(
    event_stream: AsyncIterator[dict[str, Any]], chat_id: str | None = None
) -> EventSourceResponse:
    async def guarded_stream() -> AsyncIterator[dict[str, Any]]:
        try:
            async for event in event_stream:
                yield event
        except GeneratorExit:
            api_logger.info("SSE generator closed")
            return
        except asyncio.CancelledError:
            api_logger.info("SSE stream cancelled during shutdown")
            raise
        except Exception as e:
            # An error event ends the stream; done is never sent after it
            api_logger.error("SSE pipeline crashed", exc_info=True, error=str(e))
            yield EventFactory.error(str(e), chat_id).to_sse()

    return EventSourceResponse(
        guarded_stream(),
        headers={
            "Cache-Control": "no-cache",
            "X-Accel-Buffering": "no",
        },
    )
