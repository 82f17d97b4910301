"""Structured logging for the Curiosity agent using structlog.

Importing this module configures logging once. Conversation ids bound with
``bind_chat_context`` are merged into every line logged in that context, so
the agent and tool loggers do not have to pass them around.
"""

import logging
import time

import structlog
from structlog.types import FilteringBoundLogger

from curiosity.config.logging_config import (
    LIBRARY_LOG_LEVELS,
    build_renderer,
    foreign_pre_chain,
    get_log_level,
    redact_secrets,
    truncate_long_values,
)

CHAT_CONTEXT_KEYS = ("chat_id", "user_id")


def configure_structlog():
    """Route structlog and stdlib records through one ProcessorFormatter."""
    handler = logging.StreamHandler()
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=build_renderer(),
            foreign_pre_chain=foreign_pre_chain(),
        )
    )
    logging.root.handlers = [handler]
    logging.root.setLevel(get_log_level())
    logging.captureWarnings(True)
    for name, level in LIBRARY_LOG_LEVELS.items():
        logging.getLogger(name).setLevel(level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.TimeStamper(fmt="iso"),
            redact_secrets,
            truncate_long_values,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_structlog()


def bind_chat_context(chat_id: str | None = None, user_id: str | None = None) -> None:
    """Attach the conversation ids to log lines emitted from this context."""
    values = {"chat_id": chat_id, "user_id": user_id}
    structlog.contextvars.bind_contextvars(
        **{key: value for key, value in values.items() if value}
    )


def clear_chat_context() -> None:
    structlog.contextvars.unbind_contextvars(*CHAT_CONTEXT_KEYS)


def log_chat_request(
    logger: FilteringBoundLogger, started_at: float, *, streaming: bool, **kwargs
) -> None:
    """Log a handled /api/chat request; ``started_at`` is a perf_counter value."""
    logger.info(
        "Chat request handled",
        status_code=200,
        streaming=streaming,
        duration_ms=round((time.perf_counter() - started_at) * 1000, 1),
        **kwargs,
    )


def get_logger(name: str, level: int = logging.INFO) -> FilteringBoundLogger:
    logging.getLogger(name).setLevel(level)
    return structlog.get_logger(name)


logger = get_logger("curiosity")
api_logger = get_logger("curiosity.api", level=logging.DEBUG)
agent_logger = get_logger("curiosity.agents", level=logging.DEBUG)
tool_logger = get_logger("curiosity.tools", level=logging.DEBUG)
