"""Log options, processors and the uvicorn logging dict.

Everything here reads the environment only, so ``curiosity.utils.logger``
and ``main.py`` can share it before settings are loaded.
"""

import logging
import os

import structlog

# Values under these keys never reach the log output
SECRET_KEYS = frozenset(
    {"api_key", "authorization", "access_token", "refresh_token", "token", "password"}
)
# Tool results and email bodies can be large
MAX_VALUE_LENGTH = 500

# Third-party loggers that are too chatty at INFO
LIBRARY_LOG_LEVELS = {
    "httpx": "WARNING",
    "httpcore": "WARNING",
    "openai": "INFO",
}


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes", "on")


def get_log_format() -> str:
    """``json`` (default) or ``pretty``."""
    return os.getenv("LOG_FORMAT", "json").lower()


def get_log_level(env_var: str = "LOG_LEVEL") -> int:
    return getattr(logging, os.getenv(env_var, "INFO").upper(), logging.INFO)


def build_renderer():
    if get_log_format() == "pretty":
        return structlog.dev.ConsoleRenderer(colors=_env_flag("LOG_COLORS", "true"))
    return structlog.processors.JSONRenderer()


def redact_secrets(logger, method_name, event_dict):
    for key, value in event_dict.items():
        if value and key.lower() in SECRET_KEYS:
            event_dict[key] = "***"
    return event_dict


def truncate_long_values(logger, method_name, event_dict):
    for key, value in event_dict.items():
        if key != "event" and isinstance(value, str) and len(value) > MAX_VALUE_LENGTH:
            event_dict[key] = f"{value[:MAX_VALUE_LENGTH]}... ({len(value)} chars)"
    return event_dict


def rename_uvicorn_loggers(logger, method_name, event_dict):
    # uvicorn.error carries normal server lifecycle messages
    renamed = {"uvicorn.error": "uvicorn.server", "uvicorn.access": "uvicorn.http"}
    name = event_dict.get("logger")
    if name in renamed:
        event_dict["logger"] = renamed[name]
    return event_dict


def foreign_pre_chain() -> list:
    """Processors applied to records that come from stdlib logging."""
    return [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        rename_uvicorn_loggers,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        truncate_long_values,
    ]


def _handler_logger(level: str | int) -> dict:
    return {"handlers": ["default"], "level": level, "propagate": False}


def get_logging_config() -> dict:
    """dictConfig for uvicorn, rendering through the same structlog chain."""
    uvicorn_level = get_log_level("UVICORN_LOG_LEVEL")
    loggers = {
        name: _handler_logger(uvicorn_level)
        for name in ("uvicorn", "uvicorn.access", "uvicorn.error")
    }
    loggers.update(
        {name: _handler_logger(level) for name, level in LIBRARY_LOG_LEVELS.items()}
    )
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processor": build_renderer(),
                "foreign_pre_chain": foreign_pre_chain(),
            },
        },
        "handlers": {
            "default": {
                "formatter": "default",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": loggers,
    }


LOGGING_CONFIG = get_logging_config()
