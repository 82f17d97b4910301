"""Default configuration values."""

from typing import Any

from .constants import DEFAULT_LLM_BASE_URL, DEFAULT_LLM_MODEL, DEFAULT_MAX_ITERATIONS


def get_default_config() -> dict[str, Any]:
    """Get default configuration values.

    The api key is intentionally absent; it must come from the config file
    or the environment.
    """
    return {
        "llm": {
            "base_url": DEFAULT_LLM_BASE_URL,
            "model": DEFAULT_LLM_MODEL,
            "temperature": 0.1,
            "max_tokens": 2000,
        },
        "agent": {
            "max_iterations": DEFAULT_MAX_ITERATIONS,
        },
        "integrations": {
            "base_url": "http://localhost:3000/api/integrations",
            "timeout": 30.0,
        },
        "server": {
            "host": "127.0.0.1",
            "port": 8765,
        },
        "log_level": "INFO",
        "log_format": "json",
        "log_colors": True,
    }
