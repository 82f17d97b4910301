"""Configuration settings for the Curiosity agent.

Values are resolved from an optional JSON config file first, then from
environment variables, then from the built-in defaults.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from curiosity.config.defaults import get_default_config
from curiosity.config.schema import deep_merge, load_config_file


class Settings:
    """Application settings with property-based access.

    The optional ``config`` mapping holds values loaded from a config file
    using the same nested layout as ``get_default_config()``.
    """

    def __init__(self, config: dict[str, Any] | None = None):
        self._config = config or {}
        self._defaults = get_default_config()

    @classmethod
    def from_file(cls, path: str | Path) -> Settings:
        return cls(load_config_file(path))

    def with_overrides(self, updates: dict[str, Any]) -> Settings:
        """Return a copy whose file layer is deep-merged with ``updates``."""
        return Settings(deep_merge(self._config, updates))

    def validate_or_raise(self) -> None:
        errors: list[str] = []
        if not self.llm_api_key:
            errors.append(
                "LLM api key is not set (SAMBANOVA_API_KEY, LLM_API_KEY or llm.api_key)"
            )
        if not self.model:
            errors.append("Model is not configured (LLM_MODEL or llm.model)")
        if self.max_iterations < 1:
            errors.append("agent.max_iterations must be at least 1")
        if errors:
            raise ValueError("; ".join(errors))

    def validation_status(self) -> tuple[bool, list[str]]:
        """Return (is_valid, errors) without raising."""
        try:
            self.validate_or_raise()
            return True, []
        except ValueError as exc:
            return False, [part.strip() for part in str(exc).split(";") if part]

    def _lookup(self, source: dict[str, Any], key: str) -> Any:
        node: object = source
        for part in key.split("."):
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return None
        return node

    def _get(
        self,
        key: str,
        default: Any = None,
        env_key: str | tuple[str, ...] | None = None,
    ) -> Any:
        """Get config value from the file, fallback to env, then default."""
        if default is None:
            default = self._lookup(self._defaults, key)

        value = self._lookup(self._config, key)
        if value is not None:
            return value

        env_keys = (env_key,) if isinstance(env_key, str) else env_key or ()
        for name in env_keys:
            if env_val := os.getenv(name):
                if isinstance(default, bool):
                    return env_val.lower() in ("true", "1", "yes", "on")
                elif isinstance(default, int):
                    return int(env_val)
                elif isinstance(default, float):
                    return float(env_val)
                return env_val
        return default

    # LLM
    @property
    def llm_api_key(self) -> str | None:
        return self._get("llm.api_key", None, ("SAMBANOVA_API_KEY", "LLM_API_KEY"))

    @property
    def llm_base_url(self) -> str:
        return self._get("llm.base_url", env_key="LLM_BASE_URL")

    @property
    def model(self) -> str:
        return self._get("llm.model", env_key="LLM_MODEL")

    @property
    def temperature(self) -> float:
        return float(self._get("llm.temperature", env_key="LLM_TEMPERATURE"))

    @property
    def max_tokens(self) -> int:
        return int(self._get("llm.max_tokens", env_key="LLM_MAX_TOKENS"))

    # Agent
    @property
    def max_iterations(self) -> int:
        return int(self._get("agent.max_iterations", env_key="AGENT_MAX_ITERATIONS"))

    # Integrations
    @property
    def integrations_base_url(self) -> str:
        return self._get("integrations.base_url", env_key="INTEGRATIONS_BASE_URL")

    @property
    def integrations_timeout(self) -> float:
        return float(self._get("integrations.timeout", env_key="INTEGRATIONS_TIMEOUT"))

    # Server
    @property
    def server_host(self) -> str:
        return self._get("server.host", env_key="SERVER_HOST")

    @property
    def server_port(self) -> int:
        return int(self._get("server.port", env_key="SERVER_PORT"))

    # Logging
    @property
    def log_level(self) -> str:
        return self._get("log_level", env_key="LOG_LEVEL")

    @property
    def log_format(self) -> str:
        return self._get("log_format", env_key="LOG_FORMAT")

    @property
    def log_colors(self) -> bool:
        return self._get("log_colors", env_key="LOG_COLORS")


settings = Settings()


def configure_settings(config: dict[str, Any] | None) -> Settings:
    """Replace the global settings with one backed by ``config``."""
    global settings
    settings = Settings(config)
    return settings


def get_settings() -> Settings:
    return settings
