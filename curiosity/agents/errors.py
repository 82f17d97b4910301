from __future__ import annotations


class AgentError(Exception):
    """Base class for failures that end an agent run."""


class ModelCallError(AgentError):
    """The language model call itself failed (network, auth, provider error)."""

    def __init__(self, message: str, iteration: int | None = None) -> None:
        super().__init__(message)
        self.iteration = iteration
