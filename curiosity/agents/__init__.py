from .agent_loop import AgentLoop, AgentRunResult
from .errors import AgentError, ModelCallError

__all__ = ["AgentError", "AgentLoop", "AgentRunResult", "ModelCallError"]
