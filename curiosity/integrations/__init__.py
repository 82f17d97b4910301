from .collaborator import ToolCollaborator
from .http import HttpToolCollaborator

__all__ = ["HttpToolCollaborator", "ToolCollaborator"]
