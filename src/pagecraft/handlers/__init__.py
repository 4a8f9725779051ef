"""Transport-neutral request handlers."""

from .ai import AIHandler
from .projects import ProjectHandler

__all__ = ["AIHandler", "ProjectHandler"]
