"""Project persistence."""

from .projects import (
    DuplicateRecordError,
    InMemoryProjectStore,
    ProjectNotFoundError,
    ProjectStore,
    StoredProject,
)

__all__ = [
    "DuplicateRecordError",
    "InMemoryProjectStore",
    "ProjectNotFoundError",
    "ProjectStore",
    "StoredProject",
]
