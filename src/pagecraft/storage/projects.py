"""
Project Storage
Persistence collaborator for saved layouts, scoped by owner identity.
"""

import threading
from datetime import datetime, timezone
from typing import Any, Protocol, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..core.logging_config import get_logger
from ..layout.models import Layout
from ..layout.serialization import layout_from_dict, layout_to_dict

logger = get_logger(__name__)


class DuplicateRecordError(Exception):
    """A unique key already exists for this owner."""

    pass


class ProjectNotFoundError(Exception):
    """No project with that id is visible to the owner."""

    def __init__(self, project_id: int) -> None:
        super().__init__("Project not found")
        self.project_id = project_id


class StoredProject(BaseModel):
    """A saved project record as returned to callers."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str
    layout: Layout
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    def to_wire(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "layout": layout_to_dict(self.layout),
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


class ProjectStore(Protocol):
    """Storage interface consumed by the project handler."""

    def create(self, owner: str, name: str, layout: Layout) -> StoredProject: ...

    def update(
        self,
        owner: str,
        project_id: int,
        name: str | None = None,
        layout: Layout | None = None,
    ) -> StoredProject: ...

    def get(self, owner: str, project_id: int) -> StoredProject: ...

    def list(self, owner: str) -> Sequence[StoredProject]: ...

    def delete(self, owner: str, project_id: int) -> None: ...


class InMemoryProjectStore:
    """
    Process-local project store.

    Layouts are kept in their serialized dict form and rebuilt on every read,
    so each save/load goes through the wire format. Ids are assigned from a
    single counter shared by all owners.
    """

    def __init__(self) -> None:
        self._records: dict[int, dict[str, Any]] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create(self, owner: str, name: str, layout: Layout) -> StoredProject:
        with self._lock:
            self._check_unique(owner, name)
            now = datetime.now(timezone.utc)
            project_id = self._next_id
            self._next_id += 1
            self._records[project_id] = {
                "owner": owner,
                "name": name,
                "layout": layout_to_dict(layout),
                "created_at": now,
                "updated_at": now,
            }

        logger.info("project_created", project_id=project_id, owner=owner)
        return self._to_project(project_id, self._records[project_id])

    def update(
        self,
        owner: str,
        project_id: int,
        name: str | None = None,
        layout: Layout | None = None,
    ) -> StoredProject:
        with self._lock:
            record = self._find(owner, project_id)
            if name is not None and name != record["name"]:
                self._check_unique(owner, name)
                record["name"] = name
            if layout is not None:
                record["layout"] = layout_to_dict(layout)
            record["updated_at"] = datetime.now(timezone.utc)

        logger.info("project_updated", project_id=project_id, owner=owner)
        return self._to_project(project_id, record)

    def get(self, owner: str, project_id: int) -> StoredProject:
        with self._lock:
            return self._to_project(project_id, self._find(owner, project_id))

    def list(self, owner: str) -> Sequence[StoredProject]:
        """Owner's projects, newest first."""
        with self._lock:
            owned = [
                (project_id, record)
                for project_id, record in self._records.items()
                if record["owner"] == owner
            ]
        owned.sort(key=lambda item: (item[1]["created_at"], item[0]), reverse=True)
        return [self._to_project(project_id, record) for project_id, record in owned]

    def delete(self, owner: str, project_id: int) -> None:
        with self._lock:
            self._find(owner, project_id)
            del self._records[project_id]
        logger.info("project_deleted", project_id=project_id, owner=owner)

    def _find(self, owner: str, project_id: int) -> dict[str, Any]:
        record = self._records.get(project_id)
        if record is None or record["owner"] != owner:
            raise ProjectNotFoundError(project_id)
        return record

    def _check_unique(self, owner: str, name: str) -> None:
        for record in self._records.values():
            if record["owner"] == owner and record["name"] == name:
                raise DuplicateRecordError(f"A project named '{name}' already exists")

    @staticmethod
    def _to_project(project_id: int, record: dict[str, Any]) -> StoredProject:
        return StoredProject(
            id=project_id,
            name=record["name"],
            layout=layout_from_dict(record["layout"]),
            created_at=record["created_at"],
            updated_at=record["updated_at"],
        )
