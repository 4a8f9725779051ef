"""Project Handler."""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..core.validate import ValidationError
from ..layout.models import Layout
from ..layout.serialization import layout_from_dict
from ..storage.projects import ProjectStore


def _parse_name(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Invalid project data: name is required")
    return value.strip()


def _parse_layout(value: Any) -> Layout:
    if value is None:
        raise ValidationError("Invalid project data: layout is required")
    try:
        return layout_from_dict(value)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid project data: {e.error_count()} layout error(s)") from e


class ProjectHandler:
    """
    Project CRUD on behalf of one owner identity.

    Store errors (``DuplicateRecordError``, ``ProjectNotFoundError``) pass
    through unchanged for the transport to map.
    """

    def __init__(self, store: ProjectStore) -> None:
        self.store = store

    def list_projects(self, owner: str) -> list[dict[str, Any]]:
        return [project.to_wire() for project in self.store.list(owner)]

    def get_project(self, owner: str, project_id: int) -> dict[str, Any]:
        return self.store.get(owner, project_id).to_wire()

    def create_project(self, owner: str, payload: dict[str, Any]) -> dict[str, Any]:
        name = _parse_name(payload.get("name"))
        layout = _parse_layout(payload.get("layout"))
        project = self.store.create(owner, name, layout)
        return project.to_wire()

    def update_project(self, owner: str, project_id: int, payload: dict[str, Any]) -> dict[str, Any]:
        """Apply a partial update; absent keys are left alone."""
        name = _parse_name(payload["name"]) if "name" in payload else None
        layout = _parse_layout(payload["layout"]) if "layout" in payload else None
        project = self.store.update(owner, project_id, name=name, layout=layout)
        return project.to_wire()

    def delete_project(self, owner: str, project_id: int) -> None:
        self.store.delete(owner, project_id)
