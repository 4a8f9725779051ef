"""Canonical JSON shape of a Layout.

Wire format: ``{"components": [{"id", "type", "props", "children"}]}``.
``children`` is omitted for nodes without children and defaults to an
empty sequence when absent on input. The same shape is used for project
storage and for the AI request/response payloads.
"""

from typing import Any

from ..core.json import extract_json, safe_json_dumps
from .models import ComponentNode, Layout


def node_to_dict(node: ComponentNode) -> dict[str, Any]:
    """Serialize one node and its subtree."""
    data: dict[str, Any] = {"id": node.id, "type": node.kind.value, "props": dict(node.props)}
    if node.children:
        data["children"] = [node_to_dict(child) for child in node.children]
    return data


def layout_to_dict(layout: Layout) -> dict[str, Any]:
    """Serialize a layout to plain JSON-compatible data."""
    return {"components": [node_to_dict(node) for node in layout.components]}


def layout_from_dict(data: Any) -> Layout:
    """
    Deserialize a layout.

    Args:
        data: Parsed JSON value

    Returns:
        Layout

    Raises:
        pydantic.ValidationError: If the value does not have the layout shape
    """
    return Layout.model_validate(data)


def dumps(layout: Layout, indent: int = 0) -> str:
    """Encode a layout as JSON text."""
    return safe_json_dumps(layout_to_dict(layout), indent=indent)


def loads(text: str) -> Layout:
    """Decode JSON text into a layout."""
    return layout_from_dict(extract_json(text))
