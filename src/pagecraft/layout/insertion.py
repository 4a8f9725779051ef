"""Selection-aware placement of new components."""

from ..core.id import new_component_id
from ..core.logging_config import get_logger
from .defaults import default_props
from .models import ComponentKind, ComponentNode, Layout
from .tree import append_root, find_node, insert_child

logger = get_logger(__name__)


def create_component(kind: ComponentKind | str) -> ComponentNode:
    """Build a fresh node of ``kind`` with a new id and its own copy of the default props."""
    kind = ComponentKind(kind)
    return ComponentNode(id=new_component_id(), kind=kind, props=default_props(kind))


def resolve_parent(layout: Layout, selected_id: str | None) -> str | None:
    """
    Decide which node receives the next insertion.

    Only the selected node itself is considered, never its ancestors: a text
    node selected inside a card does not make the card the target.

    Args:
        layout: Current layout
        selected_id: Current selection, if any

    Returns:
        Parent id, or None for the root sequence
    """
    if selected_id is None:
        return None

    selected = find_node(layout, selected_id)
    if selected is None:
        logger.debug("stale_selection", selected_id=selected_id)
        return None

    return selected.id if selected.is_container else None


def insert_component(layout: Layout, node: ComponentNode, selected_id: str | None) -> Layout:
    """
    Place ``node`` according to the current selection.

    Args:
        layout: Current layout
        node: New node
        selected_id: Current selection, if any

    Returns:
        New layout with ``node`` appended to the selected container or to the root
    """
    parent_id = resolve_parent(layout, selected_id)
    if parent_id is None:
        return append_root(layout, node)
    return insert_child(layout, parent_id, node)
