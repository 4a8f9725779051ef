"""Component tree model, editing engine and wire format."""

from .models import CONTAINER_KINDS, ComponentKind, ComponentNode, Layout
from .defaults import DEFAULT_PROPS, default_props, recognized_props
from .tree import (
    append_root,
    find_node,
    find_parent,
    insert_child,
    iter_nodes,
    remove_subtree,
    update_props,
)
from .insertion import create_component, insert_component, resolve_parent
from .serialization import dumps, layout_from_dict, layout_to_dict, loads, node_to_dict
from .editor import EditorSession

__all__ = [
    # Model
    "CONTAINER_KINDS",
    "ComponentKind",
    "ComponentNode",
    "Layout",
    "DEFAULT_PROPS",
    "default_props",
    "recognized_props",
    # Tree engine
    "append_root",
    "find_node",
    "find_parent",
    "insert_child",
    "iter_nodes",
    "remove_subtree",
    "update_props",
    # Insertion policy
    "create_component",
    "insert_component",
    "resolve_parent",
    # Serialization
    "dumps",
    "layout_from_dict",
    "layout_to_dict",
    "loads",
    "node_to_dict",
    # Session
    "EditorSession",
]
