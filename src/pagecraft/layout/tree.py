"""Copy-on-write operations over a Layout.

Every mutation returns a new Layout and leaves its input untouched. Only the
path from a root to the changed node is rebuilt; untouched siblings and
subtrees are shared between the old and the new tree.

A target id that does not exist is never an error: the input Layout is
returned as-is (same object), because a stale selection during fast editing
is expected.
"""

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from pydantic import TypeAdapter

from .models import ComponentNode, Layout, Props

_props_adapter = TypeAdapter(Props)

Nodes = tuple[ComponentNode, ...]


def find_node(layout: Layout, node_id: str) -> ComponentNode | None:
    """
    Depth-first, pre-order search for ``node_id``.

    Siblings are visited in order and a node's subtree is searched before its
    next sibling, so with (invalid) duplicate ids the first match in that
    order wins.

    Args:
        layout: Layout to search
        node_id: Component id

    Returns:
        Matching node or None
    """
    return _find(layout.components, node_id)


def _find(nodes: Sequence[ComponentNode], node_id: str) -> ComponentNode | None:
    for node in nodes:
        if node.id == node_id:
            return node
        found = _find(node.children, node_id)
        if found is not None:
            return found
    return None


def find_parent(layout: Layout, node_id: str) -> ComponentNode | None:
    """Return the node whose children contain ``node_id`` (None for roots or unknown ids)."""
    for node, _depth in iter_nodes(layout):
        if any(child.id == node_id for child in node.children):
            return node
    return None


def iter_nodes(layout: Layout) -> Iterator[tuple[ComponentNode, int]]:
    """Yield ``(node, depth)`` pairs in pre-order; roots have depth 1."""
    stack: list[tuple[ComponentNode, int]] = [(n, 1) for n in reversed(layout.components)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        stack.extend((child, depth + 1) for child in reversed(node.children))


def update_props(layout: Layout, node_id: str, patch: Mapping[str, Any]) -> Layout:
    """
    Shallow-merge ``patch`` into the props of ``node_id``.

    Keys in ``patch`` overwrite, keys absent from it are preserved. Only the
    first pre-order match is touched, like ``find_node`` and ``insert_child``.

    Args:
        layout: Source layout
        node_id: Component id
        patch: Props to merge (string keys, scalar values)

    Returns:
        New layout, or ``layout`` itself if the id is unknown

    Raises:
        pydantic.ValidationError: If a patch value is not a scalar
    """
    patch = _props_adapter.validate_python(dict(patch))
    components, changed = _update(layout.components, node_id, patch)
    if not changed:
        return layout
    return layout.model_copy(update={"components": components})


def _update(nodes: Nodes, node_id: str, patch: Props) -> tuple[Nodes, bool]:
    for index, node in enumerate(nodes):
        if node.id == node_id:
            replacement = node.model_copy(update={"props": {**node.props, **patch}})
        else:
            children, updated = _update(node.children, node_id, patch)
            if not updated:
                continue
            replacement = node.model_copy(update={"children": children})
        return nodes[:index] + (replacement,) + nodes[index + 1:], True

    return nodes, False


def remove_subtree(layout: Layout, node_id: str) -> Layout:
    """
    Remove ``node_id`` and its whole subtree, at whatever depth it lives.

    Args:
        layout: Source layout
        node_id: Component id

    Returns:
        New layout, or ``layout`` itself if the id is unknown
    """
    components, changed = _remove(layout.components, node_id)
    if not changed:
        return layout
    return layout.model_copy(update={"components": components})


def _remove(nodes: Nodes, node_id: str) -> tuple[Nodes, bool]:
    result = []
    changed = False

    for node in nodes:
        if node.id == node_id:
            changed = True
            continue
        children, children_changed = _remove(node.children, node_id)
        if children_changed:
            node = node.model_copy(update={"children": children})
            changed = True
        result.append(node)

    return (tuple(result), True) if changed else (nodes, False)


def insert_child(layout: Layout, parent_id: str, node: ComponentNode) -> Layout:
    """
    Append ``node`` as the last child of ``parent_id``.

    The parent's kind is not checked here; see ``insertion.insert_component``.

    Args:
        layout: Source layout
        parent_id: Id of the receiving node
        node: Node to append

    Returns:
        New layout, or ``layout`` itself if the parent is unknown
    """
    components, inserted = _insert(layout.components, parent_id, node)
    if not inserted:
        return layout
    return layout.model_copy(update={"components": components})


def _insert(nodes: Nodes, parent_id: str, new_node: ComponentNode) -> tuple[Nodes, bool]:
    for index, node in enumerate(nodes):
        if node.id == parent_id:
            replacement = node.model_copy(update={"children": node.children + (new_node,)})
        else:
            children, inserted = _insert(node.children, parent_id, new_node)
            if not inserted:
                continue
            replacement = node.model_copy(update={"children": children})
        return nodes[:index] + (replacement,) + nodes[index + 1:], True

    return nodes, False


def append_root(layout: Layout, node: ComponentNode) -> Layout:
    """Append ``node`` to the end of the top-level sequence."""
    return layout.model_copy(update={"components": layout.components + (node,)})
