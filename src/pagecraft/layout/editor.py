"""Editor Session - one layout plus its transient selection."""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..core.logging_config import get_logger
from .insertion import create_component, insert_component
from .models import ComponentKind, ComponentNode, Layout
from .tree import find_node, find_parent, remove_subtree, update_props

if TYPE_CHECKING:
    from ..clients.activity import SessionTracker

logger = get_logger(__name__)


class EditorSession:
    """
    Owns the in-memory Layout of one editing session.

    All mutations run synchronously to completion and go through the pure
    functions in ``layout.tree``; the session only swaps its reference to the
    new tree. Selection is not part of the Layout and is never persisted.
    """

    def __init__(
        self,
        layout: Layout | None = None,
        tracker: "SessionTracker | None" = None,
        project_id: int | None = None,
    ) -> None:
        self.layout = layout or Layout()
        self.selected_id: str | None = None
        self.tracker = tracker
        self.project_id = project_id

    def add_component(self, kind: ComponentKind | str) -> ComponentNode:
        """Create a node of ``kind`` and place it according to the selection."""
        node = create_component(kind)
        self.layout = insert_component(self.layout, node, self.selected_id)

        parent = find_parent(self.layout, node.id)
        logger.info(
            "component_added",
            kind=node.kind.value,
            component_id=node.id,
            parent_id=parent.id if parent else None,
        )
        self._track("component_add", node, "added")
        return node

    def select(self, node_id: str | None) -> None:
        """Set or clear the selection."""
        self.selected_id = node_id

    def selected_node(self) -> ComponentNode | None:
        """Currently selected node, if it still exists."""
        if self.selected_id is None:
            return None
        return find_node(self.layout, self.selected_id)

    def update_props(self, node_id: str, patch: Mapping[str, Any]) -> None:
        """Merge ``patch`` into a node's props; unknown ids are ignored."""
        before = self.layout
        self.layout = update_props(self.layout, node_id, patch)
        if self.layout is not before:
            node = find_node(self.layout, node_id)
            self._track("layout_change", node, "modified", keys=sorted(patch))

    def remove_component(self, node_id: str) -> None:
        """Delete a node and its subtree; clears a selection that no longer resolves."""
        node = find_node(self.layout, node_id)
        if node is None:
            return

        self.layout = remove_subtree(self.layout, node_id)
        self._clear_stale_selection()
        logger.info("component_removed", kind=node.kind.value, component_id=node_id)
        self._track("component_remove", node, "removed")

    def replace_layout(self, layout: Layout) -> None:
        """Swap in a whole new tree (loaded project or optimized layout)."""
        self.layout = layout
        self._clear_stale_selection()
        if self.tracker is not None:
            self.tracker.log_activity(
                "layout_change",
                project_id=self.project_id,
                details={"replaced": True, "components": len(layout.components)},
            )

    def _clear_stale_selection(self) -> None:
        if self.selected_id is not None and find_node(self.layout, self.selected_id) is None:
            self.selected_id = None

    def _track(self, activity: str, node: ComponentNode | None, action: str, **details: Any) -> None:
        if self.tracker is None or node is None:
            return
        self.tracker.log_activity(
            activity,
            project_id=self.project_id,
            details={"componentId": node.id, "componentType": node.kind.value, **details},
        )
        self.tracker.log_component_usage(node.kind.value, action, project_id=self.project_id)
