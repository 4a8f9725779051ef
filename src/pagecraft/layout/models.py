"""Layout Data Models."""

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr


class ComponentKind(str, Enum):
    """Closed set of component kinds."""

    CONTAINER = "container"
    SECTION = "section"
    FOOTER = "footer"
    NAVBAR = "navbar"
    CARD = "card"
    TEXT = "text"
    LINK = "link"
    BUTTON = "button"
    IMAGE = "image"


CONTAINER_KINDS: frozenset[ComponentKind] = frozenset(
    {
        ComponentKind.CONTAINER,
        ComponentKind.CARD,
        ComponentKind.SECTION,
        ComponentKind.FOOTER,
        ComponentKind.NAVBAR,
    }
)
"""Kinds that may hold children."""

PropValue = Union[StrictStr, StrictBool, StrictInt, StrictFloat, None]
Props = dict[str, PropValue]


class ComponentNode(BaseModel):
    """One typed, prop-bearing node of a layout tree.

    Nodes are frozen: the tree engine never mutates a node, it builds a
    replacement. ``kind`` is serialized under the ``type`` key.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: StrictStr = Field(..., min_length=1, description="Unique identifier")
    kind: ComponentKind = Field(..., alias="type", description="Component kind")
    props: Props = Field(default_factory=dict)
    children: tuple["ComponentNode", ...] = Field(default_factory=tuple)

    @property
    def is_container(self) -> bool:
        """Whether this node's kind may hold children."""
        return self.kind in CONTAINER_KINDS


class Layout(BaseModel):
    """Ordered forest of top-level components."""

    model_config = ConfigDict(frozen=True)

    components: tuple[ComponentNode, ...] = Field(default_factory=tuple)


ComponentNode.model_rebuild()
