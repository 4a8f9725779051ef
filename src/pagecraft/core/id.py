"""Identifiers.

Components and requests get prefixed ULIDs (``cmp_01H...``, ``req_01H...``):
sortable by creation time and recognisable in logs.

The tree engine never parses ids. Anything loaded from storage or returned
by a model is accepted as long as it is a non-empty string.
"""

from typing import NewType

from ulid import ULID

ComponentID = NewType("ComponentID", str)
RequestID = NewType("RequestID", str)


class Prefix:
    """Id prefixes per category."""

    COMPONENT = "cmp"
    REQUEST = "req"


def _prefixed(prefix: str) -> str:
    return f"{prefix}_{ULID()}"


def new_component_id() -> ComponentID:
    return ComponentID(_prefixed(Prefix.COMPONENT))


def new_request_id() -> RequestID:
    return RequestID(_prefixed(Prefix.REQUEST))
