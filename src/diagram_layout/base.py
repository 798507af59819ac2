"""
Base classes and input coercion for layout algorithms.

Layouts in this package are configured once and then run against any number
of node/edge collections. They keep no graph state between runs: every call
coerces its inputs into fresh Node/Edge records and discards them on return.

- BaseLayout: Abstract base with input coercion and validation
- coerce_node / coerce_edge / coerce_rect: Accept objects, dicts or
  camelCase dicts as produced by the document layer
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

from typing_extensions import Self

from .types import Edge, EdgeLike, Node, NodeLike, Rect, RectLike
from .validation import (
    InvalidNodeError,
    ValidationError,
    validate_dimensions,
    validate_unique_node_ids,
)

_MISSING = object()

# Accepted spellings for each field, in lookup order
_EDGE_SOURCE_KEYS = ("source_id", "sourceId", "source")
_EDGE_TARGET_KEYS = ("target_id", "targetId", "target")
_EDGE_SOURCE_PORT_KEYS = ("source_port", "sourcePort", "sourcePortId")
_EDGE_TARGET_PORT_KEYS = ("target_port", "targetPort", "targetPortId")


def _lookup(obj: Any, keys: Sequence[str], default: Any = _MISSING) -> Any:
    """Return the first of ``keys`` present on a dict or object."""
    for key in keys:
        if isinstance(obj, dict):
            if key in obj:
                return obj[key]
        elif hasattr(obj, key):
            return getattr(obj, key)
    return default


def coerce_node(node_data: NodeLike) -> Node:
    """
    Convert a Node, dict, or generic object into a validated Node.

    Raises:
        InvalidNodeError: If the id is missing or the geometry is invalid
    """
    node_id = _lookup(node_data, ("id",), None)
    if node_id is None:
        raise InvalidNodeError(f"Node is missing an id: {node_data!r}")
    x, y, width, height = validate_dimensions(
        node_id,
        _lookup(node_data, ("x",), 0.0),
        _lookup(node_data, ("y",), 0.0),
        _lookup(node_data, ("width",), 0.0),
        _lookup(node_data, ("height",), 0.0),
    )
    return Node(id=node_id, x=x, y=y, width=width, height=height)


def coerce_edge(edge_data: EdgeLike) -> Edge:
    """
    Convert an Edge, dict, or generic object into an Edge.

    Raises:
        ValidationError: If the source or target id is missing
    """
    if isinstance(edge_data, Edge):
        return edge_data
    source = _lookup(edge_data, _EDGE_SOURCE_KEYS, None)
    target = _lookup(edge_data, _EDGE_TARGET_KEYS, None)
    if source is None or target is None:
        raise ValidationError(f"Edge needs both a source and a target id: {edge_data!r}")
    return Edge(
        source_id=source,
        target_id=target,
        id=_lookup(edge_data, ("id",), None),
        source_port=_lookup(edge_data, _EDGE_SOURCE_PORT_KEYS, None),
        target_port=_lookup(edge_data, _EDGE_TARGET_PORT_KEYS, None),
    )


def coerce_rect(rect_data: RectLike) -> Rect:
    """
    Convert a Rect, Node, dict, or generic object into a validated Rect.

    Raises:
        InvalidNodeError: If the geometry is invalid
    """
    if isinstance(rect_data, Node):
        rect_data = rect_data.rect
    rect_id = _lookup(rect_data, ("id",), None)
    x, y, width, height = validate_dimensions(
        rect_id,
        _lookup(rect_data, ("x",), 0.0),
        _lookup(rect_data, ("y",), 0.0),
        _lookup(rect_data, ("width",), 0.0),
        _lookup(rect_data, ("height",), 0.0),
    )
    return Rect(x, y, width, height, rect_id)


class BaseLayout(ABC):
    """
    Abstract base class for layout algorithms.

    Subclasses hold configuration only. ``run()`` receives the graph and
    returns a result object; nothing about the graph is kept on ``self``.

    Example:
        layout = SomeLayout(direction="LR")
        result = layout.run(nodes, edges)
        for node_id, pos in result.positions.items():
            print(node_id, pos.x, pos.y)
    """

    def coerce_nodes(self, nodes: Sequence[NodeLike]) -> list[Node]:
        """
        Coerce and validate a node sequence.

        Raises:
            InvalidNodeError: If any node is malformed
            DuplicateNodeError: If two nodes share an id
        """
        result = [coerce_node(node) for node in nodes]
        validate_unique_node_ids(node.id for node in result)
        return result

    def coerce_edges(self, edges: Sequence[EdgeLike]) -> list[Edge]:
        """Coerce an edge sequence into Edge records."""
        return [coerce_edge(edge) for edge in edges]

    def validate(self, nodes: Sequence[NodeLike], edges: Sequence[EdgeLike] = ()) -> Self:
        """
        Validate inputs without running the layout.

        ``run()`` performs the same checks, but calling this first gives
        fail-fast behavior.

        Returns:
            self (for chaining)

        Raises:
            InvalidNodeError: If any node is malformed.
            DuplicateNodeError: If two nodes share an id.
        """
        self.coerce_nodes(nodes)
        self.coerce_edges(edges)
        return self

    @abstractmethod
    def run(self, nodes: Sequence[NodeLike], edges: Sequence[EdgeLike] = ()) -> Any:
        """
        Run the layout algorithm.

        Returns:
            A result object describing the computed layout
        """
        pass


__all__ = [
    "BaseLayout",
    "coerce_node",
    "coerce_edge",
    "coerce_rect",
]
