"""
Common types for diagram layout and routing.

This module provides the fundamental types shared by both algorithms:
- Point: A 2-D position or route waypoint
- Rect: Axis-aligned rectangle, optionally tagged with an id
- Node: Graph vertex as a rectangle (top-left corner plus size)
- Edge: Directed connection between two node ids
- FlowDirection: Layer direction for flow layouts
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class FlowDirection(str, Enum):
    """
    Direction in which layers advance.

    - TB: top to bottom (layers advance along +y)
    - BT: bottom to top
    - LR: left to right (layers advance along +x)
    - RL: right to left
    """

    TB = "TB"
    BT = "BT"
    LR = "LR"
    RL = "RL"

    @property
    def is_horizontal(self) -> bool:
        """True if layers advance along the x axis."""
        return self in (FlowDirection.LR, FlowDirection.RL)

    @property
    def is_reversed(self) -> bool:
        """True if the primary axis is mirrored."""
        return self in (FlowDirection.BT, FlowDirection.RL)


@dataclass(frozen=True)
class Point:
    """A position in the shared diagram coordinate space."""

    x: float
    y: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Rect:
    """
    Axis-aligned rectangle.

    ``x`` and ``y`` are the top-left corner. The optional ``id`` lets the
    router exclude an edge's own endpoints from its obstacle set.
    """

    x: float
    y: float
    width: float
    height: float
    id: Optional[str] = None

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        """Center point of the rectangle."""
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def expanded(self, padding: float) -> Rect:
        """Return a copy grown by ``padding`` on every side."""
        return Rect(
            self.x - padding,
            self.y - padding,
            self.width + 2 * padding,
            self.height + 2 * padding,
            self.id,
        )


@dataclass
class Node:
    """
    Graph node with position and size.

    Attributes:
        id: Unique node identifier
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Node width
        height: Node height
    """

    id: str
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    @property
    def rect(self) -> Rect:
        """Node bounds as an id-tagged rectangle."""
        return Rect(self.x, self.y, self.width, self.height, self.id)


@dataclass
class Edge:
    """
    Directed edge between two nodes.

    Port identifiers are opaque; the layout only looks at them when a
    source-port filter is configured.
    """

    source_id: str
    target_id: str
    id: Optional[str] = None
    source_port: Optional[str] = None
    target_port: Optional[str] = None

    @property
    def is_self_loop(self) -> bool:
        return self.source_id == self.target_id

    def __repr__(self) -> str:
        return f"Edge({self.source_id} -> {self.target_id})"


# Type aliases for Pythonic API
# These allow flexible input types while maintaining type safety
NodeLike = Union[Node, dict[str, Any], Any]
"""Input type for nodes: Node objects, dicts, or objects with id/x/y/width/height."""

EdgeLike = Union[Edge, dict[str, Any], Any]
"""Input type for edges: Edge objects, dicts, or objects with source_id/target_id."""

RectLike = Union[Rect, Node, dict[str, Any], Any]
"""Input type for rectangles: Rect or Node objects, dicts, or objects with x/y/width/height."""

DirectionLike = Union[FlowDirection, str]
"""Layer direction: FlowDirection member or one of 'TB', 'BT', 'LR', 'RL'."""


__all__ = [
    "FlowDirection",
    "Point",
    "Rect",
    "Node",
    "Edge",
    # Pythonic API type aliases
    "NodeLike",
    "EdgeLike",
    "RectLike",
    "DirectionLike",
]
