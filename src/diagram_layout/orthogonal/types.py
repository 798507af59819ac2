"""
Type definitions for orthogonal edge routing.

Provides the request and result records exchanged with the router.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..metrics import count_bends, route_length
from ..types import Point, Rect


@dataclass(frozen=True)
class RouteRequest:
    """
    An edge to route between two node rectangles.

    The rectangle ids are matched against obstacle ids so an edge is never
    forced around its own endpoints.
    """

    id: str
    source_rect: Rect
    target_rect: Rect


@dataclass
class Route:
    """
    Routed path of one edge.

    ``waypoints`` runs from the source boundary to the target boundary and
    keeps only the corners in between. An empty list means no path was found
    and the caller should fall back to a simpler connector.
    """

    edge_id: str
    waypoints: list[Point] = field(default_factory=list)

    @property
    def found(self) -> bool:
        """True if the search reached the target."""
        return bool(self.waypoints)

    @property
    def bends(self) -> int:
        """Number of direction changes along the route."""
        return count_bends(self.waypoints)

    @property
    def length(self) -> float:
        """Manhattan length of the route."""
        return route_length(self.waypoints)


__all__ = [
    "RouteRequest",
    "Route",
]
