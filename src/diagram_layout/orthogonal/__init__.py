"""
Orthogonal edge routing.

Routes edges between node rectangles using only horizontal and vertical
segments, keeping a clearance around every other node. This style suits
diagrams that want a structured, rectilinear look such as:

- Flowcharts
- Architecture and data-flow diagrams
- Entity-relationship diagrams

Available components:
- OrthogonalRouter / compute_orthogonal_routes: batch routing entry points
- RoutingGrid: grid graph built from obstacle boundaries
- find_grid_path: A* search with a bend penalty
"""

from .grid import RoutingGrid
from .router import (
    DEFAULT_BEND_PENALTY,
    DEFAULT_PADDING,
    OrthogonalRouter,
    compute_anchors,
    compute_orthogonal_routes,
    simplify_path,
)
from .search import find_grid_path
from .types import Route, RouteRequest

__all__ = [
    "DEFAULT_BEND_PENALTY",
    "DEFAULT_PADDING",
    "OrthogonalRouter",
    "Route",
    "RouteRequest",
    "RoutingGrid",
    "compute_anchors",
    "compute_orthogonal_routes",
    "find_grid_path",
    "simplify_path",
]
