"""
diagram-layout: Layered layout and orthogonal edge routing for diagrams.

This package provides the geometry behind arranging a diagram: where nodes
go and how edges travel between them. Both algorithms are pure functions of
their inputs and keep no state between calls.

Available algorithms:
- hierarchical: Flow layout (layer assignment, direction-aware placement,
  centroid preservation)
- orthogonal: Obstacle-avoiding orthogonal edge routing (grid + A*)
"""

__version__ = "0.1.0"

# Base classes and input coercion
from .base import BaseLayout, coerce_edge, coerce_node, coerce_rect

# Geometry primitives
from .geometry import (
    Orientation,
    manhattan,
    point_inside_rect,
    rect_boundary_point,
    segment_crosses_rect,
    segment_orientation,
)

# Flow layout
from .hierarchical import (
    FlowLayout,
    FlowLayoutResult,
    GraphStructureWarning,
    compute_flow_layout,
)

# Metrics for layout and route quality
from .metrics import (
    centroid,
    count_bends,
    is_orthogonal,
    route_clears_obstacles,
    route_length,
)

# Orthogonal routing
from .orthogonal import (
    OrthogonalRouter,
    Route,
    RouteRequest,
    compute_orthogonal_routes,
)

# Preprocessing utilities
from .preprocessing import (
    UnresolvedLayerPolicy,
    assign_layers_relaxation,
    count_crossings,
    find_back_edges,
    group_by_layer,
    has_cycle,
    minimize_crossings_barycenter,
    remove_cycles,
)
from .types import (
    DirectionLike,
    Edge,
    EdgeLike,
    FlowDirection,
    Node,
    NodeLike,
    Point,
    Rect,
    RectLike,
)

# Validation utilities
from .validation import (
    DuplicateEdgeError,
    DuplicateNodeError,
    InvalidDirectionError,
    InvalidNodeError,
    ValidationError,
)

__all__ = [
    # Version
    "__version__",
    # Shared types
    "Node",
    "Edge",
    "Point",
    "Rect",
    "FlowDirection",
    # Type aliases for API
    "NodeLike",
    "EdgeLike",
    "RectLike",
    "DirectionLike",
    # Base classes
    "BaseLayout",
    "coerce_node",
    "coerce_edge",
    "coerce_rect",
    # Geometry
    "Orientation",
    "manhattan",
    "point_inside_rect",
    "rect_boundary_point",
    "segment_crosses_rect",
    "segment_orientation",
    # Flow layout
    "FlowLayout",
    "FlowLayoutResult",
    "GraphStructureWarning",
    "compute_flow_layout",
    # Orthogonal routing
    "OrthogonalRouter",
    "Route",
    "RouteRequest",
    "compute_orthogonal_routes",
    # Metrics
    "centroid",
    "count_bends",
    "is_orthogonal",
    "route_clears_obstacles",
    "route_length",
    # Preprocessing
    "UnresolvedLayerPolicy",
    "assign_layers_relaxation",
    "count_crossings",
    "find_back_edges",
    "group_by_layer",
    "has_cycle",
    "minimize_crossings_barycenter",
    "remove_cycles",
    # Validation
    "ValidationError",
    "InvalidNodeError",
    "DuplicateNodeError",
    "DuplicateEdgeError",
    "InvalidDirectionError",
]
