"""
Hierarchical layout algorithms.

This module provides layered layouts for directed diagrams:
- FlowLayout: Layer assignment by bounded relaxation, direction-aware
  placement and centroid preservation
"""

from ..preprocessing import UnresolvedLayerPolicy
from .flow import (
    DEFAULT_LAYER_GAP,
    DEFAULT_NODE_GAP,
    FlowLayout,
    FlowLayoutResult,
    GraphStructureWarning,
    compute_flow_layout,
)

__all__ = [
    "DEFAULT_LAYER_GAP",
    "DEFAULT_NODE_GAP",
    "FlowLayout",
    "FlowLayoutResult",
    "GraphStructureWarning",
    "UnresolvedLayerPolicy",
    "compute_flow_layout",
]
