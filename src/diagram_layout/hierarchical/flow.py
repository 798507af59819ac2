"""
Flow layout: layered placement for directed diagrams.

Phases, in order:
1. Edge filtering (unknown ids, optional source-port filter, self-loops)
2. Cycle breaking (back edges dropped, optional)
3. Layer assignment by bounded relaxation
4. Ordering within layers (input order, optional barycenter sweeps)
5. Coordinate assignment in canonical top-to-bottom space, then mapped
   to the requested direction
6. Translation so the centroid of node centers is preserved

Every run builds its own index-backed adjacency and discards it on return.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

import numpy as np

from ..base import BaseLayout
from ..metrics import centroid
from ..preprocessing import (
    IndexEdge,
    UnresolvedLayerPolicy,
    assign_layers_relaxation,
    group_by_layer,
    minimize_crossings_barycenter,
    remove_cycles,
)
from ..types import DirectionLike, Edge, EdgeLike, FlowDirection, Node, NodeLike, Point
from ..validation import (
    validate_direction,
    validate_iterations,
    validate_non_negative,
    validate_positive,
)

DEFAULT_LAYER_GAP = 250.0
DEFAULT_NODE_GAP = 150.0
DEFAULT_CROSSING_ITERATIONS = 4


class GraphStructureWarning(UserWarning):
    """Warning issued when graph structure doesn't match algorithm assumptions."""

    pass


@dataclass
class FlowLayoutResult:
    """
    Output of a flow layout run.

    Attributes:
        positions: Top-left corner per node id
        layers: Layer index per node id
        layer_order: Node ids grouped by layer, in placement order
        back_edges: Edges dropped to break cycles, in input order
    """

    positions: dict[str, Point] = field(default_factory=dict)
    layers: dict[str, int] = field(default_factory=dict)
    layer_order: list[list[str]] = field(default_factory=list)
    back_edges: list[Edge] = field(default_factory=list)

    @property
    def order_in_layer(self) -> dict[str, int]:
        """Position of each node id within its layer."""
        return {
            node_id: pos for layer in self.layer_order for pos, node_id in enumerate(layer)
        }


class FlowLayout(BaseLayout):
    """
    Layered layout for directed diagrams.

    Places sources in layer 0 and every other node one layer past its
    deepest predecessor, then lays layers out along the chosen direction.
    Cycles and self-loops are tolerated. The centroid of the input layout is
    kept so a re-layout does not move the diagram away from where it was.

    Example:
        layout = FlowLayout(direction="LR")
        result = layout.run(
            nodes=[
                {"id": "a", "x": 0, "y": 0, "width": 200, "height": 100},
                {"id": "b", "x": 0, "y": 0, "width": 200, "height": 100},
            ],
            edges=[{"source_id": "a", "target_id": "b"}],
        )
        result.layers  # {'a': 0, 'b': 1}
    """

    def __init__(
        self,
        *,
        direction: DirectionLike = FlowDirection.TB,
        layer_gap: float = DEFAULT_LAYER_GAP,
        node_gap: float = DEFAULT_NODE_GAP,
        max_iterations: Optional[int] = None,
        break_cycles: bool = True,
        unresolved_policy: Union[UnresolvedLayerPolicy, str] = UnresolvedLayerPolicy.ZERO,
        minimize_crossings: bool = False,
        crossing_iterations: int = DEFAULT_CROSSING_ITERATIONS,
        source_port: Optional[str] = None,
        preserve_centroid: bool = True,
    ) -> None:
        """
        Initialize flow layout.

        Args:
            direction: Layer direction - 'TB', 'BT', 'LR' or 'RL'.
            layer_gap: Distance between consecutive layers along the primary axis.
            node_gap: Space between neighbouring nodes within a layer.
            max_iterations: Relaxation pass limit. None means node count + 1.
            break_cycles: Drop back edges before layering.
            unresolved_policy: Layer given to nodes the relaxation cannot resolve.
            minimize_crossings: Reorder layers with barycenter sweeps.
            crossing_iterations: Number of barycenter sweeps.
            source_port: If set, only edges leaving this port are laid out.
            preserve_centroid: Translate the result onto the input centroid.
        """
        self._direction: FlowDirection = validate_direction(direction)
        self._layer_gap: float = validate_positive("layer_gap", layer_gap)
        self._node_gap: float = validate_non_negative("node_gap", node_gap)
        self._max_iterations: Optional[int] = (
            None if max_iterations is None else validate_iterations(max_iterations)
        )
        self._break_cycles: bool = bool(break_cycles)
        self._unresolved_policy = UnresolvedLayerPolicy(unresolved_policy)
        self._minimize_crossings: bool = bool(minimize_crossings)
        self._crossing_iterations: int = validate_iterations(crossing_iterations)
        self._source_port: Optional[str] = source_port
        self._preserve_centroid: bool = bool(preserve_centroid)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def direction(self) -> FlowDirection:
        """Get layer direction."""
        return self._direction

    @direction.setter
    def direction(self, value: DirectionLike) -> None:
        """Set layer direction."""
        self._direction = validate_direction(value)

    @property
    def layer_gap(self) -> float:
        """Get distance between layers."""
        return self._layer_gap

    @layer_gap.setter
    def layer_gap(self, value: float) -> None:
        """Set distance between layers (must be > 0)."""
        self._layer_gap = validate_positive("layer_gap", value)

    @property
    def node_gap(self) -> float:
        """Get space between nodes in the same layer."""
        return self._node_gap

    @node_gap.setter
    def node_gap(self, value: float) -> None:
        """Set space between nodes in the same layer (must be >= 0)."""
        self._node_gap = validate_non_negative("node_gap", value)

    @property
    def max_iterations(self) -> Optional[int]:
        """Get relaxation pass limit (None = node count + 1)."""
        return self._max_iterations

    @max_iterations.setter
    def max_iterations(self, value: Optional[int]) -> None:
        self._max_iterations = None if value is None else validate_iterations(value)

    @property
    def break_cycles(self) -> bool:
        return self._break_cycles

    @break_cycles.setter
    def break_cycles(self, value: bool) -> None:
        self._break_cycles = bool(value)

    @property
    def unresolved_policy(self) -> UnresolvedLayerPolicy:
        """Get fallback policy for nodes left without a layer."""
        return self._unresolved_policy

    @unresolved_policy.setter
    def unresolved_policy(self, value: Union[UnresolvedLayerPolicy, str]) -> None:
        self._unresolved_policy = UnresolvedLayerPolicy(value)

    @property
    def minimize_crossings(self) -> bool:
        return self._minimize_crossings

    @minimize_crossings.setter
    def minimize_crossings(self, value: bool) -> None:
        self._minimize_crossings = bool(value)

    @property
    def crossing_iterations(self) -> int:
        """Get number of barycenter sweeps."""
        return self._crossing_iterations

    @crossing_iterations.setter
    def crossing_iterations(self, value: int) -> None:
        self._crossing_iterations = validate_iterations(value)

    @property
    def source_port(self) -> Optional[str]:
        """Get the source-port filter (None = all edges)."""
        return self._source_port

    @source_port.setter
    def source_port(self, value: Optional[str]) -> None:
        self._source_port = value

    @property
    def preserve_centroid(self) -> bool:
        return self._preserve_centroid

    @preserve_centroid.setter
    def preserve_centroid(self, value: bool) -> None:
        self._preserve_centroid = bool(value)

    # -------------------------------------------------------------------------
    # Phase 1: Edge Filtering
    # -------------------------------------------------------------------------

    def _index_edges(
        self, nodes: list[Node], edges: list[Edge]
    ) -> tuple[list[IndexEdge], list[Edge]]:
        """Map edges onto node indices, dropping self-loops and unknown ids."""
        index = {node.id: i for i, node in enumerate(nodes)}
        pairs: list[IndexEdge] = []
        kept: list[Edge] = []
        unknown = 0

        for edge in edges:
            if self._source_port is not None and edge.source_port != self._source_port:
                continue
            src = index.get(edge.source_id)
            tgt = index.get(edge.target_id)
            if src is None or tgt is None:
                unknown += 1
                continue
            if src == tgt:
                continue
            pairs.append((src, tgt))
            kept.append(edge)

        if unknown:
            warnings.warn(
                f"Skipped {unknown} edge(s) referencing unknown node ids.",
                GraphStructureWarning,
                stacklevel=3,
            )
        return pairs, kept

    # -------------------------------------------------------------------------
    # Phase 2: Layer Assignment
    # -------------------------------------------------------------------------

    def _assign_layers(self, n: int, pairs: list[IndexEdge]) -> list[int]:
        """Assign a layer to every node index."""
        layers, unresolved = assign_layers_relaxation(
            n, pairs, max_iterations=self._max_iterations, policy=self._unresolved_policy
        )
        if unresolved:
            warnings.warn(
                f"{len(unresolved)} node(s) could not be layered from their predecessors "
                f"and were placed by the {self._unresolved_policy.value!r} policy.",
                GraphStructureWarning,
                stacklevel=3,
            )
        return layers

    # -------------------------------------------------------------------------
    # Phase 3: Coordinate Assignment
    # -------------------------------------------------------------------------

    def _assign_coordinates(self, nodes: list[Node], layer_order: list[list[int]]) -> np.ndarray:
        """
        Compute top-left corners as an (n, 2) array.

        Canonical space has layers advancing along the primary axis and
        nodes packed along the secondary axis, centered on 0. The direction
        then decides which screen axis is primary and whether it is mirrored.
        """
        horizontal = self._direction.is_horizontal
        primary = np.zeros(len(nodes))
        secondary = np.zeros(len(nodes))

        for layer_idx, members in enumerate(layer_order):
            sizes = [nodes[i].height if horizontal else nodes[i].width for i in members]
            total = sum(sizes) + max(len(members) - 1, 0) * self._node_gap
            offset = -total / 2
            for node_idx, size in zip(members, sizes):
                primary[node_idx] = layer_idx * self._layer_gap
                secondary[node_idx] = offset
                offset += size + self._node_gap

        if self._direction.is_reversed:
            primary = (len(layer_order) - 1) * self._layer_gap - primary

        if horizontal:
            return np.column_stack([primary, secondary])
        return np.column_stack([secondary, primary])

    def _apply_centroid(self, nodes: list[Node], coords: np.ndarray) -> np.ndarray:
        """Translate coordinates so node centers keep the input centroid."""
        sizes = np.array([(node.width, node.height) for node in nodes], dtype=float)
        target = centroid([node.center for node in nodes])
        current = (coords + sizes / 2).mean(axis=0)
        return coords + (np.array([target.x, target.y]) - current)

    # -------------------------------------------------------------------------
    # Layout Computation
    # -------------------------------------------------------------------------

    def run(self, nodes: Sequence[NodeLike], edges: Sequence[EdgeLike] = ()) -> FlowLayoutResult:
        """
        Compute the flow layout.

        Args:
            nodes: Nodes with id, x, y, width and height
            edges: Edges with source and target ids

        Returns:
            FlowLayoutResult with positions, layers and layer order.

        Raises:
            InvalidNodeError: If a node is malformed.
            DuplicateNodeError: If two nodes share an id.
        """
        node_list = self.coerce_nodes(nodes)
        edge_list = self.coerce_edges(edges)
        if not node_list:
            return FlowLayoutResult()

        n = len(node_list)
        pairs, kept = self._index_edges(node_list, edge_list)

        back_edges: list[Edge] = []
        if self._break_cycles:
            pairs, back = remove_cycles(n, pairs)
            back_edges = [kept[i] for i in sorted(back)]

        layers = self._assign_layers(n, pairs)
        layer_order = group_by_layer(layers)
        if self._minimize_crossings:
            layer_order = minimize_crossings_barycenter(
                layer_order, pairs, iterations=self._crossing_iterations
            )

        coords = self._assign_coordinates(node_list, layer_order)
        if self._preserve_centroid:
            coords = self._apply_centroid(node_list, coords)

        return FlowLayoutResult(
            positions={
                node.id: Point(float(coords[i, 0]), float(coords[i, 1]))
                for i, node in enumerate(node_list)
            },
            layers={node.id: layers[i] for i, node in enumerate(node_list)},
            layer_order=[[node_list[i].id for i in layer] for layer in layer_order],
            back_edges=back_edges,
        )


def compute_flow_layout(
    nodes: Sequence[NodeLike],
    edges: Sequence[EdgeLike] = (),
    direction: DirectionLike = FlowDirection.TB,
    *,
    layer_gap: float = DEFAULT_LAYER_GAP,
    node_gap: float = DEFAULT_NODE_GAP,
    max_iterations: Optional[int] = None,
    break_cycles: bool = True,
    unresolved_policy: Union[UnresolvedLayerPolicy, str] = UnresolvedLayerPolicy.ZERO,
    minimize_crossings: bool = False,
    crossing_iterations: int = DEFAULT_CROSSING_ITERATIONS,
    source_port: Optional[str] = None,
    preserve_centroid: bool = True,
) -> FlowLayoutResult:
    """
    Lay out nodes in layers along ``direction``.

    Convenience wrapper around ``FlowLayout(...).run()``; keyword options
    are those of ``FlowLayout``.

    Example:
        >>> nodes = [{"id": n, "width": 200, "height": 100} for n in "ABC"]
        >>> edges = [{"source_id": "A", "target_id": "C"},
        ...          {"source_id": "B", "target_id": "C"}]
        >>> compute_flow_layout(nodes, edges, "TB").layers
        {'A': 0, 'B': 0, 'C': 1}
    """
    layout = FlowLayout(
        direction=direction,
        layer_gap=layer_gap,
        node_gap=node_gap,
        max_iterations=max_iterations,
        break_cycles=break_cycles,
        unresolved_policy=unresolved_policy,
        minimize_crossings=minimize_crossings,
        crossing_iterations=crossing_iterations,
        source_port=source_port,
        preserve_centroid=preserve_centroid,
    )
    return layout.run(nodes, edges)


__all__ = [
    "DEFAULT_LAYER_GAP",
    "DEFAULT_NODE_GAP",
    "FlowLayout",
    "FlowLayoutResult",
    "GraphStructureWarning",
    "compute_flow_layout",
]
