"""
Graph preprocessing utilities.

This module provides the index-based graph steps used by the flow layout:
- Back-edge detection and cycle removal
- Bounded layer relaxation with an explicit fallback policy
- Grouping by layer and barycenter crossing minimization
- Crossing counting between adjacent layers

Graphs are given as a node count ``n`` and a sequence of ``(source, target)``
index pairs. Pairs referencing indices outside ``[0, n)`` are ignored.
"""

from __future__ import annotations

import heapq
from enum import Enum
from typing import Optional, Sequence

from .validation import validate_iterations

IndexEdge = tuple[int, int]


class UnresolvedLayerPolicy(str, Enum):
    """
    Layer given to nodes the relaxation could not resolve.

    A node stays unresolved when one of its predecessors never receives a
    layer, which happens inside cycles that were not broken beforehand or
    when the pass limit is reached first. Unresolved nodes are visited in
    topological order among themselves, with any cycle opened at one of its
    own nodes, so earlier fallbacks count for later ones.

    - ZERO: place the node in layer 0, ignoring its predecessors
    - AFTER_RESOLVED_PREDECESSORS: one past its deepest predecessor that has
      a layer, or layer 0 if none has. Every edge outside a cycle keeps
      ``layer(target) >= layer(source) + 1``.
    """

    ZERO = "zero"
    AFTER_RESOLVED_PREDECESSORS = "after-resolved-predecessors"


def _valid_pairs(n: int, edges: Sequence[IndexEdge]) -> list[tuple[int, int, int]]:
    """(source, target, original_index) for in-range edges."""
    return [
        (src, tgt, i) for i, (src, tgt) in enumerate(edges) if 0 <= src < n and 0 <= tgt < n
    ]


# =============================================================================
# Cycle Detection and Removal
# =============================================================================


def find_back_edges(n: int, edges: Sequence[IndexEdge]) -> set[int]:
    """
    Find the edges that close a cycle during a depth-first traversal.

    Traversal starts from nodes in index order and follows outgoing edges in
    input order, so the result is deterministic. The DFS uses an explicit
    stack; deep chains cannot exhaust the interpreter's recursion limit.

    Args:
        n: Number of nodes
        edges: Directed (source, target) index pairs

    Returns:
        Indices into ``edges`` of back edges (self-loops included).

    Example:
        >>> sorted(find_back_edges(3, [(0, 1), (1, 2), (2, 0)]))
        [2]
    """
    adj: list[list[tuple[int, int]]] = [[] for _ in range(n)]  # (neighbor, edge_index)
    for src, tgt, idx in _valid_pairs(n, edges):
        adj[src].append((tgt, idx))

    # DFS states: 0=unvisited, 1=on stack, 2=finished
    state = [0] * n
    back_edges: set[int] = set()

    for start in range(n):
        if state[start] != 0:
            continue
        state[start] = 1
        # Each frame is (node, position of the next outgoing edge to try)
        stack: list[list[int]] = [[start, 0]]
        while stack:
            frame = stack[-1]
            node, pos = frame
            if pos == len(adj[node]):
                state[node] = 2
                stack.pop()
                continue
            frame[1] = pos + 1
            neighbor, edge_idx = adj[node][pos]
            if state[neighbor] == 1:
                back_edges.add(edge_idx)
            elif state[neighbor] == 0:
                state[neighbor] = 1
                stack.append([neighbor, 0])

    return back_edges


def has_cycle(n: int, edges: Sequence[IndexEdge]) -> bool:
    """
    Check if a directed graph contains any cycle.

    Args:
        n: Number of nodes
        edges: Directed (source, target) index pairs

    Returns:
        True if graph contains a cycle (including a self-loop).
    """
    return bool(find_back_edges(n, edges))


def remove_cycles(
    n: int,
    edges: Sequence[IndexEdge],
    reverse: bool = False,
) -> tuple[list[IndexEdge], set[int]]:
    """
    Make a directed graph acyclic by dropping or reversing its back edges.

    Args:
        n: Number of nodes
        edges: Directed (source, target) index pairs
        reverse: If True, back edges are reversed instead of dropped.
            Self-loops are always dropped.

    Returns:
        Tuple of (new_edges, back_edge_indices) where:
        - new_edges: Edges with cycles broken, in input order
        - back_edge_indices: Indices in ``edges`` that were dropped or reversed

    Example:
        >>> new_edges, removed = remove_cycles(2, [(0, 1), (1, 0)])
        >>> new_edges, removed
        ([(0, 1)], {1})
    """
    back_edges = find_back_edges(n, edges)

    new_edges: list[IndexEdge] = []
    for i, (src, tgt) in enumerate(edges):
        if i not in back_edges:
            new_edges.append((src, tgt))
        elif reverse and src != tgt:
            new_edges.append((tgt, src))

    return new_edges, back_edges


# =============================================================================
# Layer Assignment
# =============================================================================


def assign_layers_relaxation(
    n: int,
    edges: Sequence[IndexEdge],
    max_iterations: Optional[int] = None,
    policy: UnresolvedLayerPolicy = UnresolvedLayerPolicy.ZERO,
) -> tuple[list[int], list[int]]:
    """
    Assign layers by repeated relaxation over predecessors.

    Nodes without incoming edges (self-loops ignored) seed layer 0. Each pass
    visits nodes in index order and gives every node whose predecessors all
    have a layer ``max(predecessor layers) + 1``. Passes stop once nothing
    changes or after ``max_iterations`` passes, so cyclic input terminates.
    Remaining nodes are placed according to ``policy``; with ``ZERO`` a
    ``max_iterations`` below the graph's depth gives up the layer ordering of
    the edges it left unresolved.

    Args:
        n: Number of nodes
        edges: Directed (source, target) index pairs
        max_iterations: Pass limit. Defaults to ``n + 1``, enough to resolve
            any acyclic graph.
        policy: Fallback for nodes left unresolved

    Returns:
        Tuple of (layers, unresolved) where ``layers[i]`` is the layer of
        node ``i`` and ``unresolved`` lists the nodes placed by the fallback.

    Example:
        >>> assign_layers_relaxation(3, [(0, 2), (1, 2)])
        ([0, 0, 1], [])
    """
    cap = validate_iterations(n + 1 if max_iterations is None else max_iterations)

    predecessors: list[list[int]] = [[] for _ in range(n)]
    for src, tgt, _ in _valid_pairs(n, edges):
        if src != tgt:
            predecessors[tgt].append(src)

    layers = [0 if not predecessors[i] else -1 for i in range(n)]

    changed = True
    passes = 0
    while changed and passes < cap:
        changed = False
        passes += 1
        for i in range(n):
            if layers[i] >= 0:
                continue
            pred_layers = [layers[p] for p in predecessors[i]]
            if min(pred_layers) >= 0:
                layers[i] = max(pred_layers) + 1
                changed = True

    unresolved = [i for i in range(n) if layers[i] < 0]
    for i in _fallback_order(unresolved, predecessors):
        if policy is UnresolvedLayerPolicy.AFTER_RESOLVED_PREDECESSORS:
            resolved = [layers[p] for p in predecessors[i] if layers[p] >= 0]
            layers[i] = max(resolved) + 1 if resolved else 0
        else:
            layers[i] = 0

    return layers, unresolved


def _fallback_order(unresolved: list[int], predecessors: list[list[int]]) -> list[int]:
    """
    Order unresolved nodes so each comes after its unresolved predecessors.

    Kahn's algorithm over the unresolved subgraph, smallest index first. When
    every pending node still waits on another, the remaining nodes contain a
    cycle: walking predecessors from the smallest pending index finds a node
    on it, which is released to break the deadlock.
    """
    pending = set(unresolved)
    successors: dict[int, list[int]] = {i: [] for i in unresolved}
    waiting: dict[int, int] = {i: 0 for i in unresolved}
    for i in unresolved:
        for p in predecessors[i]:
            if p in pending:
                successors[p].append(i)
                waiting[i] += 1

    ready = [i for i in unresolved if waiting[i] == 0]
    heapq.heapify(ready)
    order: list[int] = []

    while pending:
        if not ready:
            node = min(pending)
            seen: set[int] = set()
            while node not in seen:
                seen.add(node)
                node = next(p for p in predecessors[node] if p in pending)
            heapq.heappush(ready, node)

        node = heapq.heappop(ready)
        if node not in pending:
            continue
        pending.discard(node)
        order.append(node)
        for succ in successors[node]:
            waiting[succ] -= 1
            if waiting[succ] == 0 and succ in pending:
                heapq.heappush(ready, succ)

    return order


def group_by_layer(layers: Sequence[int]) -> list[list[int]]:
    """
    Group node indices by layer, keeping index order within each layer.

    Returns:
        List indexed by layer; empty layers are kept as empty lists.
    """
    if not layers:
        return []
    grouped: list[list[int]] = [[] for _ in range(max(layers) + 1)]
    for node, layer in enumerate(layers):
        grouped[layer].append(node)
    return grouped


# =============================================================================
# Crossing Minimization
# =============================================================================


def minimize_crossings_barycenter(
    layers: list[list[int]],
    edges: Sequence[IndexEdge],
    iterations: int = 4,
) -> list[list[int]]:
    """
    Reorder nodes within layers using the barycenter heuristic.

    Even iterations sweep downward (ordering by upstream neighbors in the
    previous layer), odd iterations sweep upward (by downstream neighbors in
    the next layer). Nodes without neighbors in the reference layer keep
    their current position; ties keep their current relative order.

    Args:
        layers: Layers of node indices, e.g. from group_by_layer()
        edges: Directed (source, target) index pairs
        iterations: Number of sweeps

    Returns:
        Reordered copy of ``layers``.
    """
    result = [list(layer) for layer in layers]
    if len(result) < 2:
        return result

    node_layer: dict[int, int] = {}
    for layer_idx, layer in enumerate(result):
        for node in layer:
            node_layer[node] = layer_idx

    upstream: dict[int, list[int]] = {node: [] for node in node_layer}
    downstream: dict[int, list[int]] = {node: [] for node in node_layer}
    for src, tgt in edges:
        if src in node_layer and tgt in node_layer and src != tgt:
            downstream[src].append(tgt)
            upstream[tgt].append(src)

    position: dict[int, int] = {}
    for layer in result:
        for pos, node in enumerate(layer):
            position[node] = pos

    def order_layer(layer_idx: int, adj: dict[int, list[int]], ref_idx: int) -> None:
        keyed: list[tuple[float, int, int]] = []
        for node in result[layer_idx]:
            neighbors = [m for m in adj[node] if node_layer[m] == ref_idx]
            if neighbors:
                barycenter = sum(position[m] for m in neighbors) / len(neighbors)
            else:
                barycenter = float(position[node])
            keyed.append((barycenter, position[node], node))

        keyed.sort()
        result[layer_idx] = [node for _, _, node in keyed]
        for pos, node in enumerate(result[layer_idx]):
            position[node] = pos

    for i in range(iterations):
        if i % 2 == 0:
            for layer_idx in range(1, len(result)):
                order_layer(layer_idx, upstream, layer_idx - 1)
        else:
            for layer_idx in range(len(result) - 2, -1, -1):
                order_layer(layer_idx, downstream, layer_idx + 1)

    return result


def count_crossings(layers: list[list[int]], edges: Sequence[IndexEdge]) -> int:
    """
    Count edge crossings between adjacent layers.

    Edges spanning more than one layer, or within a layer, are not counted.

    Args:
        layers: Layers of node indices
        edges: Directed (source, target) index pairs

    Returns:
        Number of pairwise crossings.
    """
    node_layer: dict[int, int] = {}
    node_pos: dict[int, int] = {}
    for layer_idx, layer in enumerate(layers):
        for pos, node in enumerate(layer):
            node_layer[node] = layer_idx
            node_pos[node] = pos

    by_gap: dict[int, list[tuple[int, int]]] = {}
    for src, tgt in edges:
        if src not in node_layer or tgt not in node_layer:
            continue
        upper, lower = (src, tgt) if node_layer[src] < node_layer[tgt] else (tgt, src)
        if node_layer[lower] - node_layer[upper] != 1:
            continue
        by_gap.setdefault(node_layer[upper], []).append((node_pos[upper], node_pos[lower]))

    total = 0
    for pairs in by_gap.values():
        for i, (s1, t1) in enumerate(pairs):
            for s2, t2 in pairs[i + 1 :]:
                if (s1 - s2) * (t1 - t2) < 0:
                    total += 1

    return total


__all__ = [
    "UnresolvedLayerPolicy",
    "find_back_edges",
    "has_cycle",
    "remove_cycles",
    "assign_layers_relaxation",
    "group_by_layer",
    "minimize_crossings_barycenter",
    "count_crossings",
]
