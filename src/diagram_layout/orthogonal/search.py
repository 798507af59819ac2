"""
A* search over a routing grid with a bend penalty.

Search states are (grid node, orientation of the segment that reached it),
so a path's bend count is part of its cost rather than an accident of which
predecessor was expanded first. States are dense integers and the open set
is a binary heap of ``(f, h, sequence, state)`` tuples: ties on ``f`` go to
the state closer to the goal, then to the earlier insertion, which makes
the result fully determined by the input.
"""

from __future__ import annotations

import heapq
from typing import Optional

from ..geometry import Orientation
from .grid import RoutingGrid

_INF = float("inf")

# Orientation slot within a node's state block; slot 0 is "no segment yet"
_SLOT = {Orientation.HORIZONTAL: 1, Orientation.VERTICAL: 2}
_SLOTS = 3


def find_grid_path(
    grid: RoutingGrid,
    start: tuple[int, int],
    goal: tuple[int, int],
    bend_penalty: float,
) -> Optional[list[tuple[int, int]]]:
    """
    Find the cheapest orthogonal path between two grid nodes.

    Move cost is the Manhattan length of the span plus ``bend_penalty``
    whenever the orientation differs from the previous span. The heuristic
    is the Manhattan distance to ``goal``, which never overestimates.

    Args:
        grid: Routing grid
        start: (i, j) of the source anchor
        goal: (i, j) of the target anchor
        bend_penalty: Extra cost per change of direction

    Returns:
        Grid nodes from start to goal inclusive, or None if unreachable.
    """
    xs = grid.xs.tolist()
    ys = grid.ys.tolist()
    ny = len(ys)
    gx, gy = xs[goal[0]], ys[goal[1]]

    def heuristic(i: int, j: int) -> float:
        return abs(xs[i] - gx) + abs(ys[j] - gy)

    n_states = len(xs) * ny * _SLOTS
    g_score = [_INF] * n_states
    parent = [-1] * n_states
    closed = bytearray(n_states)

    start_state = (start[0] * ny + start[1]) * _SLOTS
    g_score[start_state] = 0.0
    h0 = heuristic(*start)
    heap: list[tuple[float, float, int, int]] = [(h0, h0, 0, start_state)]
    sequence = 0

    while heap:
        _, _, _, state = heapq.heappop(heap)
        if closed[state]:
            continue
        closed[state] = 1

        node, slot = divmod(state, _SLOTS)
        i, j = divmod(node, ny)
        if (i, j) == goal:
            return _reconstruct(state, parent, ny)

        base = g_score[state]
        for ni, nj, orientation in grid.neighbors(i, j):
            next_slot = _SLOT[orientation]
            cost = base + abs(xs[ni] - xs[i]) + abs(ys[nj] - ys[j])
            if slot and slot != next_slot:
                cost += bend_penalty
            next_state = (ni * ny + nj) * _SLOTS + next_slot
            if closed[next_state] or cost >= g_score[next_state]:
                continue
            g_score[next_state] = cost
            parent[next_state] = state
            h = heuristic(ni, nj)
            sequence += 1
            heapq.heappush(heap, (cost + h, h, sequence, next_state))

    return None


def _reconstruct(state: int, parent: list[int], ny: int) -> list[tuple[int, int]]:
    path: list[tuple[int, int]] = []
    while state != -1:
        path.append(divmod(state // _SLOTS, ny))
        state = parent[state]
    path.reverse()
    return path


__all__ = ["find_grid_path"]
