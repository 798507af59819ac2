"""
Routing grid built from obstacle boundaries.

Vertical lines come from every padded obstacle's left and right side plus
the anchor x coordinates; horizontal lines from top and bottom sides plus
the anchor y coordinates. Grid nodes are the line intersections. Because
every padded obstacle side is itself a grid line, the open span between two
neighbouring lines is either wholly inside an obstacle or wholly outside
one, so testing the span's midpoint is enough to decide whether a move along
it is clear.

A zero-thickness obstacle (a wall) has no interior to test against. Its
grid line instead blocks the nodes lying strictly within the wall's extent,
so a route can reach its ends but never pass through it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..geometry import Orientation
from ..types import Point, Rect


def _strictly_between(values: np.ndarray, low: float, high: float) -> np.ndarray:
    return (values > low) & (values < high)


def _node_mask(values: np.ndarray, low: float, high: float, other_extent: float) -> np.ndarray:
    """
    Lines whose nodes fall inside ``[low, high]`` along one axis.

    A degenerate axis of a rectangle with positive extent along the other
    axis covers its own line; otherwise only the open interval counts.
    """
    if low == high and other_extent > 0:
        return values == low
    return _strictly_between(values, low, high)


@dataclass
class RoutingGrid:
    """
    Grid graph for orthogonal routing.

    Attributes:
        xs: Sorted x coordinates of the vertical lines
        ys: Sorted y coordinates of the horizontal lines
        free: (len(xs), len(ys)) mask of usable grid nodes
        h_open: (len(xs) - 1, len(ys)) mask of clear horizontal spans
            between node (i, j) and node (i + 1, j)
        v_open: (len(xs), len(ys) - 1) mask of clear vertical spans
            between node (i, j) and node (i, j + 1)
    """

    xs: np.ndarray
    ys: np.ndarray
    free: np.ndarray
    h_open: np.ndarray
    v_open: np.ndarray

    @classmethod
    def build(
        cls,
        obstacles: Sequence[Rect],
        anchors: Sequence[Point],
        padding: float,
    ) -> RoutingGrid:
        """
        Build the grid for one edge.

        Args:
            obstacles: Obstacle rectangles (already filtered for the edge)
            anchors: Points that must be grid nodes, i.e. source and target
            padding: Clearance kept around every obstacle

        Returns:
            A RoutingGrid whose anchors are always free nodes.
        """
        padded = [obs.expanded(padding) for obs in obstacles]
        xs = np.unique(
            np.array(
                [r.left for r in padded] + [r.right for r in padded] + [a.x for a in anchors],
                dtype=float,
            )
        )
        ys = np.unique(
            np.array(
                [r.top for r in padded] + [r.bottom for r in padded] + [a.y for a in anchors],
                dtype=float,
            )
        )

        mid_xs = (xs[:-1] + xs[1:]) / 2
        mid_ys = (ys[:-1] + ys[1:]) / 2

        blocked = np.zeros((len(xs), len(ys)), dtype=bool)
        h_blocked = np.zeros((len(mid_xs), len(ys)), dtype=bool)
        v_blocked = np.zeros((len(xs), len(mid_ys)), dtype=bool)

        for rect in padded:
            in_x = _strictly_between(xs, rect.left, rect.right)
            in_y = _strictly_between(ys, rect.top, rect.bottom)
            blocked |= np.outer(
                _node_mask(xs, rect.left, rect.right, rect.height),
                _node_mask(ys, rect.top, rect.bottom, rect.width),
            )
            h_blocked |= np.outer(_strictly_between(mid_xs, rect.left, rect.right), in_y)
            v_blocked |= np.outer(in_x, _strictly_between(mid_ys, rect.top, rect.bottom))

        free = ~blocked
        grid = cls(xs=xs, ys=ys, free=free, h_open=~h_blocked, v_open=~v_blocked)
        for anchor in anchors:
            i, j = grid.index_of(anchor)
            free[i, j] = True
        return grid

    @property
    def shape(self) -> tuple[int, int]:
        """(number of vertical lines, number of horizontal lines)."""
        return (len(self.xs), len(self.ys))

    def index_of(self, point: Point) -> tuple[int, int]:
        """
        Grid indices of a point lying on two grid lines.

        Raises:
            KeyError: If the point is not a grid intersection
        """
        i = int(np.searchsorted(self.xs, point.x))
        j = int(np.searchsorted(self.ys, point.y))
        if i >= len(self.xs) or j >= len(self.ys) or self.xs[i] != point.x or self.ys[j] != point.y:
            raise KeyError(f"{point} is not a grid node")
        return i, j

    def point(self, i: int, j: int) -> Point:
        """World coordinates of grid node (i, j)."""
        return Point(float(self.xs[i]), float(self.ys[j]))

    def is_free(self, i: int, j: int) -> bool:
        """Check if grid node (i, j) exists and is usable."""
        nx, ny = self.shape
        return 0 <= i < nx and 0 <= j < ny and bool(self.free[i, j])

    def neighbors(self, i: int, j: int) -> list[tuple[int, int, Orientation]]:
        """
        Free neighbouring nodes reachable by a clear span.

        Order is fixed (right, left, down, up) so searches are repeatable.
        """
        result: list[tuple[int, int, Orientation]] = []
        nx, ny = self.shape
        if i + 1 < nx and self.h_open[i, j] and self.free[i + 1, j]:
            result.append((i + 1, j, Orientation.HORIZONTAL))
        if i > 0 and self.h_open[i - 1, j] and self.free[i - 1, j]:
            result.append((i - 1, j, Orientation.HORIZONTAL))
        if j + 1 < ny and self.v_open[i, j] and self.free[i, j + 1]:
            result.append((i, j + 1, Orientation.VERTICAL))
        if j > 0 and self.v_open[i, j - 1] and self.free[i, j - 1]:
            result.append((i, j - 1, Orientation.VERTICAL))
        return result


__all__ = ["RoutingGrid"]
