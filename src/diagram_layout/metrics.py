"""
Layout and route quality metrics.

Provides quantitative measures used to check and compare results:
- Bends: Number of direction changes along a route
- Route length: Total Manhattan length of a route
- Orthogonality: Whether every segment is axis-aligned
- Clearance: Whether a route stays out of padded obstacles
- Centroid: Mean position of a point set

All metrics work with plain waypoint lists and rectangles, so they apply to
routes from any source.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from .geometry import Orientation, point_inside_rect, segment_crosses_rect, segment_orientation
from .types import Point, Rect

_EPS = 1e-9


def _distinct(waypoints: Sequence[Point]) -> list[Point]:
    """Drop consecutive duplicate points."""
    result: list[Point] = []
    for pt in waypoints:
        if result and abs(pt.x - result[-1].x) < _EPS and abs(pt.y - result[-1].y) < _EPS:
            continue
        result.append(pt)
    return result


def count_bends(waypoints: Sequence[Point]) -> int:
    """
    Count direction changes along a route.

    Zero-length segments are ignored. An empty or single-segment route has
    no bends.
    """
    points = _distinct(waypoints)
    bends = 0
    previous: Optional[Orientation] = None
    for a, b in zip(points, points[1:]):
        current = segment_orientation(a, b)
        if previous is not None and current is not previous:
            bends += 1
        previous = current
    return bends


def route_length(waypoints: Sequence[Point]) -> float:
    """Total Manhattan length of a route."""
    return float(
        sum(abs(b.x - a.x) + abs(b.y - a.y) for a, b in zip(waypoints, waypoints[1:]))
    )


def is_orthogonal(waypoints: Sequence[Point]) -> bool:
    """
    Check that consecutive waypoints differ in exactly one coordinate.

    Routes with fewer than two points are trivially orthogonal.
    """
    for a, b in zip(waypoints, waypoints[1:]):
        same_x = abs(a.x - b.x) < _EPS
        same_y = abs(a.y - b.y) < _EPS
        if same_x == same_y:
            return False
    return True


def route_clears_obstacles(
    waypoints: Sequence[Point],
    obstacles: Sequence[Rect],
    padding: float = 0.0,
) -> bool:
    """
    Check that a route never enters the interior of a padded obstacle.

    Both waypoints and the segments between them are tested. Touching the
    padded boundary is allowed.
    """
    padded = [obs.expanded(padding) for obs in obstacles]
    for rect in padded:
        if any(point_inside_rect(pt, rect) for pt in waypoints):
            return False
        if any(segment_crosses_rect(a, b, rect) for a, b in zip(waypoints, waypoints[1:])):
            return False
    return True


def centroid(points: Sequence[Point]) -> Point:
    """
    Mean position of a point set.

    Returns the origin for an empty sequence.
    """
    if not points:
        return Point(0.0, 0.0)
    coords = np.array([(p.x, p.y) for p in points], dtype=float)
    cx, cy = coords.mean(axis=0)
    return Point(float(cx), float(cy))


__all__ = [
    "count_bends",
    "route_length",
    "is_orthogonal",
    "route_clears_obstacles",
    "centroid",
]
