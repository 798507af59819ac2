"""Rectangle, point and distance helpers shared by layout and routing."""

from __future__ import annotations

from enum import Enum

from .types import Point, Rect

_EPS = 1e-9


class Orientation(Enum):
    """Orientation of an axis-aligned segment."""

    HORIZONTAL = "h"
    VERTICAL = "v"


def manhattan(a: Point, b: Point) -> float:
    """Manhattan (L1) distance between two points."""
    return abs(a.x - b.x) + abs(a.y - b.y)


def segment_orientation(a: Point, b: Point) -> Orientation:
    """
    Orientation of the segment a -> b.

    Segments with equal y are horizontal; everything else counts as
    vertical, which matches how zero-length steps never occur on the grid.
    """
    if abs(a.y - b.y) < _EPS:
        return Orientation.HORIZONTAL
    return Orientation.VERTICAL


def point_inside_rect(point: Point, rect: Rect) -> bool:
    """True if ``point`` lies strictly inside ``rect`` (boundary excluded)."""
    return rect.left < point.x < rect.right and rect.top < point.y < rect.bottom


def segment_crosses_rect(p1: Point, p2: Point, rect: Rect) -> bool:
    """
    Check if an axis-aligned segment passes through the interior of ``rect``.

    Segments running along the boundary do not count as crossing.
    Diagonal segments are never reported.
    """
    if abs(p1.x - p2.x) < _EPS:
        min_y = min(p1.y, p2.y)
        max_y = max(p1.y, p2.y)
        return (rect.left < p1.x < rect.right) and (min_y < rect.bottom) and (max_y > rect.top)
    if abs(p1.y - p2.y) < _EPS:
        min_x = min(p1.x, p2.x)
        max_x = max(p1.x, p2.x)
        return (rect.top < p1.y < rect.bottom) and (min_x < rect.right) and (max_x > rect.left)
    return False


def rect_boundary_point(rect: Rect, toward: Point) -> Point:
    """
    Point where the ray from the rectangle center toward ``toward`` exits it.

    The direction vector is scaled by the smaller of the two factors needed
    to reach a vertical or horizontal side. When ``toward`` is the center
    itself the bottom midpoint is returned. A zero-size rectangle yields its
    center.
    """
    center = rect.center
    dx = toward.x - center.x
    dy = toward.y - center.y

    if dx == 0 and dy == 0:
        return Point(center.x, rect.bottom)

    hw = rect.width / 2
    hh = rect.height / 2
    scale_x = hw / abs(dx) if dx != 0 else float("inf")
    scale_y = hh / abs(dy) if dy != 0 else float("inf")
    scale = min(scale_x, scale_y)

    return Point(center.x + dx * scale, center.y + dy * scale)


def rects_overlap(a: Rect, b: Rect) -> bool:
    """True if two rectangles share interior area."""
    return a.left < b.right and b.left < a.right and a.top < b.bottom and b.top < a.bottom


__all__ = [
    "Orientation",
    "manhattan",
    "segment_orientation",
    "point_inside_rect",
    "segment_crosses_rect",
    "rect_boundary_point",
    "rects_overlap",
]
