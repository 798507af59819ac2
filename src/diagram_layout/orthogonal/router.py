"""Obstacle-avoiding orthogonal edge routing.

Each edge is routed on its own:
1. Its source and target rectangles are removed from the obstacle set.
2. Anchors are placed where the center-to-center ray leaves each rectangle.
3. A grid is built from the padded obstacle sides and the anchor lines.
4. A* with a bend penalty searches the grid.
5. Collinear interior waypoints are collapsed, leaving corners only.

A route that cannot be found is returned empty; callers treat that as the
signal to draw a simpler connector.
"""

from __future__ import annotations

from typing import Any, Sequence

from typing_extensions import Self

from ..base import _lookup, coerce_rect
from ..geometry import rect_boundary_point, segment_orientation
from ..types import Point, Rect, RectLike
from ..validation import ValidationError, validate_non_negative, validate_unique_edge_ids
from .grid import RoutingGrid
from .search import find_grid_path
from .types import Route, RouteRequest

DEFAULT_PADDING = 20.0
DEFAULT_BEND_PENALTY = 5.0


def compute_anchors(source_rect: Rect, target_rect: Rect) -> tuple[Point, Point]:
    """Boundary points facing each other along the center-to-center line."""
    source_anchor = rect_boundary_point(source_rect, target_rect.center)
    target_anchor = rect_boundary_point(target_rect, source_rect.center)
    return source_anchor, target_anchor


def simplify_path(points: Sequence[Point]) -> list[Point]:
    """
    Collapse collinear runs into corner-only waypoints.

    Consecutive duplicates are removed first. The first and last points are
    always kept.
    """
    deduped: list[Point] = []
    for pt in points:
        if deduped and pt == deduped[-1]:
            continue
        deduped.append(pt)

    if len(deduped) <= 2:
        return deduped

    simplified = [deduped[0]]
    for prev, curr, nxt in zip(deduped, deduped[1:], deduped[2:]):
        if segment_orientation(prev, curr) is not segment_orientation(curr, nxt):
            simplified.append(curr)
    simplified.append(deduped[-1])
    return simplified


def coerce_request(edge_data: Any) -> RouteRequest:
    """
    Convert a RouteRequest, dict, or generic object into a RouteRequest.

    Raises:
        ValidationError: If the id or either rectangle is missing
    """
    if isinstance(edge_data, RouteRequest):
        return edge_data
    edge_id = _lookup(edge_data, ("id",), None)
    source = _lookup(edge_data, ("source_rect", "sourceRect"), None)
    target = _lookup(edge_data, ("target_rect", "targetRect"), None)
    if edge_id is None or source is None or target is None:
        raise ValidationError(
            f"Routed edge needs an id, a source_rect and a target_rect: {edge_data!r}"
        )
    return RouteRequest(id=edge_id, source_rect=coerce_rect(source), target_rect=coerce_rect(target))


class OrthogonalRouter:
    """
    Routes edges as axis-aligned polylines around obstacle rectangles.

    The router holds configuration only; every call builds its own grid and
    search state.

    Example:
        router = OrthogonalRouter(padding=20)
        routes = router.route_all(
            [{"id": "e1", "source_rect": a, "target_rect": b}],
            obstacles=[a, b, c],
        )
        routes["e1"].waypoints
    """

    def __init__(
        self,
        *,
        padding: float = DEFAULT_PADDING,
        bend_penalty: float = DEFAULT_BEND_PENALTY,
    ) -> None:
        """
        Initialize router.

        Args:
            padding: Clearance kept between routes and obstacles.
            bend_penalty: Cost added per change of direction. Larger values
                trade path length for fewer bends.
        """
        self._padding: float = validate_non_negative("padding", padding)
        self._bend_penalty: float = validate_non_negative("bend_penalty", bend_penalty)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def padding(self) -> float:
        """Get clearance around obstacles."""
        return self._padding

    @padding.setter
    def padding(self, value: float) -> None:
        self._padding = validate_non_negative("padding", value)

    @property
    def bend_penalty(self) -> float:
        """Get cost added per change of direction."""
        return self._bend_penalty

    @bend_penalty.setter
    def bend_penalty(self, value: float) -> None:
        self._bend_penalty = validate_non_negative("bend_penalty", value)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self, edges: Sequence[Any], obstacles: Sequence[RectLike] = ()) -> Self:
        """
        Validate a batch without routing it.

        Returns:
            self (for chaining)

        Raises:
            ValidationError: If an edge is missing its id or a rectangle.
            InvalidNodeError: If a rectangle has invalid geometry.
            DuplicateEdgeError: If two edges share an id.
        """
        validate_unique_edge_ids(coerce_request(edge).id for edge in edges)
        for obs in obstacles:
            coerce_rect(obs)
        return self

    # -------------------------------------------------------------------------
    # Routing
    # -------------------------------------------------------------------------

    def route(
        self,
        source_rect: RectLike,
        target_rect: RectLike,
        obstacles: Sequence[RectLike] = (),
    ) -> list[Point]:
        """
        Route a single edge.

        Args:
            source_rect: Rectangle the edge leaves
            target_rect: Rectangle the edge enters
            obstacles: Rectangles to avoid; entries sharing an id with either
                endpoint are ignored

        Returns:
            Corner waypoints from source boundary to target boundary, or an
            empty list if every path is blocked.
        """
        return self._route(
            coerce_rect(source_rect),
            coerce_rect(target_rect),
            [coerce_rect(obs) for obs in obstacles],
        )

    def route_all(
        self,
        edges: Sequence[Any],
        obstacles: Sequence[RectLike] = (),
    ) -> dict[str, Route]:
        """
        Route a batch of edges against a shared obstacle set.

        Args:
            edges: RouteRequest objects or dicts with id, source_rect and
                target_rect
            obstacles: Rectangles to avoid, tagged with ids

        Returns:
            Route per edge id, in input order.

        Raises:
            DuplicateEdgeError: If two edges share an id.
        """
        requests = [coerce_request(edge) for edge in edges]
        validate_unique_edge_ids(req.id for req in requests)
        rects = [coerce_rect(obs) for obs in obstacles]

        return {
            req.id: Route(req.id, self._route(req.source_rect, req.target_rect, rects))
            for req in requests
        }

    def _route(self, source: Rect, target: Rect, obstacles: list[Rect]) -> list[Point]:
        own_ids = {rect.id for rect in (source, target) if rect.id is not None}
        relevant = [obs for obs in obstacles if obs.id is None or obs.id not in own_ids]

        start, goal = compute_anchors(source, target)
        grid = RoutingGrid.build(relevant, (start, goal), self._padding)
        path = find_grid_path(grid, grid.index_of(start), grid.index_of(goal), self._bend_penalty)
        if path is None:
            return []
        return simplify_path([grid.point(i, j) for i, j in path])


def compute_orthogonal_routes(
    edges: Sequence[Any],
    obstacles: Sequence[RectLike] = (),
    padding: float = DEFAULT_PADDING,
    bend_penalty: float = DEFAULT_BEND_PENALTY,
) -> dict[str, Route]:
    """
    Compute obstacle-avoiding orthogonal routes for a set of edges.

    Convenience wrapper around ``OrthogonalRouter(...).route_all()``.

    Args:
        edges: Edges with id, source_rect and target_rect
        obstacles: Rectangles to avoid, tagged with ids
        padding: Clearance kept around obstacles
        bend_penalty: Cost per change of direction

    Returns:
        Route per edge id; ``Route.waypoints`` is empty when no path exists.
    """
    router = OrthogonalRouter(padding=padding, bend_penalty=bend_penalty)
    return router.route_all(edges, obstacles)


__all__ = [
    "DEFAULT_PADDING",
    "DEFAULT_BEND_PENALTY",
    "OrthogonalRouter",
    "compute_anchors",
    "compute_orthogonal_routes",
    "coerce_request",
    "simplify_path",
]
