"""Tests for layout and route quality metrics."""

import pytest

from diagram_layout import Point, Rect
from diagram_layout.metrics import (
    centroid,
    count_bends,
    is_orthogonal,
    route_clears_obstacles,
    route_length,
)


def pts(*coords):
    return [Point(x, y) for x, y in coords]


class TestCountBends:
    """Tests for bend counting."""

    def test_empty_route(self):
        """Empty route has no bends."""
        assert count_bends([]) == 0

    def test_straight_route(self):
        """Straight segments have no bends, even when split."""
        assert count_bends(pts((0, 0), (10, 0), (20, 0))) == 0

    def test_l_shape(self):
        """L-shaped route has one bend."""
        assert count_bends(pts((0, 0), (10, 0), (10, 10))) == 1

    def test_z_shape(self):
        """Z-shaped route has two bends."""
        assert count_bends(pts((0, 0), (0, 5), (10, 5), (10, 10))) == 2

    def test_zero_length_segments_ignored(self):
        """Repeated points do not add bends."""
        assert count_bends(pts((0, 0), (10, 0), (10, 0), (10, 10))) == 1


class TestRouteLength:
    """Tests for Manhattan route length."""

    def test_empty_and_single(self):
        assert route_length([]) == 0.0
        assert route_length(pts((3, 3))) == 0.0

    def test_sums_segments(self):
        assert route_length(pts((0, 0), (10, 0), (10, 25))) == pytest.approx(35)


class TestIsOrthogonal:
    """Tests for orthogonality check."""

    def test_axis_aligned(self):
        assert is_orthogonal(pts((0, 0), (0, 10), (5, 10))) is True

    def test_diagonal(self):
        assert is_orthogonal(pts((0, 0), (5, 5))) is False

    def test_trivial(self):
        assert is_orthogonal([]) is True
        assert is_orthogonal(pts((1, 2))) is True


class TestClearance:
    """Tests for obstacle clearance."""

    def test_route_through_obstacle(self):
        """Segment crossing the interior fails."""
        route = pts((0, 50), (200, 50))
        assert route_clears_obstacles(route, [Rect(50, 0, 100, 100)]) is False

    def test_route_along_boundary(self):
        """Running along the boundary is allowed."""
        route = pts((0, 0), (200, 0))
        assert route_clears_obstacles(route, [Rect(50, 0, 100, 100)]) is True

    def test_padding_widens_obstacle(self):
        """A route clear of the obstacle can still violate its padding."""
        route = pts((0, -10), (200, -10))
        obstacle = Rect(50, 0, 100, 100)
        assert route_clears_obstacles(route, [obstacle]) is True
        assert route_clears_obstacles(route, [obstacle], padding=20) is False

    def test_single_point_inside(self):
        """A lone waypoint inside an obstacle fails."""
        assert route_clears_obstacles(pts((75, 50)), [Rect(50, 0, 100, 100)]) is False

    def test_no_obstacles(self):
        assert route_clears_obstacles(pts((0, 0), (10, 0)), []) is True


class TestCentroid:
    """Tests for centroid computation."""

    def test_empty(self):
        """Empty input returns the origin."""
        assert centroid([]) == Point(0.0, 0.0)

    def test_mean(self):
        c = centroid(pts((0, 0), (10, 0), (10, 20), (0, 20)))
        assert c.x == pytest.approx(5)
        assert c.y == pytest.approx(10)

    def test_returns_python_floats(self):
        c = centroid(pts((1, 2)))
        assert type(c.x) is float
        assert type(c.y) is float
