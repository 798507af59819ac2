"""Tests for shared types, geometry helpers and input coercion."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from diagram_layout import (
    Edge,
    FlowDirection,
    Node,
    Point,
    Rect,
    coerce_edge,
    coerce_node,
    coerce_rect,
)
from diagram_layout.geometry import (
    Orientation,
    manhattan,
    point_inside_rect,
    rect_boundary_point,
    rects_overlap,
    segment_crosses_rect,
    segment_orientation,
)
from diagram_layout.validation import InvalidNodeError, ValidationError

# =============================================================================
# Types
# =============================================================================


class TestTypes:
    def test_rect_sides_and_center(self) -> None:
        rect = Rect(10, 20, 100, 50)
        assert (rect.left, rect.right, rect.top, rect.bottom) == (10, 110, 20, 70)
        assert rect.center == Point(60, 45)

    def test_rect_expanded_keeps_id(self) -> None:
        grown = Rect(10, 20, 100, 50, "n").expanded(5)
        assert grown == Rect(5, 15, 110, 60, "n")

    def test_node_rect_and_center(self) -> None:
        node = Node("a", x=0, y=0, width=200, height=100)
        assert node.center == Point(100, 50)
        assert node.rect == Rect(0, 0, 200, 100, "a")

    def test_edge_self_loop(self) -> None:
        assert Edge("a", "a").is_self_loop
        assert not Edge("a", "b").is_self_loop
        assert repr(Edge("a", "b")) == "Edge(a -> b)"

    def test_direction_flags(self) -> None:
        assert not FlowDirection.TB.is_horizontal
        assert FlowDirection.LR.is_horizontal
        assert FlowDirection.BT.is_reversed
        assert FlowDirection.RL.is_reversed
        assert not FlowDirection.LR.is_reversed

    def test_point_as_tuple(self) -> None:
        assert Point(1.5, -2).as_tuple() == (1.5, -2)


# =============================================================================
# Geometry
# =============================================================================


class TestGeometry:
    def test_manhattan(self) -> None:
        assert manhattan(Point(0, 0), Point(3, -4)) == 7

    def test_segment_orientation(self) -> None:
        assert segment_orientation(Point(0, 5), Point(10, 5)) is Orientation.HORIZONTAL
        assert segment_orientation(Point(0, 5), Point(0, 10)) is Orientation.VERTICAL

    def test_point_inside_excludes_boundary(self) -> None:
        rect = Rect(0, 0, 10, 10)
        assert point_inside_rect(Point(5, 5), rect)
        assert not point_inside_rect(Point(0, 5), rect)
        assert not point_inside_rect(Point(10, 10), rect)
        assert not point_inside_rect(Point(20, 5), rect)

    @pytest.mark.parametrize(
        ("p1", "p2", "expected"),
        [
            (Point(-5, 5), Point(15, 5), True),  # horizontal through
            (Point(5, -5), Point(5, 15), True),  # vertical through
            (Point(-5, 0), Point(15, 0), False),  # along top side
            (Point(10, -5), Point(10, 15), False),  # along right side
            (Point(-5, 5), Point(0, 5), False),  # stops at the side
            (Point(-5, 20), Point(15, 20), False),  # passes below
            (Point(-5, -5), Point(15, 15), False),  # diagonal
        ],
    )
    def test_segment_crosses_rect(self, p1: Point, p2: Point, expected: bool) -> None:
        assert segment_crosses_rect(p1, p2, Rect(0, 0, 10, 10)) is expected

    def test_boundary_point_right_side(self) -> None:
        assert rect_boundary_point(Rect(0, 0, 100, 100), Point(500, 50)) == Point(100, 50)

    def test_boundary_point_top_side(self) -> None:
        assert rect_boundary_point(Rect(0, 0, 100, 100), Point(50, -300)) == Point(50, 0)

    def test_boundary_point_diagonal(self) -> None:
        # Wide rectangle: the ray reaches the bottom side first
        pt = rect_boundary_point(Rect(0, 0, 200, 100), Point(300, 250))
        assert pt.y == pytest.approx(100)
        assert pt.x == pytest.approx(150)

    def test_boundary_point_coincident_centers(self) -> None:
        assert rect_boundary_point(Rect(0, 0, 100, 40), Point(50, 20)) == Point(50, 40)

    def test_boundary_point_zero_size(self) -> None:
        assert rect_boundary_point(Rect(7, 8, 0, 0), Point(100, 100)) == Point(7, 8)

    def test_rects_overlap(self) -> None:
        a = Rect(0, 0, 10, 10)
        assert rects_overlap(a, Rect(5, 5, 10, 10))
        assert not rects_overlap(a, Rect(10, 0, 10, 10))  # touching
        assert not rects_overlap(a, Rect(30, 30, 5, 5))


# =============================================================================
# Input Coercion
# =============================================================================


class TestCoercion:
    def test_node_from_dict(self) -> None:
        node = coerce_node({"id": "a", "x": 1, "y": 2, "width": 3, "height": 4})
        assert node == Node("a", 1.0, 2.0, 3.0, 4.0)

    def test_node_from_object(self) -> None:
        obj = SimpleNamespace(id="a", x=5, y=6, width=7, height=8)
        assert coerce_node(obj) == Node("a", 5.0, 6.0, 7.0, 8.0)

    def test_node_missing_geometry_defaults_to_zero(self) -> None:
        assert coerce_node({"id": "a"}) == Node("a")

    def test_node_missing_id(self) -> None:
        with pytest.raises(InvalidNodeError, match="missing an id"):
            coerce_node({"x": 0})

    @pytest.mark.parametrize(
        "data",
        [
            {"source_id": "a", "target_id": "b"},
            {"sourceId": "a", "targetId": "b"},
            {"source": "a", "target": "b"},
            SimpleNamespace(source_id="a", target_id="b"),
        ],
    )
    def test_edge_spellings(self, data: object) -> None:
        edge = coerce_edge(data)
        assert (edge.source_id, edge.target_id) == ("a", "b")

    def test_edge_ports_and_id(self) -> None:
        edge = coerce_edge(
            {"id": "e", "sourceId": "a", "targetId": "b", "sourcePortId": "flow-out"}
        )
        assert edge.id == "e"
        assert edge.source_port == "flow-out"
        assert edge.target_port is None

    def test_edge_passthrough(self) -> None:
        edge = Edge("a", "b")
        assert coerce_edge(edge) is edge

    def test_edge_missing_target(self) -> None:
        with pytest.raises(ValidationError):
            coerce_edge({"source_id": "a"})

    def test_rect_from_node_keeps_id(self) -> None:
        rect = coerce_rect(Node("n", 1, 2, 3, 4))
        assert rect == Rect(1, 2, 3, 4, "n")

    def test_rect_from_dict(self) -> None:
        assert coerce_rect({"x": 1, "y": 2, "width": 3, "height": 4}) == Rect(1, 2, 3, 4)

    def test_rect_rejects_negative_size(self) -> None:
        with pytest.raises(InvalidNodeError):
            coerce_rect(Rect(0, 0, -1, 5))
