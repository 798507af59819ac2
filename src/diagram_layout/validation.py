"""
Input validation utilities for diagram layout and routing.

Provides centralized validation functions for nodes, edges, directions,
and numeric options. Raises descriptive exceptions on invalid input.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Optional

from .types import FlowDirection


class ValidationError(ValueError):
    """Base exception for layout validation errors."""

    pass


class InvalidNodeError(ValidationError):
    """Raised when a node or rectangle is malformed."""

    pass


class DuplicateNodeError(ValidationError):
    """Raised when two nodes share an id."""

    pass


class DuplicateEdgeError(ValidationError):
    """Raised when two routed edges share an id."""

    pass


class InvalidDirectionError(ValidationError):
    """Raised when a flow direction is not one of TB, BT, LR, RL."""

    pass


def validate_direction(direction: Any) -> FlowDirection:
    """
    Validate and normalize a flow direction.

    Args:
        direction: FlowDirection member or its string value (case-insensitive)

    Returns:
        The matching FlowDirection

    Raises:
        InvalidDirectionError: If direction is not recognized
    """
    if isinstance(direction, FlowDirection):
        return direction
    if isinstance(direction, str):
        try:
            return FlowDirection(direction.upper())
        except ValueError:
            pass
    valid = ", ".join(d.value for d in FlowDirection)
    raise InvalidDirectionError(f"direction must be one of {valid}, got {direction!r}")


def validate_dimensions(
    node_id: Any, x: float, y: float, width: float, height: float
) -> tuple[float, float, float, float]:
    """
    Validate rectangle coordinates and size.

    Zero-size rectangles are accepted; negative or non-finite values are not.

    Returns:
        (x, y, width, height) as floats

    Raises:
        InvalidNodeError: If any value is non-finite or a size is negative
    """
    values = (float(x), float(y), float(width), float(height))
    if not all(math.isfinite(v) for v in values):
        raise InvalidNodeError(f"Node {node_id!r}: coordinates must be finite, got {values}")
    if values[2] < 0 or values[3] < 0:
        raise InvalidNodeError(
            f"Node {node_id!r}: width and height must be >= 0, got "
            f"({values[2]}, {values[3]})"
        )
    return values


def validate_unique_node_ids(ids: Iterable[str]) -> None:
    """
    Check that node ids are unique.

    Raises:
        DuplicateNodeError: Listing every repeated id
    """
    duplicates = _find_duplicates(ids)
    if duplicates:
        raise DuplicateNodeError(f"Duplicate node ids: {', '.join(map(repr, duplicates))}")


def validate_unique_edge_ids(ids: Iterable[Optional[str]]) -> None:
    """
    Check that edge ids are unique.

    Raises:
        DuplicateEdgeError: Listing every repeated id
    """
    duplicates = _find_duplicates(ids)
    if duplicates:
        raise DuplicateEdgeError(f"Duplicate edge ids: {', '.join(map(repr, duplicates))}")


def validate_iterations(iterations: int) -> int:
    """
    Validate iteration count is positive.

    Args:
        iterations: Number of iterations

    Returns:
        Validated iteration count

    Raises:
        ValidationError: If iterations < 1
    """
    if iterations < 1:
        raise ValidationError(f"iterations must be >= 1, got {iterations}")
    return int(iterations)


def validate_non_negative(name: str, value: float) -> float:
    """
    Validate that a numeric option is finite and >= 0.

    Raises:
        ValidationError: If value is negative or non-finite
    """
    value = float(value)
    if not math.isfinite(value) or value < 0:
        raise ValidationError(f"{name} must be a finite number >= 0, got {value}")
    return value


def validate_positive(name: str, value: float) -> float:
    """
    Validate that a numeric option is finite and > 0.

    Raises:
        ValidationError: If value is not strictly positive
    """
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise ValidationError(f"{name} must be a finite number > 0, got {value}")
    return value


def _find_duplicates(ids: Iterable[Any]) -> list[Any]:
    seen: set[Any] = set()
    duplicates: list[Any] = []
    for item in ids:
        if item in seen and item not in duplicates:
            duplicates.append(item)
        seen.add(item)
    return duplicates


__all__ = [
    "ValidationError",
    "InvalidNodeError",
    "DuplicateNodeError",
    "DuplicateEdgeError",
    "InvalidDirectionError",
    "validate_direction",
    "validate_dimensions",
    "validate_unique_node_ids",
    "validate_unique_edge_ids",
    "validate_iterations",
    "validate_non_negative",
    "validate_positive",
]
