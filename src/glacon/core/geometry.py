"""Geometric operations for outline normalization.

This module provides the small point utilities shared by the stroker and
the path normalizer:
- Distances and point matching with tolerance
- Segment flattening into polylines

All functions are pure and operate on plain (x, y) tuples.
"""

import math

from glacon.core._bezier import flatten_cubic as _flatten_cubic
from glacon.core._bezier import flatten_quadratic as _flatten_quadratic
from glacon.domain import Segment

Pt = tuple[float, float]


def distance(a: Pt, b: Pt) -> float:
    """Euclidean distance between two points.

    Examples:
        >>> distance((0.0, 0.0), (3.0, 4.0))
        5.0
    """
    return math.hypot(b[0] - a[0], b[1] - a[1])


def points_match(a: Pt, b: Pt, tolerance: float) -> bool:
    """Check whether two points coincide within tolerance."""
    return distance(a, b) <= tolerance


def flatten_segment(segment: Segment, tolerance: float) -> list[Pt]:
    """Approximate a segment by a polyline.

    Args:
        segment: Line, quadratic or cubic segment
        tolerance: Maximum distance between polyline and curve

    Returns:
        Polyline points including both endpoints
    """
    if segment.is_line:
        return [segment.start, segment.end]
    if segment.is_quadratic:
        return _flatten_quadratic(list(segment.points), tolerance)
    return _flatten_cubic(list(segment.points), tolerance)
