"""Internal Bezier curve helpers.

Flattening (used by the stroker) and cubic-to-quadratic degree reduction
(used by the path normalizer). Not intended for public use.
"""

import logging
import math

from fontTools.cu2qu import curve_to_quadratic
from fontTools.cu2qu.errors import ApproxNotFoundError
from fontTools.misc.bezierTools import splitCubicAtT

Pt = tuple[float, float]

logger = logging.getLogger(__name__)

MAX_DEPTH = 16


def _midpoint(a: Pt, b: Pt) -> Pt:
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)


def _distance_to_line(point: Pt, start: Pt, end: Pt) -> float:
    """Distance from point to the infinite line through start and end."""
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    length = math.hypot(dx, dy)
    if length < 1e-12:
        return math.hypot(point[0] - start[0], point[1] - start[1])
    return abs((point[0] - start[0]) * dy - (point[1] - start[1]) * dx) / length


def flatten_quadratic(points: list[Pt], tolerance: float, depth: int = 0) -> list[Pt]:
    """Flatten a quadratic Bezier curve using recursive subdivision.

    Args:
        points: List of 3 control points [p0, p1, p2]
        tolerance: Maximum distance from true curve

    Returns:
        List of points approximating the curve, endpoints included
    """
    p0, p1, p2 = points

    # The curve midpoint lies halfway between the control point and the chord
    deviation = _distance_to_line(p1, p0, p2) / 2

    if deviation <= tolerance or depth >= MAX_DEPTH:
        return [p0, p2]

    # Subdivide at t=0.5
    q1 = _midpoint(p0, p1)
    r1 = _midpoint(p1, p2)
    mid = _midpoint(q1, r1)

    left = flatten_quadratic([p0, q1, mid], tolerance, depth + 1)
    right = flatten_quadratic([mid, r1, p2], tolerance, depth + 1)

    # Combine, avoiding duplicate midpoint
    return left[:-1] + right


def flatten_cubic(points: list[Pt], tolerance: float, depth: int = 0) -> list[Pt]:
    """Flatten a cubic Bezier curve using recursive subdivision.

    Uses De Casteljau's algorithm for subdivision. The curve stays within
    3/4 of the control polygon's distance from the chord.

    Args:
        points: List of 4 control points [p0, p1, p2, p3]
        tolerance: Maximum distance from true curve

    Returns:
        List of points approximating the curve, endpoints included
    """
    p0, p1, p2, p3 = points

    deviation = 0.75 * max(_distance_to_line(p1, p0, p3), _distance_to_line(p2, p0, p3))

    if deviation <= tolerance or depth >= MAX_DEPTH:
        return [p0, p3]

    # First level
    q1 = _midpoint(p0, p1)
    q2 = _midpoint(p1, p2)
    q3 = _midpoint(p2, p3)

    # Second level
    r1 = _midpoint(q1, q2)
    r2 = _midpoint(q2, q3)

    # Third level (midpoint)
    mid = _midpoint(r1, r2)

    left = flatten_cubic([p0, q1, r1, mid], tolerance, depth + 1)
    right = flatten_cubic([mid, r2, q3, p3], tolerance, depth + 1)

    return left[:-1] + right


def cubic_to_quadratics(points: list[Pt], tolerance: float, depth: int = 0) -> list[tuple[Pt, Pt]]:
    """Replace a cubic curve with quadratic curves.

    cu2qu looks for the quadratic spline with the fewest segments that stays
    within tolerance of the cubic. Cubics it cannot approximate are split in
    half and each half is reduced on its own.

    Args:
        points: List of 4 control points [p0, p1, p2, p3]
        tolerance: Maximum distance from the cubic curve

    Returns:
        List of (control, end) pairs, one per quadratic segment
    """
    try:
        spline = curve_to_quadratic(points, tolerance)
    except ApproxNotFoundError:
        if depth >= MAX_DEPTH:
            # Single quadratic through the cubic's midpoint tangent estimate
            p0, p1, p2, p3 = points
            control = (
                (3 * (p1[0] + p2[0]) - p0[0] - p3[0]) / 4,
                (3 * (p1[1] + p2[1]) - p0[1] - p3[1]) / 4,
            )
            return [(control, p3)]

        logger.debug("Subdividing cubic for quadratic approximation", extra={"depth": depth})
        left, right = splitCubicAtT(*points, 0.5)
        return cubic_to_quadratics(list(left), tolerance, depth + 1) + cubic_to_quadratics(
            list(right), tolerance, depth + 1
        )

    # The spline has implied on-curve points halfway between consecutive
    # off-curve points; make them explicit.
    controls = [tuple(p) for p in spline[1:-1]]
    end = tuple(spline[-1])
    quads: list[tuple[Pt, Pt]] = []
    for i, control in enumerate(controls):
        if i + 1 < len(controls):
            quads.append((control, _midpoint(control, controls[i + 1])))
        else:
            quads.append((control, end))
    return quads
