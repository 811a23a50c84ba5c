"""Stroke-to-outline conversion.

Converts a stroked path into filled outline rings with shapely. Curves are
flattened to polylines first and each polyline is buffered by half the
stroke width, so the outline only contains lines.

Ring layout:
- Open sub-path: the exterior ring of the buffered shape, followed by one
  ring per hole left where the stroke crosses itself.
- Closed sub-path: one ring made of the exterior, a "seam" line to the
  nearest vertex of the interior, the interior and the closing line back
  over the seam.

Exterior and interior rings wind in opposite directions, so holes stay
open and the seam edges cancel out under the nonzero fill rule.
"""

import logging

from shapely.geometry import LinearRing, LineString, MultiPolygon, Point, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.geometry.polygon import orient
from shapely.ops import substring

from glacon.core.geometry import distance, flatten_segment
from glacon.domain import BezierPath, LineCap, LineJoin, Stroke

Pt = tuple[float, float]

logger = logging.getLogger(__name__)

# Points closer than this are merged when building polylines
EPSILON = 1e-9

# Segments per quarter circle in round joins and caps
QUAD_SEGMENTS = 8

CAP_STYLES = {
    LineCap.BUTT: "flat",
    LineCap.ROUND: "round",
    LineCap.SQUARE: "square",
}

JOIN_STYLES = {
    LineJoin.MITER: "mitre",
    LineJoin.ROUND: "round",
    LineJoin.BEVEL: "bevel",
}


def _buffer(geometry: BaseGeometry, half_width: float, stroke: Stroke) -> list[Polygon]:
    """Buffer a centerline, exteriors counter-clockwise and holes clockwise."""
    buffered = geometry.buffer(
        half_width,
        quad_segs=QUAD_SEGMENTS,
        cap_style=CAP_STYLES[stroke.cap],
        join_style=JOIN_STYLES[stroke.join],
        mitre_limit=stroke.miter_limit,
    )
    if buffered.is_empty:
        return []
    if isinstance(buffered, Polygon):
        polygons = [buffered]
    elif isinstance(buffered, MultiPolygon):
        polygons = list(buffered.geoms)
    else:
        raise TypeError(f"Unexpected buffered geometry type: {buffered.geom_type}")
    return [orient(polygon, sign=1.0) for polygon in polygons]


def _ring_points(ring: LinearRing) -> list[Pt]:
    # shapely repeats the first coordinate at the end
    return [(x, y) for x, y in ring.coords[:-1]]


def _add_ring(outline: BezierPath, points: list[Pt]) -> None:
    outline.move_to(points[0])
    for point in points[1:]:
        outline.line_to(point)
    outline.close_path()


def _add_seamed_rings(outline: BezierPath, exterior: list[Pt], interior: list[Pt]) -> None:
    """Join the two rings of a closed stroke into one sub-path ending on the seam."""
    nearest = min(range(len(interior)), key=lambda i: distance(interior[i], exterior[0]))
    interior = interior[nearest:] + interior[:nearest]

    outline.move_to(exterior[0])
    for point in exterior[1:]:
        outline.line_to(point)
    outline.line_to(exterior[0])
    for point in interior:
        outline.line_to(point)
    outline.line_to(interior[0])
    outline.close_path()


def _add_polygons(outline: BezierPath, polygons: list[Polygon]) -> None:
    for polygon in polygons:
        _add_ring(outline, _ring_points(polygon.exterior))
        for interior in polygon.interiors:
            _add_ring(outline, _ring_points(interior))


def _stroke_open(outline: BezierPath, points: list[Pt], half_width: float, stroke: Stroke) -> None:
    """Stroke an open polyline; a single point paints a dot with round or square caps."""
    geometry = Point(points[0]) if len(points) == 1 else LineString(points)
    _add_polygons(outline, _buffer(geometry, half_width, stroke))


def _stroke_closed(outline: BezierPath, points: list[Pt], half_width: float, stroke: Stroke) -> None:
    polygons = _buffer(LinearRing(points), half_width, stroke)
    if len(polygons) == 1 and len(polygons[0].interiors) == 1:
        polygon = polygons[0]
        _add_seamed_rings(outline, _ring_points(polygon.exterior), _ring_points(polygon.interiors[0]))
    else:
        _add_polygons(outline, polygons)


def _dedupe(points: list[Pt]) -> list[Pt]:
    result: list[Pt] = []
    for point in points:
        if not result or distance(result[-1], point) >= EPSILON:
            result.append(point)
    return result


def _polylines(path: BezierPath, tolerance: float) -> list[tuple[list[Pt], bool]]:
    """Flatten every sub-path into a (points, closed) polyline."""
    result: list[tuple[list[Pt], bool]] = []

    for subpath in path.subpaths():
        if subpath.is_empty():
            continue

        points: list[Pt] = []
        for segment in subpath.segments():
            flat = flatten_segment(segment, tolerance)
            points.extend(flat if not points else flat[1:])

        if not points:
            # Zero-length sub-path such as "M x y Z"
            points = [subpath.elements[0].points[-1]]

        closed = subpath.is_closed()
        points = _dedupe(points)
        if closed and len(points) > 1 and distance(points[0], points[-1]) < EPSILON:
            points.pop()
        result.append((points, closed))

    return result


def dash_polyline(
    points: list[Pt],
    closed: bool,
    dash_array: tuple[float, ...],
    dash_offset: float = 0.0,
) -> list[list[Pt]]:
    """Cut a polyline into dashes.

    An odd number of dash lengths is repeated to yield an even pattern.

    Args:
        points: Polyline vertices
        closed: Whether the last vertex connects back to the first
        dash_array: Alternating dash and gap lengths
        dash_offset: Distance into the pattern at the first vertex

    Returns:
        Open polylines, one per visible dash
    """
    if closed and points:
        points = points + [points[0]]

    pattern = list(dash_array) if len(dash_array) % 2 == 0 else list(dash_array) * 2
    total = sum(pattern)
    if len(points) < 2 or total <= 0:
        return [points]

    line = LineString(points)
    length = line.length
    position = -(dash_offset % total)
    index = 0
    dashes: list[list[Pt]] = []

    while position < length:
        end = position + pattern[index]
        start, stop = max(position, 0.0), min(end, length)
        if index % 2 == 0 and stop > start:
            dashes.append([(x, y) for x, y in substring(line, start, stop).coords])
        position = end
        index = (index + 1) % len(pattern)

    return dashes


def stroke_path(path: BezierPath, stroke: Stroke, tolerance: float = 0.01) -> BezierPath:
    """Convert the stroke of a path into filled outline rings.

    Args:
        path: Path in user space
        stroke: Stroke paint, width already in user space
        tolerance: Flattening tolerance for curved segments

    Returns:
        New path made of closed rings; empty if the stroke paints nothing
    """
    outline = BezierPath()
    half_width = stroke.width / 2
    if half_width <= 0:
        return outline

    for points, closed in _polylines(path, tolerance):
        if stroke.dash_array and len(points) > 1:
            for dash in dash_polyline(points, closed, stroke.dash_array, stroke.dash_offset):
                _stroke_open(outline, _dedupe(dash), half_width, stroke)
        elif closed and len(points) > 2:
            _stroke_closed(outline, points, half_width, stroke)
        elif closed and len(points) == 2:
            _stroke_open(outline, [*points, points[0]], half_width, stroke)
        else:
            _stroke_open(outline, points, half_width, stroke)

    logger.debug("Stroked path", extra={"elements": len(outline), "width": stroke.width})
    return outline
