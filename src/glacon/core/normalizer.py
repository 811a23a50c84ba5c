"""Outline normalization.

Turns parsed SVG nodes into outlines that only use moveTo, lineTo, quadTo
and close elements, the subset TrueType glyphs can store:
- Filled paths have their cubic curves replaced by quadratics.
- Stroked paths are converted to outline rings by the stroker.
- Stroked and filled closed paths keep only the outer stroke ring, which
  already covers the filled interior.
"""

import logging

from glacon.config import GeometryConfig
from glacon.core._bezier import cubic_to_quadratics
from glacon.core.geometry import points_match
from glacon.core.stroke import stroke_path
from glacon.domain import (
    BezierPath,
    GroupNode,
    ImageNode,
    PathNode,
    Segment,
    Stroke,
    SvgNode,
    TextNode,
    Verb,
)

logger = logging.getLogger(__name__)


def to_quadratic_curves(path: BezierPath, tolerance: float = 0.01) -> BezierPath:
    """Replace every cubic curve of a path with quadratic curves.

    Args:
        path: Path possibly containing curveTo elements
        tolerance: Maximum deviation from the cubic curves

    Returns:
        New path without curveTo elements
    """
    result = BezierPath()
    current = (0.0, 0.0)
    start = current

    for element in path:
        if element.verb == Verb.CURVE_TO:
            for control, end in cubic_to_quadratics([current, *element.points], tolerance):
                result.quad_to(control, end)
            current = element.points[-1]
            continue

        result.elements.append(element)
        if element.verb == Verb.MOVE_TO:
            start = current = element.points[0]
        elif element.verb == Verb.CLOSE:
            current = start
        else:
            current = element.points[-1]

    return result


def _segments_match(a: Segment, b: Segment, tolerance: float) -> bool:
    """Check if two segments join the same endpoints, in either direction."""
    if points_match(a.start, b.start, tolerance) and points_match(a.end, b.end, tolerance):
        return True
    return points_match(a.start, b.end, tolerance) and points_match(a.end, b.start, tolerance)


def separate_stroked_path(path: BezierPath, tolerance: float = 0.5) -> list[BezierPath]:
    """Split the stroke outline of a closed path at its seam.

    The last segment of the outline is taken to be the seam joining the two
    offset loops when the outline also draws it in the opposite direction.
    Every line segment matching the seam's endpoints is removed and the path
    is cut there.

    Args:
        path: Stroke outline of a single closed sub-path
        tolerance: Endpoint matching tolerance

    Returns:
        The resulting closed sub-paths; the input unchanged if it has no seam
    """
    segments = list(path.segments())
    if not segments or not segments[-1].is_line:
        return [path]

    seam = segments[-1]
    if not any(s.start == seam.end and s.end == seam.start for s in segments[:-1]):
        return [path]

    pieces: list[list[Segment]] = [[]]
    for segment in segments:
        if segment.is_line and _segments_match(segment, seam, tolerance):
            if pieces[-1]:
                pieces.append([])
            continue
        pieces[-1].append(segment)

    return [BezierPath.from_segments(piece, close=True) for piece in pieces if piece]


def outermost(paths: list[BezierPath]) -> BezierPath:
    """Return the path whose bounding box covers the largest area."""
    return max(paths, key=lambda path: path.bounding_box().area)


class PathNormalizer:
    """Converts SVG nodes into quadratic-only outlines.

    Example:
        normalizer = PathNormalizer(GeometryConfig())
        outlines = normalizer.normalize(document)
    """

    def __init__(self, config: GeometryConfig | None = None) -> None:
        self.config = config or GeometryConfig()

    def normalize(self, node: SvgNode) -> list[BezierPath]:
        """Normalize a node and its descendants.

        Text and image nodes produce no outlines.

        Raises:
            TypeError: If node is not one of the known node kinds
        """
        if isinstance(node, GroupNode):
            outlines: list[BezierPath] = []
            for child in node.children:
                outlines.extend(self.normalize(child))
            return outlines
        if isinstance(node, PathNode):
            return self.normalize_path(node)
        if isinstance(node, (TextNode, ImageNode)):
            logger.debug("Ignoring %s", type(node).__name__)
            return []
        raise TypeError(f"Unsupported node type: {type(node).__name__}")

    def normalize_path(self, node: PathNode) -> list[BezierPath]:
        """Normalize a single path node.

        Returns:
            Outlines in drawing order; empty for empty or unpainted paths
        """
        if node.path.is_empty() or (node.fill is None and node.stroke is None):
            return []

        if node.stroke is None:
            return [to_quadratic_curves(node.path, self.config.cubic_tolerance)]

        outlines: list[BezierPath] = []
        for subpath in node.path.subpaths():
            outlines.extend(self._normalize_stroked(subpath, node.stroke, node.fill is not None))
        return [outline for outline in outlines if not outline.is_empty()]

    def _normalize_stroked(self, subpath: BezierPath, stroke: Stroke, filled: bool) -> list[BezierPath]:
        outline = stroke_path(subpath, stroke, self.config.stroke_tolerance)
        if outline.is_empty():
            return self._fill_only(subpath, filled)

        # Dashed outlines have no seam; each dash is its own ring
        if stroke.dash_array or not subpath.is_closed():
            rings = [to_quadratic_curves(ring, self.config.cubic_tolerance) for ring in outline.subpaths()]
            return self._fill_only(subpath, filled) + rings

        rings = outline.subpaths()
        if len(rings) == 1:
            rings = separate_stroked_path(outline, self.config.seam_tolerance)
        if filled:
            return [outermost(rings)]
        return rings

    def _fill_only(self, subpath: BezierPath, filled: bool) -> list[BezierPath]:
        if not filled or subpath.bounding_box().area <= 0:
            return []
        outline = to_quadratic_curves(subpath, self.config.cubic_tolerance)
        if not outline.is_closed():
            outline.close_path()
        return [outline]


def normalize_node(node: SvgNode, config: GeometryConfig | None = None) -> list[BezierPath]:
    """Convenience wrapper around PathNormalizer.normalize()."""
    return PathNormalizer(config).normalize(node)
