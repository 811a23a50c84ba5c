"""Glyph synthesis from normalized outlines.

Converts the quadratic-only outlines of one icon into a GlyphRecord:
TrueType contours in font units plus the glyph's horizontal metrics.
"""

import logging

from glacon.config import FontConfig, GeometryConfig
from glacon.core.geometry import distance
from glacon.core.transform import FontTransform
from glacon.domain import (
    BezierPath,
    BoundingBox,
    Contour,
    CurvePoint,
    GlyphRecord,
    Verb,
    bounding_box,
)
from glacon.exceptions import GlyphConversionError

logger = logging.getLogger(__name__)


def left_side_bearing(advance_width: int, glyph_width: float) -> int:
    """Bearing that centers a glyph of the given width in its advance."""
    return max(0, int(advance_width - glyph_width) // 2)


class GlyphSynthesizer:
    """Builds glyph records from normalized outlines.

    Example:
        synthesizer = GlyphSynthesizer(FontConfig(), GeometryConfig())
        record = synthesizer.create_glyph("jam/book", outlines)
    """

    def __init__(
        self,
        font_config: FontConfig | None = None,
        geometry_config: GeometryConfig | None = None,
    ) -> None:
        self.font_config = font_config or FontConfig()
        self.geometry_config = geometry_config or GeometryConfig()

    def create_glyph(self, name: str, paths: list[BezierPath]) -> GlyphRecord:
        """Create a glyph record for one icon.

        Every moveTo or close element ends the current contour. A copy of the
        start point is appended on close unless the contour is already back
        at its start.

        Args:
            name: Glyph name
            paths: Outlines in SVG user space without cubic curves

        Returns:
            GlyphRecord with contours, bounds and metrics

        Raises:
            GlyphConversionError: If a path contains a cubic curve
        """
        advance = self.font_config.advance_width
        transform = FontTransform(bounding_box(paths), advance)
        close_tolerance = self.geometry_config.close_tolerance

        contours: list[Contour] = []
        points: list[CurvePoint] = []

        def flush() -> None:
            nonlocal points
            if points:
                contours.append(Contour(points))
                points = []

        for path in paths:
            start: CurvePoint | None = None
            current: CurvePoint | None = None

            for element in path:
                if element.verb in (Verb.LINE_TO, Verb.QUAD_TO) and not points and start is not None:
                    # Drawing after a close resumes at the sub-path start
                    points.append(start)

                if element.verb == Verb.MOVE_TO:
                    flush()
                    start = current = transform.transform_point(element.points[0])
                    points.append(start)
                elif element.verb == Verb.LINE_TO:
                    current = transform.transform_point(element.points[0])
                    points.append(current)
                elif element.verb == Verb.QUAD_TO:
                    control, end = element.points
                    current = transform.transform_point(end)
                    points.append(transform.transform_point(control, on_curve=False))
                    points.append(current)
                elif element.verb == Verb.CURVE_TO:
                    raise GlyphConversionError(name, "cubic Bezier curves are not allowed")
                elif element.verb == Verb.CLOSE:
                    if (
                        start is not None
                        and current is not None
                        and distance(start.to_tuple(), current.to_tuple()) > close_tolerance
                    ):
                        points.append(CurvePoint(start.x, start.y, on_curve=True))
                    flush()
                    current = start

            flush()

        bbox = BoundingBox.union_all(contour.bounding_box() for contour in contours)
        lsb = left_side_bearing(advance, bbox.width)

        logger.debug(
            "Created glyph",
            extra={"glyph": name, "contours": len(contours), "scale": transform.scale},
        )

        return GlyphRecord(
            name=name,
            contours=contours,
            bbox=bbox,
            advance_width=advance,
            left_side_bearing=lsb,
        )


def create_glyph(
    name: str,
    paths: list[BezierPath],
    font_config: FontConfig | None = None,
    geometry_config: GeometryConfig | None = None,
) -> GlyphRecord:
    """Convenience wrapper around GlyphSynthesizer.create_glyph()."""
    return GlyphSynthesizer(font_config, geometry_config).create_glyph(name, paths)
