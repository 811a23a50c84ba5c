"""Converters between fonttools and domain models.

This module handles the conversion between fonttools pen/glyph
representations and our domain models (BezierPath, GlyphRecord, Contour).
"""

from typing import Any

from fontTools.pens.basePen import BasePen
from fontTools.pens.recordingPen import RecordingPen
from fontTools.pens.ttGlyphPen import TTGlyphPointPen
from fontTools.ttLib.tables._g_l_y_f import Glyph

from glacon.domain import BezierPath, Contour, CurvePoint, GlyphRecord


class BezierPathPen(BasePen):
    """Pen that records drawing commands into a BezierPath.

    Used as the target of fontTools' SVG path parser. Cubic curves are kept
    as they are; the path normalizer reduces them later.

    Example:
        pen = BezierPathPen()
        parse_path("M0 0 L10 0 Z", pen)
        path = pen.path
    """

    def __init__(self, glyphSet: Any = None) -> None:
        super().__init__(glyphSet)
        self.path = BezierPath()

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self.path.move_to(pt)

    def _lineTo(self, pt: tuple[float, float]) -> None:
        self.path.line_to(pt)

    def _qCurveToOne(self, pt1: tuple[float, float], pt2: tuple[float, float]) -> None:
        self.path.quad_to(pt1, pt2)

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        self.path.curve_to(pt1, pt2, pt3)

    def _closePath(self) -> None:
        self.path.close_path()

    def _endPath(self) -> None:
        # Open sub-path; the next moveTo starts a new one
        pass


def domain_glyph_to_fonttools(record: GlyphRecord) -> Glyph:
    """Convert a glyph record into a fonttools TrueType glyph.

    Points are passed through a point pen unchanged, so the stored contour
    keeps every point of the record, coincident closing points included.

    Args:
        record: Glyph record with contours in font units

    Returns:
        fonttools glyf table glyph
    """
    pen = TTGlyphPointPen(None)

    for contour in record.contours:
        pen.beginPath()
        points = contour.points
        for i, point in enumerate(points):
            if not point.on_curve:
                segment_type = None
            elif points[i - 1].on_curve:
                segment_type = "line"
            else:
                segment_type = "qcurve"
            pen.addPoint((point.x, point.y), segmentType=segment_type)
        pen.endPath()

    return pen.glyph()


def fonttools_glyph_to_contours(fonttools_glyph: Any) -> list[Contour]:
    """Convert a fonttools glyph back to domain contours.

    Uses a RecordingPen to extract the glyph outline as a series of
    drawing commands. Implied on-curve points between consecutive
    off-curve points are not restored.

    Args:
        fonttools_glyph: Glyph object from a TTFont glyph set

    Returns:
        List of Contour objects
    """
    pen = RecordingPen()
    fonttools_glyph.draw(pen)

    contours: list[Contour] = []
    current_points: list[CurvePoint] = []

    for command, args in pen.value:
        if command == "moveTo":
            if current_points:
                contours.append(Contour(points=current_points))
                current_points = []
            x, y = args[0]
            current_points.append(CurvePoint(x, y, True))

        elif command == "lineTo":
            x, y = args[0]
            current_points.append(CurvePoint(x, y, True))

        elif command == "qCurveTo":
            for i, pt in enumerate(args):
                if pt is None:
                    continue
                x, y = pt
                current_points.append(CurvePoint(x, y, i == len(args) - 1))

        elif command in ("closePath", "endPath"):
            if current_points:
                contours.append(Contour(points=current_points))
                current_points = []

    if current_points:
        contours.append(Contour(points=current_points))

    return contours
