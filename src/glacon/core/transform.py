"""Mapping from SVG user space to font units."""

from fontTools.misc.roundTools import otRound

from glacon.domain import BoundingBox, CurvePoint


class FontTransform:
    """Scales, flips and vertically centers icon outlines.

    The longer side of the icon's bounding box is scaled to the advance
    width. SVG's y axis points down, so y is negated and shifted so that
    the icon sits centered in the square advance box.

    Attributes:
        scale: Factor from SVG user units to font units
        delta_y: Vertical shift applied after flipping
    """

    def __init__(self, bbox: BoundingBox, advance_width: int) -> None:
        max_side = bbox.max_side
        self.scale = advance_width / max_side if max_side > 0 else 1.0

        projected_height = self.project(bbox.height)
        self.delta_y = advance_width - max(0, advance_width - projected_height) // 2

    def project(self, value: float) -> int:
        """Scale a single coordinate value and round it to font units."""
        return otRound(value * self.scale)

    def transform_point(self, point: tuple[float, float], on_curve: bool = True) -> CurvePoint:
        """Map a point from SVG user space into font units."""
        x, y = point
        return CurvePoint(self.project(x), -self.project(y) + self.delta_y, on_curve)
