"""Glyph record.

This module defines the glyph domain model handed from the glyph
synthesizer to the table assembler: one icon's contours in font units
together with its horizontal metrics.
"""

from dataclasses import dataclass, field

from glacon.domain.contour import BoundingBox, Contour

NOTDEF_NAME = ".notdef"


@dataclass
class GlyphRecord:
    """A single glyph ready to be packed into a font.

    Attributes:
        name: Glyph name (the icon identifier, or ".notdef")
        contours: Contours forming the glyph outline
        bbox: Bounds of all contour points in font units
        advance_width: Horizontal advance in font units
        left_side_bearing: Left side bearing in font units
    """

    name: str
    contours: list[Contour] = field(default_factory=list)
    bbox: BoundingBox = field(default_factory=BoundingBox)
    advance_width: int = 0
    left_side_bearing: int = 0

    @classmethod
    def notdef(cls, advance_width: int) -> "GlyphRecord":
        """Create the empty glyph that occupies glyph index 0."""
        return cls(name=NOTDEF_NAME, advance_width=advance_width, left_side_bearing=0)

    def is_empty(self) -> bool:
        """Check if glyph has no outlines.

        Returns:
            True if glyph has no contours, False otherwise
        """
        return len(self.contours) == 0

    @property
    def point_count(self) -> int:
        """Total number of points over all contours."""
        return sum(len(contour.points) for contour in self.contours)
