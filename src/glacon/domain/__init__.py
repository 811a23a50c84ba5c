"""Domain models for glacon.

This module contains the core domain models representing SVG geometry,
glyph outlines and glyph records. All models are:

- Immutable where possible (using frozen dataclasses)
- Independent of fonttools table implementation details

Key classes:
- BezierPath: Drawing elements of an icon outline in SVG space
- PathNode, GroupNode, TextNode, ImageNode: Parsed SVG node variants
- CurvePoint: A point of a TrueType contour with its on-curve flag
- Contour: A closed contour in font units
- BoundingBox: Axis-aligned bounds
- GlyphRecord: A glyph with metrics, ready for table assembly
"""

from glacon.domain.contour import BoundingBox, Contour, CurvePoint
from glacon.domain.glyph import NOTDEF_NAME, GlyphRecord
from glacon.domain.node import (
    Fill,
    FillRule,
    GroupNode,
    ImageNode,
    LineCap,
    LineJoin,
    PathNode,
    Stroke,
    SvgNode,
    TextNode,
)
from glacon.domain.path import BezierPath, PathElement, Segment, Verb, bounding_box

__all__: list[str] = [
    # Enums
    "FillRule",
    "LineCap",
    "LineJoin",
    "Verb",
    # Path types
    "BezierPath",
    "PathElement",
    "Segment",
    "bounding_box",
    # Node types
    "Fill",
    "GroupNode",
    "ImageNode",
    "PathNode",
    "Stroke",
    "SvgNode",
    "TextNode",
    # Glyph types
    "BoundingBox",
    "Contour",
    "CurvePoint",
    "GlyphRecord",
    "NOTDEF_NAME",
]
