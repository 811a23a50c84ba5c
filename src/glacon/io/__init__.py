"""Input/output layer for glacon.

This module handles everything that touches files or external formats:
- Discover SVG icon files and derive icon names
- Parse SVG documents into node trees
- Convert between fonttools pens/glyphs and domain models
- Validate the destination and write font files atomically

Key classes:
- IconSource: An SVG file with its icon name
- SvgParser: SVG markup to node tree
- FontWriter: Atomic font file writer
"""

from glacon.io.converter import (
    BezierPathPen,
    domain_glyph_to_fonttools,
    fonttools_glyph_to_contours,
)
from glacon.io.reader import IconSource, collect_svg_paths, read_svg_file
from glacon.io.svg import SvgParser, parse_svg, parse_transform
from glacon.io.writer import FontWriter, get_font_name, write_font_file

__all__ = [
    "BezierPathPen",
    "FontWriter",
    "IconSource",
    "SvgParser",
    "collect_svg_paths",
    "domain_glyph_to_fonttools",
    "fonttools_glyph_to_contours",
    "get_font_name",
    "parse_svg",
    "parse_transform",
    "read_svg_file",
    "write_font_file",
]
