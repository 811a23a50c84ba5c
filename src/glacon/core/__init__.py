"""Core processing algorithms for glacon.

This module contains the core algorithms for:

- Outline normalization (cubic reduction, stroking, seam removal)
- Coordinate mapping into the em box
- Glyph synthesis
- TrueType table assembly
- Icon map recovery from compiled fonts

Key functions:
- to_quadratic_curves: Replace cubic curves with quadratics
- stroke_path: Convert a stroke into outline rings
- separate_stroked_path: Split a closed stroke outline at its seam
- create_glyph: Build a glyph record from outlines
- compile_font: Build and serialize a font
- build_icon_map: Recover the name to character mapping of a font
- make_font: Full SVG directory to font file pipeline

Key classes:
- PathNormalizer: Node tree to quadratic outlines
- FontTransform: SVG user space to font units
- GlyphSynthesizer: Outlines to glyph records
- FontAssembler: Glyph records to font tables
- IconFontProcessor: Orchestrates font generation
"""

from glacon.core.assembler import FontAssembler, compile_font
from glacon.core.decoder import (
    build_icon_map,
    build_icon_map_from_bytes,
    decode_glyph_names,
    decode_segmented_subtable,
    select_cmap_subtable,
)
from glacon.core.normalizer import (
    PathNormalizer,
    normalize_node,
    separate_stroked_path,
    to_quadratic_curves,
)
from glacon.core.processor import IconFontProcessor, make_font
from glacon.core.stroke import stroke_path
from glacon.core.synthesizer import GlyphSynthesizer, create_glyph
from glacon.core.transform import FontTransform

__all__ = [
    # Assembly
    "FontAssembler",
    "compile_font",
    # Decoding
    "build_icon_map",
    "build_icon_map_from_bytes",
    "decode_glyph_names",
    "decode_segmented_subtable",
    "select_cmap_subtable",
    # Normalization
    "PathNormalizer",
    "normalize_node",
    "separate_stroked_path",
    "stroke_path",
    "to_quadratic_curves",
    # Synthesis
    "FontTransform",
    "GlyphSynthesizer",
    "create_glyph",
    # Orchestration
    "IconFontProcessor",
    "make_font",
]
