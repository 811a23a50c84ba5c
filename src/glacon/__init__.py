"""Glacon - Build TrueType icon fonts from SVG files.

Glacon converts a directory of SVG icons into a TrueType font. Every icon
becomes a glyph named after its relative path (without extension) and is
assigned a codepoint in the Unicode Private Use Area, starting at U+E000
in sorted icon order.

The mapping between icon names and codepoints is stored in the font itself
and can be recovered at runtime with build_icon_map().

Example:
    $ glacon build assets/icons assets/app-icons.ttf

    >>> from glacon import build_icon_map
    >>> icons = build_icon_map("assets/app-icons.ttf")
    >>> icons["jam/book"]
    '\\ue002'
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

from glacon.core.decoder import build_icon_map, build_icon_map_from_bytes
from glacon.core.processor import make_font
from glacon.utils.cache import IconMapCache

__all__ = [
    "IconMapCache",
    "__author__",
    "__version__",
    "build_icon_map",
    "build_icon_map_from_bytes",
    "make_font",
]
