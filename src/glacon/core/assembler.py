"""TrueType table assembly.

This module packs an ordered list of glyph records into a complete
TrueType font using fontTools' FontBuilder. The glyph order is fixed once
and every glyph-indexed table (glyf/loca, hmtx, cmap, post) is derived
from it.

Tables written:
- head: 1000 units per em, zeroed timestamps, revision 1.0
- hhea: ascender at the advance width, no descender or line gap
- maxp: glyph count including .notdef
- cmap: format 4 subtables (Unicode and Windows BMP) mapping each icon's
  Private Use Area codepoint to its glyph index
- hmtx: constant advance, centering left side bearings
- glyf/loca: the glyph outlines
- post: format 2 with every glyph name
- name: font naming strings for the Macintosh and Windows platforms
- OS/2: vertical metrics matching hhea
"""

import logging
import re
import struct
from io import BytesIO

from fontTools.fontBuilder import FontBuilder
from fontTools.ttLib import TTFont
from fontTools.ttLib.sfnt import calcChecksum

from glacon.config import PUA_END, FontConfig
from glacon.domain import NOTDEF_NAME, BoundingBox, GlyphRecord
from glacon.exceptions import FontCreationError
from glacon.io.converter import domain_glyph_to_fonttools

logger = logging.getLogger(__name__)

INT16_MIN = -32768
INT16_MAX = 32767

# Pascal strings in the post table hold at most 255 bytes
MAX_GLYPH_NAME_LENGTH = 255

# Characters allowed in PostScript names
_PS_NAME_INVALID = re.compile(r"[^!-~]|[\[\](){}<>/%]")

# head table layout: checkSumAdjustment, then created and modified dates
HEAD_CHECKSUM_ADJUSTMENT = 8
HEAD_TIMESTAMPS = slice(20, 36)

# Whole-font checksum target for checkSumAdjustment
CHECKSUM_MAGIC = 0xB1B0AFBA


def zero_head_timestamps(data: bytes) -> bytes:
    """Clear the head created and modified dates of a compiled font.

    fontTools shifts small head dates past 1904 when it reads them as Unix
    times, so the dates are zeroed in the serialized bytes. The head table
    checksum and checkSumAdjustment are recomputed.

    Raises:
        FontCreationError: If the font has no head table
    """
    font = bytearray(data)
    num_tables = struct.unpack_from(">H", font, 4)[0]
    for index in range(num_tables):
        record = 12 + 16 * index
        tag, _, offset, length = struct.unpack_from(">4sLLL", font, record)
        if tag == b"head":
            break
    else:
        raise FontCreationError("compiled font has no head table")

    head = slice(offset, offset + length)
    font[offset + HEAD_TIMESTAMPS.start : offset + HEAD_TIMESTAMPS.stop] = bytes(16)
    struct.pack_into(">L", font, offset + HEAD_CHECKSUM_ADJUSTMENT, 0)
    struct.pack_into(">L", font, record + 4, calcChecksum(bytes(font[head])))
    adjustment = (CHECKSUM_MAGIC - calcChecksum(bytes(font))) & 0xFFFFFFFF
    struct.pack_into(">L", font, offset + HEAD_CHECKSUM_ADJUSTMENT, adjustment)
    return bytes(font)


def postscript_name(font_name: str) -> str:
    """Derive a PostScript font name.

    Examples:
        >>> postscript_name("My Icons (v2)")
        'MyIconsv2'
    """
    name = _PS_NAME_INVALID.sub("", font_name)[:63]
    return name or "Icons"


class FontAssembler:
    """Builds a TrueType font from glyph records.

    Example:
        assembler = FontAssembler(FontConfig())
        data = assembler.compile([GlyphRecord.notdef(1000), record], "app-icons")
    """

    def __init__(self, config: FontConfig | None = None) -> None:
        self.config = config or FontConfig()

    def codepoint(self, glyph_index: int) -> int:
        """Codepoint assigned to the icon at glyph_index (1-based)."""
        return self.config.codepoint_base + glyph_index - 1

    def validate(self, glyphs: list[GlyphRecord]) -> None:
        """Check the glyph list before any table is built.

        Raises:
            FontCreationError: If the list cannot form a consistent font
        """
        if not glyphs or glyphs[0].name != NOTDEF_NAME:
            raise FontCreationError(f"first glyph must be '{NOTDEF_NAME}'")

        capacity = PUA_END - self.config.codepoint_base + 1
        if len(glyphs) - 1 > capacity:
            raise FontCreationError(
                f"{len(glyphs) - 1} icons exceed the {capacity} available codepoints"
            )
        if len(glyphs) > 0xFFFF:
            raise FontCreationError(f"too many glyphs: {len(glyphs)}")

        seen: set[str] = set()
        for record in glyphs:
            if not record.name:
                raise FontCreationError("empty glyph name")
            if record.name in seen:
                raise FontCreationError(f"duplicate glyph name '{record.name}'")
            seen.add(record.name)

            try:
                encoded = record.name.encode("latin-1")
            except UnicodeEncodeError as e:
                raise FontCreationError(f"glyph name '{record.name}' is not Latin-1") from e
            if len(encoded) > MAX_GLYPH_NAME_LENGTH:
                raise FontCreationError(f"glyph name '{record.name}' is too long")

            if not self._fits_int16(record.bbox):
                raise FontCreationError(f"glyph '{record.name}' exceeds the coordinate range")

    @staticmethod
    def _fits_int16(bbox: BoundingBox) -> bool:
        return all(INT16_MIN <= value <= INT16_MAX for value in bbox.to_tuple())

    def _name_strings(self, font_name: str) -> dict[str, str]:
        config = self.config
        strings = {
            "copyright": config.copyright,
            "familyName": font_name,
            "styleName": config.style_name,
            "uniqueFontIdentifier": font_name,
            "fullName": font_name,
            "version": config.version_string,
            "psName": postscript_name(font_name),
            "description": config.description,
        }
        if config.vendor_url:
            strings["vendorURL"] = config.vendor_url
        return strings

    def build(self, glyphs: list[GlyphRecord], font_name: str) -> TTFont:
        """Build the font tables.

        Args:
            glyphs: Glyph records, .notdef first, icons in codepoint order
            font_name: Family name of the font

        Returns:
            TTFont ready to be saved

        Raises:
            FontCreationError: If the glyph list is inconsistent or a table
                cannot be built
        """
        self.validate(glyphs)

        advance = self.config.advance_width
        glyph_order = [record.name for record in glyphs]
        cmap = {self.codepoint(index): record.name for index, record in enumerate(glyphs) if index > 0}
        metrics = {
            record.name: (advance, record.left_side_bearing if index > 0 else 0)
            for index, record in enumerate(glyphs)
        }

        try:
            builder = FontBuilder(self.config.units_per_em, isTTF=True)
            builder.setupGlyphOrder(glyph_order)
            builder.setupCharacterMap(cmap)
            builder.setupGlyf({record.name: domain_glyph_to_fonttools(record) for record in glyphs})
            builder.setupHorizontalMetrics(metrics)
            builder.setupHorizontalHeader(
                ascent=advance,
                descent=0,
                lineGap=0,
                advanceWidthMax=advance,
            )
            builder.setupNameTable(self._name_strings(font_name), windows=True, mac=True)
            builder.setupOS2(
                sTypoAscender=advance,
                sTypoDescender=0,
                sTypoLineGap=0,
                usWinAscent=advance,
                usWinDescent=0,
            )
            builder.setupPost(keepGlyphNames=True)
            builder.setupMaxp()
            builder.updateHead(created=0, modified=0, fontRevision=1.0)
        except FontCreationError:
            raise
        except Exception as e:
            raise FontCreationError(str(e)) from e

        logger.debug(
            "Assembled font tables",
            extra={"font_name": font_name, "glyphs": len(glyph_order)},
        )
        return builder.font

    def compile(self, glyphs: list[GlyphRecord], font_name: str) -> bytes:
        """Build the font and serialize it.

        Returns:
            Complete font file contents

        Raises:
            FontCreationError: If the font cannot be built or compiled
        """
        font = self.build(glyphs, font_name)
        buffer = BytesIO()
        try:
            font.save(buffer)
        except Exception as e:
            raise FontCreationError(f"compilation failed: {e}") from e
        return zero_head_timestamps(buffer.getvalue())


def compile_font(glyphs: list[GlyphRecord], font_name: str, config: FontConfig | None = None) -> bytes:
    """Convenience wrapper around FontAssembler.compile()."""
    return FontAssembler(config).compile(glyphs, font_name)
