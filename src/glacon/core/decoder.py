"""Icon map recovery from compiled fonts.

Reads the raw cmap and post tables of a font and rebuilds the mapping from
glyph name to character. fontTools only opens the font container and hands
out table bytes; both tables are decoded here so that arbitrary, possibly
damaged fonts degrade to a smaller mapping instead of an error.

Only format 4 (segment mapping to delta values) cmap subtables are read.
"""

import logging
import struct
from io import BytesIO
from pathlib import Path

from fontTools.ttLib import TTFont
from fontTools.ttLib.standardGlyphOrder import standardGlyphOrder

from glacon.exceptions import FontIOError, FontParseError

logger = logging.getLogger(__name__)

PLATFORM_UNICODE = 0
PLATFORM_WINDOWS = 3
ENCODING_WINDOWS_BMP = 1
SEGMENTED_FORMAT = 4

POST_FORMAT_1 = 0x00010000
POST_FORMAT_2 = 0x00020000

SURROGATES = range(0xD800, 0xE000)


def _u16(data: bytes, offset: int) -> int:
    return struct.unpack_from(">H", data, offset)[0]


def _i16(data: bytes, offset: int) -> int:
    return struct.unpack_from(">h", data, offset)[0]


def _u32(data: bytes, offset: int) -> int:
    return struct.unpack_from(">I", data, offset)[0]


def select_cmap_subtable(cmap: bytes) -> bytes | None:
    """Find the preferred segmented subtable of a cmap table.

    The first format 4 subtable on the Unicode platform wins, then the first
    format 4 subtable for Windows Unicode BMP.

    Args:
        cmap: Raw cmap table

    Returns:
        Subtable bytes running to the end of the table, or None if there is
        no usable subtable
    """
    if len(cmap) < 4:
        return None

    num_tables = _u16(cmap, 2)
    unicode_offset: int | None = None
    windows_offset: int | None = None

    for i in range(num_tables):
        record = 4 + 8 * i
        if record + 8 > len(cmap):
            break
        platform_id = _u16(cmap, record)
        encoding_id = _u16(cmap, record + 2)
        offset = _u32(cmap, record + 4)

        if offset + 2 > len(cmap) or _u16(cmap, offset) != SEGMENTED_FORMAT:
            continue
        if platform_id == PLATFORM_UNICODE and unicode_offset is None:
            unicode_offset = offset
        elif (
            platform_id == PLATFORM_WINDOWS
            and encoding_id == ENCODING_WINDOWS_BMP
            and windows_offset is None
        ):
            windows_offset = offset

    offset = unicode_offset if unicode_offset is not None else windows_offset
    if offset is None:
        return None
    return cmap[offset:]


def decode_segmented_subtable(subtable: bytes) -> list[tuple[int, int]]:
    """Decode a format 4 cmap subtable.

    Each segment maps the codes startCode..endCode either by adding idDelta
    to the code or, when idRangeOffset is non-zero, by looking up the glyph
    index array through the self-relative idRangeOffset and adding idDelta
    to the stored value. All sums wrap modulo 65536. Codes mapping to glyph
    0 are left out.

    Args:
        subtable: Subtable bytes starting at the format field

    Returns:
        (code, glyph index) pairs in segment order; empty if the segment
        arrays are truncated
    """
    if len(subtable) < 14:
        return []

    seg_count = _u16(subtable, 6) // 2
    end_codes = 14
    start_codes = 16 + 2 * seg_count
    id_deltas = 16 + 4 * seg_count
    id_range_offsets = 16 + 6 * seg_count
    if len(subtable) < 16 + 8 * seg_count:
        logger.warning("Truncated cmap subtable", extra={"segments": seg_count})
        return []

    pairs: list[tuple[int, int]] = []
    for i in range(seg_count):
        end = _u16(subtable, end_codes + 2 * i)
        start = _u16(subtable, start_codes + 2 * i)
        delta = _i16(subtable, id_deltas + 2 * i)
        range_offset_position = id_range_offsets + 2 * i
        range_offset = _u16(subtable, range_offset_position)

        for code in range(start, end + 1):
            if range_offset == 0:
                glyph_index = (code + delta) & 0xFFFF
            else:
                address = range_offset_position + range_offset + 2 * (code - start)
                if address + 2 > len(subtable):
                    continue
                raw = _u16(subtable, address)
                if raw == 0:
                    continue
                glyph_index = (raw + delta) & 0xFFFF

            if glyph_index != 0:
                pairs.append((code, glyph_index))

    return pairs


def decode_glyph_names(post: bytes) -> list[str | None]:
    """Read glyph names from a post table.

    Formats 1 and 2 carry names; any other format yields none.

    Args:
        post: Raw post table

    Returns:
        Name per glyph index, None where an index has no resolvable name
    """
    if len(post) < 32:
        return []

    version = _u32(post, 0)
    if version == POST_FORMAT_1:
        return list(standardGlyphOrder)
    if version != POST_FORMAT_2 or len(post) < 34:
        return []

    num_glyphs = _u16(post, 32)
    strings_start = 34 + 2 * num_glyphs
    if len(post) < strings_start:
        logger.warning("Truncated post table", extra={"glyphs": num_glyphs})
        return []

    indices = struct.unpack_from(f">{num_glyphs}H", post, 34)

    extra_names: list[str] = []
    position = strings_start
    while position < len(post):
        length = post[position]
        chunk = post[position + 1 : position + 1 + length]
        if len(chunk) < length:
            break
        extra_names.append(chunk.decode("latin-1"))
        position += 1 + length

    names: list[str | None] = []
    for index in indices:
        if index < len(standardGlyphOrder):
            names.append(standardGlyphOrder[index])
        elif index - len(standardGlyphOrder) < len(extra_names):
            names.append(extra_names[index - len(standardGlyphOrder)])
        else:
            names.append(None)
    return names


def _table_data(font: TTFont, tag: str) -> bytes | None:
    if tag not in font:
        return None
    try:
        return font.getTableData(tag)
    except Exception as e:
        logger.warning("Unreadable table", extra={"tag": tag, "error": str(e)})
        return None


def build_icon_map_from_bytes(data: bytes) -> dict[str, str]:
    """Recover the icon map from font bytes.

    Missing or unusable cmap/post tables produce an empty map and codes whose
    glyph has no name are skipped. If two codes resolve to the same name the
    later one wins.

    Args:
        data: Complete font file contents

    Returns:
        Mapping from glyph name to its one-character string

    Raises:
        FontParseError: If the data is not a font container
    """
    try:
        font = TTFont(BytesIO(data), lazy=True)
    except Exception as e:
        raise FontParseError(str(e)) from e

    try:
        cmap = _table_data(font, "cmap")
        post = _table_data(font, "post")
    finally:
        font.close()

    if cmap is None or post is None:
        return {}

    subtable = select_cmap_subtable(cmap)
    if subtable is None:
        logger.info("No format 4 Unicode cmap subtable")
        return {}

    names = decode_glyph_names(post)
    icon_map: dict[str, str] = {}
    for code, glyph_index in decode_segmented_subtable(subtable):
        if code in SURROGATES or glyph_index >= len(names):
            continue
        name = names[glyph_index]
        if name:
            icon_map[name] = chr(code)

    return icon_map


def build_icon_map(source: str | Path | bytes) -> dict[str, str]:
    """Recover the icon map from a font file or font bytes.

    Args:
        source: Path to a font file, or the font file contents

    Returns:
        Mapping from glyph name to its one-character string

    Raises:
        FontIOError: If the font file cannot be read
        FontParseError: If the data is not a font container
    """
    if isinstance(source, (bytes, bytearray)):
        return build_icon_map_from_bytes(bytes(source))

    path = Path(source)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise FontIOError(str(path), str(e)) from e

    return build_icon_map_from_bytes(data)
