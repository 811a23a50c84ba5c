"""Unit tests for icon map recovery."""

import struct
from io import BytesIO
from pathlib import Path

import pytest
from fontTools.ttLib import TTFont
from fontTools.ttLib.tables.DefaultTable import DefaultTable

from glacon.core.assembler import compile_font
from glacon.core.decoder import (
    build_icon_map,
    build_icon_map_from_bytes,
    decode_glyph_names,
    decode_segmented_subtable,
    select_cmap_subtable,
)
from glacon.domain import BoundingBox, Contour, CurvePoint, GlyphRecord
from glacon.exceptions import FontIOError, FontParseError


def format4(segments: list[tuple[int, int, int, int]], glyph_ids: list[int] | None = None) -> bytes:
    """Build a format 4 subtable from (start, end, delta, range offset) segments."""
    glyph_ids = glyph_ids or []
    n = len(segments)
    header = struct.pack(">7H", 4, 0, 0, 2 * n, 0, 0, 0)
    ends = struct.pack(f">{n}H", *(end for _, end, _, _ in segments))
    starts = struct.pack(f">{n}H", *(start for start, _, _, _ in segments))
    deltas = struct.pack(
        f">{n}h", *(((delta + 0x8000) & 0xFFFF) - 0x8000 for _, _, delta, _ in segments)
    )
    offsets = struct.pack(f">{n}H", *(offset for _, _, _, offset in segments))
    glyphs = struct.pack(f">{len(glyph_ids)}H", *glyph_ids)
    return header + ends + b"\x00\x00" + starts + deltas + offsets + glyphs


def cmap_table(records: list[tuple[int, int, bytes]]) -> bytes:
    """Build a cmap table from (platform, encoding, subtable) records."""
    header = struct.pack(">HH", 0, len(records))
    offset = 4 + 8 * len(records)
    directory = b""
    body = b""
    for platform_id, encoding_id, subtable in records:
        directory += struct.pack(">HHI", platform_id, encoding_id, offset + len(body))
        body += subtable
    return header + directory + body


def post_table(version: int, names: list[int] | None = None, strings: list[str] | None = None) -> bytes:
    header = struct.pack(">IIhhIIIII", version, 0, 0, 0, 0, 0, 0, 0, 0)
    if names is None:
        return header
    data = header + struct.pack(f">H{len(names)}H", len(names), *names)
    for string in strings or []:
        encoded = string.encode("latin-1")
        data += bytes([len(encoded)]) + encoded
    return data


def record(name: str) -> GlyphRecord:
    points = [CurvePoint(0, 0), CurvePoint(500, 0), CurvePoint(500, 500), CurvePoint(0, 0)]
    return GlyphRecord(
        name=name,
        contours=[Contour(points)],
        bbox=BoundingBox(0, 0, 500, 500),
        advance_width=1000,
        left_side_bearing=250,
    )


def replace_post(data: bytes, post: bytes) -> bytes:
    """Swap the raw post table of a compiled font."""
    font = TTFont(BytesIO(data))
    font.getGlyphOrder()
    table = DefaultTable("post")
    table.data = post
    font["post"] = table
    buffer = BytesIO()
    font.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def font_bytes() -> bytes:
    glyphs = [GlyphRecord.notdef(1000), record("jam/book"), record("jam/pen"), record("star")]
    return compile_font(glyphs, "test-icons")


class TestDecodeSegmentedSubtable:
    """Tests for format 4 decoding."""

    def test_delta_mapping_wraps(self) -> None:
        """Test that code plus delta wraps modulo 65536."""
        subtable = format4([(0xE000, 0xE002, 1 - 0xE000, 0), (0xFFFF, 0xFFFF, 1, 0)])
        assert decode_segmented_subtable(subtable) == [(0xE000, 1), (0xE001, 2), (0xE002, 3)]

    def test_negative_delta(self) -> None:
        """Test a small negative delta."""
        subtable = format4([(0x10, 0x11, -13, 0), (0xFFFF, 0xFFFF, 1, 0)])
        assert decode_segmented_subtable(subtable) == [(0x10, 3), (0x11, 4)]

    def test_range_offset_lookup(self) -> None:
        """Test glyph index array lookup through idRangeOffset."""
        # Two segments: the glyph array starts 2 * (2 - 0) bytes after the
        # first segment's idRangeOffset field
        subtable = format4(
            [(0x41, 0x43, -1, 4), (0xFFFF, 0xFFFF, 1, 0)],
            glyph_ids=[6, 0, 8],
        )
        assert decode_segmented_subtable(subtable) == [(0x41, 5), (0x43, 7)]

    def test_range_offset_out_of_bounds(self) -> None:
        """Test that lookups past the end of the subtable are skipped."""
        subtable = format4([(0x41, 0x45, 0, 4), (0xFFFF, 0xFFFF, 1, 0)], glyph_ids=[3, 4])
        assert decode_segmented_subtable(subtable) == [(0x41, 3), (0x42, 4)]

    def test_truncated(self) -> None:
        """Test that truncated segment arrays yield nothing."""
        subtable = format4([(0x41, 0x43, 1, 0), (0xFFFF, 0xFFFF, 1, 0)])
        assert decode_segmented_subtable(subtable[:20]) == []
        assert decode_segmented_subtable(b"\x00\x04") == []


class TestSelectCmapSubtable:
    """Tests for subtable selection."""

    def test_prefers_unicode_platform(self) -> None:
        """Test that a Unicode platform subtable beats the Windows one."""
        windows = format4([(0x41, 0x41, 1, 0), (0xFFFF, 0xFFFF, 1, 0)])
        unicode = format4([(0x42, 0x42, 1, 0), (0xFFFF, 0xFFFF, 1, 0)])
        cmap = cmap_table([(3, 1, windows), (0, 3, unicode)])

        selected = select_cmap_subtable(cmap)
        assert selected is not None
        assert decode_segmented_subtable(selected)[0][0] == 0x42

    def test_windows_fallback(self) -> None:
        """Test that the Windows BMP subtable is used when needed."""
        windows = format4([(0x41, 0x41, 1, 0), (0xFFFF, 0xFFFF, 1, 0)])
        format12 = struct.pack(">HHIII", 12, 0, 16, 0, 0)
        cmap = cmap_table([(0, 4, format12), (3, 1, windows)])

        selected = select_cmap_subtable(cmap)
        assert selected is not None
        assert decode_segmented_subtable(selected) == [(0x41, 0x42)]

    def test_ignores_other_windows_encodings(self) -> None:
        """Test that symbol encodings are not used."""
        symbol = format4([(0x41, 0x41, 1, 0), (0xFFFF, 0xFFFF, 1, 0)])
        assert select_cmap_subtable(cmap_table([(3, 0, symbol)])) is None

    def test_short_table(self) -> None:
        """Test that a table without a header has no subtable."""
        assert select_cmap_subtable(b"\x00") is None


class TestDecodeGlyphNames:
    """Tests for post table decoding."""

    def test_format_2(self) -> None:
        """Test standard and custom names."""
        post = post_table(0x00020000, [0, 258, 259, 3, 300], ["jam/book", "café"])
        assert decode_glyph_names(post) == [".notdef", "jam/book", "café", "space", None]

    def test_format_1(self) -> None:
        """Test the implicit standard Macintosh order."""
        names = decode_glyph_names(post_table(0x00010000))
        assert len(names) == 258
        assert names[0] == ".notdef"

    def test_format_3_has_no_names(self) -> None:
        """Test that format 3 carries no names."""
        assert decode_glyph_names(post_table(0x00030000)) == []

    def test_truncated(self) -> None:
        """Test short tables."""
        assert decode_glyph_names(b"\x00\x02") == []
        assert decode_glyph_names(post_table(0x00020000) + b"\x00\x05") == []


class TestBuildIconMap:
    """Tests for build_icon_map() and build_icon_map_from_bytes()."""

    def test_compiled_font(self, font_bytes: bytes) -> None:
        """Test recovering the map of a compiled font."""
        assert build_icon_map_from_bytes(font_bytes) == {
            "jam/book": "\ue000",
            "jam/pen": "\ue001",
            "star": "\ue002",
        }

    def test_from_path(self, font_bytes: bytes, tmp_path: Path) -> None:
        """Test reading the font from a file."""
        path = tmp_path / "icons.ttf"
        path.write_bytes(font_bytes)

        assert build_icon_map(path) == build_icon_map(str(path)) == build_icon_map(font_bytes)

    def test_missing_cmap(self, font_bytes: bytes) -> None:
        """Test that a font without cmap gives an empty map."""
        assert build_icon_map_from_bytes(font_bytes.replace(b"cmap", b"zzzz", 1)) == {}

    def test_missing_post(self, font_bytes: bytes) -> None:
        """Test that a font without post gives an empty map."""
        assert build_icon_map_from_bytes(font_bytes.replace(b"post", b"zzzz", 1)) == {}

    def test_glyph_without_name_is_omitted(self, font_bytes: bytes) -> None:
        """Test that mapped glyphs lacking a post name are left out."""
        # Glyph 2 points past the name strings and glyph 3 has no entry at all
        post = post_table(0x00020000, [0, 258, 300], ["jam/book"])
        assert build_icon_map_from_bytes(replace_post(font_bytes, post)) == {"jam/book": "\ue000"}

    def test_post_format_3_gives_empty_map(self, font_bytes: bytes) -> None:
        """Test that a font whose post table carries no names maps nothing."""
        assert build_icon_map_from_bytes(replace_post(font_bytes, post_table(0x00030000))) == {}

    def test_not_a_font(self) -> None:
        """Test that arbitrary bytes raise FontParseError."""
        with pytest.raises(FontParseError):
            build_icon_map_from_bytes(b"definitely not a font file" * 4)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that unreadable paths raise FontIOError."""
        with pytest.raises(FontIOError):
            build_icon_map(tmp_path / "missing.ttf")
