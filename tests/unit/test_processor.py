"""Tests for font generation orchestration."""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from glacon.config import GlaconSettings
from glacon.core.decoder import build_icon_map
from glacon.core.processor import IconFontProcessor, make_font
from glacon.exceptions import GlyphConversionError, InvalidDestinationError

SQUARE = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">'
    '<path d="M4 4h16v16H4z"/>'
    "</svg>"
)


@pytest.fixture
def icon_dir(tmp_path: Path) -> Path:
    """Create a source directory with two icons and one broken file."""
    root = tmp_path / "icons"
    root.mkdir()
    (root / "a-broken.svg").write_text("<svg>")
    (root / "b-square.svg").write_text(SQUARE)
    (root / "c-square.svg").write_text(SQUARE)
    return root


@pytest.fixture
def mock_logger() -> Mock:
    return Mock()


class TestIconFontProcessor:
    """Tests for IconFontProcessor class."""

    def test_init_defaults(self) -> None:
        """Test processor initialization with default settings."""
        processor = IconFontProcessor()

        assert isinstance(processor.config, GlaconSettings)
        assert processor.assembler.codepoint(1) == 0xE000

    def test_skipped_icons_leave_no_gap(self, icon_dir: Path, tmp_path: Path, mock_logger: Mock) -> None:
        """Test that codepoints are assigned to converted icons only."""
        destination = tmp_path / "icons.ttf"
        stats = IconFontProcessor(logger=mock_logger).process(icon_dir, destination)

        assert build_icon_map(destination) == {"b-square": "\ue000", "c-square": "\ue001"}
        assert stats.icon_count == 3
        assert stats.processed_count == 2
        assert stats.skipped[0][0] == "a-broken"

    def test_logs_summary(self, icon_dir: Path, tmp_path: Path, mock_logger: Mock) -> None:
        """Test that start and completion are logged with structured fields."""
        IconFontProcessor(logger=mock_logger).process(icon_dir, tmp_path / "icons.ttf")

        messages = [call.args[0] for call in mock_logger.info.call_args_list]
        assert messages[0] == "Starting font generation"
        assert messages[-1] == "Font generation complete"
        assert mock_logger.info.call_args.kwargs["processed"] == 2
        mock_logger.warning.assert_called_once()

    def test_glyph_error_aborts(self, icon_dir: Path, tmp_path: Path, mock_logger: Mock) -> None:
        """Test that a synthesis failure stops the build without output."""
        destination = tmp_path / "icons.ttf"
        processor = IconFontProcessor(logger=mock_logger)

        with patch.object(
            processor.synthesizer,
            "create_glyph",
            side_effect=GlyphConversionError("b-square", "too many points"),
        ):
            with pytest.raises(GlyphConversionError):
                processor.process(icon_dir, destination)

        assert not destination.exists()
        mock_logger.error.assert_called_once()

    def test_destination_checked_first(self, icon_dir: Path, tmp_path: Path) -> None:
        """Test that a bad destination fails before icons are collected."""
        with patch("glacon.core.processor.collect_svg_paths") as mock_collect:
            with pytest.raises(InvalidDestinationError):
                IconFontProcessor().process(icon_dir, tmp_path / "icons.svg")

        mock_collect.assert_not_called()


class TestMakeFont:
    """Tests for make_font()."""

    def test_accepts_strings(self, icon_dir: Path, tmp_path: Path) -> None:
        """Test that string paths are accepted."""
        destination = tmp_path / "icons.ttf"
        stats = make_font(str(icon_dir), str(destination))

        assert destination.exists()
        assert stats.output_size > 0
