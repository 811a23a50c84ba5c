"""Font generation orchestration.

This module coordinates the full SVG-to-font workflow:

1. Validate the destination and derive the font name
2. Collect SVG files from the source directory
3. Parse, normalize and synthesize one glyph per icon
4. Assemble and compile the font tables
5. Write the font file atomically

Icons whose SVG cannot be read or parsed are skipped. Any failure after
parsing aborts the build and no file is written.

Key components:
- IconFontProcessor: Main orchestrator class
- make_font: Functional entry point
"""

import time
from collections.abc import Callable
from pathlib import Path

import structlog

from glacon.config import GlaconSettings
from glacon.core.assembler import FontAssembler
from glacon.core.normalizer import PathNormalizer
from glacon.core.synthesizer import GlyphSynthesizer
from glacon.domain import GlyphRecord
from glacon.exceptions import FontIOError, GlyphError, NoIconsFoundError, SourceError
from glacon.io import FontWriter, collect_svg_paths, get_font_name, parse_svg
from glacon.utils import ProcessingLogger, ProcessingStats


class IconFontProcessor:
    """Builds an icon font from a directory of SVG files.

    Example:
        settings = GlaconSettings()
        processor = IconFontProcessor(settings)
        stats = processor.process(
            source_dir=Path("assets/icons"),
            destination=Path("assets/app-icons.ttf"),
        )
    """

    def __init__(
        self,
        config: GlaconSettings | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the processor.

        Args:
            config: Glacon settings (defaults if None)
            logger: Structured logger; the "glacon" logger if None
        """
        self.config = config or GlaconSettings()
        self.logger = logger or structlog.get_logger("glacon")
        self.normalizer = PathNormalizer(self.config.geometry)
        self.synthesizer = GlyphSynthesizer(self.config.font, self.config.geometry)
        self.assembler = FontAssembler(self.config.font)

    def process(
        self,
        source_dir: Path,
        destination: Path,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> ProcessingStats:
        """Generate the font file.

        Args:
            source_dir: Directory searched recursively for SVG files
            destination: Font file to create; its stem becomes the font name
            progress_callback: Optional callback(completed, total, icon_name, success)
                for progress updates

        Returns:
            ProcessingStats with counts, timing and skipped icons

        Raises:
            InvalidDestinationError: If the destination extension is wrong
            FontIOError: If the source cannot be listed or the font cannot be written
            NoIconsFoundError: If no icon could be converted
            GlyphConversionError: If an outline cannot become a glyph
            FontCreationError: If the font tables cannot be built
        """
        processing_logger = ProcessingLogger(self.logger)
        stats = processing_logger.stats
        stats.start_time = time.time()

        font_name = get_font_name(destination, self.config.font.extension)
        sources = collect_svg_paths(source_dir)
        stats.icon_count = len(sources)

        self.logger.info(
            "Starting font generation",
            source=str(source_dir),
            destination=str(destination),
            font_name=font_name,
            icons=len(sources),
        )

        glyphs: list[GlyphRecord] = [GlyphRecord.notdef(self.config.font.advance_width)]

        for completed, source in enumerate(sources, start=1):
            icon_start = time.time()
            processing_logger.log_icon_start(source.name)

            try:
                document = parse_svg(source.read(), source=str(source.path))
            except (SourceError, FontIOError) as e:
                processing_logger.log_icon_skipped(source.name, str(e))
                if progress_callback:
                    progress_callback(completed, len(sources), source.name, False)
                continue

            try:
                outlines = self.normalizer.normalize(document)
                record = self.synthesizer.create_glyph(source.name, outlines)
            except GlyphError as e:
                processing_logger.log_icon_error(source.name, e)
                raise

            codepoint = self.assembler.codepoint(len(glyphs))
            glyphs.append(record)

            processing_logger.log_icon_complete(
                source.name,
                codepoint=codepoint,
                contours=len(record.contours),
                duration_ms=(time.time() - icon_start) * 1000,
            )
            if progress_callback:
                progress_callback(completed, len(sources), source.name, True)

        if len(glyphs) == 1:
            raise NoIconsFoundError(str(source_dir))

        data = self.assembler.compile(glyphs, font_name)
        stats.output_size = FontWriter(destination).write(data)
        stats.end_time = time.time()

        self.logger.info(
            "Font generation complete",
            processed=stats.processed_count,
            skipped=stats.skipped_count,
            contours=stats.contour_count,
            size=stats.output_size,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats


def make_font(
    source_dir: str | Path,
    destination: str | Path,
    settings: GlaconSettings | None = None,
    logger: structlog.stdlib.BoundLogger | None = None,
) -> ProcessingStats:
    """Build a TrueType icon font from the SVG files in a directory.

    Glyph names are the SVG paths relative to source_dir without extension,
    directories separated by "/". Codepoints are assigned from U+E000 in
    sorted name order.

    Args:
        source_dir: Directory searched recursively for SVG files
        destination: Path of the .ttf file to create
        settings: Glacon settings (defaults if None)
        logger: Structured logger (the "glacon" logger if None)

    Returns:
        ProcessingStats of the build
    """
    processor = IconFontProcessor(settings, logger)
    return processor.process(Path(source_dir), Path(destination))
