"""Exception hierarchy for Glacon."""


class GlaconError(Exception):
    """Base exception for all Glacon errors."""

    pass


class SourceError(GlaconError):
    """Errors related to the SVG icon sources."""

    pass


class NoIconsFoundError(SourceError):
    """The source directory contains no usable icons."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"No icons found in source '{source}'")


class SvgParseError(SourceError):
    """An SVG document could not be parsed."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to parse SVG '{source}': {reason}")


class FontError(GlaconError):
    """Errors related to building, reading or writing fonts."""

    pass


class FontIOError(FontError):
    """Error reading or writing a file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"I/O error on '{path}': {reason}")


class InvalidDestinationError(FontError):
    """The destination path cannot be used for a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid destination '{path}': {reason}")


class FontCreationError(FontError):
    """A font table could not be built consistently."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to create font: {reason}")


class FontParseError(FontError):
    """Font bytes could not be parsed as a font container."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to parse font: {reason}")


class GlyphError(GlaconError):
    """Errors related to glyph synthesis."""

    pass


class GlyphConversionError(GlyphError):
    """An outline could not be converted to a TrueType glyph."""

    def __init__(self, glyph_name: str, reason: str) -> None:
        self.glyph_name = glyph_name
        self.reason = reason
        super().__init__(f"Failed to create glyph '{glyph_name}': {reason}")
