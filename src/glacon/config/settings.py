"""Configuration settings for Glacon."""

from pathlib import Path

from pydantic import BaseModel, Field

# Start of the Basic Multilingual Plane Private Use Area
PUA_START = 0xE000
PUA_END = 0xF8FF


class GeometryConfig(BaseModel):
    """Tolerances for outline normalization, in SVG user units."""

    cubic_tolerance: float = Field(
        default=0.01,
        gt=0.0,
        le=1.0,
        description="Maximum deviation when replacing cubic curves with quadratics",
    )
    stroke_tolerance: float = Field(
        default=0.01,
        gt=0.0,
        le=1.0,
        description="Flattening tolerance for curves that are stroked",
    )
    seam_tolerance: float = Field(
        default=0.5,
        ge=0.0,
        le=5.0,
        description="Endpoint tolerance when matching the seam of a stroked closed path",
    )
    close_tolerance: float = Field(
        default=1e-5,
        ge=0.0,
        le=1.0,
        description="Distance below which a closing point is considered coincident with the start",
    )


class FontConfig(BaseModel):
    """Configuration for the generated font."""

    advance_width: int = Field(
        default=1000,
        ge=16,
        le=16384,
        description="Advance width shared by all icon glyphs (also the em box height)",
    )
    units_per_em: int = Field(
        default=1000,
        ge=16,
        le=16384,
        description="Font units per em",
    )
    codepoint_base: int = Field(
        default=PUA_START,
        ge=PUA_START,
        le=PUA_END,
        description="First codepoint assigned to icons",
    )
    extension: str = Field(
        default="ttf",
        description="Required extension of the destination file",
    )
    style_name: str = Field(default="Regular")
    version_string: str = Field(default="Version 1.0")
    copyright: str = Field(
        default="Copyright remains with the copyright holders of the SVG icons",
    )
    description: str = Field(default="Icon font generated from SVG files")
    vendor_url: str = Field(default="", description="Vendor URL (omitted when empty)")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class GlaconSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    font: FontConfig = Field(default_factory=FontConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> GlaconSettings:
    """Get default application settings."""
    return GlaconSettings()
