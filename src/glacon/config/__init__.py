"""Configuration management for glacon.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Tolerances used while normalizing outlines
- FontConfig: Metrics, codepoints and naming of the generated font
- LoggingConfig: Logging settings
- GlaconSettings: Main application settings
"""

from glacon.config.settings import (
    PUA_END,
    PUA_START,
    FontConfig,
    GeometryConfig,
    GlaconSettings,
    LoggingConfig,
    get_default_settings,
)

__all__ = [
    "PUA_END",
    "PUA_START",
    "FontConfig",
    "GeometryConfig",
    "GlaconSettings",
    "LoggingConfig",
    "get_default_settings",
]
