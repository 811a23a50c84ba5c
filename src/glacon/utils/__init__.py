"""Utility functions for glacon.

This module provides utility functions including:

- Logging setup and configuration
- Processing statistics
- The compute-once icon map cache
"""

from glacon.utils.cache import IconMapCache
from glacon.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "IconMapCache",
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
