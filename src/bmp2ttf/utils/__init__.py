"""Utility functions for bmp2ttf.

This module provides utility functions including:

- Logging setup and configuration
- Conversion statistics tracking
"""

from bmp2ttf.utils.logging import (
    ConversionLogger,
    ConversionStats,
    configure_logging,
)

__all__ = [
    "ConversionLogger",
    "ConversionStats",
    "configure_logging",
]
