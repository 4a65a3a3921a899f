"""Configuration management for bmp2ttf.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- FontConfig: Output font naming and metrics
- ScanConfig: Directory walk settings
- LoggingConfig: Logging settings
- Bmp2TtfSettings: Main application settings
"""

from bmp2ttf.config.settings import (
    Bmp2TtfSettings,
    FontConfig,
    LoggingConfig,
    ScanConfig,
    get_default_settings,
)

__all__ = [
    "Bmp2TtfSettings",
    "FontConfig",
    "LoggingConfig",
    "ScanConfig",
    "get_default_settings",
]
