"""Configuration settings for bmp2ttf."""

from pathlib import Path

from pydantic import BaseModel, Field


class FontConfig(BaseModel):
    """Configuration for the generated font.

    Bitmaps are traced pixel by pixel; ``pixel_size`` is the edge length of one
    bitmap pixel in font units.
    """

    family_name: str = Field(
        default="Bitmap",
        min_length=1,
        description="Font family name written to the name table",
    )
    style_name: str = Field(
        default="Regular",
        min_length=1,
        description="Font style name written to the name table",
    )
    units_per_em: int = Field(
        default=1024,
        ge=16,
        le=16384,
        description="Units per em of the output font",
    )
    pixel_size: int = Field(
        default=64,
        ge=1,
        le=1024,
        description="Font units per bitmap pixel",
    )
    ascent_ratio: float = Field(
        default=0.8,
        ge=0.0,
        le=1.0,
        description="Share of the em above the baseline",
    )
    threshold: int = Field(
        default=128,
        ge=0,
        le=255,
        description="Gray level below which a pixel counts as ink",
    )

    @property
    def ascent(self) -> int:
        """Ascender in font units."""
        return round(self.units_per_em * self.ascent_ratio)

    @property
    def descent(self) -> int:
        """Descender in font units (zero or negative)."""
        return self.ascent - self.units_per_em


class ScanConfig(BaseModel):
    """Configuration for the directory walk."""

    follow_symlinks: bool = Field(
        default=False,
        description="Descend into symlinked directories",
    )
    max_workers: int = Field(
        default=1,
        ge=1,
        description="Worker threads for walking top-level subdirectories",
    )


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


class Bmp2TtfSettings(BaseModel):
    """Main application settings."""

    font: FontConfig = Field(default_factory=FontConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> Bmp2TtfSettings:
    """Get default application settings."""
    return Bmp2TtfSettings()
