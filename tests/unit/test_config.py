"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from bmp2ttf.config import Bmp2TtfSettings, FontConfig, ScanConfig, get_default_settings


class TestFontConfig:
    """Tests for FontConfig."""

    def test_defaults(self):
        """Test default metrics."""
        config = FontConfig()
        assert config.units_per_em == 1024
        assert config.ascent == 819
        assert config.descent == -205
        assert config.ascent - config.descent == config.units_per_em

    @pytest.mark.parametrize(
        "kwargs",
        [{"units_per_em": 8}, {"pixel_size": 0}, {"threshold": 300}, {"family_name": ""}],
    )
    def test_invalid_values(self, kwargs: dict):
        """Test constraints reject out-of-range values."""
        with pytest.raises(ValidationError):
            FontConfig(**kwargs)


class TestScanConfig:
    """Tests for ScanConfig."""

    def test_defaults(self):
        """Test sequential, no-follow defaults."""
        config = ScanConfig()
        assert config.follow_symlinks is False
        assert config.max_workers == 1

    def test_rejects_zero_workers(self):
        """Test at least one worker is required."""
        with pytest.raises(ValidationError):
            ScanConfig(max_workers=0)


class TestSettings:
    """Tests for the aggregate settings."""

    def test_default_settings(self):
        """Test get_default_settings builds every section."""
        settings = get_default_settings()
        assert isinstance(settings, Bmp2TtfSettings)
        assert settings.font.family_name == "Bitmap"
        assert settings.logging.log_file is None
        assert settings.logging.log_level == "WARNING"
