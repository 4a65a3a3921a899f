"""Shared fixtures for bmp2ttf tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image

# "#" is ink, anything else is paper
GLYPH_A = [
    ".##.",
    "#..#",
    "####",
    "#..#",
    "#..#",
]


def write_bmp(path: Path, pattern: list[str] = GLYPH_A) -> Path:
    """Write a grayscale BMP drawn from a text pattern."""
    height = len(pattern)
    width = max(len(row) for row in pattern)
    image = Image.new("L", (width, height), 255)
    for y, row in enumerate(pattern):
        for x, char in enumerate(row):
            if char == "#":
                image.putpixel((x, y), 0)
    path.parent.mkdir(parents=True, exist_ok=True)
    image.save(path, format="BMP")
    return path


@pytest.fixture
def make_bmp() -> Callable[..., Path]:
    """Factory writing BMP glyph images."""
    return write_bmp


@pytest.fixture
def glyph_dir(tmp_path: Path) -> Path:
    """Directory with two valid glyphs and two files that break the naming rule."""
    source = tmp_path / "glyphs"
    source.mkdir()
    write_bmp(source / "U-0041.bmp")
    write_bmp(source / "U-4E2D.bmp", ["#####", "..#..", "#####", "..#.."])
    (source / "readme.txt").write_text("not a glyph")
    (source / "bad_name.bmp").write_bytes(b"BM")
    return source
