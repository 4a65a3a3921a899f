"""Bitmap loading and pixel tracing.

A bitmap is reduced to rectangles of ink: each row is split into horizontal
runs of dark pixels, and identical runs on consecutive rows are merged into
one taller rectangle.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from bmp2ttf.exceptions import BitmapLoadError


@dataclass(frozen=True)
class InkRect:
    """Rectangle of ink in pixel coordinates (top-left origin).

    Attributes:
        left: First column (inclusive)
        top: First row (inclusive)
        right: Last column (exclusive)
        bottom: Last row (exclusive)
    """

    left: int
    top: int
    right: int
    bottom: int


@dataclass
class GlyphBitmap:
    """Traced bitmap ready for outline generation."""

    width: int
    height: int
    rects: list[InkRect] = field(default_factory=list)

    def is_blank(self) -> bool:
        """Check if the bitmap has no ink."""
        return not self.rects


def _row_runs(row: list[bool]) -> list[tuple[int, int]]:
    runs: list[tuple[int, int]] = []
    start: int | None = None
    for x, ink in enumerate(row):
        if ink and start is None:
            start = x
        elif not ink and start is not None:
            runs.append((start, x))
            start = None
    if start is not None:
        runs.append((start, len(row)))
    return runs


def trace_rows(rows: list[list[bool]]) -> list[InkRect]:
    """Convert a grid of ink flags into rectangles.

    Args:
        rows: Rows top to bottom; True marks an ink pixel

    Returns:
        Rectangles ordered by top row, then left column
    """
    rects: list[InkRect] = []
    # (left, right) -> top row of the rectangle still being extended
    open_runs: dict[tuple[int, int], int] = {}

    for y, row in enumerate(rows):
        runs = set(_row_runs(row))
        for span in sorted(set(open_runs) - runs):
            rects.append(InkRect(span[0], open_runs.pop(span), span[1], y))
        for span in runs:
            open_runs.setdefault(span, y)

    for span, top in open_runs.items():
        rects.append(InkRect(span[0], top, span[1], len(rows)))

    rects.sort(key=lambda r: (r.top, r.left))
    return rects


def load_bitmap(path: str | os.PathLike[str], threshold: int = 128) -> GlyphBitmap:
    """Load an image and trace its dark pixels.

    Args:
        path: Image file (any format Pillow reads; BMP in practice)
        threshold: Gray level below which a pixel counts as ink

    Returns:
        Traced GlyphBitmap

    Raises:
        BitmapLoadError: If the image cannot be opened or decoded
    """
    path = Path(path)
    try:
        with Image.open(path) as image:
            gray = image.convert("L")
    except (OSError, UnidentifiedImageError, ValueError, Image.DecompressionBombError) as e:
        raise BitmapLoadError(path, str(e)) from e

    width, height = gray.size
    # Mode "L" is one byte per pixel, row-major
    pixels = gray.tobytes()
    rows = [
        [value < threshold for value in pixels[y * width : (y + 1) * width]]
        for y in range(height)
    ]
    return GlyphBitmap(width=width, height=height, rects=trace_rows(rows))
