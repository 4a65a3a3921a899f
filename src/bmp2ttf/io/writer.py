"""Glyph sinks that turn accepted glyph sources into a font file.

This module provides BitmapFontWriter, which builds a TrueType font with
fontTools' FontBuilder, and NullGlyphSink, which records what it was given and
writes nothing.
"""

import struct
from collections.abc import Sequence
from pathlib import Path

import structlog
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib.tables._g_l_y_f import Glyph as TTGlyph

from bmp2ttf import __version__
from bmp2ttf.config import FontConfig
from bmp2ttf.domain.record import GlyphSource
from bmp2ttf.exceptions import BitmapLoadError, FontBuildError
from bmp2ttf.io.bitmap import GlyphBitmap, load_bitmap

logger = structlog.get_logger("bmp2ttf.writer")

NOTDEF = ".notdef"
SPACE = "space"
SPACE_CODEPOINT = 0x20

# glyf coordinates are int16
MIN_COORDINATE = -0x8000
MAX_COORDINATE = 0x7FFF


def build_name_strings(config: FontConfig) -> dict[str, str]:
    """Name table entries for FontBuilder.setupNameTable."""
    family = config.family_name
    style = config.style_name
    return {
        "familyName": family,
        "styleName": style,
        "uniqueFontIdentifier": f"{family}-{style}",
        "fullName": f"{family} {style}",
        # PostScript names can't have spaces
        "psName": f"{family.replace(' ', '')}-{style.replace(' ', '')}",
        "version": f"Version 1.000; bmp2ttf {__version__}",
    }


def draw_bitmap(bitmap: GlyphBitmap, pixel_size: int, top: int) -> TTGlyph:
    """Draw a traced bitmap as clockwise rectangle contours.

    Args:
        bitmap: Traced bitmap
        pixel_size: Font units per pixel
        top: Font y coordinate of the bitmap's top edge

    Returns:
        TrueType glyph
    """
    pen = TTGlyphPen(None)
    for rect in bitmap.rects:
        x0 = rect.left * pixel_size
        x1 = rect.right * pixel_size
        y0 = top - rect.bottom * pixel_size
        y1 = top - rect.top * pixel_size
        pen.moveTo((x0, y0))
        pen.lineTo((x0, y1))
        pen.lineTo((x1, y1))
        pen.lineTo((x1, y0))
        pen.closePath()
    return pen.glyph()


class BitmapFontWriter:
    """Builds a TrueType font from glyph bitmaps.

    Glyphs are named ``uniXXXX``. When two sources share a code point the first
    one wins and the others are logged.

    Example:
        writer = BitmapFontWriter(FontConfig(family_name="Pixel"))
        writer.emit([GlyphSource(0x41, Path("U-0041.bmp"))], Path("pixel.ttf"))
    """

    def __init__(self, config: FontConfig | None = None) -> None:
        """Initialize the font writer.

        Args:
            config: Font naming and metrics (defaults if None)
        """
        self.config = config if config is not None else FontConfig()

    def emit(self, glyphs: Sequence[GlyphSource], dest_path: Path) -> None:
        """Build the font and save it to ``dest_path``.

        Raises:
            FontBuildError: If there are no glyphs, a bitmap cannot be loaded,
                or the font cannot be saved
        """
        if not glyphs:
            raise FontBuildError(dest_path, "no glyph sources to write")

        config = self.config
        ascent = config.ascent
        notdef_width = config.units_per_em // 2

        glyf: dict[str, TTGlyph] = {NOTDEF: self._notdef_glyph(notdef_width, ascent, config.descent)}
        hmtx: dict[str, tuple[int, int]] = {NOTDEF: (notdef_width, notdef_width // 10)}
        cmap: dict[int, str] = {}

        for source in self._unique(glyphs):
            try:
                bitmap = load_bitmap(source.path, threshold=config.threshold)
            except BitmapLoadError:
                logger.error("Bitmap load failed", path=str(source.path))
                raise

            self._check_extent(bitmap, source, dest_path)
            name = source.glyph_name
            glyf[name] = draw_bitmap(bitmap, config.pixel_size, ascent)
            lsb = min((r.left for r in bitmap.rects), default=0) * config.pixel_size
            hmtx[name] = (bitmap.width * config.pixel_size, lsb)
            cmap[source.codepoint] = name
            logger.debug(
                "Glyph emitted",
                glyph=name,
                path=str(source.path),
                width=bitmap.width,
                height=bitmap.height,
                contours=len(bitmap.rects),
            )

        if SPACE_CODEPOINT not in cmap:
            glyf[SPACE] = TTGlyphPen(None).glyph()
            hmtx[SPACE] = (notdef_width, 0)
            cmap[SPACE_CODEPOINT] = SPACE

        glyph_order = [NOTDEF] + [name for name in glyf if name != NOTDEF]

        try:
            fb = FontBuilder(config.units_per_em, isTTF=True)
            fb.setupGlyphOrder(glyph_order)
            fb.setupCharacterMap(cmap)
            fb.setupGlyf(glyf)
            fb.setupHorizontalMetrics(hmtx)
            fb.setupHorizontalHeader(ascent=ascent, descent=config.descent)
            fb.setupOS2(
                sTypoAscender=ascent,
                sTypoDescender=config.descent,
                usWinAscent=ascent,
                usWinDescent=-config.descent,
            )
            fb.setupNameTable(build_name_strings(config))
            fb.setupPost()
            fb.save(str(dest_path))
        except (OSError, ValueError, OverflowError, struct.error) as e:
            raise FontBuildError(dest_path, str(e)) from e

        logger.info("Font saved", output=str(dest_path), glyphs=len(cmap))

    def _check_extent(self, bitmap: GlyphBitmap, source: GlyphSource, dest_path: Path) -> None:
        pixel_size = self.config.pixel_size
        right = bitmap.width * pixel_size
        bottom = self.config.ascent - bitmap.height * pixel_size
        if right > MAX_COORDINATE or bottom < MIN_COORDINATE:
            raise FontBuildError(
                dest_path,
                f"bitmap '{source.path}' ({bitmap.width}x{bitmap.height} px) is too large "
                f"for {pixel_size} units per pixel",
            )

    @staticmethod
    def _unique(glyphs: Sequence[GlyphSource]) -> list[GlyphSource]:
        seen: dict[int, GlyphSource] = {}
        for source in glyphs:
            first = seen.setdefault(source.codepoint, source)
            if first is not source:
                logger.warning(
                    "Duplicate code point",
                    codepoint=f"U+{source.codepoint:04X}",
                    kept=str(first.path),
                    ignored=str(source.path),
                )
        return list(seen.values())

    @staticmethod
    def _notdef_glyph(width: int, ascent: int, descent: int) -> TTGlyph:
        inset = width // 10
        pen = TTGlyphPen(None)
        x0, y0 = inset, descent + inset
        x1, y1 = width - inset, ascent - inset
        pen.moveTo((x0, y0))
        pen.lineTo((x0, y1))
        pen.lineTo((x1, y1))
        pen.lineTo((x1, y0))
        pen.closePath()
        return pen.glyph()


class NullGlyphSink:
    """Accepts glyph sources without writing anything.

    Used for dry runs; keeps every call for inspection.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[list[GlyphSource], Path]] = []

    def emit(self, glyphs: Sequence[GlyphSource], dest_path: Path) -> None:
        """Record the call."""
        self.calls.append((list(glyphs), dest_path))
        logger.info("Dry run, no font written", glyphs=len(glyphs), dest=str(dest_path))

    @property
    def last_glyphs(self) -> list[GlyphSource]:
        """Glyph sources from the most recent call (empty if never called)."""
        return self.calls[-1][0] if self.calls else []
