"""Font output layer for bmp2ttf.

This module turns accepted glyph sources into a font file. Bitmaps are read
with Pillow and traced into rectangles; the font is assembled with fontTools'
FontBuilder.

Key classes:
- BitmapFontWriter: GlyphSink that writes a TrueType font
- NullGlyphSink: GlyphSink that writes nothing (dry runs)
- GlyphBitmap: A traced bitmap
"""

from bmp2ttf.io.bitmap import GlyphBitmap, InkRect, load_bitmap, trace_rows
from bmp2ttf.io.writer import BitmapFontWriter, NullGlyphSink

__all__ = [
    "BitmapFontWriter",
    "GlyphBitmap",
    "InkRect",
    "NullGlyphSink",
    "load_bitmap",
    "trace_rows",
]
