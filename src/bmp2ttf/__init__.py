"""bmp2ttf - Build TrueType fonts from directories of bitmap glyph images.

bmp2ttf walks a directory of BMP files whose names encode Unicode code points
(``U-0041.bmp``, ``u_4e2d.bmp``), validates each code point against a fixed
table of supported Unicode blocks, and hands the accepted images to a font
writer.

Example:
    $ bmp2ttf glyphs/ MyBitmapFont.ttf

Files that do not follow the naming rule are reported and skipped.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
