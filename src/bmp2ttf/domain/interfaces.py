"""Interfaces for collaborators outside the ingestion core."""

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from bmp2ttf.domain.record import GlyphSource


@runtime_checkable
class GlyphSink(Protocol):
    """Receives the accepted glyph sources and produces the output font.

    Sources arrive in scan order. Implementations decide how to treat an
    empty sequence and duplicate code points.
    """

    def emit(self, glyphs: Sequence[GlyphSource], dest_path: Path) -> None:
        """Produce the font artifact at ``dest_path``."""
        ...
