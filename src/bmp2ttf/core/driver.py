"""Orchestration of a bitmap-to-font conversion run.

The driver owns the Unicode range table, gates the run on path validation,
scans the source directory and forwards every record with a valid code point
to the glyph sink. Records without one are reported and left out; they never
stop the run.
"""

import os
import time
from collections.abc import Callable, Iterable
from pathlib import Path

import structlog

from bmp2ttf.config import Bmp2TtfSettings
from bmp2ttf.core.parser import FilenameCodepointParser
from bmp2ttf.core.ranges import UnicodeRangeTable
from bmp2ttf.core.scanner import DirectoryScanner
from bmp2ttf.core.validator import check_dest_file, check_source_dir
from bmp2ttf.domain import GlyphSink, GlyphSource, ScanResult, SourceRecord
from bmp2ttf.utils import ConversionLogger, ConversionStats

ProgressCallback = Callable[[SourceRecord, bool], None]


class ConversionDriver:
    """Runs validation, scanning and emission for one source directory.

    Example:
        driver = ConversionDriver(sink=BitmapFontWriter(FontConfig()))
        stats = driver.run(Path("glyphs"), Path("out.ttf"))
        sys.exit(stats.exit_status)
    """

    def __init__(
        self,
        sink: GlyphSink,
        settings: Bmp2TtfSettings | None = None,
        table: UnicodeRangeTable | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the driver.

        Args:
            sink: Font-emission collaborator
            settings: Application settings (defaults if None)
            table: Range table to share with the parser (a new one if None)
            logger: Bound logger (module logger if None)
        """
        self.sink = sink
        self.settings = settings if settings is not None else Bmp2TtfSettings()
        self.table = table if table is not None else UnicodeRangeTable()
        self.parser = FilenameCodepointParser(self.table)
        self.scanner = DirectoryScanner(
            parser=self.parser,
            follow_symlinks=self.settings.scan.follow_symlinks,
            max_workers=self.settings.scan.max_workers,
        )
        self.logger = logger if logger is not None else structlog.get_logger("bmp2ttf.driver")

    def scan(self, source_dir: str | os.PathLike[str]) -> ScanResult:
        """Validate and scan the source directory.

        Raises:
            SourceDirectoryError: If the directory is missing or not a directory
        """
        return self.scanner.scan(check_source_dir(source_dir))

    def convert(
        self,
        records: Iterable[SourceRecord],
        dest_path: str | os.PathLike[str],
        progress_callback: ProgressCallback | None = None,
    ) -> ConversionStats:
        """Forward valid records to the sink in order.

        Args:
            records: Scanned records, in scan order
            dest_path: Output font path handed to the sink
            progress_callback: Optional callback(record, accepted) per record

        Returns:
            ConversionStats; ``exit_status`` is 0 once the sink has run

        Raises:
            FontBuildError: If the sink cannot produce the font
        """
        dest_path = Path(dest_path)
        stats = ConversionStats(start_time=time.time())
        conversion_logger = ConversionLogger(self.logger, stats)

        glyphs: list[GlyphSource] = []
        for record in records:
            if record.is_valid:
                conversion_logger.log_file_processing(record)
                glyphs.append(GlyphSource.from_record(record))
            else:
                conversion_logger.log_file_skipped(record, "unrecognized file name")
            if progress_callback is not None:
                progress_callback(record, record.is_valid)

        conversion_logger.log_emit_start(len(glyphs), dest_path)
        self.sink.emit(glyphs, dest_path)

        stats.end_time = time.time()
        stats.exit_status = 0
        self.logger.info(
            "Conversion complete",
            processed=stats.processed_count,
            skipped=stats.skipped_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )
        return stats

    def run(
        self,
        source_dir: str | os.PathLike[str],
        dest_path: str | os.PathLike[str],
        progress_callback: ProgressCallback | None = None,
    ) -> ConversionStats:
        """Validate both paths, scan, and convert.

        Raises:
            PathValidationError: Before any scanning, if either path is rejected
            FontBuildError: If the sink cannot produce the font
        """
        source_dir = check_source_dir(source_dir)
        dest_path = check_dest_file(dest_path)
        self.logger.info("Starting conversion", source=str(source_dir), dest=str(dest_path))

        result = self.scanner.scan(source_dir)
        return self.convert(result, dest_path, progress_callback=progress_callback)
