"""Logging utilities for bmp2ttf."""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from bmp2ttf.domain.record import SourceRecord


@dataclass
class ConversionStats:
    """Statistics from one conversion run."""

    processed: list[SourceRecord] = field(default_factory=list)
    skipped: list[SourceRecord] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None
    exit_status: int = 0

    @property
    def processed_count(self) -> int:
        """Number of records forwarded to the glyph sink."""
        return len(self.processed)

    @property
    def skipped_count(self) -> int:
        """Number of records skipped for lacking a valid code point."""
        return len(self.skipped)

    @property
    def duration_seconds(self) -> float:
        """Calculate conversion duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file logging if None)
        console_level: Logging level for stderr output
        file_level: Logging level for file output
        quiet: If True, suppress stderr log output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        if getattr(handler, "_bmp2ttf", False):
            root_logger.removeHandler(handler)
            handler.close()

    handlers: list[logging.Handler] = []

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        handlers.append(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(console_handler)

    if not handlers:
        handlers.append(logging.NullHandler())

    for handler in handlers:
        handler._bmp2ttf = True  # type: ignore[attr-defined]
        root_logger.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("bmp2ttf")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class ConversionLogger:
    """Logger for tracking per-file conversion decisions and statistics."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger,
        stats: ConversionStats | None = None,
    ) -> None:
        self._logger = logger
        self._stats = stats if stats is not None else ConversionStats()

    def log_file_processing(self, record: SourceRecord) -> None:
        """Log a file accepted for emission."""
        self._logger.info(
            "Processing file",
            path=str(record.path),
            codepoint=f"U+{record.codepoint:04X}",
        )
        self._stats.processed.append(record)

    def log_file_skipped(self, record: SourceRecord, reason: str) -> None:
        """Log a file left out of the font."""
        self._logger.warning("Skipping file", path=str(record.path), reason=reason)
        self._stats.skipped.append(record)

    def log_emit_start(self, glyph_count: int, dest_path: Path) -> None:
        """Log hand-off to the glyph sink."""
        self._logger.info("Emitting glyphs", glyphs=glyph_count, dest=str(dest_path))

    @property
    def stats(self) -> ConversionStats:
        """Get current conversion statistics."""
        return self._stats
