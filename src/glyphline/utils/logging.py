"""Logging utilities for Glyphline."""

import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import structlog

from glyphline.domain import Glyph, LookupKind


@dataclass
class LabelStats:
    """Statistics from a labelling run."""

    labels_count: int = 0
    glyphs_placed: int = 0
    fallback_count: int = 0
    missing_count: int = 0
    error_count: int = 0
    total_distance: float = 0.0
    errors: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate run duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


# Processors shared by every glyphline logger; the last one renders to JSON
SHARED_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
    structlog.processors.JSONRenderer(),
]

# Marks handlers installed here so a second configure call replaces them
_HANDLER_FLAG = "_glyphline_handler"


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown log level {name!r}")
    return level


def _replace_handlers(root: logging.Logger, handlers: list[logging.Handler]) -> None:
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_FLAG, False):
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        setattr(handler, _HANDLER_FLAG, True)
        root.addHandler(handler)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging to a JSON log file and stderr.

    Label output may be written to stdout, so console records always go to
    stderr. Calling this again replaces the handlers of the previous call.

    Args:
        log_file: Path to log file (glyphline_<timestamp>.log if None)
        console_level: Logging level for stderr output
        file_level: Logging level for file output
        quiet: If True, only errors reach stderr

    Returns:
        Configured structlog logger

    Raises:
        ValueError: If a level name is not a logging level
    """
    file_log_level = _level(file_level)
    console_log_level = logging.ERROR if quiet else _level(console_level)
    if log_file is None:
        log_file = Path(f"glyphline_{datetime.now():%Y%m%d_%H%M%S}.log")

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(file_log_level)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_log_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    _replace_handlers(root_logger, [file_handler, console_handler])

    structlog.configure(
        processors=SHARED_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("glyphline")
    logger.info(
        "Logging initialized",
        log_file=str(log_file),
        file_level=file_level.upper(),
        console_level="ERROR" if quiet else console_level.upper(),
    )
    return logger


class LabelLogger:
    """Logger for tracking label placement and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = LabelStats()

    def log_label_start(self, font: str, text: str) -> None:
        """Log start of label placement."""
        self._logger.debug("Placing label", font=font, text=text)

    def log_glyph_placed(self, glyph: Glyph, distance: float) -> None:
        """Log one placed glyph and count fallbacks and missing glyphs."""
        self._logger.debug(
            "Glyph placed",
            char=glyph.char,
            lookup=glyph.lookup.value,
            distance=round(distance, 4),
        )
        self._stats.glyphs_placed += 1
        if glyph.lookup == LookupKind.FALLBACK:
            self._stats.fallback_count += 1
        elif glyph.lookup == LookupKind.MISSING:
            self._stats.missing_count += 1

    def log_label_complete(
        self,
        text: str,
        distance: float,
        duration_ms: float,
    ) -> None:
        """Log a finalized label."""
        self._logger.info(
            "Label placed",
            text=text,
            distance=round(distance, 4),
            duration_ms=round(duration_ms, 2),
        )
        self._stats.labels_count += 1
        self._stats.total_distance += distance

    def log_label_error(
        self,
        text: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log label placement error."""
        self._logger.error(
            "Label placement failed",
            text=text,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((text, str(error)))

    @property
    def stats(self) -> LabelStats:
        """Get current label statistics."""
        return self._stats
