"""
File log sink built on loguru.

loguru keeps one global logger; LogSink owns the single file handler this
process writes to and swaps it when the level changes.
"""

from pathlib import Path

from loguru import logger

from core import NAME

# =============================================================================
# CONFIGURATION
# =============================================================================

DEFAULT_LOG_LEVEL = "warn"
LOG_FILE_NAME = f"{NAME}.log"
LOG_ROTATION = "10 MB"
LOG_RETENTION = 5
LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{name}:{function}:{line} - {message}"
)

# CLI level name -> loguru level name (None disables the sink)
LEVELS: dict[str, str | None] = {
    "debug": "DEBUG",
    "info": "INFO",
    "warn": "WARNING",
    "error": "ERROR",
    "none": None,
}


def normalize_level(level: str) -> str:
    """Validate a level name and return it lowercased."""
    name = level.strip().lower()
    if name not in LEVELS:
        raise ValueError(
            f"invalid log level '{level}' (expected {'|'.join(LEVELS)})"
        )
    return name


# =============================================================================
# LOG SINK
# =============================================================================


class LogSink:
    """A loguru file handler under a log directory, at an adjustable level."""

    def __init__(self, log_dir: Path, level: str = DEFAULT_LOG_LEVEL):
        self.log_dir = log_dir
        self.path = log_dir / LOG_FILE_NAME
        self.level = DEFAULT_LOG_LEVEL
        self._handler_id: int | None = None
        self.set_level(level)

    def set_level(self, level: str) -> None:
        """Re-open the file handler at a new level. Raises ValueError."""
        name = normalize_level(level)
        self._remove_handler()

        loguru_level = LEVELS[name]
        if loguru_level is not None:
            self._handler_id = logger.add(
                self.path,
                level=loguru_level,
                format=LOG_FORMAT,
                rotation=LOG_ROTATION,
                retention=LOG_RETENTION,
                encoding="utf-8",
            )
        self.level = name

    def _remove_handler(self) -> None:
        if self._handler_id is not None:
            logger.remove(self._handler_id)
            self._handler_id = None

    def close(self) -> None:
        """Flush and detach the file handler."""
        self._remove_handler()

    def __enter__(self) -> "LogSink":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def open_log(log_dir: Path, level: str = DEFAULT_LOG_LEVEL) -> LogSink:
    """Drop loguru's default stderr handler and open the file sink."""
    logger.remove()
    return LogSink(log_dir, level)
