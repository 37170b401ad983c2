"""Logging configuration for the story generator."""

import logging
import sys
import time
import uuid
from collections.abc import Generator
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Default log file, relative to the working directory the process runs in
DEFAULT_LOG_FILE = Path("logs") / "story_generator.log"

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(correlation_id)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ContextFilter(logging.Filter):
    """Add context information to log records."""

    def __init__(self) -> None:
        super().__init__()
        self.correlation_id: str | None = None

    def filter(self, record: logging.LogRecord) -> bool:
        """Add correlation ID to log record if available."""
        if self.correlation_id:
            record.correlation_id = self.correlation_id
        else:
            record.correlation_id = "-"
        return True


class FlushingRotatingFileHandler(RotatingFileHandler):
    """RotatingFileHandler that flushes immediately after each log."""

    def emit(self, record: logging.LogRecord) -> None:
        super().emit(record)
        self.flush()


# Global context filter instance
_context_filter = ContextFilter()


def setup_logging(level: str = "INFO", log_file: str | None = "default") -> None:
    """Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: File path for logs. "default" uses logs/story_generator.log
                  under the current working directory, None disables file logging.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Note: Filter must be on HANDLERS, not logger, for child logger records
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(_context_filter)
    root_logger.addHandler(console_handler)

    if log_file == "default":
        log_path: Path | None = Path.cwd() / DEFAULT_LOG_FILE
    elif log_file:
        log_path = Path(log_file)
    else:
        log_path = None

    if log_path:
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # Max 5MB per file, keep 3 backup files
        file_handler = FlushingRotatingFileHandler(
            log_path,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(_context_filter)
        root_logger.addHandler(file_handler)

        root_logger.info("Logging to file: %s (max 5MB, 3 backups)", log_path)

    # Set third-party loggers to WARNING to reduce noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def set_log_level(level: str) -> None:
    """Change the level of the root logger and all of its handlers.

    Args:
        level: New log level name. Unknown names fall back to INFO.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers:
        handler.setLevel(log_level)


@contextmanager
def log_context(correlation_id: str | None = None) -> Generator[str]:
    """Context manager for setting correlation ID in logs.

    Args:
        correlation_id: Optional correlation ID. If not provided, generates a new UUID.

    Yields:
        The correlation ID being used.

    Example:
        with log_context("run-123"):
            logger.info("Generating story")  # Will include correlation_id in log
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())[:8]

    old_id = _context_filter.correlation_id
    _context_filter.correlation_id = correlation_id
    try:
        yield correlation_id
    finally:
        _context_filter.correlation_id = old_id


@contextmanager
def log_performance(logger: logging.Logger, operation: str) -> Generator[None]:
    """Context manager for logging operation performance.

    Args:
        logger: Logger instance to use
        operation: Name of the operation being timed

    Example:
        with log_performance(logger, "story_generation"):
            generator.generate_story()  # Will log duration after completion
    """
    start_time = time.time()
    logger.info("%s: Starting", operation)
    try:
        yield
    except Exception as e:
        duration = time.time() - start_time
        logger.error("%s: Failed after %.2fs - %s", operation, duration, e)
        raise
    else:
        duration = time.time() - start_time
        logger.info("%s: Completed in %.2fs", operation, duration)
