"""
Logging configuration and utilities.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional


DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"


def setup_root_logger(log_file: Optional[Path] = None,
                     level: str = "INFO",
                     console_level: str = "WARNING",
                     max_file_size_mb: int = 10,
                     backup_count: int = 5,
                     format_string: Optional[str] = None):
    """
    Set up the root logger for the application.

    The console handler sits above the file handler's level so that log
    records do not interleave with the coloured status lines; the log file
    keeps the full record.

    Args:
        log_file: Optional log file path
        level: Logging level for the log file
        console_level: Logging level for the console
        max_file_size_mb: Size at which the log file rotates
        backup_count: Number of rotated log files to keep
        format_string: Log format string
    """
    root_logger = logging.getLogger()

    # Clear any existing handlers
    root_logger.handlers.clear()

    file_level = getattr(logging, level.upper())
    stream_level = getattr(logging, console_level.upper())
    root_logger.setLevel(min(file_level, stream_level) if log_file else stream_level)

    formatter = logging.Formatter(format_string or DETAILED_FORMAT)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(stream_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # File handler
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Set levels for third-party loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)
