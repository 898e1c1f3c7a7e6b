"""
Logging configuration and utilities.
"""

import logging
import logging.handlers
from datetime import datetime
from pathlib import Path
from typing import Optional


RUN_HEADER_RULE = "-" * 40


def setup_logger(name: str,
                log_file: Optional[Path] = None,
                level: str = "INFO",
                format_string: Optional[str] = None) -> logging.Logger:
    """
    Set up a logger with console and optional file handlers.

    Loggers created under a configured root propagate to it and get no
    handlers of their own.

    Args:
        name: Logger name
        log_file: Optional log file path
        level: Logging level
        format_string: Log format string

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers or logging.getLogger().handlers:
        return logger

    logger.setLevel(getattr(logging, level.upper()))

    # Default format
    if not format_string:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler if specified
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def write_run_header(log_file: Path) -> None:
    """Start the log file with a timestamped run header."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    with open(log_file, "a", encoding="utf-8") as f:
        f.write(f"{RUN_HEADER_RULE}\n")
        f.write(f"Dev Environment Installer Log - {datetime.now().strftime('%a %b %d %H:%M:%S %Y')}\n")
        f.write(f"{RUN_HEADER_RULE}\n")


def setup_root_logger(log_file: Optional[Path] = None,
                     level: str = "INFO",
                     max_file_size_mb: int = 10,
                     backup_count: int = 5):
    """
    Set up the root logger for the application.

    Args:
        log_file: Optional log file path
        level: Console logging level; the file always records debug output
        max_file_size_mb: Size at which the log file is rotated
        backup_count: Number of rotated files kept
    """
    root_logger = logging.getLogger()

    # Clear any existing handlers
    root_logger.handlers.clear()

    # Root passes everything; each handler filters for its audience
    root_logger.setLevel(logging.DEBUG)

    # Console stays terse; the file gets full detail
    console_formatter = logging.Formatter("%(levelname)s: %(message)s")
    file_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
    )

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper()))
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    # File handler
    if log_file:
        write_run_header(log_file)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)

    # Set levels for third-party loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
