"""
Centralized logging configuration for backup integrity validation.

This module provides structured logging with console and file handlers,
log rotation, and progress tracking for validation runs. Console output goes
to stderr so the validation report on stdout stays machine-readable.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime, timezone


def setup_logger(
    name: str = "backup_integrity",
    log_level: str = "WARNING",
    log_file: Optional[str] = None,
    log_max_size: int = 10485760,  # 10MB
    log_backup_count: int = 5,
    verbose: bool = False,
    debug: bool = False
) -> logging.Logger:
    """
    Set up centralized logging configuration.

    Args:
        name: Logger name
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Log file path (optional)
        log_max_size: Maximum log file size in bytes
        log_backup_count: Number of backup log files to keep
        verbose: Enable verbose console output (at least INFO)
        debug: Enable debug mode (overrides log_level)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Clear any existing handlers
    logger.handlers.clear()

    if debug:
        level = logging.DEBUG
    else:
        level = getattr(logging, log_level.upper(), logging.WARNING)
        if verbose:
            level = min(level, logging.INFO)

    logger.setLevel(level)

    detailed_formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    simple_formatter = logging.Formatter(
        fmt='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stderr)
    if verbose or debug:
        console_handler.setFormatter(detailed_formatter)
    else:
        console_handler.setFormatter(simple_formatter)
    console_handler.setLevel(level)

    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_file,
            maxBytes=log_max_size,
            backupCount=log_backup_count,
            encoding='utf-8',
            errors='backslashreplace'
        )
        file_handler.setFormatter(detailed_formatter)
        file_handler.setLevel(logging.DEBUG)

        logger.addHandler(file_handler)
        # The file always records everything, whatever the console shows
        logger.setLevel(logging.DEBUG)

    # Prevent duplicate logs from parent loggers
    logger.propagate = False

    return logger


def get_logger(name: str = "backup_integrity") -> logging.Logger:
    """
    Get an existing logger or create a basic one.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger = setup_logger(name)

    return logger


class ProgressLogger:
    """
    Logger for tracking validation progress.

    Logs the start and completion of an operation together with
    its outcome counts and duration.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize progress logger.

        Args:
            logger: Logger instance (creates default if None)
        """
        self.logger = logger or get_logger("backup_integrity.progress")
        self.start_time: Optional[datetime] = None

    def start_operation(self, operation: str, target: str = "") -> None:
        """
        Log the start of an operation.

        Args:
            operation: Operation name
            target: Path or item the operation works on (optional)
        """
        self.start_time = datetime.now(timezone.utc)

        message = f"Starting {operation}"
        if target:
            message += f": {target}"

        self.logger.info(
            message,
            extra={
                "event_type": "operation_start",
                "operation": operation,
                "target": target,
                "start_time": self.start_time.isoformat(),
            }
        )

    def complete_operation(self, operation: str, total_items: int,
                          success_count: int, warning_count: int = 0,
                          error_count: int = 0) -> None:
        """
        Log operation completion.

        Args:
            operation: Operation name
            total_items: Total number of items processed
            success_count: Number of items without findings
            warning_count: Number of items flagged with warnings
            error_count: Number of failed items
        """
        duration = None
        if self.start_time:
            duration = (datetime.now(timezone.utc) - self.start_time).total_seconds()

        message = f"Completed {operation}: {success_count}/{total_items} valid"
        if warning_count > 0:
            message += f", {warning_count} warnings"
        if error_count > 0:
            message += f", {error_count} errors"
        if duration is not None:
            message += f" (took {duration:.2f}s)"

        level = logging.INFO if error_count == 0 else logging.WARNING

        self.logger.log(
            level,
            message,
            extra={
                "event_type": "operation_complete",
                "operation": operation,
                "total_items": total_items,
                "success_count": success_count,
                "warning_count": warning_count,
                "error_count": error_count,
                "duration": duration,
            }
        )
