"""
Utility modules for backup integrity validation.

This package contains shared utilities for logging and
human-readable formatting.
"""

from .logger import setup_logger, get_logger, ProgressLogger
from .formatting import format_size, display_path

__all__ = [
    "setup_logger",
    "get_logger",
    "ProgressLogger",
    "format_size",
    "display_path",
]
