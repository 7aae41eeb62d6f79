"""
Command-line interface modules for backup integrity validation.

This package provides the `backuptest` CLI with a Rich report,
JSON output and configurable exit behaviour.
"""

from .validate_cli import validate_app

__all__ = [
    "validate_app",
]
