"""
Backup Integrity Validator

Post-backup sanity checks: confirms every file of a backup is present,
readable and non-empty, and records a content checksum for each.
"""

__version__ = "1.0.0"
__author__ = "Backup Integrity Validator"

from .validation import BackupValidator, FileValidator, ValidationResult, ValidationStatus
from .config import ValidatorConfig

__all__ = [
    "BackupValidator",
    "FileValidator",
    "ValidationResult",
    "ValidationStatus",
    "ValidatorConfig",
    "__version__",
]
