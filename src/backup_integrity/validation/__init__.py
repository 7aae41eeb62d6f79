"""
Validation modules for backup integrity checking.

This package walks backup paths, validates each file's readability and
size, and computes content checksums for later comparison.
"""

from .models import ValidationResult, ValidationStatus, ValidationSummary
from .file_validator import FileValidator, compute_checksum, validate_file
from .traversal import BackupValidator, validate_backup

__all__ = [
    "ValidationResult",
    "ValidationStatus",
    "ValidationSummary",
    "FileValidator",
    "compute_checksum",
    "validate_file",
    "BackupValidator",
    "validate_backup",
]
