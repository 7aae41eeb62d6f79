"""
Result records produced by backup validation.

This module defines the per-file validation result, its status values and
the aggregate summary consumed by the CLI and other renderers.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable

from ..utils.formatting import display_path


class ValidationStatus(str, Enum):
    """Outcome of validating a single file."""
    OK = "OK"
    WARNING = "WARNING"
    ERROR = "ERROR"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating one file (or one inaccessible path)."""
    path: str
    status: ValidationStatus
    size_bytes: int = 0
    checksum: str = ""
    error_message: str = ""
    examined_at: datetime = field(default_factory=_utc_now)

    @classmethod
    def error(cls, path: str, message: str) -> "ValidationResult":
        """Build an ERROR result carrying only the path and the failure text."""
        return cls(path=path, status=ValidationStatus.ERROR, error_message=message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": display_path(self.path),
            "status": self.status.value,
            "size_bytes": self.size_bytes,
            "checksum": self.checksum,
            "error_message": display_path(self.error_message),
            "examined_at": self.examined_at.isoformat(),
        }


@dataclass(frozen=True)
class ValidationSummary:
    """Aggregate status counts across a validation run."""
    valid: int
    warnings: int
    errors: int

    @property
    def total(self) -> int:
        return self.valid + self.warnings + self.errors

    @property
    def is_successful(self) -> bool:
        return self.warnings == 0 and self.errors == 0

    @property
    def has_errors(self) -> bool:
        return self.errors > 0

    @classmethod
    def from_results(cls, results: Iterable[ValidationResult]) -> "ValidationSummary":
        """
        Count results by status.

        Args:
            results: Validation results in any order

        Returns:
            ValidationSummary with one count per status
        """
        counts = {status: 0 for status in ValidationStatus}
        for result in results:
            counts[result.status] += 1

        return cls(
            valid=counts[ValidationStatus.OK],
            warnings=counts[ValidationStatus.WARNING],
            errors=counts[ValidationStatus.ERROR]
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "warnings": self.warnings,
            "errors": self.errors,
            "total": self.total,
            "successful": self.is_successful,
        }
