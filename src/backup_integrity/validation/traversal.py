"""
Backup traversal and validation orchestration.

This module resolves a backup path to the files it contains and runs the
file validator over each of them, collecting one result per file and one
ERROR result per path that could not be accessed.
"""

import logging
import os
import stat
from typing import Callable, Iterator, List, Optional

from .file_validator import FileValidator
from .models import ValidationResult, ValidationSummary
from ..config import ValidatorConfig
from ..utils.logger import ProgressLogger

NOT_REGULAR_MESSAGE = "Not a regular file or directory"
DIRECTORY_SYMLINK_MESSAGE = "Symlink to directory not followed"


class BackupValidator:
    """
    Validates a backup given as a single file or a directory tree.

    Directories are walked exhaustively and sequentially. An inaccessible
    entry is reported as an ERROR result and the walk carries on with
    its siblings.
    """

    def __init__(
        self,
        config: Optional[ValidatorConfig] = None,
        logger: Optional[logging.Logger] = None,
        file_validator: Optional[FileValidator] = None
    ):
        """
        Initialize backup validator.

        Args:
            config: Validator configuration (environment defaults if None)
            logger: Logger instance
            file_validator: Validator used per file (built from config if None)
        """
        self.config = config or ValidatorConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.progress_logger = ProgressLogger(self.logger)
        self.file_validator = file_validator or FileValidator(
            hash_algorithm=self.config.hash_algorithm,
            chunk_size=self.config.chunk_size,
            logger=self.logger
        )

    def validate(
        self,
        root_path: str,
        progress_callback: Optional[Callable[[str, int], None]] = None
    ) -> List[ValidationResult]:
        """
        Validate every file of a backup.

        Args:
            root_path: Backup file or directory
            progress_callback: Optional callback receiving the path just
                examined and the number of results so far

        Returns:
            Results in traversal order
        """
        root_path = str(root_path)
        self.progress_logger.start_operation("backup validation", root_path)

        results: List[ValidationResult] = []
        for result in self._iter_results(root_path):
            results.append(result)
            if progress_callback:
                progress_callback(result.path, len(results))

        summary = ValidationSummary.from_results(results)
        self.progress_logger.complete_operation(
            "backup validation",
            total_items=summary.total,
            success_count=summary.valid,
            warning_count=summary.warnings,
            error_count=summary.errors
        )
        return results

    def _iter_results(self, root_path: str) -> Iterator[ValidationResult]:
        try:
            root_stat = os.stat(root_path)
        except OSError as e:
            self.logger.error(f"Cannot access backup path {root_path}: {e}")
            yield ValidationResult.error(root_path, str(e))
            return

        if stat.S_ISDIR(root_stat.st_mode):
            yield from self._walk(root_path)
        elif stat.S_ISREG(root_stat.st_mode):
            yield self.file_validator.validate_file(root_path)
        else:
            self.logger.error(f"Backup path is not a regular file or directory: {root_path}")
            yield ValidationResult.error(root_path, NOT_REGULAR_MESSAGE)

    def _walk(self, root_dir: str) -> Iterator[ValidationResult]:
        """
        Walk a directory tree depth-first, yielding file results.

        Entries are visited in name order within each directory, descending
        into a subdirectory where it sorts. The stack of open listings keeps
        arbitrarily deep trees within the recursion limit.
        """
        stack: List[Iterator[os.DirEntry]] = []
        yield from self._enter_directory(root_dir, stack)

        while stack:
            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                continue

            try:
                if entry.is_dir(follow_symlinks=False):
                    yield from self._enter_directory(entry.path, stack)
                    continue
                is_regular = entry.is_file()
                is_link = entry.is_symlink()
                if is_link and not is_regular:
                    # Dangling links raise here
                    entry.stat()
            except OSError as e:
                self.logger.warning(f"Cannot access {entry.path}: {e}")
                yield ValidationResult.error(entry.path, str(e))
                continue

            if is_regular:
                yield self.file_validator.validate_file(entry.path)
            elif is_link and entry.is_dir():
                self.logger.warning(f"Not following directory symlink: {entry.path}")
                yield ValidationResult.error(entry.path, DIRECTORY_SYMLINK_MESSAGE)
            else:
                self.logger.warning(f"Not a regular file: {entry.path}")
                yield ValidationResult.error(entry.path, NOT_REGULAR_MESSAGE)

    def _enter_directory(
        self,
        directory: str,
        stack: List[Iterator[os.DirEntry]]
    ) -> Iterator[ValidationResult]:
        """Push a directory's sorted listing, or yield an ERROR if it cannot be listed."""
        try:
            with os.scandir(directory) as iterator:
                entries = sorted(iterator, key=lambda entry: entry.name)
        except OSError as e:
            self.logger.warning(f"Cannot list directory {directory}: {e}")
            yield ValidationResult.error(directory, str(e))
            return

        stack.append(iter(entries))


def validate_backup(root_path: str, config: Optional[ValidatorConfig] = None) -> List[ValidationResult]:
    """Validate a backup path with a default BackupValidator."""
    return BackupValidator(config).validate(root_path)
