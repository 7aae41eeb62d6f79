"""
Per-file integrity validation.

This module opens a single backup file, measures its size, computes a
content checksum and classifies the outcome. Filesystem failures never
escape: each one is captured as an ERROR result for the file.
"""

import hashlib
import logging
import os
from typing import BinaryIO, Optional

from .models import ValidationResult, ValidationStatus
from ..config import check_hash_algorithm

DEFAULT_HASH_ALGORITHM = "md5"
DEFAULT_CHUNK_SIZE = 65536
EMPTY_FILE_MESSAGE = "Empty file"


def compute_checksum(
    handle: BinaryIO,
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM,
    chunk_size: int = DEFAULT_CHUNK_SIZE
) -> str:
    """
    Stream a binary handle through a digest.

    Args:
        handle: Open binary file object positioned at the start
        hash_algorithm: Algorithm name accepted by hashlib.new
        chunk_size: Number of bytes read per iteration

    Returns:
        Lowercase hex digest of the full content

    Raises:
        OSError: If reading from the handle fails
    """
    digest = hashlib.new(hash_algorithm)
    for chunk in iter(lambda: handle.read(chunk_size), b""):
        digest.update(chunk)
    return digest.hexdigest()


class FileValidator:
    """
    Validates one file at a time.

    The validator keeps no state between calls, so a single instance
    can be reused for every file of a traversal.
    """

    def __init__(
        self,
        hash_algorithm: str = DEFAULT_HASH_ALGORITHM,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize file validator.

        Args:
            hash_algorithm: Digest used for checksums (md5 by default)
            chunk_size: Read size used while hashing
            logger: Logger instance

        Raises:
            ValueError: If the algorithm or chunk size is unusable
        """
        check_hash_algorithm(hash_algorithm)
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")

        self.hash_algorithm = hash_algorithm
        self.chunk_size = chunk_size
        self.logger = logger or logging.getLogger(__name__)

    def validate_file(self, path: str) -> ValidationResult:
        """
        Validate a single file.

        Args:
            path: Path of the file to examine

        Returns:
            ValidationResult describing the file
        """
        path = str(path)

        try:
            handle = open(path, "rb")
        except OSError as e:
            self.logger.warning(f"Cannot open {path}: {e}")
            return ValidationResult.error(path, str(e))

        with handle:
            try:
                size = os.fstat(handle.fileno()).st_size
            except OSError as e:
                self.logger.warning(f"Cannot determine size of {path}: {e}")
                return ValidationResult.error(path, str(e))

            try:
                checksum = self._compute_checksum(handle)
            except OSError as e:
                self.logger.warning(f"Read failed while hashing {path}: {e}")
                return ValidationResult(
                    path=path,
                    status=ValidationStatus.ERROR,
                    size_bytes=size,
                    error_message=str(e)
                )

        if size == 0:
            self.logger.info(f"Empty file: {path}")
            return ValidationResult(
                path=path,
                status=ValidationStatus.WARNING,
                size_bytes=0,
                checksum=checksum,
                error_message=EMPTY_FILE_MESSAGE
            )

        self.logger.debug(f"Validated {path} ({size} bytes, {self.hash_algorithm} {checksum})")
        return ValidationResult(
            path=path,
            status=ValidationStatus.OK,
            size_bytes=size,
            checksum=checksum
        )

    def _compute_checksum(self, handle: BinaryIO) -> str:
        return compute_checksum(handle, self.hash_algorithm, self.chunk_size)


def validate_file(path: str, hash_algorithm: str = DEFAULT_HASH_ALGORITHM) -> ValidationResult:
    """Validate one file with a throwaway FileValidator."""
    return FileValidator(hash_algorithm=hash_algorithm).validate_file(path)
