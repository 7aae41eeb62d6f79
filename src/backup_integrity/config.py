"""
Configuration management for backup integrity validation.

This module provides a dataclass for validator settings, environment
variable loading, and validation of the configured values.
"""

import hashlib
import os
from dataclasses import dataclass, field
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


@dataclass
class ValidatorConfig:
    """Configuration for validation runs."""

    # Checksum Settings
    hash_algorithm: str = field(default_factory=lambda: os.getenv("BACKUPTEST_HASH_ALGORITHM", "md5"))
    chunk_size: int = field(default_factory=lambda: int(os.getenv("BACKUPTEST_CHUNK_SIZE", "65536")))

    # Exit Behaviour
    fail_on_error: bool = field(default_factory=lambda: os.getenv("BACKUPTEST_FAIL_ON_ERROR", "false").lower() == "true")

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "WARNING"))
    log_file: Optional[str] = field(default_factory=lambda: os.getenv("LOG_FILE"))
    log_max_size: int = field(default_factory=lambda: int(os.getenv("LOG_MAX_SIZE", "10485760")))  # 10MB
    log_backup_count: int = field(default_factory=lambda: int(os.getenv("LOG_BACKUP_COUNT", "5")))

    # Development
    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    verbose: bool = field(default_factory=lambda: os.getenv("VERBOSE", "false").lower() == "true")

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.validate()

    def validate(self) -> None:
        """Validate configuration settings."""
        check_hash_algorithm(self.hash_algorithm)

        if self.chunk_size <= 0:
            raise ValueError("BACKUPTEST_CHUNK_SIZE must be positive")

        if self.log_max_size <= 0:
            raise ValueError("LOG_MAX_SIZE must be positive")

        if self.log_backup_count < 0:
            raise ValueError("LOG_BACKUP_COUNT must be non-negative")


def check_hash_algorithm(name: str) -> None:
    """
    Ensure a digest algorithm is usable for file checksums.

    Args:
        name: Algorithm name as accepted by hashlib.new

    Raises:
        ValueError: If the algorithm is unknown or has a variable-length digest
    """
    try:
        digest = hashlib.new(name)
    except (ValueError, TypeError):
        raise ValueError(f"Unsupported hash algorithm: {name}")

    # shake_* digests need an explicit length and cannot be compared run to run
    if digest.digest_size == 0:
        raise ValueError(f"Hash algorithm must have a fixed digest size: {name}")


def get_validator_config(**overrides) -> ValidatorConfig:
    """
    Get validator configuration with optional overrides.

    Args:
        **overrides: Configuration values to override

    Returns:
        ValidatorConfig instance
    """
    config = ValidatorConfig()

    # Apply overrides
    for key, value in overrides.items():
        if hasattr(config, key):
            setattr(config, key, value)
        else:
            raise ValueError(f"Unknown configuration key: {key}")

    config.validate()
    return config
