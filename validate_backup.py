#!/usr/bin/env python3
"""
Backup validation script entry point.

This provides a simple `python validate_backup.py <backup_path>` interface
for users who have not installed the package.
"""

import sys
from pathlib import Path

# Add src to Python path to allow imports
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))

from backup_integrity.cli.validate_cli import validate_app

if __name__ == "__main__":
    validate_app()
