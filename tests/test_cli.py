"""
Test suite for the backuptest command-line interface.

Tests usage output, the rendered report, JSON output and exit codes
using Typer's CliRunner against temporary backup trees.
"""

import hashlib
import json
import logging
import os
import pytest
from pathlib import Path
from unittest.mock import patch

# Add src to path for imports
import sys
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from typer.testing import CliRunner

from backup_integrity.cli.validate_cli import validate_app

HELLO_MD5 = "5d41402abc4b2a76b9719d911017c592"


@pytest.fixture
def runner():
    """Create CLI runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep validator settings independent of the caller's environment."""
    for name in ["BACKUPTEST_HASH_ALGORITHM", "BACKUPTEST_CHUNK_SIZE",
                 "BACKUPTEST_FAIL_ON_ERROR", "LOG_LEVEL", "LOG_FILE", "DEBUG", "VERBOSE"]:
        monkeypatch.delenv(name, raising=False)

    yield

    # Handlers bound to the runner's captured streams must not outlive the test
    logger = logging.getLogger("backup_integrity")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.propagate = True


@pytest.fixture
def backup_dir(tmp_path):
    """Create a backup directory with one regular and one empty file."""
    directory = tmp_path / "daily"
    directory.mkdir()
    (directory / "a.txt").write_bytes(b"hello")
    (directory / "empty.bin").write_bytes(b"")
    return directory


class TestValidateCLI:
    """Test the backuptest command."""

    def test_no_arguments_prints_usage(self, runner):
        """Test missing path prints usage with examples and exits 1."""
        result = runner.invoke(validate_app, [])

        assert result.exit_code == 1
        assert "Usage: backuptest <backup_path>" in result.output
        assert "backuptest /backup/daily" in result.output

    def test_report_for_directory(self, runner, backup_dir):
        """Test report lines and summary for a mixed directory."""
        result = runner.invoke(validate_app, [str(backup_dir)])

        assert result.exit_code == 0
        assert "=== BACKUP INTEGRITY TEST RESULTS ===" in result.output
        assert f"[OK] {backup_dir / 'a.txt'}" in result.output
        assert f"Size: 5 B | Checksum: {HELLO_MD5}" in result.output
        assert f"[WARNING] {backup_dir / 'empty.bin'}" in result.output
        assert "Error: Empty file" in result.output
        assert "Valid: 1" in result.output
        assert "Warnings: 1" in result.output
        assert "Errors: 0" in result.output
        assert "verified successfully" not in result.output

    def test_success_banner(self, runner, tmp_path):
        """Test banner appears only when every file is OK."""
        backup_file = tmp_path / "database.sql"
        backup_file.write_bytes(b"x" * 2048)

        result = runner.invoke(validate_app, [str(backup_file)])

        assert result.exit_code == 0
        assert "Size: 2.0 KB" in result.output
        assert "Backup integrity verified successfully!" in result.output

    def test_missing_path_exits_zero_by_default(self, runner, tmp_path):
        """Test per-file errors do not change the exit code unless requested."""
        missing = tmp_path / "gone"

        result = runner.invoke(validate_app, [str(missing)])

        assert result.exit_code == 0
        assert f"[ERROR] {missing}" in result.output
        assert "No such file or directory" in result.output
        assert "Errors: 1" in result.output

    def test_fail_on_error_flag(self, runner, tmp_path):
        """Test --fail-on-error exits 1 when any ERROR result exists."""
        result = runner.invoke(validate_app, [str(tmp_path / "gone"), "--fail-on-error"])

        assert result.exit_code == 1
        assert "Errors: 1" in result.output

    def test_fail_on_error_from_environment(self, runner, monkeypatch, tmp_path, backup_dir):
        """Test BACKUPTEST_FAIL_ON_ERROR enables strict exit codes and the flag can disable it."""
        monkeypatch.setenv("BACKUPTEST_FAIL_ON_ERROR", "true")

        assert runner.invoke(validate_app, [str(tmp_path / "gone")]).exit_code == 1
        assert runner.invoke(validate_app, [str(tmp_path / "gone"), "--no-fail-on-error"]).exit_code == 0
        # Warnings alone never fail the run
        assert runner.invoke(validate_app, [str(backup_dir)]).exit_code == 0

    def test_json_output(self, runner, backup_dir):
        """Test JSON output contains every result and the summary."""
        result = runner.invoke(validate_app, [str(backup_dir), "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["hash_algorithm"] == "md5"
        assert payload["summary"] == {
            "valid": 1,
            "warnings": 1,
            "errors": 0,
            "total": 2,
            "successful": False,
        }
        by_name = {Path(item["path"]).name: item for item in payload["results"]}
        assert by_name["a.txt"]["checksum"] == HELLO_MD5
        assert by_name["a.txt"]["status"] == "OK"
        assert by_name["empty.bin"]["error_message"] == "Empty file"

    def test_algorithm_option(self, runner, tmp_path):
        """Test --algorithm selects the digest."""
        backup_file = tmp_path / "a.txt"
        backup_file.write_bytes(b"hello")

        result = runner.invoke(validate_app, [str(backup_file), "--algorithm", "sha256", "--json"])

        payload = json.loads(result.stdout)
        assert payload["results"][0]["checksum"] == hashlib.sha256(b"hello").hexdigest()

    def test_unknown_algorithm_is_configuration_error(self, runner, tmp_path):
        """Test invalid configuration reports an error and exits 1."""
        result = runner.invoke(validate_app, [str(tmp_path), "--algorithm", "nope"])

        assert result.exit_code == 1
        assert "Unsupported hash algorithm: nope" in result.output

    def test_paths_with_markup_characters(self, runner, tmp_path):
        """Test paths containing brackets are printed literally."""
        odd_file = tmp_path / "[red]backup[bold].sql"
        odd_file.write_bytes(b"data")

        result = runner.invoke(validate_app, [str(odd_file)])

        assert result.exit_code == 0
        assert f"[OK] {odd_file}" in result.output

    @pytest.mark.skipif(sys.platform in ("darwin", "win32"), reason="requires byte-string file names")
    def test_undecodable_file_name(self, runner, tmp_path):
        """Test a file name that is not valid UTF-8 is reported without breaking the run."""
        (tmp_path / "good.txt").write_bytes(b"hello")
        with open(os.path.join(os.fsencode(str(tmp_path)), b"bad\xff.dat"), "wb") as handle:
            handle.write(b"data")

        result = runner.invoke(validate_app, [str(tmp_path)])

        assert result.exit_code == 0
        assert "bad\\xff.dat" in result.output
        assert "Valid: 2" in result.output
        assert "Errors: 0" in result.output

        json_result = runner.invoke(validate_app, [str(tmp_path), "--json"])

        assert json_result.exit_code == 0
        payload = json.loads(json_result.stdout)
        names = sorted(Path(item["path"]).name for item in payload["results"])
        assert names == ["bad\\xff.dat", "good.txt"]
        assert payload["summary"]["valid"] == 2

    def test_progress_reports_examined_paths(self, runner, backup_dir):
        """Test the spinner counts every examined path."""
        with patch("backup_integrity.cli.validate_cli.Progress") as progress_cls:
            result = runner.invoke(validate_app, [str(backup_dir)])

        progress = progress_cls.return_value.__enter__.return_value
        task = progress.add_task.return_value
        assert result.exit_code == 0
        progress.update.assert_called_with(task, description="Examined 2 paths")

    def test_log_file_option(self, runner, backup_dir, tmp_path):
        """Test --log-file records the run."""
        log_file = tmp_path / "logs" / "backuptest.log"

        result = runner.invoke(validate_app, [str(backup_dir), "--log-file", str(log_file)])

        assert result.exit_code == 0
        content = log_file.read_text(encoding="utf-8")
        assert "Starting backup validation" in content
        assert "Empty file" in content
