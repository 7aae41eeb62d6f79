"""
Command-line interface for backup integrity validation.

This module provides the `backuptest` CLI using Typer, rendering per-file
results and a summary with Rich, or emitting JSON for other tooling.
"""

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn

from ..config import get_validator_config
from ..utils.formatting import display_path, format_size
from ..utils.logger import setup_logger
from ..validation.models import ValidationResult, ValidationStatus, ValidationSummary
from ..validation.traversal import BackupValidator

# Create Typer app
validate_app = typer.Typer(
    name="backuptest",
    help="Validate backup files: presence, readability, size and checksum.",
    add_completion=False
)

# Rich console for pretty output; long paths must not be wrapped
console = Console(soft_wrap=True)

STATUS_STYLES = {
    ValidationStatus.OK: "green",
    ValidationStatus.WARNING: "yellow",
    ValidationStatus.ERROR: "red",
}


@validate_app.command()
def main(
    backup_path: Optional[Path] = typer.Argument(
        None,
        help="Backup file or directory to validate"
    ),
    algorithm: Optional[str] = typer.Option(
        None,
        "--algorithm", "-a",
        help="Checksum algorithm (default: from .env BACKUPTEST_HASH_ALGORITHM, md5)"
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print results and summary as JSON instead of the report"
    ),
    fail_on_error: Optional[bool] = typer.Option(
        None,
        "--fail-on-error/--no-fail-on-error",
        help="Exit with code 1 when any file has an ERROR status"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose logging"
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug logging"
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file", "-l",
        help="Log file path (default: no file logging)"
    )
):
    """
    Validate the integrity of a backup file or directory.

    Every file is checked for presence, readability and size, and a content
    checksum is recorded for later comparison.
    """
    if backup_path is None:
        _print_usage()
        raise typer.Exit(1)

    try:
        config_overrides = {
            "verbose": verbose,
            "debug": debug,
        }

        if algorithm:
            config_overrides["hash_algorithm"] = algorithm

        if fail_on_error is not None:
            config_overrides["fail_on_error"] = fail_on_error

        if log_file:
            config_overrides["log_file"] = str(log_file)

        config = get_validator_config(**config_overrides)

        logger = setup_logger(
            name="backup_integrity",
            log_level=config.log_level,
            log_file=config.log_file,
            log_max_size=config.log_max_size,
            log_backup_count=config.log_backup_count,
            verbose=config.verbose,
            debug=config.debug
        )

        validator = BackupValidator(config, logger)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
            disable=json_output
        ) as progress:

            task = progress.add_task("Validating backup...", total=None)

            def update_progress(path: str, examined: int):
                progress.update(task, description=f"Examined {examined} paths")

            results = validator.validate(str(backup_path), progress_callback=update_progress)

        summary = ValidationSummary.from_results(results)

        if json_output:
            typer.echo(json.dumps({
                "backup_path": display_path(str(backup_path)),
                "hash_algorithm": config.hash_algorithm,
                "results": [result.to_dict() for result in results],
                "summary": summary.to_dict(),
            }, indent=2, ensure_ascii=False))
        else:
            _display_results(results)
            _display_summary(summary)

    except KeyboardInterrupt:
        console.print("\n[yellow]Validation cancelled by user[/yellow]")
        raise typer.Exit(1)

    except Exception as e:
        console.print(f"\n[red]Error:[/red] {escape(str(e))}")
        if debug:
            console.print_exception()
        raise typer.Exit(1)

    if config.fail_on_error and summary.has_errors:
        raise typer.Exit(1)


def _print_usage():
    """Print usage text and examples."""
    console.print("[cyan]backuptest - Backup Integrity Validator[/cyan]")
    console.print()
    console.print("Usage: backuptest <backup_path>")
    console.print()
    console.print("Examples:")
    console.print("  backuptest /backup/daily")
    console.print("  backuptest /backup/daily/database.sql")


def _display_results(results: List[ValidationResult]):
    """Display one block per validation result."""
    console.print("\n[cyan]=== BACKUP INTEGRITY TEST RESULTS ===[/cyan]\n")

    for result in results:
        style = STATUS_STYLES[result.status]
        console.print(f"[[{style}]{result.status.value}[/{style}]] {escape(display_path(result.path))}")
        console.print(
            f"    Size: {format_size(result.size_bytes)} | "
            f"Checksum: [bright_white]{result.checksum}[/bright_white]"
        )

        if result.error_message:
            console.print(f"    [red]Error[/red]: {escape(display_path(result.error_message))}")
        console.print()


def _display_summary(summary: ValidationSummary):
    """Display aggregate counts and the success banner."""
    console.print("\n[cyan]=== SUMMARY ===[/cyan]")
    console.print(f"  Valid: {summary.valid}")
    console.print(f"  Warnings: {summary.warnings}")
    console.print(f"  Errors: {summary.errors}")

    if summary.is_successful:
        console.print("\n[green]✓ Backup integrity verified successfully![/green]")


if __name__ == "__main__":
    validate_app()
