"""Validate command for checking snapshot files.

This module provides the `validate` command that checks a canvas snapshot
(and optionally a settings file) for errors and layout advisories.
"""

from pathlib import Path
from typing import Annotated

import typer

from sheetlayout.application.config import (
    ConfigError,
    LayoutSettings,
    ValidationResult,
    load_settings,
    load_snapshot,
    validate_snapshot,
)


def validate_command(
    snapshot_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON canvas snapshot to validate"),
    ],
    settings_file: Annotated[
        Path | None,
        typer.Option("--settings", "-s", help="Path to JSON layout settings"),
    ] = None,
) -> None:
    """Validate a canvas snapshot file.

    Checks the snapshot for:
    - JSON syntax errors
    - Schema validation errors (missing fields, degenerate rectangles, etc.)
    - Layout advisories (missing frames, empty content, oversized content)

    Exit codes:
        0 - Snapshot is valid with no warnings
        1 - Snapshot has errors (cannot be used)
        2 - Snapshot is valid but has warnings

    Example:
        sheetlayout validate sheet.json
    """
    typer.echo(f"Validating {snapshot_file}...")
    typer.echo()

    try:
        settings = load_settings(settings_file) if settings_file else LayoutSettings()
        snapshot = load_snapshot(snapshot_file)
    except ConfigError as e:
        _display_load_error(e)
        raise typer.Exit(code=1)

    result = validate_snapshot(snapshot, settings)
    _display_validation_result(result)
    raise typer.Exit(code=result.exit_code)


def _display_load_error(error: ConfigError) -> None:
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            path = detail.get("path") or "<root>"
            typer.echo(f"  {path}: {detail.get('message', 'Unknown error')}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)

    typer.echo()
    typer.echo("Validation failed.", err=True)


def _display_validation_result(result: ValidationResult) -> None:
    if result.errors:
        typer.echo("Errors:", err=True)
        for error in result.errors:
            typer.echo(f"  {error.path}: {error.message}", err=True)
            if error.value is not None:
                typer.echo(f"    Value: {error.value!r}", err=True)
        typer.echo()

    if result.warnings:
        typer.echo("Warnings:")
        for warning in result.warnings:
            typer.echo(f"  {warning.path}: {warning.message}")
            if warning.suggestion:
                typer.echo(f"    Suggestion: {warning.suggestion}")
        typer.echo()

    if result.errors:
        typer.echo(
            f"Validation failed: {len(result.errors)} error(s), {len(result.warnings)} warning(s)",
            err=True,
        )
    elif result.warnings:
        typer.echo(f"Validation passed with {len(result.warnings)} warning(s)")
    else:
        typer.echo("Validation passed. Snapshot is valid.")
