"""Validate command for checking job files.

This module provides the `validate` command that checks a JSON job file for
errors and flags pieces that no sheet orientation can hold.
"""

from pathlib import Path
from typing import Annotated

import typer

from plycut.application.config import (
    ConfigError,
    config_to_bin_packing,
    config_to_pieces,
    load_config,
)
from plycut.application.presets import PresetManager


def display_config_error(error: ConfigError) -> None:
    """Display a configuration loading error.

    Args:
        error: The ConfigError to display
    """
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
    elif error.error_type in ("validation", "preset") and error.details:
        for detail in error.details:
            path = detail.get("path", "unknown")
            message = detail.get("message", "Unknown error")
            value = detail.get("value")
            typer.echo(f"  {path}: {message}", err=True)
            if value is not None:
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)


def validate_command(
    job_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON job file to validate"),
    ],
) -> None:
    """Validate a cut job file.

    Checks the job file for:
    - JSON syntax errors
    - Schema validation errors (missing fields, invalid sizes, etc.)
    - Unknown presets
    - Pieces too large for the sheet in either orientation

    Exit codes:
        0 - Job is valid with no warnings
        1 - Job has errors (cannot be used)
        2 - Job is valid but has warnings

    Example:
        plycut validate kitchen.json
    """
    typer.echo(f"Validating {job_file}...")
    typer.echo()

    try:
        config = load_config(job_file)
        pieces = config_to_pieces(config, PresetManager())
    except ConfigError as e:
        display_config_error(e)
        typer.echo()
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    sheet = config_to_bin_packing(config).sheet_size
    oversized = [piece for piece in pieces if not sheet.can_hold(piece)]

    if oversized:
        typer.echo("Warnings:")
        unit = config.unit.value
        for piece in oversized:
            typer.echo(
                f"  {piece.group}: {piece.label} ({piece.width:g}x{piece.height:g}{unit}) "
                f"does not fit a {sheet.width:g}x{sheet.height:g}{unit} sheet"
            )
        typer.echo()
        typer.echo(f"Validation passed with {len(oversized)} warning(s)")
        raise typer.Exit(code=2)

    typer.echo(
        f"Validation passed. {len(config.furniture)} furniture item(s), "
        f"{len(pieces)} piece(s)."
    )
