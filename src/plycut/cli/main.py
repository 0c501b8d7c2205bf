"""Typer CLI for plywood cut optimization."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from plycut.application import OptimizeCutsCommand
from plycut.application.config import (
    ConfigError,
    load_config,
    merge_config_with_cli,
)
from plycut.cli.commands import presets_app, validate_command
from plycut.domain.value_objects import Unit
from plycut.infrastructure import CutDiagramRenderer, JsonExporter

OUTPUT_FORMATS = ("text", "ascii", "json", "svg")

app = typer.Typer(
    name="plycut",
    help="Lay out furniture parts on plywood sheets with minimal waste.",
)

# Register validate command
app.command(name="validate")(validate_command)

# Register presets subcommand group
app.add_typer(presets_app, name="presets")


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """Lay out furniture parts on plywood sheets with minimal waste."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


@app.command()
def optimize(
    job_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON job file"),
    ],
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, ascii, json, svg"),
    ] = "text",
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write output to a file"),
    ] = None,
    sheet_width: Annotated[
        float | None,
        typer.Option("--sheet-width", help="Override sheet width"),
    ] = None,
    sheet_height: Annotated[
        float | None,
        typer.Option("--sheet-height", help="Override sheet height"),
    ] = None,
    sheets: Annotated[
        int | None,
        typer.Option("--sheets", help="Override number of sheets available"),
    ] = None,
    kerf: Annotated[
        float | None,
        typer.Option("--kerf", help="Override saw blade width"),
    ] = None,
    unit: Annotated[
        Unit | None,
        typer.Option("--unit", help="Override display unit"),
    ] = None,
) -> None:
    """Optimize the cut layout for a job file.

    Pieces that cannot be placed are reported in the output; they do not
    make the command fail.

    Examples:
        plycut optimize job.json
        plycut optimize job.json --format ascii --kerf 3
        plycut optimize job.json --format svg --output layout.svg
    """
    output_format = output_format.lower()
    if output_format not in OUTPUT_FORMATS:
        typer.echo(f"Unknown format: {output_format}", err=True)
        typer.echo(f"Available formats: {', '.join(OUTPUT_FORMATS)}", err=True)
        raise typer.Exit(code=1)

    try:
        config = load_config(job_file)
        config = merge_config_with_cli(
            config,
            sheet_width=sheet_width,
            sheet_height=sheet_height,
            sheets=sheets,
            kerf=kerf,
            unit=unit,
        )
        output = OptimizeCutsCommand().execute(config)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    renderer = CutDiagramRenderer(unit=output.unit)
    summary = renderer.render_summary(output.result, output.total_pieces)

    if output_format == "json":
        content = JsonExporter().export_string(output.result)
    elif output_format == "svg":
        content = renderer.render_combined_svg(output.result)
    elif output_format == "ascii":
        content = renderer.render_all_ascii(output.result) + "\n\n" + summary
    else:
        content = summary

    if output_file is not None:
        try:
            output_file.write_text(content, encoding="utf-8")
        except OSError as e:
            typer.echo(f"Error: Could not write file: {e}", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"{output_format.upper()} exported to: {output_file}")
        if output_format in ("json", "svg"):
            typer.echo()
            typer.echo(summary)
    else:
        typer.echo(content)


if __name__ == "__main__":
    app()
