"""Presets commands for listing, saving and initializing furniture presets.

This module provides the `presets` command group. Custom presets are stored
in ``~/.plycut/presets.json`` unless PLYCUT_PRESETS_FILE points elsewhere.
"""

from pathlib import Path
from typing import Annotated, NoReturn

import typer

from plycut.application.config import ConfigError, load_config, resolve_furniture
from plycut.application.presets import PresetManager, PresetNotFoundError
from plycut.cli.commands.validate import display_config_error

presets_app = typer.Typer(
    name="presets",
    help="Manage furniture presets.",
)


def _fail_not_found(manager: PresetManager, key: str) -> NoReturn:
    available = ", ".join(summary.key for summary in manager.list_presets())
    typer.echo(f"Error: Preset not found: {key}", err=True)
    typer.echo(f"Available presets: {available}", err=True)
    raise typer.Exit(code=1)


@presets_app.command(name="list")
def list_presets() -> None:
    """List bundled and custom furniture presets.

    Example:
        plycut presets list
    """
    manager = PresetManager()
    try:
        summaries = manager.list_presets()
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo("Available presets:")
    typer.echo()

    max_key_width = max(len(summary.key) for summary in summaries)
    for summary in summaries:
        typer.echo(
            f"  {summary.key:<{max_key_width}}  - {summary.name} "
            f"({summary.piece_count} pieces) {summary.description}"
        )

    typer.echo()
    typer.echo("Use 'plycut presets init <key>' to create a job file from a preset.")


@presets_app.command(name="show")
def show_preset(
    key: Annotated[str, typer.Argument(help="Preset key")],
) -> None:
    """Show the cuts that make up a preset.

    Example:
        plycut presets show chair
    """
    manager = PresetManager()
    try:
        preset = manager.get_preset(key)
    except PresetNotFoundError:
        _fail_not_found(manager, key)

    typer.echo(f"{preset.name} ({key})")
    for cut in preset.cuts:
        typer.echo(f"  {cut.quantity} x {cut.name}: {cut.width:g} x {cut.height:g}")


@presets_app.command(name="init")
def init_preset(
    key: Annotated[
        str,
        typer.Argument(help="Preset to build the job from"),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output file path (default: <key>.json)"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing file"),
    ] = False,
) -> None:
    """Initialize a new job file from a preset.

    Examples:
        plycut presets init table
        plycut presets init bed-frame --output bedroom.json
    """
    manager = PresetManager()

    if output is None:
        output = Path(f"{key}.json")

    if not manager.exists(key):
        _fail_not_found(manager, key)

    if output.exists() and not force:
        typer.echo(f"Error: File already exists: {output}", err=True)
        typer.echo("Use --force to overwrite.", err=True)
        raise typer.Exit(code=1)

    try:
        manager.init_preset(key, output)
        typer.echo(f"Created: {output}")
    except OSError as e:
        typer.echo(f"Error: Could not write file: {e}", err=True)
        raise typer.Exit(code=1)


@presets_app.command(name="save")
def save_preset(
    job_file: Annotated[
        Path,
        typer.Argument(help="Job file containing the furniture item"),
    ],
    furniture_index: Annotated[
        int,
        typer.Option("--furniture-index", "-i", help="Index of the furniture item"),
    ] = 0,
    name: Annotated[
        str | None,
        typer.Option("--name", "-n", help="Preset name (default: the item's name)"),
    ] = None,
) -> None:
    """Save a furniture item from a job file as a custom preset.

    Example:
        plycut presets save job.json --furniture-index 1 --name "Desk"
    """
    manager = PresetManager()
    try:
        items = resolve_furniture(load_config(job_file), manager)
    except ConfigError as e:
        display_config_error(e)
        raise typer.Exit(code=1)

    if not 0 <= furniture_index < len(items):
        typer.echo(
            f"Error: Furniture index {furniture_index} out of range "
            f"(job has {len(items)} item(s))",
            err=True,
        )
        raise typer.Exit(code=1)

    item = items[furniture_index]
    key = manager.save_custom(name or item.name, item.cuts)
    typer.echo(f"Saved preset: {key}")


@presets_app.command(name="delete")
def delete_preset(
    key: Annotated[str, typer.Argument(help="Custom preset key")],
) -> None:
    """Delete a custom preset.

    Example:
        plycut presets delete custom-desk
    """
    manager = PresetManager()
    try:
        manager.delete_custom(key)
    except PresetNotFoundError:
        _fail_not_found(manager, key)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Deleted preset: {key}")
