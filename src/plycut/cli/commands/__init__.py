"""CLI command implementations for the plycut application.

This package contains subcommands for the plycut CLI, including:
- validate: Validate a job file
- presets: Manage furniture presets
"""

from plycut.cli.commands.presets import presets_app
from plycut.cli.commands.validate import validate_command

__all__ = ["presets_app", "validate_command"]
