"""FastAPI dependency injection for plycut services."""

from typing import Annotated

from fastapi import Depends

from plycut.application.commands import OptimizeCutsCommand
from plycut.application.presets import PresetManager


def get_preset_manager() -> PresetManager:
    """Dependency for PresetManager."""
    return PresetManager()


def get_optimize_command(
    manager: Annotated[PresetManager, Depends(get_preset_manager)],
) -> OptimizeCutsCommand:
    """Dependency for OptimizeCutsCommand."""
    return OptimizeCutsCommand(preset_manager=manager)


# Type aliases for cleaner endpoint signatures
PresetManagerDep = Annotated[PresetManager, Depends(get_preset_manager)]
OptimizeCommandDep = Annotated[OptimizeCutsCommand, Depends(get_optimize_command)]
