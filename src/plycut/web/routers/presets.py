"""Preset endpoints."""

from fastapi import APIRouter

from plycut.web.dependencies import PresetManagerDep
from plycut.web.schemas.responses import (
    CutSchema,
    PresetContentSchema,
    PresetListItemSchema,
    PresetListSchema,
)

router = APIRouter(prefix="/presets", tags=["presets"])


@router.get("", response_model=PresetListSchema)
async def list_presets(manager: PresetManagerDep) -> PresetListSchema:
    """List bundled and custom presets."""
    presets = [
        PresetListItemSchema(
            key=summary.key,
            name=summary.name,
            description=summary.description,
            builtin=summary.builtin,
            piece_count=summary.piece_count,
        )
        for summary in manager.list_presets()
    ]
    return PresetListSchema(presets=presets)


@router.get("/{key}", response_model=PresetContentSchema)
async def get_preset(key: str, manager: PresetManagerDep) -> PresetContentSchema:
    """Get the cuts of a specific preset.

    Raises:
        PresetNotFoundError: If the preset does not exist (handled by
            exception handler).
    """
    preset = manager.get_preset(key)
    return PresetContentSchema(
        key=key,
        name=preset.name,
        builtin=manager.is_builtin(key),
        cuts=[CutSchema(**cut.model_dump()) for cut in preset.cuts],
    )
