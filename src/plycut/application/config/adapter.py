"""Adapter to convert JobConfiguration to engine inputs.

Furniture items are resolved against presets and expanded into one
``Piece`` per physical part; the sheet section becomes a
``BinPackingConfig``.
"""

from typing import TYPE_CHECKING, NamedTuple

from plycut.application.config.loader import ConfigError
from plycut.application.config.schema import CutConfig, JobConfiguration
from plycut.domain.value_objects import Piece
from plycut.infrastructure.bin_packing import BinPackingConfig, SheetConfig

if TYPE_CHECKING:
    from plycut.application.presets.manager import PresetManager

# Fill colours cycled per furniture item
PALETTE: tuple[str, ...] = (
    "#3498db",
    "#e74c3c",
    "#2ecc71",
    "#f39c12",
    "#9b59b6",
    "#1abc9c",
    "#e67e22",
    "#34495e",
    "#16a085",
    "#c0392b",
    "#8e44ad",
    "#d35400",
)

DEFAULT_FURNITURE_NAME = "Custom"


class ResolvedFurniture(NamedTuple):
    """A furniture item with its preset applied."""

    name: str
    quantity: int
    cuts: list[CutConfig]


def resolve_furniture(
    config: JobConfiguration, presets: "PresetManager"
) -> list[ResolvedFurniture]:
    """Resolve each furniture item's name and cuts.

    Explicit cuts win over the preset's cuts; the name falls back to the
    preset's name, then to "Custom".

    Raises:
        ConfigError: With error_type "preset" when a preset key is unknown.
    """
    from plycut.application.presets.manager import PresetNotFoundError

    resolved = []
    for index, item in enumerate(config.furniture):
        cuts = list(item.cuts)
        name = item.name
        if item.preset is not None:
            try:
                preset = presets.get_preset(item.preset)
            except PresetNotFoundError:
                raise ConfigError(
                    message=f"Unknown preset '{item.preset}' in furniture[{index}]",
                    error_type="preset",
                    details=[
                        {
                            "path": f"furniture[{index}].preset",
                            "message": "Unknown preset",
                            "value": item.preset,
                        }
                    ],
                )
            if not cuts:
                cuts = list(preset.cuts)
            if name is None:
                name = preset.name
        resolved.append(
            ResolvedFurniture(name or DEFAULT_FURNITURE_NAME, item.quantity, cuts)
        )
    return resolved


def config_to_pieces(
    config: JobConfiguration, presets: "PresetManager"
) -> list[Piece]:
    """Expand furniture items into engine pieces.

    Pieces are produced in input order: furniture item, furniture copy, cut,
    cut copy. Copies of a multi-quantity item are grouped as "Name #n".

    Args:
        config: Validated job configuration.
        presets: Preset lookup for items that reference a preset.

    Returns:
        One Piece per physical part.

    Raises:
        ConfigError: With error_type "preset" when a preset key is unknown.
    """
    pieces = []
    for f, item in enumerate(resolve_furniture(config, presets)):
        color = PALETTE[f % len(PALETTE)]
        for fq in range(item.quantity):
            group = item.name if item.quantity == 1 else f"{item.name} #{fq + 1}"
            for cut in item.cuts:
                for cq in range(cut.quantity):
                    pieces.append(
                        Piece(
                            id=f"{f + 1}-{fq}-{cut.name}-{cq}",
                            label=cut.name,
                            width=cut.width,
                            height=cut.height,
                            group=group,
                            color=color,
                        )
                    )
    return pieces


def config_to_bin_packing(config: JobConfiguration) -> BinPackingConfig:
    """Convert the job's sheet section to a BinPackingConfig."""
    return BinPackingConfig(
        sheet_size=SheetConfig(width=config.sheet.width, height=config.sheet.height),
        kerf=config.sheet.kerf,
        max_sheets=config.sheet.quantity,
    )
