"""Application commands (use cases) for cut optimization."""

import logging

from plycut.application.config import (
    JobConfiguration,
    config_to_bin_packing,
    config_to_pieces,
)
from plycut.application.presets import PresetManager
from plycut.infrastructure.max_rects import MaxRectsBinPacker

from .dtos import OptimizationOutput

logger = logging.getLogger(__name__)


class OptimizeCutsCommand:
    """Command to lay out a job's furniture pieces on stock sheets."""

    def __init__(self, preset_manager: PresetManager | None = None) -> None:
        self.preset_manager = preset_manager or PresetManager()

    def execute(self, config: JobConfiguration) -> OptimizationOutput:
        """Expand the job into pieces and pack them.

        Args:
            config: Validated job configuration.

        Returns:
            OptimizationOutput with the packing result.

        Raises:
            ConfigError: If a furniture item references an unknown preset.
        """
        pieces = config_to_pieces(config, self.preset_manager)
        packer = MaxRectsBinPacker(config_to_bin_packing(config))

        logger.debug("Optimizing %d pieces", len(pieces))
        result = packer.pack(pieces)
        return OptimizationOutput(
            result=result, total_pieces=len(pieces), unit=config.unit
        )
