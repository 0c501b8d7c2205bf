"""Data transfer objects for the application layer."""

from dataclasses import dataclass

from plycut.domain.value_objects import Unit
from plycut.infrastructure.bin_packing import PackingResult


@dataclass
class OptimizationOutput:
    """Output DTO for a cut optimization run.

    Attributes:
        result: Packing result from the engine.
        total_pieces: Number of pieces the job expanded to.
        unit: Display unit of the job.
    """

    result: PackingResult
    total_pieces: int
    unit: Unit = Unit.MM

    @property
    def all_placed(self) -> bool:
        """Check whether every piece found a place."""
        return not self.result.unplaced
