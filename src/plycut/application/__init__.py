"""Application layer - use cases and orchestration."""

from .commands import OptimizeCutsCommand
from .dtos import OptimizationOutput

__all__ = [
    "OptimizeCutsCommand",
    "OptimizationOutput",
]
