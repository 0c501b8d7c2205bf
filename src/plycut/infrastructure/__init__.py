"""Infrastructure layer - packing engine, rendering and export."""

from .bin_packing import (
    BinPackingConfig,
    PackingResult,
    PlacedPiece,
    SheetConfig,
    SheetLayout,
    SheetState,
    UnplacedPiece,
)
from .consolidation import SheetConsolidator
from .cut_diagram_renderer import CutDiagramRenderer
from .exporters import JsonExporter
from .fit_scoring import Fit, FitScore, find_best_fit, leaves_kerf, score_fit
from .max_rects import STRATEGIES, MaxRectsBinPacker, PackingAttempt, pack_pieces
from .suggestions import Suggestion, generate_suggestions

__all__ = [
    # Bin packing
    "BinPackingConfig",
    "MaxRectsBinPacker",
    "PackingAttempt",
    "PackingResult",
    "PlacedPiece",
    "SheetConfig",
    "SheetConsolidator",
    "SheetLayout",
    "SheetState",
    "STRATEGIES",
    "UnplacedPiece",
    "pack_pieces",
    # Fit scoring
    "Fit",
    "FitScore",
    "find_best_fit",
    "leaves_kerf",
    "score_fit",
    # Suggestions
    "Suggestion",
    "generate_suggestions",
    # Output
    "CutDiagramRenderer",
    "JsonExporter",
]
