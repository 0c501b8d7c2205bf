"""Domain value objects for the plycut sheet optimizer."""

from plycut.domain.value_objects import (
    FreeRectangle,
    Heuristic,
    Piece,
    SortOrder,
    SuggestionType,
    Unit,
    UnplacedReason,
)

__all__ = [
    "FreeRectangle",
    "Heuristic",
    "Piece",
    "SortOrder",
    "SuggestionType",
    "Unit",
    "UnplacedReason",
]
