"""JSON export of packing results."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from plycut.domain.value_objects import FreeRectangle, Piece
from plycut.infrastructure.bin_packing import (
    PackingResult,
    PlacedPiece,
    SheetLayout,
)

logger = logging.getLogger(__name__)


class JsonExporter:
    """Serializes a PackingResult to plain JSON-compatible data.

    Attributes:
        indent: Indentation for string export, or None for compact output.
        include_free_rectangles: Whether each sheet lists its free rectangles.
    """

    format_name = "json"
    file_extension = "json"

    def __init__(
        self, indent: int | None = 2, include_free_rectangles: bool = True
    ) -> None:
        self.indent = indent
        self.include_free_rectangles = include_free_rectangles

    def export(self, result: PackingResult, path: Path) -> None:
        """Write the result to ``path`` as JSON."""
        path.write_text(self.export_string(result), encoding="utf-8")
        logger.info("Exported packing result to %s", path)

    def export_string(self, result: PackingResult) -> str:
        """Return the result as a JSON string."""
        return json.dumps(self.to_dict(result), indent=self.indent)

    def to_dict(self, result: PackingResult) -> dict[str, Any]:
        """Convert the result to a dictionary.

        Args:
            result: Complete packing result.

        Returns:
            Dictionary with ``sheet``, ``summary``, ``sheets``, ``unplaced``
            and ``suggestions`` keys.
        """
        return {
            "sheet": {
                "width": result.sheet_config.width,
                "height": result.sheet_config.height,
            },
            "summary": {
                "total_sheets": result.total_sheets,
                "pieces_placed": result.total_pieces_placed,
                "pieces_unplaced": len(result.unplaced),
                "used_area": result.total_used_area,
                "waste_percentage": result.total_waste_percentage,
                "theoretical_min_sheets": result.theoretical_min_sheets,
            },
            "sheets": [self._layout_to_dict(layout) for layout in result.layouts],
            "unplaced": [
                {**self._piece_to_dict(entry.piece), "reason": entry.reason.value}
                for entry in result.unplaced
            ],
            "suggestions": [
                {
                    "type": suggestion.type.value,
                    "sheet": suggestion.sheet,
                    "message": suggestion.message,
                }
                for suggestion in result.suggestions
            ],
        }

    def _layout_to_dict(self, layout: SheetLayout) -> dict[str, Any]:
        data: dict[str, Any] = {
            "index": layout.sheet_index,
            "used_area": layout.used_area,
            "waste_percentage": layout.waste_percentage,
            "total_free_area": layout.total_free_area,
            "largest_free": self._rect_to_dict(layout.largest_free_rectangle),
            "pieces": [self._placement_to_dict(p) for p in layout.placements],
        }
        if self.include_free_rectangles:
            data["free_rectangles"] = [
                self._rect_to_dict(rect) for rect in layout.free_rectangles
            ]
        return data

    def _placement_to_dict(self, placement: PlacedPiece) -> dict[str, Any]:
        return {
            **self._piece_to_dict(placement.piece),
            "x": placement.x,
            "y": placement.y,
            "placed_width": placement.placed_width,
            "placed_height": placement.placed_height,
            "rotated": placement.rotated,
        }

    @staticmethod
    def _piece_to_dict(piece: Piece) -> dict[str, Any]:
        return {
            "id": piece.id,
            "label": piece.label,
            "group": piece.group,
            "color": piece.color,
            "width": piece.width,
            "height": piece.height,
        }

    @staticmethod
    def _rect_to_dict(rect: FreeRectangle) -> dict[str, float]:
        return {"x": rect.x, "y": rect.y, "width": rect.width, "height": rect.height}
