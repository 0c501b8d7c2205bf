"""Bin packing data models for sheet material optimization.

This module provides data structures for representing sheet configuration,
piece placements, per-sheet layouts and packing results, plus the mutable
per-sheet state the packing algorithms work on.

The public result types are frozen dataclasses; only ``SheetState`` is
mutable, and it never escapes a packing run.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from plycut.domain.value_objects import (
    FreeRectangle,
    Heuristic,
    Piece,
    UnplacedReason,
)
from plycut.infrastructure.fit_scoring import Fit, find_best_fit
from plycut.infrastructure.free_space import clipped_free_area, insert_placement
from plycut.infrastructure.suggestions import Suggestion

logger = logging.getLogger(__name__)

# Returned when a sheet has no free space left.
EMPTY_RECTANGLE = FreeRectangle(0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class SheetConfig:
    """Dimensions of the stock sheet.

    Standard plywood sizes:
    - 2440 x 1220 mm (8' x 4') - most common
    - 1525 x 1525 mm (5' x 5') - Baltic birch

    Attributes:
        width: Sheet width in caller units (default 2440).
        height: Sheet height in caller units (default 1220).
    """

    width: float = 2440.0
    height: float = 1220.0

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError("Sheet width must be positive")
        if self.height <= 0:
            raise ValueError("Sheet height must be positive")

    @property
    def area(self) -> float:
        """Total sheet area."""
        return self.width * self.height

    def can_hold(self, piece: Piece) -> bool:
        """Check whether a piece fits an empty sheet in either orientation."""
        fits_normal = piece.width <= self.width and piece.height <= self.height
        fits_rotated = piece.height <= self.width and piece.width <= self.height
        return fits_normal or fits_rotated


@dataclass(frozen=True)
class BinPackingConfig:
    """Configuration for bin packing optimization.

    Attributes:
        sheet_size: Sheet dimensions configuration.
        kerf: Saw blade width reserved after each piece (default 0).
        max_sheets: Maximum number of sheets that may be used (default 5).
    """

    sheet_size: SheetConfig = field(default_factory=SheetConfig)
    kerf: float = 0.0
    max_sheets: int = 5

    def __post_init__(self) -> None:
        if self.kerf < 0:
            raise ValueError("Kerf must be non-negative")
        if self.max_sheets < 1:
            raise ValueError("Maximum sheets must be at least 1")


@dataclass(frozen=True)
class PlacedPiece:
    """A piece placed at a specific position on a sheet.

    Coordinates are measured from the sheet's top-left corner.

    Attributes:
        piece: The original piece being placed.
        x: Horizontal position of the piece's left edge.
        y: Vertical position of the piece's top edge.
        rotated: True if the piece is turned 90 degrees from its original
            orientation.
    """

    piece: Piece
    x: float
    y: float
    rotated: bool = False

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")

    @property
    def placed_width(self) -> float:
        """Width of piece as placed (accounts for rotation)."""
        return self.piece.height if self.rotated else self.piece.width

    @property
    def placed_height(self) -> float:
        """Height of piece as placed (accounts for rotation)."""
        return self.piece.width if self.rotated else self.piece.height

    @property
    def right_edge(self) -> float:
        """X coordinate of piece right edge."""
        return self.x + self.placed_width

    @property
    def bottom_edge(self) -> float:
        """Y coordinate of piece bottom edge."""
        return self.y + self.placed_height

    @property
    def area(self) -> float:
        """Area of the piece, excluding kerf."""
        return self.piece.area


@dataclass(frozen=True)
class UnplacedPiece:
    """A piece the packer could not place, with the reason.

    Attributes:
        piece: The piece that was not placed.
        reason: Why it was not placed.
    """

    piece: Piece
    reason: UnplacedReason


@dataclass(frozen=True)
class SheetLayout:
    """Final layout of pieces on a single sheet.

    Attributes:
        sheet_index: Zero-based index of this sheet in the packing result.
        sheet_config: Configuration of the sheet dimensions.
        placements: Placed pieces in placement order.
        free_rectangles: Maximal free rectangles left on the sheet.
    """

    sheet_index: int
    sheet_config: SheetConfig
    placements: tuple[PlacedPiece, ...]
    free_rectangles: tuple[FreeRectangle, ...] = ()

    def __post_init__(self) -> None:
        if self.sheet_index < 0:
            raise ValueError("Sheet index must be non-negative")

    @property
    def used_area(self) -> float:
        """Total area used by placed pieces, excluding kerf."""
        return sum(p.area for p in self.placements)

    @property
    def waste_percentage(self) -> float:
        """Percentage of the sheet not covered by pieces, to one decimal."""
        return round((1 - self.used_area / self.sheet_config.area) * 100, 1)

    @property
    def piece_count(self) -> int:
        """Number of pieces placed on this sheet."""
        return len(self.placements)

    @property
    def largest_free_rectangle(self) -> FreeRectangle:
        """Free rectangle with the largest area, or a zero-area sentinel."""
        largest = EMPTY_RECTANGLE
        for rect in self.free_rectangles:
            if rect.area > largest.area:
                largest = rect
        return largest

    @property
    def total_free_area(self) -> float:
        """Free area estimated from the maximal rectangles."""
        return clipped_free_area(self.free_rectangles, self.sheet_config.area)


@dataclass(frozen=True)
class PackingResult:
    """Complete result of bin packing optimization.

    Attributes:
        sheet_config: Sheet dimensions the pieces were packed into.
        layouts: Sheet layouts with placed pieces.
        unplaced: Pieces that could not be placed.
        suggestions: Advisory hints derived from the layouts.
    """

    sheet_config: SheetConfig
    layouts: tuple[SheetLayout, ...] = ()
    unplaced: tuple[UnplacedPiece, ...] = ()
    suggestions: tuple[Suggestion, ...] = ()

    @property
    def total_sheets(self) -> int:
        """Number of sheets used."""
        return len(self.layouts)

    @property
    def total_pieces_placed(self) -> int:
        """Total number of pieces placed across all sheets."""
        return sum(layout.piece_count for layout in self.layouts)

    @property
    def total_used_area(self) -> float:
        """Area covered by pieces across all sheets."""
        return sum(layout.used_area for layout in self.layouts)

    @property
    def total_waste_percentage(self) -> float:
        """Waste percentage (0-100) across all sheets, to one decimal."""
        if not self.layouts:
            return 0.0
        total_area = self.sheet_config.area * len(self.layouts)
        return round((1 - self.total_used_area / total_area) * 100, 1)

    @property
    def theoretical_min_sheets(self) -> int:
        """Lower bound on sheets needed for the placed area."""
        return math.ceil(self.total_used_area / self.sheet_config.area)


@dataclass
class SheetState:
    """Mutable state of one sheet during packing.

    Attributes:
        sheet_config: Sheet dimensions.
        kerf: Blade width reserved after each placed piece.
        free_rects: Current maximal free rectangles.
        placements: Pieces placed so far, in order.
        used_area: Accumulated piece area, excluding kerf.
    """

    sheet_config: SheetConfig
    kerf: float
    free_rects: list[FreeRectangle]
    placements: list[PlacedPiece] = field(default_factory=list)
    used_area: float = 0.0

    @classmethod
    def empty(cls, sheet_config: SheetConfig, kerf: float) -> SheetState:
        """Create a sheet whose free space is one rectangle spanning it."""
        whole = FreeRectangle(0.0, 0.0, sheet_config.width, sheet_config.height)
        return cls(sheet_config=sheet_config, kerf=kerf, free_rects=[whole])

    def find_best_fit(self, piece: Piece, heuristic: Heuristic) -> Fit | None:
        """Find the best free rectangle and orientation for ``piece``."""
        return find_best_fit(
            self.free_rects,
            piece.width,
            piece.height,
            heuristic,
            self.sheet_config.width,
            kerf=self.kerf,
            sheet_height=self.sheet_config.height,
        )

    def place(self, piece: Piece, fit: Fit) -> PlacedPiece:
        """Place ``piece`` at the top-left corner of ``fit.rect``.

        Args:
            piece: The piece to place.
            fit: A fit previously found on this sheet.

        Returns:
            The placed piece.
        """
        placement = PlacedPiece(
            piece=piece, x=fit.rect.x, y=fit.rect.y, rotated=fit.rotated
        )
        self.placements.append(placement)
        self.used_area += fit.width * fit.height
        self.free_rects = insert_placement(
            self.free_rects,
            placement.x,
            placement.y,
            fit.width,
            fit.height,
            self.kerf,
            self.sheet_config.width,
            self.sheet_config.height,
        )
        return placement

    def try_place(self, piece: Piece, heuristic: Heuristic) -> PlacedPiece | None:
        """Place ``piece`` at its best fit, if it fits anywhere."""
        fit = self.find_best_fit(piece, heuristic)
        if fit is None:
            return None
        return self.place(piece, fit)

    def to_layout(self, sheet_index: int) -> SheetLayout:
        """Freeze this state into a ``SheetLayout``."""
        return SheetLayout(
            sheet_index=sheet_index,
            sheet_config=self.sheet_config,
            placements=tuple(self.placements),
            free_rectangles=tuple(self.free_rects),
        )
