"""Multi-strategy maximal-rectangles bin packer.

Every combination of sort order and placement heuristic is packed
independently from zero sheets. The best attempt (fewest unplaced pieces,
then fewest sheets, then least waste) is consolidated and returned.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from plycut.domain.value_objects import Heuristic, Piece, SortOrder, UnplacedReason
from plycut.infrastructure.bin_packing import (
    BinPackingConfig,
    PackingResult,
    SheetConfig,
    SheetState,
    UnplacedPiece,
)
from plycut.infrastructure.consolidation import SheetConsolidator
from plycut.infrastructure.fit_scoring import Fit
from plycut.infrastructure.suggestions import generate_suggestions

logger = logging.getLogger(__name__)

# Sort orders vary slowest; earlier entries win ties.
STRATEGIES: tuple[tuple[SortOrder, Heuristic], ...] = tuple(
    (sort_order, heuristic) for sort_order in SortOrder for heuristic in Heuristic
)


@dataclass
class PackingAttempt:
    """Outcome of packing with one sort order and heuristic.

    Attributes:
        sort_order: Order the pieces were fed in.
        heuristic: Placement heuristic used.
        sheets: Sheets opened, in opening order.
        unplaced: Pieces that could not be placed.
    """

    sort_order: SortOrder
    heuristic: Heuristic
    sheets: list[SheetState] = field(default_factory=list)
    unplaced: list[UnplacedPiece] = field(default_factory=list)

    @property
    def waste_ratio(self) -> float:
        """Fraction of opened sheet area not covered by pieces."""
        if not self.sheets:
            return 0.0
        total_area = len(self.sheets) * self.sheets[0].sheet_config.area
        used = sum(sheet.used_area for sheet in self.sheets)
        return 1 - used / total_area

    @property
    def rank(self) -> tuple[int, int, float]:
        """Comparison key; lower is better."""
        return (len(self.unplaced), len(self.sheets), self.waste_ratio)


class MaxRectsBinPacker:
    """Packs pieces onto sheets with a maximal-rectangles free-space model.

    Pieces may be placed anywhere a free rectangle allows and may be rotated
    90 degrees. A kerf margin is reserved on the right and bottom edges of
    each piece.

    Attributes:
        config: Bin packing configuration (sheet size, kerf, sheet cap).
    """

    def __init__(self, config: BinPackingConfig) -> None:
        """Initialize the packer with configuration.

        Args:
            config: Bin packing configuration specifying sheet size,
                kerf width and the maximum number of sheets.
        """
        self.config = config

    def pack(self, pieces: Sequence[Piece]) -> PackingResult:
        """Pack pieces onto as few sheets as the strategy search finds.

        Args:
            pieces: Pieces to cut, one entry per physical piece.

        Returns:
            PackingResult with sheet layouts, unplaced pieces and suggestions.
            Pieces that cannot be placed are reported, never raised.
        """
        sheet_config = self.config.sheet_size
        if not pieces:
            return PackingResult(sheet_config=sheet_config)

        logger.debug(
            "Packing %d pieces onto %sx%s sheets (kerf %s, max %d sheets)",
            len(pieces),
            sheet_config.width,
            sheet_config.height,
            self.config.kerf,
            self.config.max_sheets,
        )

        best = self.select_best(pieces)

        logger.info(
            "Best strategy: %s/%s with %d sheets, %d unplaced",
            best.sort_order.value,
            best.heuristic.value,
            len(best.sheets),
            len(best.unplaced),
        )

        sheets = best.sheets
        unplaced = list(best.unplaced)
        if len(sheets) > 1:
            sheets, lost = SheetConsolidator(self.config).consolidate(sheets)
            unplaced.extend(lost)

        layouts = tuple(sheet.to_layout(index) for index, sheet in enumerate(sheets))
        for layout in layouts:
            logger.debug(
                "Sheet %d: %d pieces, %.1f%% waste",
                layout.sheet_index,
                layout.piece_count,
                layout.waste_percentage,
            )

        return PackingResult(
            sheet_config=sheet_config,
            layouts=layouts,
            unplaced=tuple(unplaced),
            suggestions=tuple(generate_suggestions(layouts)),
        )

    def select_best(self, pieces: Sequence[Piece]) -> PackingAttempt:
        """Run every strategy and return the best attempt.

        Args:
            pieces: Pieces to pack, in caller order.

        Returns:
            The winning attempt. Earlier strategies win exact ties.

        Raises:
            RuntimeError: If the strategy grid is empty.
        """
        best: PackingAttempt | None = None
        for sort_order, heuristic in STRATEGIES:
            ordered = sort_order.apply(list(pieces))
            attempt = self.run_strategy(ordered, sort_order, heuristic)
            logger.debug(
                "Strategy %s/%s: %d sheets, %d unplaced, %.3f waste",
                sort_order.value,
                heuristic.value,
                len(attempt.sheets),
                len(attempt.unplaced),
                attempt.waste_ratio,
            )
            if best is None or attempt.rank < best.rank:
                best = attempt
        if best is None:
            raise RuntimeError("No packing strategies are configured")
        return best

    def run_strategy(
        self,
        ordered: Sequence[Piece],
        sort_order: SortOrder,
        heuristic: Heuristic,
    ) -> PackingAttempt:
        """Greedily pack pieces in the given order with one heuristic.

        Each piece goes to the best-scoring position across all open sheets.
        A new sheet is opened only when no open sheet has room.

        Args:
            ordered: Pieces in packing order.
            sort_order: Sort order that produced ``ordered`` (recorded only).
            heuristic: Placement heuristic.

        Returns:
            The attempt's sheets and unplaced pieces.
        """
        sheet_config: SheetConfig = self.config.sheet_size
        attempt = PackingAttempt(sort_order=sort_order, heuristic=heuristic)

        for piece in ordered:
            if not sheet_config.can_hold(piece):
                attempt.unplaced.append(
                    UnplacedPiece(piece, UnplacedReason.TOO_LARGE_FOR_SHEET)
                )
                continue

            best_sheet: SheetState | None = None
            best_fit: Fit | None = None
            for sheet in attempt.sheets:
                fit = sheet.find_best_fit(piece, heuristic)
                if fit is not None and (best_fit is None or fit.score < best_fit.score):
                    best_sheet, best_fit = sheet, fit

            if best_sheet is not None and best_fit is not None:
                best_sheet.place(piece, best_fit)
                continue

            if len(attempt.sheets) >= self.config.max_sheets:
                attempt.unplaced.append(
                    UnplacedPiece(piece, UnplacedReason.NO_SHEETS_REMAINING)
                )
                continue

            sheet = SheetState.empty(sheet_config, self.config.kerf)
            if sheet.try_place(piece, heuristic) is None:
                logger.warning(
                    "Piece '%s' (%sx%s) did not fit an empty sheet",
                    piece.label,
                    piece.width,
                    piece.height,
                )
                attempt.unplaced.append(
                    UnplacedPiece(piece, UnplacedReason.COULD_NOT_PLACE)
                )
                continue
            attempt.sheets.append(sheet)

        return attempt


def pack_pieces(
    pieces: Sequence[Piece],
    sheet_width: float,
    sheet_height: float,
    kerf: float = 0.0,
    max_sheets: int = 5,
) -> PackingResult:
    """Pack pieces onto sheets of the given size.

    Args:
        pieces: Pieces to cut.
        sheet_width: Sheet width.
        sheet_height: Sheet height.
        kerf: Blade width reserved after each piece.
        max_sheets: Maximum number of sheets to use.

    Returns:
        The packing result.

    Raises:
        ValueError: If the sheet size, kerf or sheet cap is invalid.
    """
    config = BinPackingConfig(
        sheet_size=SheetConfig(width=sheet_width, height=sheet_height),
        kerf=kerf,
        max_sheets=max_sheets,
    )
    return MaxRectsBinPacker(config).pack(pieces)
