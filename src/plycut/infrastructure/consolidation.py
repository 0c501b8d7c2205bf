"""Post-pass that moves pieces off the sparsest sheet.

After the strategy search, the sheet with the least used area is emptied
piece by piece into the free space of the other sheets. A sheet left empty is
dropped; a sheet left partly filled is re-packed from scratch so its free
space stays maximal. Passes repeat until one moves nothing.
"""

from __future__ import annotations

import logging

from plycut.domain.value_objects import Heuristic, Piece, UnplacedReason
from plycut.infrastructure.bin_packing import (
    BinPackingConfig,
    SheetState,
    UnplacedPiece,
)

logger = logging.getLogger(__name__)

CONSOLIDATION_HEURISTIC = Heuristic.BEST_SHORT_SIDE_FIT


class SheetConsolidator:
    """Reduces sheet count by migrating pieces between sheets.

    Attributes:
        config: Bin packing configuration (sheet size and kerf).
    """

    def __init__(self, config: BinPackingConfig) -> None:
        self.config = config

    def consolidate(
        self, sheets: list[SheetState]
    ) -> tuple[list[SheetState], list[UnplacedPiece]]:
        """Run consolidation passes until no piece moves.

        Args:
            sheets: Sheets from the winning packing attempt. The states are
                mutated in place.

        Returns:
            Tuple of (sheets sorted fullest first, pieces lost while
            re-packing a sheet). The second list is empty unless free-space
            bookkeeping breaks down.
        """
        sheets = list(sheets)
        lost: list[UnplacedPiece] = []
        passes = 0

        while len(sheets) > 1:
            passes += 1
            # Sparsest sheet last
            sheets.sort(key=lambda s: s.used_area, reverse=True)
            last = sheets[-1]
            candidates = [placement.piece for placement in last.placements]

            targets = sheets[:-1]
            remaining = [
                piece for piece in candidates if not self._move_piece(piece, targets)
            ]
            moved = len(candidates) - len(remaining)

            logger.debug(
                "Consolidation pass %d: moved %d of %d pieces off the last sheet",
                passes,
                moved,
                len(candidates),
            )

            if moved == 0:
                break

            if not remaining:
                sheets.pop()
                logger.info("Consolidation emptied a sheet; %d remain", len(sheets))
                continue

            rebuilt, dropped = self._rebuild(remaining)
            lost.extend(dropped)
            if rebuilt.placements:
                sheets[-1] = rebuilt
            else:
                sheets.pop()

        return sheets, lost

    def _move_piece(self, piece: Piece, targets: list[SheetState]) -> bool:
        """Place ``piece`` on the first target sheet with room for it."""
        for sheet in targets:
            fit = sheet.find_best_fit(piece, CONSOLIDATION_HEURISTIC)
            if fit is not None:
                sheet.place(piece, fit)
                return True
        return False

    def _rebuild(
        self, pieces: list[Piece]
    ) -> tuple[SheetState, list[UnplacedPiece]]:
        """Pack ``pieces`` onto a fresh sheet in the given order."""
        sheet = SheetState.empty(self.config.sheet_size, self.config.kerf)
        dropped: list[UnplacedPiece] = []
        for piece in pieces:
            if sheet.try_place(piece, CONSOLIDATION_HEURISTIC) is None:
                logger.warning(
                    "Piece '%s' (%sx%s) no longer fits its rebuilt sheet",
                    piece.label,
                    piece.width,
                    piece.height,
                )
                dropped.append(UnplacedPiece(piece, UnplacedReason.COULD_NOT_PLACE))
        return sheet, dropped
