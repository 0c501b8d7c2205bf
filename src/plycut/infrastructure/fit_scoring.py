"""Scoring of candidate placements against free rectangles.

Scores are compared lexicographically and lower is better. The last
component always favours rectangles nearer the sheet's top-left corner,
which keeps used space contiguous.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import NamedTuple

from plycut.domain.value_objects import FreeRectangle, Heuristic

# Slack when deciding that a rectangle reaches the sheet edge.
EDGE_TOLERANCE = 1e-6


class FitScore(NamedTuple):
    """Lexicographic placement score (lower is better)."""

    primary: float
    secondary: float
    position: float


@dataclass(frozen=True)
class Fit:
    """Best placement of a piece within a set of free rectangles.

    Attributes:
        rect: Free rectangle whose top-left corner receives the piece.
        width: Placed width (after rotation).
        height: Placed height (after rotation).
        rotated: True if the piece is turned 90 degrees.
        score: Score the placement achieved.
    """

    rect: FreeRectangle
    width: float
    height: float
    rotated: bool
    score: FitScore


def score_fit(
    rect: FreeRectangle,
    width: float,
    height: float,
    heuristic: Heuristic,
    sheet_width: float,
) -> FitScore | None:
    """Score placing a ``width`` x ``height`` footprint in ``rect``.

    Args:
        rect: Candidate free rectangle.
        width: Placed width of the piece.
        height: Placed height of the piece.
        heuristic: Heuristic deciding the primary and secondary components.
        sheet_width: Sheet width, used to linearize the position.

    Returns:
        The score, or None if the footprint does not fit.
    """
    if not rect.fits(width, height):
        return None

    leftover_w = rect.width - width
    leftover_h = rect.height - height

    if heuristic is Heuristic.BEST_SHORT_SIDE_FIT:
        primary = min(leftover_w, leftover_h)
        secondary = max(leftover_w, leftover_h)
    elif heuristic is Heuristic.BEST_LONG_SIDE_FIT:
        primary = max(leftover_w, leftover_h)
        secondary = min(leftover_w, leftover_h)
    else:
        # Linear terms penalize thin slivers over squarer leftovers of equal area
        primary = leftover_w * leftover_h + leftover_w + leftover_h
        secondary = min(leftover_w, leftover_h)

    return FitScore(primary, secondary, rect.y * sheet_width + rect.x)


def leaves_kerf(
    rect: FreeRectangle,
    width: float,
    height: float,
    kerf: float,
    sheet_width: float,
    sheet_height: float,
) -> bool:
    """Check that a footprint leaves room for the saw cut inside ``rect``.

    A free rectangle may end where another piece begins, so the kerf strip
    right of and below the placed piece has to fall inside ``rect`` unless
    that side of ``rect`` is the sheet edge.
    """
    if kerf <= 0:
        return True
    at_right_edge = rect.right >= sheet_width - EDGE_TOLERANCE
    at_bottom_edge = rect.bottom >= sheet_height - EDGE_TOLERANCE
    room_right = width + kerf <= rect.width or at_right_edge
    room_below = height + kerf <= rect.height or at_bottom_edge
    return room_right and room_below


def find_best_fit(
    free_rects: Iterable[FreeRectangle],
    width: float,
    height: float,
    heuristic: Heuristic,
    sheet_width: float,
    kerf: float = 0.0,
    sheet_height: float = math.inf,
) -> Fit | None:
    """Find the best-scoring rectangle and orientation for a piece.

    Both orientations are tried for each rectangle (the rotated one only for
    non-square pieces). On equal scores the first candidate found wins.
    An orientation is skipped when its kerf strip would run past the
    rectangle into neighbouring material.

    Args:
        free_rects: Free rectangles of one sheet.
        width: Original piece width.
        height: Original piece height.
        heuristic: Placement heuristic.
        sheet_width: Sheet width for the position tiebreak.
        kerf: Saw blade width kept clear right of and below the piece.
        sheet_height: Sheet height; the kerf strip may be dropped at the
            bottom edge.

    Returns:
        The best fit, or None if the piece fits nowhere.
    """
    best: Fit | None = None

    for rect in free_rects:
        orientations = [(width, height, False)]
        if width != height:
            orientations.append((height, width, True))

        for placed_w, placed_h, rotated in orientations:
            if not leaves_kerf(
                rect, placed_w, placed_h, kerf, sheet_width, sheet_height
            ):
                continue
            score = score_fit(rect, placed_w, placed_h, heuristic, sheet_width)
            if score is None:
                continue
            if best is None or score < best.score:
                best = Fit(
                    rect=rect,
                    width=placed_w,
                    height=placed_h,
                    rotated=rotated,
                    score=score,
                )

    return best
