"""Maximal free rectangle tracking for a single sheet.

A sheet's free space is kept as the set of all maximal empty rectangles.
Rectangles may overlap each other, but none is contained in another. When a
piece is placed, every free rectangle it touches is split into up to four
remainders (left, right, above, below the consumed area), so space that a
two-way guillotine split would strand stays available to later pieces.
"""

from __future__ import annotations

from collections.abc import Iterable

from plycut.domain.value_objects import FreeRectangle

# Remainders this thin or thinner are dropped.
MIN_FREE_DIMENSION = 0.5


def is_degenerate(rect: FreeRectangle) -> bool:
    """Check whether a rectangle is too thin to hold anything."""
    return rect.width <= MIN_FREE_DIMENSION or rect.height <= MIN_FREE_DIMENSION


def intersects(
    rect: FreeRectangle, x1: float, y1: float, x2: float, y2: float
) -> bool:
    """Check whether ``rect`` overlaps the half-open area [x1, x2) x [y1, y2)."""
    return not (x1 >= rect.right or x2 <= rect.x or y1 >= rect.bottom or y2 <= rect.y)


def subtract(
    rect: FreeRectangle, x1: float, y1: float, x2: float, y2: float
) -> list[FreeRectangle]:
    """Split ``rect`` around the consumed area [x1, x2) x [y1, y2).

    Each remainder spans the full extent of ``rect`` along one axis, so
    remainders may overlap each other.

    Args:
        rect: Free rectangle intersecting the consumed area.
        x1: Left edge of the consumed area.
        y1: Top edge of the consumed area.
        x2: Right edge of the consumed area.
        y2: Bottom edge of the consumed area.

    Returns:
        Up to four remainders, possibly degenerate.
    """
    remainders: list[FreeRectangle] = []
    if x1 > rect.x:
        remainders.append(FreeRectangle(rect.x, rect.y, x1 - rect.x, rect.height))
    if x2 < rect.right:
        remainders.append(FreeRectangle(x2, rect.y, rect.right - x2, rect.height))
    if y1 > rect.y:
        remainders.append(FreeRectangle(rect.x, rect.y, rect.width, y1 - rect.y))
    if y2 < rect.bottom:
        remainders.append(FreeRectangle(rect.x, y2, rect.width, rect.bottom - y2))
    return remainders


def prune_contained(rects: list[FreeRectangle]) -> list[FreeRectangle]:
    """Drop every rectangle fully contained in another.

    Of two identical rectangles the earlier one is dropped. Quadratic in the
    number of rectangles, which stays small per sheet.
    """
    keep = [True] * len(rects)
    for i, rect in enumerate(rects):
        if not keep[i]:
            continue
        for j in range(i + 1, len(rects)):
            if not keep[j]:
                continue
            if rects[j].contains(rect):
                keep[i] = False
                break
            if rect.contains(rects[j]):
                keep[j] = False
    return [rect for rect, kept in zip(rects, keep) if kept]


def insert_placement(
    free_rects: Iterable[FreeRectangle],
    x: float,
    y: float,
    width: float,
    height: float,
    kerf: float,
    sheet_width: float,
    sheet_height: float,
) -> list[FreeRectangle]:
    """Consume a placed piece's footprint from a sheet's free space.

    The footprint is the piece plus ``kerf`` on its right and bottom edges,
    clipped to the sheet.

    Args:
        free_rects: Current maximal free rectangles of the sheet.
        x: Left edge of the placed piece.
        y: Top edge of the placed piece.
        width: Placed width of the piece (after rotation).
        height: Placed height of the piece (after rotation).
        kerf: Blade width reserved after the piece.
        sheet_width: Width of the sheet.
        sheet_height: Height of the sheet.

    Returns:
        The new maximal, pruned free rectangle list.
    """
    x2 = min(x + width + kerf, sheet_width)
    y2 = min(y + height + kerf, sheet_height)

    updated: list[FreeRectangle] = []
    for rect in free_rects:
        if not intersects(rect, x, y, x2, y2):
            updated.append(rect)
            continue
        updated.extend(subtract(rect, x, y, x2, y2))

    return prune_contained([rect for rect in updated if not is_degenerate(rect)])


def clipped_free_area(
    free_rects: Iterable[FreeRectangle], sheet_area: float
) -> float:
    """Total area of the free rectangles, capped at the sheet area.

    Maximal rectangles overlap, so the plain sum over-counts; the cap keeps
    the figure meaningful for an empty or nearly empty sheet.
    """
    return min(sum(rect.area for rect in free_rects), sheet_area)
