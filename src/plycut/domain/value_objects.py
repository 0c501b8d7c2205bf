"""Value objects for sheet cutting optimization."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Unit(str, Enum):
    """Display unit for piece and sheet dimensions.

    The optimizer is unit-agnostic; the unit only affects labels.
    """

    MM = "mm"
    CM = "cm"
    INCH = "in"


class Heuristic(str, Enum):
    """Placement heuristic used to score a piece against a free rectangle.

    Attributes:
        BEST_SHORT_SIDE_FIT: Minimize the shorter leftover side.
        BEST_LONG_SIDE_FIT: Minimize the longer leftover side.
        BEST_AREA_FIT: Minimize leftover area (plus a sliver penalty).
    """

    BEST_SHORT_SIDE_FIT = "bssf"
    BEST_LONG_SIDE_FIT = "blsf"
    BEST_AREA_FIT = "baf"


class SortOrder(str, Enum):
    """Order in which pieces are fed to the packer (all descending)."""

    AREA = "area"
    PERIMETER = "perimeter"
    LONGEST_SIDE = "longest_side"
    LONGEST_THEN_SHORTEST = "longest_then_shortest"

    def sort_key(self, piece: Piece) -> tuple[float, float]:
        """Return the descending sort key for a piece."""
        longest = max(piece.width, piece.height)
        if self is SortOrder.AREA:
            return (piece.area, longest)
        if self is SortOrder.PERIMETER:
            return (piece.width + piece.height, piece.area)
        if self is SortOrder.LONGEST_SIDE:
            return (longest, piece.area)
        return (longest, min(piece.width, piece.height))

    def apply(self, pieces: list[Piece]) -> list[Piece]:
        """Return a new list sorted largest-first (stable for equal keys)."""
        return sorted(pieces, key=self.sort_key, reverse=True)


class UnplacedReason(str, Enum):
    """Why a piece could not be placed on any sheet."""

    TOO_LARGE_FOR_SHEET = "too_large_for_sheet"
    NO_SHEETS_REMAINING = "no_sheets_remaining"
    COULD_NOT_PLACE = "could_not_place"

    @property
    def description(self) -> str:
        """Human-readable form of the reason."""
        return self.value.replace("_", " ").capitalize()


class SuggestionType(str, Enum):
    """Kinds of optimization hints derived from a finished packing."""

    FILL_GAPS = "fill_gaps"
    CONSOLIDATE = "consolidate"
    FUTURE_USE = "future_use"
    EFFICIENCY = "efficiency"


@dataclass(frozen=True)
class Piece:
    """A rectangular part to cut from a stock sheet.

    Attributes:
        id: Unique identifier of this physical piece.
        label: Display name of the part (e.g. "Leg").
        width: Width in caller units.
        height: Height in caller units.
        group: Name of the furniture item the part belongs to.
        color: Display color used by renderers.
    """

    id: str
    label: str
    width: float
    height: float
    group: str = ""
    color: str = "#3498db"

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Piece dimensions must be positive")

    @property
    def area(self) -> float:
        """Area of the piece."""
        return self.width * self.height


@dataclass(frozen=True)
class FreeRectangle:
    """An empty axis-aligned rectangle on a sheet.

    Coordinates use the sheet's top-left corner as origin.
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        """X coordinate of the right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Y coordinate of the bottom edge."""
        return self.y + self.height

    @property
    def area(self) -> float:
        """Area of the rectangle."""
        return self.width * self.height

    def contains(self, other: FreeRectangle) -> bool:
        """Check whether ``other`` lies entirely within this rectangle."""
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def fits(self, width: float, height: float) -> bool:
        """Check whether a ``width`` x ``height`` footprint fits unrotated."""
        return width <= self.width and height <= self.height
