"""Tests for the multi-strategy maximal-rectangles packer.

Tests cover:
- Strategy grid and attempt ranking
- Unplaced piece reasons
- Kerf and rotation handling
- Layout properties that hold for any input (bounds, overlap, conservation,
  determinism)
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable

import pytest

from plycut.domain.value_objects import (
    Heuristic,
    Piece,
    SortOrder,
    UnplacedReason,
)
from plycut.infrastructure.bin_packing import (
    BinPackingConfig,
    PackingResult,
    SheetConfig,
    SheetState,
    UnplacedPiece,
)
from plycut.infrastructure.max_rects import (
    STRATEGIES,
    MaxRectsBinPacker,
    PackingAttempt,
    pack_pieces,
)

# Float slack for edge comparisons.
EPS = 1e-9


def _assert_valid_layouts(result: PackingResult, kerf: float = 0.0) -> None:
    """Check bounds and that no two kerf footprints intersect.

    A footprint is the piece plus kerf on its right and bottom edges, clipped
    to the sheet.
    """
    sheet = result.sheet_config
    for layout in result.layouts:
        placements = layout.placements
        for p in placements:
            assert p.x >= 0 and p.y >= 0
            assert p.right_edge <= sheet.width + EPS
            assert p.bottom_edge <= sheet.height + EPS
        footprints = [
            (
                p.x,
                p.y,
                min(p.right_edge + kerf, sheet.width),
                min(p.bottom_edge + kerf, sheet.height),
            )
            for p in placements
        ]
        for i, (ax1, ay1, ax2, ay2) in enumerate(footprints):
            for j in range(i + 1, len(footprints)):
                bx1, by1, bx2, by2 = footprints[j]
                overlap = (
                    ax1 < bx2 - EPS
                    and bx1 < ax2 - EPS
                    and ay1 < by2 - EPS
                    and by1 < ay2 - EPS
                )
                ids = (placements[i].piece.id, placements[j].piece.id)
                assert not overlap, "%s overlaps %s" % ids


def _ids(result: PackingResult) -> Counter[str]:
    placed = [p.piece.id for layout in result.layouts for p in layout.placements]
    unplaced = [u.piece.id for u in result.unplaced]
    return Counter(placed + unplaced)


@pytest.fixture
def mixed_pieces(make_piece: Callable[..., Piece]) -> list[Piece]:
    """A spread of furniture-like parts."""
    sizes = [
        (600, 1000), (60, 700), (60, 700), (60, 700), (60, 700),
        (400, 400), (50, 400), (50, 400), (50, 400), (50, 400),
        (80, 300), (80, 300), (200, 800), (200, 800), (200, 600),
        (200, 600), (200, 600), (333, 127), (127, 333), (450, 90),
    ]
    return [make_piece(w, h) for w, h in sizes]


# =============================================================================
# Strategy grid
# =============================================================================


class TestStrategies:
    """Tests for the strategy grid and attempt ranking."""

    def test_grid_covers_all_combinations(self) -> None:
        """Test that every sort order is paired with every heuristic."""
        assert len(STRATEGIES) == 12
        assert len(set(STRATEGIES)) == 12

    def test_sort_orders_vary_slowest(self) -> None:
        """Test the deterministic strategy order."""
        assert STRATEGIES[0] == (SortOrder.AREA, Heuristic.BEST_SHORT_SIDE_FIT)
        assert STRATEGIES[1] == (SortOrder.AREA, Heuristic.BEST_LONG_SIDE_FIT)
        assert STRATEGIES[3][0] == SortOrder.PERIMETER
        assert STRATEGIES[-1] == (
            SortOrder.LONGEST_THEN_SHORTEST,
            Heuristic.BEST_AREA_FIT,
        )

    def test_rank_prefers_fewer_unplaced_then_fewer_sheets(
        self, square_sheet: SheetConfig, make_piece: Callable[..., Piece]
    ) -> None:
        """Test lexicographic attempt ranking."""
        one_sheet = [SheetState.empty(square_sheet, 0.0)]
        two_sheets = [SheetState.empty(square_sheet, 0.0) for _ in range(2)]
        lost = [UnplacedPiece(make_piece(10, 10), UnplacedReason.NO_SHEETS_REMAINING)]

        placed_all = PackingAttempt(SortOrder.AREA, Heuristic.BEST_AREA_FIT, two_sheets)
        missing_one = PackingAttempt(
            SortOrder.AREA, Heuristic.BEST_AREA_FIT, one_sheet, lost
        )
        fewer_sheets = PackingAttempt(SortOrder.AREA, Heuristic.BEST_AREA_FIT, one_sheet)

        assert placed_all.rank < missing_one.rank
        assert fewer_sheets.rank < placed_all.rank

    def test_waste_ratio(
        self, square_sheet: SheetConfig, make_piece: Callable[..., Piece]
    ) -> None:
        """Test waste ratio over opened sheets."""
        sheet = SheetState.empty(square_sheet, 0.0)
        sheet.try_place(make_piece(500, 1000), Heuristic.BEST_AREA_FIT)
        attempt = PackingAttempt(SortOrder.AREA, Heuristic.BEST_AREA_FIT, [sheet])
        assert attempt.waste_ratio == pytest.approx(0.5)
        assert PackingAttempt(SortOrder.AREA, Heuristic.BEST_AREA_FIT).waste_ratio == 0.0


# =============================================================================
# Packing scenarios
# =============================================================================


class TestMaxRectsBinPacker:
    """Tests for MaxRectsBinPacker.pack."""

    def test_empty_input(self, square_config: BinPackingConfig) -> None:
        """Test that no pieces yield an empty result."""
        result = MaxRectsBinPacker(square_config).pack([])
        assert result.layouts == ()
        assert result.unplaced == ()
        assert result.suggestions == ()

    def test_pieces_share_one_sheet(
        self, square_config: BinPackingConfig, make_piece: Callable[..., Piece]
    ) -> None:
        """Test a 400 square and four 300 squares on one 1000 sheet."""
        pieces = [make_piece(400, 400)] + [make_piece(300, 300) for _ in range(4)]
        result = MaxRectsBinPacker(square_config).pack(pieces)

        assert result.total_sheets == 1
        assert result.unplaced == ()
        assert result.total_pieces_placed == 5
        _assert_valid_layouts(result)

    def test_too_large_for_sheet(
        self, square_config: BinPackingConfig, make_piece: Callable[..., Piece]
    ) -> None:
        """Test that a piece larger than the sheet in both orientations is reported."""
        oversized = make_piece(1200, 400, label="Long Rail")
        result = MaxRectsBinPacker(square_config).pack([oversized])

        assert result.total_sheets == 0
        assert result.unplaced == (
            UnplacedPiece(oversized, UnplacedReason.TOO_LARGE_FOR_SHEET),
        )

    def test_too_large_on_oblong_sheet(self, make_piece: Callable[..., Piece]) -> None:
        """Test that rotation does not rescue a piece longer than both sides."""
        result = pack_pieces([make_piece(1200, 400)], 1000, 500, max_sheets=1)
        assert result.layouts == ()
        assert result.unplaced[0].reason == UnplacedReason.TOO_LARGE_FOR_SHEET

    def test_no_sheets_remaining(self, make_piece: Callable[..., Piece]) -> None:
        """Test that pieces beyond the sheet cap are reported."""
        config = BinPackingConfig(
            sheet_size=SheetConfig(width=500, height=500), max_sheets=1
        )
        pieces = [make_piece(400, 400), make_piece(400, 400)]
        result = MaxRectsBinPacker(config).pack(pieces)

        assert result.total_sheets == 1
        assert len(result.unplaced) == 1
        assert result.unplaced[0].reason == UnplacedReason.NO_SHEETS_REMAINING

    def test_opens_sheets_as_needed(
        self, square_config: BinPackingConfig, make_piece: Callable[..., Piece]
    ) -> None:
        """Test that pieces that cannot share a sheet each get one."""
        pieces = [make_piece(600, 600) for _ in range(3)]
        result = MaxRectsBinPacker(square_config).pack(pieces)

        assert result.total_sheets == 3
        assert result.unplaced == ()

    def test_kerf_separates_pieces(self, make_piece: Callable[..., Piece]) -> None:
        """Test that kerf can push a piece onto another sheet."""
        sheet = SheetConfig(width=1000, height=1000)
        halves = [make_piece(500, 1000), make_piece(500, 1000)]

        no_kerf = pack_pieces(halves, sheet.width, sheet.height, kerf=0.0)
        with_kerf = pack_pieces(halves, sheet.width, sheet.height, kerf=3.0)

        assert no_kerf.total_sheets == 1
        assert with_kerf.total_sheets == 2
        _assert_valid_layouts(with_kerf, kerf=3.0)

    def test_kerf_kept_before_earlier_neighbour(
        self, make_piece: Callable[..., Piece]
    ) -> None:
        """Test that a gap ending at an earlier piece still fits the blade."""
        sizes = [
            (250, 400), (500, 400), (748, 461), (250, 618),
            (166.67, 400), (500, 306), (250, 200), (219, 200),
            (500, 200), (250, 247), (250, 206), (250, 246),
        ]
        pieces = [make_piece(w, h) for w, h in sizes]
        result = pack_pieces(pieces, 500, 800, kerf=10.0, max_sheets=4)

        _assert_valid_layouts(result, kerf=10.0)
        assert _ids(result) == Counter(p.id for p in pieces)

    def test_piece_rejected_by_empty_sheet(
        self,
        square_config: BinPackingConfig,
        make_piece: Callable[..., Piece],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that a piece an empty sheet refuses is reported, not dropped."""
        monkeypatch.setattr(SheetState, "try_place", lambda *args: None)
        piece = make_piece(100, 100)
        attempt = MaxRectsBinPacker(square_config).run_strategy(
            [piece], SortOrder.AREA, Heuristic.BEST_AREA_FIT
        )

        assert attempt.sheets == []
        assert attempt.unplaced == [
            UnplacedPiece(piece, UnplacedReason.COULD_NOT_PLACE)
        ]

    def test_empty_strategy_grid_raises(
        self,
        square_config: BinPackingConfig,
        make_piece: Callable[..., Piece],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that selecting from no strategies is an error."""
        monkeypatch.setattr("plycut.infrastructure.max_rects.STRATEGIES", ())
        with pytest.raises(RuntimeError, match="No packing strategies"):
            MaxRectsBinPacker(square_config).select_best([make_piece(10, 10)])

    def test_rotates_to_fit(self, make_piece: Callable[..., Piece]) -> None:
        """Test that a piece fitting only when turned is rotated."""
        result = pack_pieces([make_piece(400, 900)], 1000, 500)

        placement = result.layouts[0].placements[0]
        assert placement.rotated is True
        assert (placement.placed_width, placement.placed_height) == (900, 400)

    def test_reports_suggestions(
        self, square_config: BinPackingConfig, make_piece: Callable[..., Piece]
    ) -> None:
        """Test that a sparse sheet produces hints."""
        result = MaxRectsBinPacker(square_config).pack([make_piece(300, 300)])
        assert result.suggestions

    def test_invalid_configuration_raises(self, make_piece: Callable[..., Piece]) -> None:
        """Test that pack_pieces validates its configuration."""
        with pytest.raises(ValueError, match="Kerf"):
            pack_pieces([make_piece(10, 10)], 100, 100, kerf=-1)
        with pytest.raises(ValueError, match="width must be positive"):
            pack_pieces([make_piece(10, 10)], 0, 100)


# =============================================================================
# Properties
# =============================================================================


class TestLayoutProperties:
    """Properties that hold for every packing."""

    @pytest.mark.parametrize("kerf", [0.0, 3.0, 12.5])
    def test_placements_in_bounds_and_apart(
        self, mixed_pieces: list[Piece], kerf: float
    ) -> None:
        """Test bounds and kerf separation on a mixed job."""
        result = pack_pieces(mixed_pieces, 2440, 1220, kerf=kerf)
        _assert_valid_layouts(result, kerf=kerf)

    def test_every_piece_accounted_for_once(self, mixed_pieces: list[Piece]) -> None:
        """Test that each piece is either placed or unplaced, exactly once."""
        result = pack_pieces(mixed_pieces, 1000, 1000, max_sheets=2)
        assert _ids(result) == Counter(p.id for p in mixed_pieces)

    def test_deterministic(self, mixed_pieces: list[Piece]) -> None:
        """Test that identical input yields identical output."""
        first = pack_pieces(mixed_pieces, 2440, 1220, kerf=3.0)
        second = pack_pieces(list(mixed_pieces), 2440, 1220, kerf=3.0)
        assert first == second

    def test_sheet_cap_respected(self, mixed_pieces: list[Piece]) -> None:
        """Test that no more than the allowed sheets are used."""
        result = pack_pieces(mixed_pieces, 800, 800, max_sheets=2)
        assert result.total_sheets <= 2
        assert all(
            u.reason == UnplacedReason.NO_SHEETS_REMAINING
            or u.reason == UnplacedReason.TOO_LARGE_FOR_SHEET
            for u in result.unplaced
        )

    def test_sheet_indices_sequential(self, mixed_pieces: list[Piece]) -> None:
        """Test that layouts are numbered from zero without gaps."""
        result = pack_pieces(mixed_pieces, 1000, 1000)
        assert [layout.sheet_index for layout in result.layouts] == list(
            range(result.total_sheets)
        )
