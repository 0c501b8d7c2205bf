"""Tests for optimization suggestions."""

from __future__ import annotations

from plycut.domain.value_objects import Heuristic, Piece, SuggestionType
from plycut.infrastructure.bin_packing import SheetConfig, SheetLayout, SheetState
from plycut.infrastructure.suggestions import Suggestion, generate_suggestions

SHEET = SheetConfig(width=1000, height=1000)


def _layout(index: int, *sizes: tuple[float, float]) -> SheetLayout:
    state = SheetState.empty(SHEET, 0.0)
    for n, (width, height) in enumerate(sizes):
        piece = Piece(id=f"{index}-{n}", label="Part", width=width, height=height)
        assert state.try_place(piece, Heuristic.BEST_SHORT_SIDE_FIT) is not None
    return state.to_layout(index)


class TestGenerateSuggestions:
    """Tests for generate_suggestions."""

    def test_no_layouts(self) -> None:
        """Test that an empty packing has no hints."""
        assert generate_suggestions([]) == []

    def test_full_sheet_has_no_hints(self) -> None:
        """Test that a sheet without free space is skipped."""
        assert generate_suggestions([_layout(0, (1000, 1000))]) == []

    def test_single_sparse_sheet(self) -> None:
        """Test gap and future-use hints on a lone sheet."""
        suggestions = generate_suggestions([_layout(0, (500, 500))])

        assert suggestions == [
            Suggestion(
                type=SuggestionType.FILL_GAPS,
                sheet=1,
                message=(
                    "Sheet 1 has 100% free space. Usable gaps: 500x1000, 1000x500. "
                    "Consider adding smaller parts here to reduce waste."
                ),
            ),
            Suggestion(
                type=SuggestionType.FUTURE_USE,
                sheet=1,
                message=(
                    "Sheet 1 (last used) has a largest free area of 500x1000, "
                    "available for future furniture."
                ),
            ),
        ]

    def test_multiple_sheets(self) -> None:
        """Test hint order and the efficiency hint across sheets."""
        layouts = [_layout(0, (500, 500)), _layout(1, (100, 100))]
        suggestions = generate_suggestions(layouts)

        assert [(s.type, s.sheet) for s in suggestions] == [
            (SuggestionType.FILL_GAPS, 1),
            (SuggestionType.CONSOLIDATE, 1),
            (SuggestionType.FILL_GAPS, 2),
            (SuggestionType.FUTURE_USE, 2),
            (SuggestionType.EFFICIENCY, 0),
        ]
        assert suggestions[1].message.startswith("Sheet 1 is only 25% used.")
        assert suggestions[-1].message == (
            "Theoretical minimum: 1 sheet. Current: 2 sheets. "
            "The extra space is available for future cuts."
        )

    def test_small_gaps_not_listed(self) -> None:
        """Test that gaps under the minimum size are not offered."""
        # Leaves 150-wide strips only
        layout = _layout(0, (850, 850))
        types = [s.type for s in generate_suggestions([layout])]
        assert SuggestionType.FILL_GAPS not in types
        assert SuggestionType.FUTURE_USE in types

    def test_low_waste_sheet_quiet(self) -> None:
        """Test that a well-used last sheet gets no future-use hint."""
        layout = _layout(0, (1000, 900))
        assert generate_suggestions([layout]) == []

    def test_gap_examples_capped(self) -> None:
        """Test that at most three gaps are named."""
        layout = _layout(0, (300, 300), (300, 300))
        fill = [
            s for s in generate_suggestions([layout])
            if s.type == SuggestionType.FILL_GAPS
        ]
        assert len(fill) == 1
        gaps = fill[0].message.split("Usable gaps: ")[1].split(". ")[0]
        assert 1 <= len(gaps.split(", ")) <= 3

    def test_repeatable(self) -> None:
        """Test that the same layouts always produce the same hints."""
        layouts = [_layout(0, (500, 500)), _layout(1, (100, 100))]
        assert generate_suggestions(layouts) == generate_suggestions(layouts)
