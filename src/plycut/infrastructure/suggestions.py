"""Advisory optimization hints derived from finished sheet layouts.

Suggestions never affect placement. Only ``Suggestion.type`` is meant for
programmatic use; ``message`` is preformatted display text.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from plycut.domain.value_objects import SuggestionType

if TYPE_CHECKING:
    from plycut.infrastructure.bin_packing import SheetLayout

# Waste above which usable gaps on a sheet are listed
FILL_GAPS_WASTE = 15.0
# Waste above which a non-final sheet is flagged as under-used
CONSOLIDATE_WASTE = 30.0
# Waste above which the final sheet's leftover is advertised
FUTURE_USE_WASTE = 20.0
# Both sides of a gap must reach this to be worth listing
MIN_GAP_SIZE = 200.0
MAX_GAP_EXAMPLES = 3


@dataclass(frozen=True)
class Suggestion:
    """An optimization hint.

    Attributes:
        type: Kind of hint.
        sheet: One-based sheet number, or 0 for the whole job.
        message: Display text.
    """

    type: SuggestionType
    sheet: int
    message: str


def _gap_examples(layout: SheetLayout) -> list[str]:
    """Distinct ``WxH`` keys of free rectangles large enough to reuse."""
    examples: list[str] = []
    for rect in layout.free_rectangles:
        if rect.width >= MIN_GAP_SIZE and rect.height >= MIN_GAP_SIZE:
            key = f"{math.floor(rect.width)}x{math.floor(rect.height)}"
            if key not in examples:
                examples.append(key)
    return examples


def generate_suggestions(layouts: Sequence[SheetLayout]) -> list[Suggestion]:
    """Derive optimization hints from a finished packing.

    Args:
        layouts: Final sheet layouts in output order.

    Returns:
        Suggestions in a stable order: per-sheet hints by sheet, then the
        last-sheet hint, then the overall efficiency hint.
    """
    suggestions: list[Suggestion] = []
    if not layouts:
        return suggestions

    last_index = len(layouts) - 1

    for idx, layout in enumerate(layouts):
        if layout.largest_free_rectangle.area <= 0:
            continue

        sheet_no = idx + 1
        waste = layout.waste_percentage

        if waste > FILL_GAPS_WASTE:
            examples = _gap_examples(layout)
            if examples:
                free_pct = layout.total_free_area / layout.sheet_config.area * 100
                suggestions.append(
                    Suggestion(
                        type=SuggestionType.FILL_GAPS,
                        sheet=sheet_no,
                        message=(
                            f"Sheet {sheet_no} has {free_pct:.0f}% free space. "
                            f"Usable gaps: {', '.join(examples[:MAX_GAP_EXAMPLES])}. "
                            "Consider adding smaller parts here to reduce waste."
                        ),
                    )
                )

        if idx < last_index and waste > CONSOLIDATE_WASTE:
            suggestions.append(
                Suggestion(
                    type=SuggestionType.CONSOLIDATE,
                    sheet=sheet_no,
                    message=(
                        f"Sheet {sheet_no} is only {100 - waste:.0f}% used. "
                        "Smaller pieces from later sheets could potentially "
                        "fill gaps here."
                    ),
                )
            )

    last = layouts[last_index]
    if last.waste_percentage > FUTURE_USE_WASTE:
        largest = last.largest_free_rectangle
        suggestions.append(
            Suggestion(
                type=SuggestionType.FUTURE_USE,
                sheet=len(layouts),
                message=(
                    f"Sheet {len(layouts)} (last used) has a largest free area of "
                    f"{math.floor(largest.width)}x{math.floor(largest.height)}, "
                    "available for future furniture."
                ),
            )
        )

    if len(layouts) > 1:
        sheet_area = layouts[0].sheet_config.area
        total_used = sum(layout.used_area for layout in layouts)
        min_sheets = math.ceil(total_used / sheet_area)
        if min_sheets < len(layouts):
            plural = "s" if min_sheets > 1 else ""
            suggestions.append(
                Suggestion(
                    type=SuggestionType.EFFICIENCY,
                    sheet=0,
                    message=(
                        f"Theoretical minimum: {min_sheets} sheet{plural}. "
                        f"Current: {len(layouts)} sheets. "
                        "The extra space is available for future cuts."
                    ),
                )
            )

    return suggestions
