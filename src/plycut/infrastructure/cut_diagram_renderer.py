"""Cut diagram rendering for bin packing visualization.

This module provides SVG and ASCII rendering of sheet layouts showing piece
placements, dimensions, rotation indicators and remaining free space, plus a
plain-text summary of a packing result.
"""

from __future__ import annotations

import math
from html import escape

from plycut.domain.value_objects import FreeRectangle, Unit
from plycut.infrastructure.bin_packing import (
    PackingResult,
    PlacedPiece,
    SheetLayout,
)


def _free_label(layout: SheetLayout) -> str:
    """Describe the largest free rectangle, or an empty string if none."""
    largest = layout.largest_free_rectangle
    if largest.area <= 0:
        return ""
    return f"largest free: {math.floor(largest.width)}x{math.floor(largest.height)}"


class CutDiagramRenderer:
    """Renders cut diagrams in SVG and ASCII form.

    Attributes:
        scale: Pixels per sheet unit for SVG rendering.
        unit: Unit shown next to dimensions.
        piece_stroke: Stroke color for piece outlines.
        sheet_fill: Fill color for the bare sheet.
        free_fill: Fill color for free rectangles.
        text_color: Color for header text.
        show_dimensions: Whether to show piece dimensions.
        show_labels: Whether to show piece labels.
        show_free_space: Whether to draw free rectangles.
    """

    def __init__(
        self,
        scale: float = 0.25,
        unit: Unit = Unit.MM,
        piece_stroke: str = "#333333",
        sheet_fill: str = "#e8e8e8",
        free_fill: str = "#f5f5dc",
        text_color: str = "#000000",
        show_dimensions: bool = True,
        show_labels: bool = True,
        show_free_space: bool = True,
    ) -> None:
        """Initialize renderer with styling options.

        Args:
            scale: Pixels per sheet unit (default 0.25, about 610 px for a
                2440 mm sheet).
            unit: Unit shown next to dimensions (default mm).
            piece_stroke: Stroke color for piece outlines.
            sheet_fill: Fill color for the bare sheet (waste).
            free_fill: Fill color for free rectangles.
            text_color: Color for header text.
            show_dimensions: Whether to show piece dimensions (default True).
            show_labels: Whether to show piece labels (default True).
            show_free_space: Whether to draw free rectangles (default True).
        """
        self.scale = scale
        self.unit = unit
        self.piece_stroke = piece_stroke
        self.sheet_fill = sheet_fill
        self.free_fill = free_fill
        self.text_color = text_color
        self.show_dimensions = show_dimensions
        self.show_labels = show_labels
        self.show_free_space = show_free_space

    def render_svg(self, layout: SheetLayout, total_sheets: int = 1) -> str:
        """Generate SVG cut diagram for a single sheet.

        Args:
            layout: Sheet layout with placed pieces.
            total_sheets: Total number of sheets (for header display).

        Returns:
            SVG string representation of the layout.
        """
        sheet = layout.sheet_config
        header_height = 30

        svg_width = sheet.width * self.scale
        svg_height = sheet.height * self.scale + header_height

        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            "",
            "  <!-- Background -->",
            f'  <rect x="0" y="0" width="{svg_width}" height="{svg_height}" '
            f'fill="white"/>',
            "",
            self._render_header(layout, total_sheets, svg_width, header_height),
            "",
            "  <!-- Sheet -->",
            f'  <rect x="0" y="{header_height}" '
            f'width="{svg_width}" height="{sheet.height * self.scale}" '
            f'fill="{self.sheet_fill}"/>',
        ]

        if self.show_free_space and layout.free_rectangles:
            parts.append("")
            parts.append("  <!-- Free space -->")
            for rect in layout.free_rectangles:
                parts.append(self._render_free_rect(rect, header_height))

        parts.append("")
        parts.append("  <!-- Placed pieces -->")
        for placement in layout.placements:
            parts.append(self._render_piece(placement, header_height))

        parts.append("")
        parts.append("  <!-- Sheet border -->")
        parts.append(
            f'  <rect x="0" y="{header_height}" '
            f'width="{svg_width}" height="{sheet.height * self.scale}" '
            f'fill="none" stroke="{self.piece_stroke}" stroke-width="2"/>'
        )
        parts.append("")
        parts.append("</svg>")

        return "\n".join(parts)

    def render_all_svg(self, result: PackingResult) -> list[str]:
        """Generate SVG cut diagrams for all sheets.

        Args:
            result: Complete packing result.

        Returns:
            List of SVG strings, one per sheet.
        """
        total_sheets = len(result.layouts)
        return [self.render_svg(layout, total_sheets) for layout in result.layouts]

    def _render_header(
        self,
        layout: SheetLayout,
        total_sheets: int,
        svg_width: float,
        header_height: float,
    ) -> str:
        """Render sheet header with waste and largest free area."""
        header_text = (
            f"Sheet {layout.sheet_index + 1} of {total_sheets} - "
            f"{layout.waste_percentage:.1f}% waste"
        )
        free_label = _free_label(layout)
        if free_label:
            header_text += f" | {free_label}"

        return (
            f"  <!-- Header -->\n"
            f'  <rect x="0" y="0" width="{svg_width}" height="{header_height}" '
            f'fill="#E0E0E0"/>\n'
            f'  <text x="10" y="{header_height - 8}" '
            f'font-family="Arial, sans-serif" font-size="14" '
            f'fill="{self.text_color}">{escape(header_text)}</text>'
        )

    def _render_free_rect(self, rect: FreeRectangle, header_height: float) -> str:
        """Render a free rectangle as a dashed, translucent box."""
        x = rect.x * self.scale
        y = header_height + rect.y * self.scale
        w = rect.width * self.scale
        h = rect.height * self.scale

        parts = [
            f'  <rect x="{x}" y="{y}" width="{w}" height="{h}" '
            f'fill="{self.free_fill}" fill-opacity="0.4" stroke="#999999" '
            f'stroke-dasharray="4,3"/>'
        ]
        if w > 50 and h > 20:
            font_size = max(8, min(11, min(w, h) * 0.15))
            parts.append(
                f'  <text x="{x + w / 2}" y="{y + h / 2}" text-anchor="middle" '
                f'dominant-baseline="middle" font-family="Arial, sans-serif" '
                f'font-size="{font_size}" fill="#888888">'
                f"{math.floor(rect.width)}x{math.floor(rect.height)}</text>"
            )
        return "\n".join(parts)

    def _render_piece(self, placement: PlacedPiece, header_height: float) -> str:
        """Render a single placed piece as SVG rect and text.

        Args:
            placement: The placed piece.
            header_height: Header height offset.

        Returns:
            SVG elements for the piece.
        """
        x = placement.x * self.scale
        y = header_height + placement.y * self.scale
        w = placement.placed_width * self.scale
        h = placement.placed_height * self.scale

        piece = placement.piece
        dims = f"{piece.width:g}x{piece.height:g}"
        if placement.rotated:
            dims += " (R)"

        font_size = max(9, min(14, min(w, h) * 0.18))
        text_x = x + w / 2
        text_y = y + h / 2

        svg_parts = [
            "  <g>",
            f'    <rect x="{x}" y="{y}" width="{w}" height="{h}" '
            f'fill="{piece.color}" fill-opacity="0.75" stroke="{self.piece_stroke}"/>',
        ]

        # Label and dimensions only where they fit
        if self.show_labels and w > 30 and h > font_size * 1.5:
            label_y = text_y - font_size * 0.6 if h > font_size * 3 else text_y
            svg_parts.append(
                f'    <text x="{text_x}" y="{label_y}" text-anchor="middle" '
                f'dominant-baseline="middle" font-family="Arial, sans-serif" '
                f'font-weight="bold" font-size="{font_size}" fill="#ffffff">'
                f"{escape(piece.label)}</text>"
            )
        if self.show_dimensions and w > 30 and h > font_size * 3:
            svg_parts.append(
                f'    <text x="{text_x}" y="{text_y + font_size * 0.6}" '
                f'text-anchor="middle" dominant-baseline="middle" '
                f'font-family="Arial, sans-serif" font-size="{font_size * 0.8}" '
                f'fill="#ffffff">{dims}</text>'
            )

        svg_parts.append("  </g>")
        return "\n".join(svg_parts)

    def render_combined_svg(self, result: PackingResult) -> str:
        """Generate single SVG with all sheets stacked vertically.

        Args:
            result: Complete packing result.

        Returns:
            Combined SVG string with all sheets.
        """
        if not result.layouts:
            return (
                '<svg width="100" height="50" xmlns="http://www.w3.org/2000/svg">'
                '<text x="10" y="30">No sheets to display</text></svg>'
            )

        header_height = 30
        sheet_spacing = 20
        sheet = result.sheet_config
        sheet_block = sheet.height * self.scale + header_height + sheet_spacing

        svg_width = sheet.width * self.scale
        svg_height = sheet_block * len(result.layouts)

        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            f'  <rect x="0" y="0" width="{svg_width}" height="{svg_height}" '
            f'fill="white"/>',
        ]

        total_sheets = len(result.layouts)
        for position, layout in enumerate(result.layouts):
            parts.append(
                f'  <g transform="translate(0, {position * sheet_block})">'
            )
            parts.append(f"    <!-- Sheet {layout.sheet_index + 1} -->")

            # Reuse the single-sheet body between the <svg> tags
            sheet_svg = self.render_svg(layout, total_sheets)
            start_idx = sheet_svg.find(">") + 1
            end_idx = sheet_svg.rfind("</svg>")
            for line in sheet_svg[start_idx:end_idx].strip().split("\n"):
                if line.strip():
                    parts.append(f"  {line}")

            parts.append("  </g>")

        parts.append("</svg>")
        return "\n".join(parts)

    def render_ascii(
        self,
        layout: SheetLayout,
        width: int = 80,
        total_sheets: int = 1,
    ) -> str:
        """Generate ASCII cut diagram for a single sheet.

        Args:
            layout: Sheet layout with placed pieces.
            width: Terminal width in characters (default 80).
            total_sheets: Total number of sheets (for header display).

        Returns:
            ASCII string representation of the layout.
        """
        sheet = layout.sheet_config

        # Reserve 2 chars for borders
        usable_width = width - 2
        scale_x = usable_width / sheet.width

        # Characters are roughly twice as tall as they are wide
        grid_height = int(usable_width * (sheet.height / sheet.width) * 0.5)
        grid_height = max(grid_height, 10)
        scale_y = grid_height / sheet.height

        grid = [[" " for _ in range(usable_width)] for _ in range(grid_height)]
        for placement in layout.placements:
            self._draw_piece_ascii(grid, placement, scale_x, scale_y)

        header = (
            f"Sheet {layout.sheet_index + 1} of {total_sheets} - "
            f"{layout.waste_percentage:.1f}% waste"
        )
        free_label = _free_label(layout)
        if free_label:
            header += f" ({free_label})"

        lines: list[str] = [header, "+" + "-" * usable_width + "+"]
        for row in grid:
            lines.append("|" + "".join(row) + "|")
        lines.append("+" + "-" * usable_width + "+")

        return "\n".join(lines)

    def _draw_piece_ascii(
        self,
        grid: list[list[str]],
        placement: PlacedPiece,
        scale_x: float,
        scale_y: float,
    ) -> None:
        """Draw a single piece onto the ASCII grid.

        Args:
            grid: 2D character grid.
            placement: The placed piece.
            scale_x: Characters per unit (horizontal).
            scale_y: Lines per unit (vertical).
        """
        grid_height = len(grid)
        grid_width = len(grid[0]) if grid else 0

        x1 = max(0, min(int(placement.x * scale_x), grid_width - 1))
        y1 = max(0, min(int(placement.y * scale_y), grid_height - 1))
        x2 = max(0, min(int(placement.right_edge * scale_x), grid_width - 1))
        y2 = max(0, min(int(placement.bottom_edge * scale_y), grid_height - 1))

        for x in range(x1, x2 + 1):
            grid[y1][x] = "-"
            grid[y2][x] = "-"
        for y in range(y1, y2 + 1):
            grid[y][x1] = "|"
            grid[y][x2] = "|"
        for cx, cy in ((x1, y1), (x2, y1), (x1, y2), (x2, y2)):
            grid[cy][cx] = "+"

        piece = placement.piece
        dims = f"{piece.width:.0f}x{piece.height:.0f}"
        if placement.rotated:
            dims += "R"

        for row, text in ((y1 + 1, piece.label), (y1 + 2, dims)):
            if row >= y2:
                break
            text = text[: max(0, x2 - x1 - 1)]
            for i, char in enumerate(text):
                grid[row][x1 + 1 + i] = char

    def render_all_ascii(self, result: PackingResult, width: int = 80) -> str:
        """Generate ASCII cut diagrams for all sheets.

        Args:
            result: Complete packing result.
            width: Terminal width in characters.

        Returns:
            Combined ASCII string with all sheets.
        """
        if not result.layouts:
            return "No sheets to display."

        total_sheets = len(result.layouts)
        parts: list[str] = []
        for layout in result.layouts:
            parts.append(self.render_ascii(layout, width, total_sheets))
            parts.append("")

        parts.append("=" * width)
        parts.append(
            f"SUMMARY: {total_sheets} sheet{'s' if total_sheets != 1 else ''}, "
            f"{result.total_waste_percentage:.1f}% total waste"
        )
        return "\n".join(parts)

    def render_summary(
        self, result: PackingResult, total_pieces: int | None = None
    ) -> str:
        """Generate text summary of sheet usage, unplaced pieces and hints.

        Args:
            result: Complete packing result.
            total_pieces: Number of pieces requested; defaults to placed plus
                unplaced.

        Returns:
            Formatted summary string.
        """
        if total_pieces is None:
            total_pieces = result.total_pieces_placed + len(result.unplaced)

        sheet = result.sheet_config
        unit = self.unit.value
        lines: list[str] = [
            "CUT OPTIMIZATION SUMMARY",
            "=" * 40,
            f"Sheet size: {sheet.width:g} x {sheet.height:g} {unit}",
            f"Sheets needed: {result.total_sheets}",
            f"Pieces placed: {result.total_pieces_placed} / {total_pieces}",
            f"Overall waste: {result.total_waste_percentage:.1f}%",
        ]

        if result.layouts:
            lines.append("")
            lines.append("Per-Sheet Details:")
            for layout in result.layouts:
                detail = (
                    f"  Sheet {layout.sheet_index + 1}: "
                    f"{layout.piece_count} piece{'s' if layout.piece_count != 1 else ''}, "
                    f"{layout.waste_percentage:.1f}% waste"
                )
                free_label = _free_label(layout)
                if free_label:
                    detail += f" ({free_label})"
                lines.append(detail)

        if result.unplaced:
            lines.append("")
            lines.append("Could not place:")
            for entry in result.unplaced:
                piece = entry.piece
                lines.append(
                    f"  {piece.label} ({piece.width:g}x{piece.height:g}{unit}) - "
                    f"{entry.reason.description}"
                )

        if result.suggestions:
            lines.append("")
            lines.append("Optimization Suggestions:")
            for suggestion in result.suggestions:
                lines.append(f"  [{suggestion.type.value}] {suggestion.message}")

        return "\n".join(lines)
