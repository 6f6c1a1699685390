"""Cut diagram rendering for nesting results.

Draws each consumed sheet with its placed panels, in SVG for export and in
ASCII for terminal display. Panels are coloured by mark so identical parts
are easy to spot across sheets.
"""

from __future__ import annotations

from xml.sax.saxutils import escape

from panelnest.domain.value_objects import OptimizationResult, Placement, UsedSheet

# Fill colours cycled over marks in order of first appearance
MARK_PALETTE: tuple[str, ...] = (
    "#87CEEB",  # Sky blue
    "#90EE90",  # Light green
    "#DDA0DD",  # Plum
    "#F0E68C",  # Khaki
    "#FFB6C1",  # Light pink
    "#FFA07A",  # Light salmon
    "#FFD700",  # Gold
    "#DEB887",  # Burlywood
    "#E6E6FA",  # Lavender
    "#BC8F8F",  # Rosy brown
)

UNMARKED_LABEL = "(unmarked)"


def assign_mark_colors(placements: tuple[Placement, ...] | list[Placement]) -> dict[str, str]:
    """Map every mark to a palette colour, first come first served."""
    colors: dict[str, str] = {}
    for placement in placements:
        if placement.mark not in colors:
            colors[placement.mark] = MARK_PALETTE[len(colors) % len(MARK_PALETTE)]
    return colors


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


class CutDiagramRenderer:
    """Renders nesting results as SVG or ASCII cut diagrams.

    Attributes:
        scale: Pixels per sheet unit for SVG rendering.
        piece_stroke: Stroke colour for panel outlines.
        sheet_fill: Fill colour of the sheet, which shows through as kerf
            and waste.
        text_color: Colour for labels and dimensions.
        show_dimensions: Whether to print placed dimensions on panels.
        show_labels: Whether to print marks on panels.
        use_mark_colors: Whether to colour panels by mark.
    """

    header_height = 30
    sheet_spacing = 20

    def __init__(
        self,
        scale: float = 5.0,
        piece_fill: str = "#ADD8E6",
        piece_stroke: str = "#000000",
        sheet_fill: str = "#D3D3D3",
        text_color: str = "#000000",
        show_dimensions: bool = True,
        show_labels: bool = True,
        use_mark_colors: bool = True,
    ) -> None:
        self.scale = scale
        self.piece_fill = piece_fill
        self.piece_stroke = piece_stroke
        self.sheet_fill = sheet_fill
        self.text_color = text_color
        self.show_dimensions = show_dimensions
        self.show_labels = show_labels
        self.use_mark_colors = use_mark_colors

    def render_svg(
        self,
        result: OptimizationResult,
        sheet: UsedSheet,
        colors: dict[str, str] | None = None,
    ) -> str:
        """Generate an SVG cut diagram for one consumed sheet.

        Args:
            result: Result the sheet belongs to.
            sheet: The sheet to draw.
            colors: Mark colours; computed from the result when omitted so
                a mark keeps its colour across sheets.

        Returns:
            SVG document as a string.
        """
        if colors is None:
            colors = assign_mark_colors(result.placements)

        body = self._render_sheet_body(result, sheet, colors)
        svg_width = sheet.width * self.scale
        svg_height = self._sheet_block_height(sheet, result)
        return "\n".join(
            [
                f'<svg width="{svg_width}" height="{svg_height}" '
                f'xmlns="http://www.w3.org/2000/svg">',
                f'  <rect x="0" y="0" width="{svg_width}" height="{svg_height}" '
                f'fill="white"/>',
                *body,
                "</svg>",
            ]
        )

    def render_all_svg(self, result: OptimizationResult) -> list[str]:
        """Generate one SVG document per consumed sheet."""
        colors = assign_mark_colors(result.placements)
        return [self.render_svg(result, sheet, colors) for sheet in result.sheets]

    def render_combined_svg(self, result: OptimizationResult) -> str:
        """Generate a single SVG with every sheet stacked vertically.

        Raises:
            ValueError: If the result consumed no sheets.
        """
        if not result.sheets:
            raise ValueError("No sheets to render: the result placed no panels")

        colors = assign_mark_colors(result.placements)
        svg_width = max(sheet.width for sheet in result.sheets) * self.scale
        heights = [
            self._sheet_block_height(sheet, result) for sheet in result.sheets
        ]
        svg_height = sum(heights) + self.sheet_spacing * (len(heights) - 1)

        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            f'  <rect x="0" y="0" width="{svg_width}" height="{svg_height}" '
            f'fill="white"/>',
        ]

        y_offset = 0.0
        for sheet, height in zip(result.sheets, heights):
            parts.append(f'  <g transform="translate(0, {y_offset})">')
            parts.append(f"    <!-- Sheet {sheet.sheet_id} #{sheet.sheet_no} -->")
            parts.extend(
                f"  {line}" for line in self._render_sheet_body(result, sheet, colors)
            )
            parts.append("  </g>")
            y_offset += height + self.sheet_spacing

        parts.append("</svg>")
        return "\n".join(parts)

    def _marks_on(
        self, result: OptimizationResult, sheet: UsedSheet
    ) -> list[str]:
        placements = result.placements_for(sheet.sheet_id, sheet.sheet_no)
        return list(dict.fromkeys(p.mark for p in placements))

    def _legend_height(self, marks: list[str]) -> float:
        if not marks or not self.use_mark_colors:
            return 0.0
        rows = (len(marks) + 2) // 3
        return 20 + 10 + rows * 25 + 10

    def _sheet_block_height(self, sheet: UsedSheet, result: OptimizationResult) -> float:
        marks = self._marks_on(result, sheet)
        return self.header_height + sheet.height * self.scale + self._legend_height(marks)

    def _render_sheet_body(
        self,
        result: OptimizationResult,
        sheet: UsedSheet,
        colors: dict[str, str],
    ) -> list[str]:
        """SVG elements for one sheet, origin at the top of its header."""
        sheet_width = sheet.width * self.scale
        sheet_height = sheet.height * self.scale
        placements = result.placements_for(sheet.sheet_id, sheet.sheet_no)
        total = len(result.sheets)
        index = result.sheets.index(sheet) + 1

        header_text = escape(
            f"Sheet {index} of {total} - {sheet.width:g} x {sheet.height:g} "
            f"(id {sheet.sheet_id} #{sheet.sheet_no}) - {sheet.waste_percentage:.1f}% waste"
        )
        parts: list[str] = [
            "  <!-- Header -->",
            f'  <rect x="0" y="0" width="{sheet_width}" height="{self.header_height}" '
            f'fill="#E0E0E0"/>',
            f'  <text x="10" y="{self.header_height - 8}" '
            f'font-family="Arial, sans-serif" font-size="14" '
            f'fill="{self.text_color}">{header_text}</text>',
            "  <!-- Sheet (kerf and waste show through) -->",
            f'  <rect x="0" y="{self.header_height}" width="{sheet_width}" '
            f'height="{sheet_height}" fill="{self.sheet_fill}" '
            f'stroke="{self.piece_stroke}" stroke-width="2"/>',
            "  <!-- Placed panels -->",
        ]
        for placement in placements:
            parts.append(self._render_piece(placement, colors))

        marks = self._marks_on(result, sheet)
        if self.use_mark_colors and marks:
            parts.append("  <!-- Legend -->")
            parts.append(
                self._render_legend(
                    marks, colors, sheet_width, self.header_height + sheet_height
                )
            )
        return parts

    def _render_piece(self, placement: Placement, colors: dict[str, str]) -> str:
        x = placement.x * self.scale
        y = self.header_height + placement.y * self.scale
        w = placement.width * self.scale
        h = placement.height * self.scale

        if self.use_mark_colors:
            fill = colors.get(placement.mark, self.piece_fill)
        else:
            fill = self.piece_fill

        rect = (
            f'<rect x="{x}" y="{y}" width="{w}" height="{h}" '
            f'fill="{fill}" stroke="{self.piece_stroke}"/>'
        )

        font_size = min(12, min(w, h) / 6)
        if font_size < 6:
            return f"  {rect}"

        text_x = x + w / 2
        text_y = y + h / 2
        parts = ["  <g>", f"    {rect}"]

        if self.show_labels:
            label = escape(placement.mark or f"#{placement.panel_id}")
            parts.append(
                f'    <text x="{text_x}" y="{text_y - font_size / 2}" '
                f'text-anchor="middle" font-family="Arial, sans-serif" '
                f'font-size="{font_size}" fill="{self.text_color}">{label}</text>'
            )

        if self.show_dimensions:
            dims = f"{placement.width:g} x {placement.height:g}"
            if placement.rotated:
                dims += " (R)"
            dims_y = text_y + font_size / 2 + 2 if self.show_labels else text_y
            parts.append(
                f'    <text x="{text_x}" y="{dims_y}" '
                f'text-anchor="middle" font-family="Arial, sans-serif" '
                f'font-size="{font_size * 0.8}" fill="{self.text_color}">{dims}</text>'
            )

        parts.append("  </g>")
        return "\n".join(parts)

    def _render_legend(
        self,
        marks: list[str],
        colors: dict[str, str],
        svg_width: float,
        y_offset: float,
    ) -> str:
        parts: list[str] = [
            f'  <rect x="0" y="{y_offset}" width="{svg_width}" '
            f'height="{self._legend_height(marks)}" fill="#F5F5F5" stroke="#CCCCCC"/>',
            f'  <text x="10" y="{y_offset + 18}" '
            f'font-family="Arial, sans-serif" font-size="12" font-weight="bold" '
            f'fill="{self.text_color}">Marks:</text>',
        ]

        column_width = svg_width / 3
        swatch_size = 15
        start_y = y_offset + 35

        for idx, mark in enumerate(marks):
            x = (idx % 3) * column_width + 15
            y = start_y + (idx // 3) * 25
            label = escape(mark or UNMARKED_LABEL)
            parts.append(
                f'  <rect x="{x}" y="{y}" width="{swatch_size}" height="{swatch_size}" '
                f'fill="{colors.get(mark, self.piece_fill)}" stroke="{self.piece_stroke}"/>'
            )
            parts.append(
                f'  <text x="{x + swatch_size + 5}" y="{y + swatch_size - 3}" '
                f'font-family="Arial, sans-serif" font-size="10" '
                f'fill="{self.text_color}">{label}</text>'
            )

        return "\n".join(parts)

    def render_ascii(
        self,
        result: OptimizationResult,
        sheet: UsedSheet,
        width: int = 80,
    ) -> str:
        """Generate an ASCII cut diagram for one consumed sheet.

        Args:
            result: Result the sheet belongs to.
            sheet: The sheet to draw.
            width: Terminal width in characters.

        Returns:
            Multi-line string with a header and the boxed sheet.
        """
        usable_width = width - 2
        scale_x = usable_width / sheet.width
        # Terminal cells are roughly twice as tall as they are wide
        grid_height = max(int(usable_width * sheet.height / sheet.width * 0.5), 10)
        scale_y = grid_height / sheet.height

        grid = [[" "] * usable_width for _ in range(grid_height)]
        for placement in result.placements_for(sheet.sheet_id, sheet.sheet_no):
            self._draw_piece_ascii(grid, placement, scale_x, scale_y)

        index = result.sheets.index(sheet) + 1
        lines = [
            f"Sheet {index} of {len(result.sheets)} - {sheet.width:g} x {sheet.height:g} "
            f"(id {sheet.sheet_id} #{sheet.sheet_no}) - {sheet.waste_percentage:.1f}% waste",
            "+" + "-" * usable_width + "+",
            *("|" + "".join(row) + "|" for row in grid),
            "+" + "-" * usable_width + "+",
        ]
        return "\n".join(lines)

    def _draw_piece_ascii(
        self,
        grid: list[list[str]],
        placement: Placement,
        scale_x: float,
        scale_y: float,
    ) -> None:
        """Draw one placement's outline and labels onto the grid."""
        grid_height = len(grid)
        grid_width = len(grid[0]) if grid else 0

        def clamp(value: float, upper: int) -> int:
            return max(0, min(int(value), upper - 1))

        x1 = clamp(placement.x * scale_x, grid_width)
        x2 = clamp(placement.right_edge * scale_x, grid_width)
        y1 = clamp(placement.y * scale_y, grid_height)
        y2 = clamp(placement.bottom_edge * scale_y, grid_height)

        for x in range(x1, x2 + 1):
            grid[y1][x] = "-"
            grid[y2][x] = "-"
        for y in range(y1, y2 + 1):
            grid[y][x1] = "|"
            grid[y][x2] = "|"
        for y, x in ((y1, x1), (y1, x2), (y2, x1), (y2, x2)):
            grid[y][x] = "+"

        dims = f"{placement.width:g}x{placement.height:g}"
        if placement.rotated:
            dims += "R"
        for row, text in ((y1 + 1, placement.mark), (y1 + 2, dims)):
            if row >= y2 or not text:
                continue
            text = text[: max(0, x2 - x1 - 1)]
            for i, char in enumerate(text):
                grid[row][x1 + 1 + i] = char

    def render_all_ascii(self, result: OptimizationResult, width: int = 80) -> str:
        """Generate ASCII diagrams for every sheet plus a summary line."""
        if not result.sheets:
            return "No sheets to display."

        parts: list[str] = []
        for sheet in result.sheets:
            parts.append(self.render_ascii(result, sheet, width))
            parts.append("")

        summary = result.summary
        parts.append("=" * width)
        parts.append(
            f"SUMMARY: {_plural(summary.total_sheets, 'sheet')}, "
            f"{summary.waste_percentage:.1f}% total waste, "
            f"{summary.total_panels_placed}/{summary.total_panels_needed} panels placed"
        )
        return "\n".join(parts)

    def render_waste_summary(self, result: OptimizationResult) -> str:
        """Generate a short text summary of sheet usage and waste."""
        summary = result.summary
        lines: list[str] = [
            "CUT OPTIMIZATION SUMMARY",
            "=" * 40,
            f"Total Sheets: {summary.total_sheets}",
            f"Total Waste: {summary.waste_percentage:.1f}%",
            "",
            "Per-Sheet Details:",
        ]
        for sheet in result.sheets:
            count = len(result.placements_for(sheet.sheet_id, sheet.sheet_no))
            lines.append(
                f"  Sheet {sheet.sheet_id} #{sheet.sheet_no}: "
                f"{_plural(count, 'panel')}, {sheet.waste_percentage:.1f}% waste"
            )
        return "\n".join(lines)
