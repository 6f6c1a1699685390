"""Text formatters for nesting results."""

from __future__ import annotations

from collections import Counter

from panelnest.domain.value_objects import OptimizationResult, UnitPanel


class SummaryFormatter:
    """Formats the aggregate block of a result."""

    def format(self, result: OptimizationResult) -> str:
        summary = result.summary
        lines = [
            "NESTING SUMMARY",
            "=" * 70,
            f"Sheets used:     {summary.total_sheets} "
            f"({summary.sheet_types_used} sheet type{'s' if summary.sheet_types_used != 1 else ''})",
            f"Total area:      {summary.total_area:.2f}",
            f"Used area:       {summary.used_area:.2f}",
            f"Waste:           {summary.waste_percentage:.1f}%",
            f"Panels placed:   {summary.total_panels_placed} of {summary.total_panels_needed}",
        ]
        if result.optimal_sheet is not None:
            lines.append(
                f"Optimal sheet:   {result.optimal_sheet.width:g} x "
                f"{result.optimal_sheet.height:g}"
            )
        return "\n".join(lines)


class SheetTableFormatter:
    """Formats one row per consumed sheet."""

    def format(self, result: OptimizationResult) -> str:
        if not result.sheets:
            return "No sheets used."

        lines = [
            "SHEETS USED",
            "=" * 70,
            f"{'Sheet':<8} {'No':<5} {'Width':<10} {'Height':<10} "
            f"{'Panels':<8} {'Used area':<12} {'Waste'}",
            "-" * 70,
        ]
        for sheet in result.sheets:
            count = len(result.placements_for(sheet.sheet_id, sheet.sheet_no))
            lines.append(
                f"{sheet.sheet_id:<8} {sheet.sheet_no:<5} {sheet.width:<10g} "
                f"{sheet.height:<10g} {count:<8} {sheet.used_area:<12.2f} "
                f"{sheet.waste_percentage:.1f}%"
            )
        return "\n".join(lines)


class PlacementTableFormatter:
    """Formats the cut list: where each panel sits."""

    def format(self, result: OptimizationResult) -> str:
        if not result.placements:
            return "No panels placed."

        lines = [
            "PANEL PLACEMENTS",
            "=" * 70,
            f"{'Sheet':<10} {'Panel':<7} {'Mark':<14} {'Width':<9} {'Height':<9} "
            f"{'X':<9} {'Y':<9} {'Rot'}",
            "-" * 70,
        ]
        for p in result.placements:
            lines.append(
                f"{f'{p.sheet_id}#{p.sheet_no}':<10} {p.panel_id:<7} {p.mark[:14]:<14} "
                f"{p.width:<9g} {p.height:<9g} {p.x:<9g} {p.y:<9g} "
                f"{'Yes' if p.rotated else 'No'}"
            )
        return "\n".join(lines)


class UnplacedFormatter:
    """Formats the block listing panels that did not fit."""

    def format(self, result: OptimizationResult) -> str:
        """Return an INCOMPLETE block, or an empty string when complete."""
        if result.summary.is_complete:
            return ""

        lines = [
            "INCOMPLETE",
            "=" * 70,
            f"{result.summary.panels_missing} panel"
            f"{'s' if result.summary.panels_missing != 1 else ''} could not be placed "
            "on the available sheets:",
        ]
        for (mark, width, height), count in _group_unplaced(result.unplaced).items():
            lines.append(f"  {mark or '(unmarked)'}: {width:g} x {height:g} x {count}")
        return "\n".join(lines)


def _group_unplaced(panels: tuple[UnitPanel, ...]) -> Counter[tuple[str, float, float]]:
    return Counter((p.mark, p.width, p.height) for p in panels)


class ResultReportFormatter:
    """Full text report: summary, sheets, placements and any shortfall."""

    def __init__(self, include_placements: bool = True) -> None:
        self.include_placements = include_placements
        self.summary = SummaryFormatter()
        self.sheets = SheetTableFormatter()
        self.placements = PlacementTableFormatter()
        self.unplaced = UnplacedFormatter()

    def format(self, result: OptimizationResult) -> str:
        sections = [self.summary.format(result), self.sheets.format(result)]
        if self.include_placements:
            sections.append(self.placements.format(result))
        incomplete = self.unplaced.format(result)
        if incomplete:
            sections.append(incomplete)
        return "\n\n".join(sections)
