"""CSV exporter for nesting results.

The file has three sections separated by blank rows: an overall summary,
one row per consumed sheet, and one row per panel placement.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import ClassVar

from panelnest.domain.value_objects import OptimizationResult
from panelnest.infrastructure.exporters.base import ExporterRegistry

SHEET_HEADER = ["Sheet ID", "Sheet No", "Width", "Height", "Used Area", "Waste Percentage"]
PLACEMENT_HEADER = [
    "Sheet ID",
    "Sheet No",
    "Panel ID",
    "Mark",
    "Width",
    "Height",
    "X Position",
    "Y Position",
    "Rotated",
]


@ExporterRegistry.register("csv")
class CsvResultExporter:
    """Exports summary, sheets and placements as a sectioned CSV."""

    format_name: ClassVar[str] = "csv"
    file_extension: ClassVar[str] = "csv"

    def export(self, result: OptimizationResult, path: Path) -> None:
        path.write_text(self.export_string(result), encoding="utf-8", newline="")

    def export_string(self, result: OptimizationResult) -> str:
        output = io.StringIO()
        writer = csv.writer(output)
        summary = result.summary

        writer.writerow(["PANEL OPTIMIZATION SUMMARY"])
        writer.writerow(["Total Sheets", summary.total_sheets])
        writer.writerow(["Total Area", f"{summary.total_area:.2f}"])
        writer.writerow(["Used Area", f"{summary.used_area:.2f}"])
        writer.writerow(["Waste Percentage", f"{summary.waste_percentage:.2f}%"])
        writer.writerow(
            ["Panels Placed", f"{summary.total_panels_placed}/{summary.total_panels_needed}"]
        )
        if result.optimal_sheet is not None:
            writer.writerow(
                [
                    "Optimal Sheet",
                    f"{result.optimal_sheet.width:g}x{result.optimal_sheet.height:g}",
                ]
            )
        writer.writerow([])

        writer.writerow(["SHEETS USED"])
        writer.writerow(SHEET_HEADER)
        for sheet in result.sheets:
            writer.writerow(
                [
                    sheet.sheet_id,
                    sheet.sheet_no,
                    f"{sheet.width:g}",
                    f"{sheet.height:g}",
                    f"{sheet.used_area:.2f}",
                    f"{sheet.waste_percentage:.2f}%",
                ]
            )
        writer.writerow([])

        writer.writerow(["PANEL PLACEMENTS"])
        writer.writerow(PLACEMENT_HEADER)
        for p in result.placements:
            writer.writerow(
                [
                    p.sheet_id,
                    p.sheet_no,
                    p.panel_id,
                    p.mark,
                    f"{p.width:g}",
                    f"{p.height:g}",
                    f"{p.x:g}",
                    f"{p.y:g}",
                    "Yes" if p.rotated else "No",
                ]
            )

        return output.getvalue()
