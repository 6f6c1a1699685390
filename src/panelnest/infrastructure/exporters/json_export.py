"""JSON exporter for nesting results."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, ClassVar

from panelnest.domain.value_objects import OptimizationResult
from panelnest.infrastructure.exporters.base import ExporterRegistry


def result_to_dict(result: OptimizationResult) -> dict[str, Any]:
    """Convert a result into JSON-ready primitives.

    Derived summary fields (``is_complete``, ``panels_missing``) are
    included so consumers need not recompute them.
    """
    summary = asdict(result.summary)
    summary["is_complete"] = result.summary.is_complete
    summary["panels_missing"] = result.summary.panels_missing

    return {
        "summary": summary,
        "sheets": [asdict(sheet) for sheet in result.sheets],
        "placements": [asdict(p) for p in result.placements],
        "unplaced": [asdict(panel) for panel in result.unplaced],
        "optimal_sheet": (
            asdict(result.optimal_sheet) if result.optimal_sheet is not None else None
        ),
    }


@ExporterRegistry.register("json")
class JsonResultExporter:
    """Exports the complete result as indented JSON."""

    format_name: ClassVar[str] = "json"
    file_extension: ClassVar[str] = "json"

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def export(self, result: OptimizationResult, path: Path) -> None:
        path.write_text(self.export_string(result), encoding="utf-8")

    def export_string(self, result: OptimizationResult) -> str:
        return json.dumps(result_to_dict(result), indent=self.indent)
