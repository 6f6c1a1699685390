"""SVG exporter for cut diagrams.

Wraps CutDiagramRenderer to write every consumed sheet into one SVG file,
stacked vertically, or one file per sheet.
"""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar

from panelnest.domain.value_objects import OptimizationResult
from panelnest.infrastructure.cut_diagram_renderer import CutDiagramRenderer
from panelnest.infrastructure.exporters.base import ExporterRegistry


@ExporterRegistry.register("svg")
class SvgExporter:
    """SVG exporter for sheet cut diagrams.

    Raises ValueError on export when the result consumed no sheets, since
    there is nothing to draw.
    """

    format_name: ClassVar[str] = "svg"
    file_extension: ClassVar[str] = "svg"

    def __init__(
        self,
        scale: float = 5.0,
        show_dimensions: bool = True,
        show_labels: bool = True,
        use_mark_colors: bool = True,
    ) -> None:
        self.renderer = CutDiagramRenderer(
            scale=scale,
            show_dimensions=show_dimensions,
            show_labels=show_labels,
            use_mark_colors=use_mark_colors,
        )

    def export(self, result: OptimizationResult, path: Path) -> None:
        path.write_text(self.export_string(result), encoding="utf-8")

    def export_string(self, result: OptimizationResult) -> str:
        return self.renderer.render_combined_svg(result)

    def export_individual_sheets(
        self, result: OptimizationResult, base_path: Path
    ) -> list[Path]:
        """Write one SVG per sheet as ``{stem}_{n}.svg``.

        A single-sheet result is written to ``base_path`` itself.
        """
        svgs = self.renderer.render_all_svg(result)
        if not svgs:
            raise ValueError("No sheets to render: the result placed no panels")

        created: list[Path] = []
        for index, svg_content in enumerate(svgs, start=1):
            if len(svgs) == 1:
                file_path = base_path
            else:
                suffix = base_path.suffix or ".svg"
                file_path = base_path.parent / f"{base_path.stem}_{index}{suffix}"
            file_path.write_text(svg_content, encoding="utf-8")
            created.append(file_path)
        return created
