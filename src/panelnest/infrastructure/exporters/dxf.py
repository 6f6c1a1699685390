"""DXF exporter for nesting results.

Generates one R2010 drawing with every consumed sheet laid out left to
right. Each sheet is outlined and its placements are drawn as closed
polylines with their mark and size as a label, ready for import into CAM
software. DXF's Y axis points up, so sheet coordinates (origin at the top
left) are flipped on the way out.
"""

from __future__ import annotations

import logging
from io import StringIO
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

import ezdxf

from panelnest.domain.value_objects import OptimizationResult, Placement, UsedSheet
from panelnest.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from ezdxf.document import Drawing
    from ezdxf.layouts import Modelspace


logger = logging.getLogger(__name__)


LAYERS = {
    "SHEETS": 7,  # White - sheet outlines
    "PANELS": 3,  # Green - panel cut outlines
    "LABELS": 5,  # Blue - marks and sizes
}


@ExporterRegistry.register("dxf")
class DxfExporter:
    """Exports consumed sheets and their placements to DXF.

    Attributes:
        sheet_spacing: Gap between neighbouring sheets, in sheet units.
        units: "inches" (default) or "mm"; mm output scales by 25.4.
    """

    format_name: ClassVar[str] = "dxf"
    file_extension: ClassVar[str] = "dxf"

    def __init__(self, sheet_spacing: float = 12.0, units: str = "inches") -> None:
        if units not in ("inches", "mm"):
            raise ValueError(f"Invalid units: {units}. Must be 'inches' or 'mm'")
        self.sheet_spacing = sheet_spacing
        self.units = units
        self.scale = 25.4 if units == "mm" else 1.0

    def export(self, result: OptimizationResult, path: Path) -> None:
        """Write the drawing to ``path``.

        Raises:
            ValueError: If the result consumed no sheets.
        """
        doc = self.build_document(result)
        doc.saveas(path)
        logger.info("Exported %d sheets to DXF %s", len(result.sheets), path)

    def export_string(self, result: OptimizationResult) -> str:
        doc = self.build_document(result)
        stream = StringIO()
        doc.write(stream)
        return stream.getvalue()

    def build_document(self, result: OptimizationResult) -> Drawing:
        """Create the drawing for a result.

        Raises:
            ValueError: If the result consumed no sheets.
        """
        if not result.sheets:
            raise ValueError("No sheets to export: the result placed no panels")

        doc = ezdxf.new("R2010")
        for name, color in LAYERS.items():
            doc.layers.add(name, color=color)

        msp = doc.modelspace()
        offset_x = 0.0
        for sheet in result.sheets:
            self._draw_sheet(msp, result, sheet, offset_x)
            offset_x += (sheet.width + self.sheet_spacing) * self.scale
        return doc

    def _draw_sheet(
        self,
        msp: Modelspace,
        result: OptimizationResult,
        sheet: UsedSheet,
        offset_x: float,
    ) -> None:
        width = sheet.width * self.scale
        height = sheet.height * self.scale
        msp.add_lwpolyline(
            _rectangle(offset_x, 0.0, width, height),
            close=True,
            dxfattribs={"layer": "SHEETS"},
        )
        msp.add_mtext(
            f"Sheet {sheet.sheet_id} #{sheet.sheet_no} - {sheet.waste_percentage:.1f}% waste",
            dxfattribs={
                "layer": "LABELS",
                "char_height": max(0.5 * self.scale, height * 0.02),
                "insert": (offset_x, height + 1.0 * self.scale),
                "attachment_point": 7,  # BOTTOM_LEFT
            },
        )
        for placement in result.placements_for(sheet.sheet_id, sheet.sheet_no):
            self._draw_placement(msp, placement, sheet, offset_x)

    def _draw_placement(
        self,
        msp: Modelspace,
        placement: Placement,
        sheet: UsedSheet,
        offset_x: float,
    ) -> None:
        x = offset_x + placement.x * self.scale
        y = (sheet.height - placement.bottom_edge) * self.scale
        width = placement.width * self.scale
        height = placement.height * self.scale

        msp.add_lwpolyline(
            _rectangle(x, y, width, height),
            close=True,
            dxfattribs={"layer": "PANELS"},
        )

        label = f"{placement.width:g} x {placement.height:g}"
        if placement.rotated:
            label += " (R)"
        if placement.mark:
            label = f"{_escape_mtext(placement.mark)}\\P{label}"

        text_height = max(0.15 * self.scale, min(1.0 * self.scale, min(width, height) * 0.08))
        msp.add_mtext(
            label,
            dxfattribs={
                "layer": "LABELS",
                "char_height": text_height,
                "insert": (x + width / 2, y + height / 2),
                "attachment_point": 5,  # MIDDLE_CENTER
            },
        )


def _escape_mtext(text: str) -> str:
    """Make free text literal inside MTEXT, where backslash and braces are codes."""
    return (
        text.replace("\\", "\\\\")
        .replace("{", "\\{")
        .replace("}", "\\}")
        .replace("\n", " ")
    )


def _rectangle(x: float, y: float, width: float, height: float) -> list[tuple[float, float]]:
    return [(x, y), (x + width, y), (x + width, y + height), (x, y + height)]
