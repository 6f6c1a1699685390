"""Infrastructure layer - formatters, diagrams and exporters."""

from .cut_diagram_renderer import CutDiagramRenderer, assign_mark_colors
from .exporters import (
    CsvResultExporter,
    DxfExporter,
    Exporter,
    ExporterRegistry,
    ExportManager,
    JsonResultExporter,
    SvgExporter,
    result_to_dict,
)
from .formatters import (
    PlacementTableFormatter,
    ResultReportFormatter,
    SheetTableFormatter,
    SummaryFormatter,
    UnplacedFormatter,
)

__all__ = [
    "CsvResultExporter",
    "CutDiagramRenderer",
    "DxfExporter",
    "Exporter",
    "ExportManager",
    "ExporterRegistry",
    "JsonResultExporter",
    "PlacementTableFormatter",
    "ResultReportFormatter",
    "SheetTableFormatter",
    "SummaryFormatter",
    "SvgExporter",
    "UnplacedFormatter",
    "assign_mark_colors",
    "result_to_dict",
]
