"""Exporter framework for nesting results.

- Exporter Protocol: interface every exporter implements
- ExporterRegistry: format name lookup
- ExportManager: writes several formats to one directory

Registered exporters:
- csv: Summary, sheets used and panel placements
- dxf: Sheet and panel outlines for CAM import
- json: The complete result
- svg: Cut diagrams coloured by mark

Usage:
    manager = ExportManager(output_dir=Path("./output"))
    manager.export_all(["csv", "svg"], result, project_name="job_42")
"""

from panelnest.infrastructure.exporters.base import (
    Exporter,
    ExporterRegistry,
    ExportManager,
)

# Import exporters to trigger registration
from panelnest.infrastructure.exporters.csv_export import CsvResultExporter
from panelnest.infrastructure.exporters.dxf import DxfExporter
from panelnest.infrastructure.exporters.json_export import (
    JsonResultExporter,
    result_to_dict,
)
from panelnest.infrastructure.exporters.svg import SvgExporter

__all__ = [
    "CsvResultExporter",
    "DxfExporter",
    "Exporter",
    "ExportManager",
    "ExporterRegistry",
    "JsonResultExporter",
    "SvgExporter",
    "result_to_dict",
]
