"""Tests for the exporter framework (base.py)."""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar

import pytest

from panelnest.infrastructure.exporters import (
    CsvResultExporter,
    DxfExporter,
    Exporter,
    ExporterRegistry,
    ExportManager,
    JsonResultExporter,
    SvgExporter,
)


class TestExporterRegistry:
    """Tests for ExporterRegistry."""

    def setup_method(self) -> None:
        """Store original exporters before each test."""
        self._original_exporters = ExporterRegistry._exporters.copy()

    def teardown_method(self) -> None:
        """Restore original exporters after each test."""
        ExporterRegistry._exporters = self._original_exporters

    def test_builtin_formats_registered(self) -> None:
        assert ExporterRegistry.available_formats() == ["csv", "dxf", "json", "svg"]
        assert ExporterRegistry.get("csv") is CsvResultExporter
        assert ExporterRegistry.get("dxf") is DxfExporter
        assert ExporterRegistry.get("json") is JsonResultExporter
        assert ExporterRegistry.get("svg") is SvgExporter

    def test_get_unknown_format_raises_key_error(self) -> None:
        with pytest.raises(KeyError) as exc_info:
            ExporterRegistry.get("pdf")
        assert "No exporter registered for format 'pdf'" in str(exc_info.value)

    def test_register_new_exporter(self) -> None:
        @ExporterRegistry.register("txt")
        class TextExporter:
            format_name: ClassVar[str] = "txt"
            file_extension: ClassVar[str] = "txt"

            def export(self, result, path: Path) -> None:
                path.write_text("done")

        assert ExporterRegistry.is_registered("txt")
        assert ExporterRegistry.get("txt") is TextExporter

    def test_clear_removes_all_exporters(self) -> None:
        ExporterRegistry.clear()
        assert ExporterRegistry.available_formats() == []
        with pytest.raises(KeyError, match="none"):
            ExporterRegistry.get("csv")

    def test_builtin_exporters_satisfy_protocol(self) -> None:
        for exporter in (CsvResultExporter(), JsonResultExporter(), SvgExporter(), DxfExporter()):
            assert isinstance(exporter, Exporter)


class TestExportManager:
    """Tests for ExportManager."""

    def test_export_all_names_files_by_project(self, tmp_path: Path, two_sheet_result) -> None:
        manager = ExportManager(tmp_path / "out")
        files = manager.export_all(["csv", "json"], two_sheet_result, "job42")

        assert files == {
            "csv": tmp_path / "out" / "job42_csv.csv",
            "json": tmp_path / "out" / "job42_json.json",
        }
        assert all(path.exists() for path in files.values())

    def test_unknown_format_writes_nothing(self, tmp_path: Path, two_sheet_result) -> None:
        manager = ExportManager(tmp_path)
        with pytest.raises(KeyError):
            manager.export_all(["csv", "pdf"], two_sheet_result)
        assert list(tmp_path.iterdir()) == []

    def test_export_single(self, tmp_path: Path, two_sheet_result) -> None:
        path = ExportManager(tmp_path).export_single("svg", two_sheet_result)
        assert path == tmp_path / "nesting_svg.svg"
        assert path.read_text(encoding="utf-8").startswith("<svg")
