"""Exporter framework: Protocol, Registry and Manager."""

from __future__ import annotations

import logging
from abc import abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from panelnest.domain.value_objects import OptimizationResult


logger = logging.getLogger(__name__)


@runtime_checkable
class Exporter(Protocol):
    """Protocol for all result exporters.

    Attributes:
        format_name: Registry key for the format (e.g. "csv", "dxf").
        file_extension: File extension without leading dot.
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]

    @abstractmethod
    def export(self, result: OptimizationResult, path: Path) -> None:
        """Write the result to a file."""
        ...

    def export_string(self, result: OptimizationResult) -> str:
        """Render the result as a string.

        Raises:
            NotImplementedError: If the format has no string form.
        """
        raise NotImplementedError(
            f"Format '{self.format_name}' does not support string export"
        )


class ExporterRegistry:
    """Central registry of exporter classes keyed by format name.

    Example:
        @ExporterRegistry.register("json")
        class JsonResultExporter:
            format_name = "json"
            file_extension = "json"
            ...
    """

    _exporters: ClassVar[dict[str, type[Exporter]]] = {}

    @classmethod
    def register(cls, format_name: str):
        """Class decorator registering an exporter under ``format_name``."""

        def decorator(exporter_class: type[Exporter]) -> type[Exporter]:
            if format_name in cls._exporters:
                logger.warning("Overwriting existing exporter for format '%s'", format_name)
            cls._exporters[format_name] = exporter_class
            logger.debug("Registered exporter '%s': %s", format_name, exporter_class.__name__)
            return exporter_class

        return decorator

    @classmethod
    def get(cls, format_name: str) -> type[Exporter]:
        """Look up an exporter class.

        Raises:
            KeyError: If no exporter is registered for the format.
        """
        if format_name not in cls._exporters:
            available = ", ".join(sorted(cls._exporters))
            raise KeyError(
                f"No exporter registered for format '{format_name}'. "
                f"Available formats: {available or 'none'}"
            )
        return cls._exporters[format_name]

    @classmethod
    def available_formats(cls) -> list[str]:
        return sorted(cls._exporters)

    @classmethod
    def is_registered(cls, format_name: str) -> bool:
        return format_name in cls._exporters

    @classmethod
    def clear(cls) -> None:
        """Remove every registration. Used by tests."""
        cls._exporters.clear()


class ExportManager:
    """Writes a result to several formats in one output directory.

    Files are named ``{project_name}_{format}.{extension}``.

    Attributes:
        output_dir: Directory receiving the files; created on demand.
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)

    def export_all(
        self,
        formats: list[str],
        result: OptimizationResult,
        project_name: str = "nesting",
    ) -> dict[str, Path]:
        """Export the result to every named format.

        Returns:
            Mapping of format name to the written file.

        Raises:
            KeyError: If any format is not registered. Checked before any
                file is written.
            OSError: If a file cannot be written.
        """
        exporter_classes = {name: ExporterRegistry.get(name) for name in formats}
        self.output_dir.mkdir(parents=True, exist_ok=True)

        written: dict[str, Path] = {}
        for format_name, exporter_class in exporter_classes.items():
            exporter = exporter_class()
            filepath = self.output_dir / (
                f"{project_name}_{format_name}.{exporter.file_extension}"
            )
            logger.info("Exporting %s to %s", format_name, filepath)
            exporter.export(result, filepath)
            written[format_name] = filepath

        return written

    def export_single(
        self,
        format_name: str,
        result: OptimizationResult,
        project_name: str = "nesting",
    ) -> Path:
        """Export the result to one format and return the file path."""
        return self.export_all([format_name], result, project_name)[format_name]
