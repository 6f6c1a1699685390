"""Typer CLI for panel nesting."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from panelnest.application import OptimizePanelsCommand
from panelnest.application.config import (
    ConfigError,
    NestingConfiguration,
    config_to_request,
    load_config,
    search_config_to_input,
)
from panelnest.cli.commands import display_load_error, validate_command
from panelnest.domain import SheetSizeSearch, verify_result
from panelnest.domain.value_objects import OptimizationResult
from panelnest.infrastructure import (
    CsvResultExporter,
    CutDiagramRenderer,
    JsonResultExporter,
    ResultReportFormatter,
)
from panelnest.infrastructure.exporters import ExporterRegistry, ExportManager

EXIT_ERROR = 1
EXIT_INCOMPLETE = 2

OUTPUT_FORMATS = ("text", "json", "csv", "diagram")

# Exporters that draw sheets and cannot render a result with none
DRAWING_FORMATS = frozenset({"svg", "dxf"})


app = typer.Typer(
    name="panelnest",
    help="Nest rectangular panels onto stock sheets with minimal waste.",
)

app.command(name="validate")(validate_command)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """Nest rectangular panels onto stock sheets with minimal waste."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_or_exit(config_file: Path) -> NestingConfiguration:
    try:
        return load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=EXIT_ERROR)


def _render(result: OptimizationResult, output_format: str) -> str:
    if output_format == "json":
        return JsonResultExporter().export_string(result)
    if output_format == "csv":
        return CsvResultExporter().export_string(result)
    if output_format == "diagram":
        return CutDiagramRenderer().render_all_ascii(result)
    return ResultReportFormatter().format(result)


def _handle_multi_format_export(
    output_formats_str: str,
    output_dir: Path | None,
    project_name: str,
    result: OptimizationResult,
) -> None:
    """Export the result via --output-formats.

    Drawing formats are skipped with a warning when no sheet was used.
    """
    if output_formats_str.lower() == "all":
        formats = ExporterRegistry.available_formats()
    else:
        formats = [f.strip().lower() for f in output_formats_str.split(",") if f.strip()]

    available = ExporterRegistry.available_formats()
    invalid = [f for f in formats if f not in available]
    if invalid:
        typer.echo(f"Unknown formats: {', '.join(invalid)}", err=True)
        typer.echo(f"Available formats: {', '.join(available)}", err=True)
        raise typer.Exit(code=EXIT_ERROR)

    if not result.sheets:
        skipped = [f for f in formats if f in DRAWING_FORMATS]
        if skipped:
            typer.echo(
                f"Warning: {', '.join(skipped)} export skipped - no sheets were used.",
                err=True,
            )
            formats = [f for f in formats if f not in DRAWING_FORMATS]

    if not formats:
        typer.echo("No valid formats to export.", err=True)
        raise typer.Exit(code=EXIT_ERROR)

    manager = ExportManager(output_dir or Path("."))
    try:
        files = manager.export_all(formats, result, project_name)
    except (OSError, ValueError) as e:
        typer.echo(f"Export error: {e}", err=True)
        raise typer.Exit(code=EXIT_ERROR)

    typer.echo("\nExported files:")
    for fmt, path in files.items():
        typer.echo(f"  {fmt.upper()}: {path}")


@app.command()
def optimize(
    config_file: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path to JSON job file"),
    ],
    blade_width: Annotated[
        float | None,
        typer.Option("--blade-width", "-b", min=0.0, max=1.0, help="Override blade kerf"),
    ] = None,
    no_rotation: Annotated[
        bool,
        typer.Option("--no-rotation", help="Never rotate panels"),
    ] = False,
    find_sheet: Annotated[
        bool,
        typer.Option("--find-sheet", help="Search for the best sheet size first"),
    ] = False,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json, csv, diagram"),
    ] = "text",
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the output to this file"),
    ] = None,
    output_formats: Annotated[
        str | None,
        typer.Option(
            "--output-formats",
            help="Comma-separated export formats: csv,json,svg,dxf (or 'all')",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", help="Output directory for multi-format export"),
    ] = None,
    project_name: Annotated[
        str,
        typer.Option("--project-name", help="Project name for output file naming"),
    ] = "nesting",
    check: Annotated[
        bool,
        typer.Option("--check", help="Verify the layout and fail on any problem"),
    ] = False,
) -> None:
    """Nest the panels of a job file onto its sheets.

    Exit codes:
        0 - Every panel was placed
        1 - The job file or its options are invalid
        2 - Some panels could not be placed
    """
    if output_format not in OUTPUT_FORMATS:
        typer.echo(
            f"Unknown format '{output_format}'. Choose from: {', '.join(OUTPUT_FORMATS)}",
            err=True,
        )
        raise typer.Exit(code=EXIT_ERROR)

    config = _load_or_exit(config_file)
    request = config_to_request(config)
    if blade_width is not None:
        request.blade_width = blade_width
    if no_rotation:
        request.allow_rotation = False
    if find_sheet and request.sheet_search is None:
        request.sheet_search = search_config_to_input(config.sheet_search)

    output = OptimizePanelsCommand().execute(request)
    if not output.is_valid:
        for error in output.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=EXIT_ERROR)

    result = output.result
    rendered = _render(result, output_format)
    if output_file is not None:
        output_file.write_text(rendered, encoding="utf-8")
        typer.echo(f"Wrote {output_format} output to {output_file}")
    else:
        typer.echo(rendered)

    if output_formats:
        _handle_multi_format_export(output_formats, output_dir, project_name, result)

    if check:
        issues = verify_result(result, allow_rotation=request.allow_rotation)
        if issues:
            typer.echo("Layout check failed:", err=True)
            for issue in issues:
                typer.echo(f"  [{issue.kind.value}] {issue.message}", err=True)
            raise typer.Exit(code=EXIT_ERROR)
        typer.echo("Layout check passed.")

    if not result.summary.is_complete:
        typer.echo(
            f"Incomplete: {result.summary.panels_missing} panel(s) could not be placed.",
            err=True,
        )
        raise typer.Exit(code=EXIT_INCOMPLETE)


@app.command(name="find-sheet")
def find_sheet(
    config_file: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path to JSON job file"),
    ],
    min_width: Annotated[float | None, typer.Option("--min-width", help="Smallest width")] = None,
    max_width: Annotated[float | None, typer.Option("--max-width", help="Largest width")] = None,
    min_height: Annotated[float | None, typer.Option("--min-height", help="Smallest height")] = None,
    max_height: Annotated[float | None, typer.Option("--max-height", help="Largest height")] = None,
    step_size: Annotated[float | None, typer.Option("--step", help="Grid increment")] = None,
    blade_width: Annotated[
        float | None,
        typer.Option("--blade-width", "-b", min=0.0, max=1.0, help="Override blade kerf"),
    ] = None,
    no_rotation: Annotated[
        bool,
        typer.Option("--no-rotation", help="Never rotate panels"),
    ] = False,
) -> None:
    """Recommend the stock sheet size that uses the least material.

    Range options default to the job file's sheet_search block.
    """
    config = _load_or_exit(config_file)
    request = config_to_request(config)
    search_input = search_config_to_input(config.sheet_search)

    overrides = {
        "min_width": min_width,
        "max_width": max_width,
        "min_height": min_height,
        "max_height": max_height,
        "step_size": step_size,
    }
    for name, value in overrides.items():
        if value is not None:
            setattr(search_input, name, value)

    errors = search_input.validate()
    if errors:
        for error in errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=EXIT_ERROR)

    search = SheetSizeSearch(
        blade_width=blade_width if blade_width is not None else request.blade_width,
        allow_rotation=request.allow_rotation and not no_rotation,
        sheet_quantity=search_input.candidate_quantity,
    )
    size = search.find_best(
        request.panels,
        search_input.min_width,
        search_input.max_width,
        search_input.min_height,
        search_input.max_height,
        search_input.step_size,
    )
    typer.echo(f"Recommended sheet size: {size.width:g} x {size.height:g}")


if __name__ == "__main__":
    app()
