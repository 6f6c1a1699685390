"""Validate command for checking job files.

Loads a job file, reports schema problems, and warns about panels that no
listed sheet can hold in any orientation.
"""

from pathlib import Path
from typing import Annotated

import typer

from panelnest.application.config import ConfigError, NestingConfiguration, load_config


def display_load_error(error: ConfigError) -> None:
    """Print a ConfigError to stderr, one line per problem."""
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            typer.echo(
                f"    Line {detail.get('line', '?')}, Column {detail.get('column', '?')}: "
                f"{detail.get('message', 'Unknown error')}",
                err=True,
            )
    elif error.error_type == "validation":
        for detail in error.details:
            typer.echo(
                f"  {detail.get('path', 'unknown')}: {detail.get('message', 'Unknown error')}",
                err=True,
            )
            value = detail.get("value")
            if value is not None and not isinstance(value, (dict, list)):
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)


def oversized_panel_warnings(config: NestingConfiguration) -> list[str]:
    """Warn about panels that fit on none of the listed sheets.

    Skipped when the sheet search is enabled, since the stock size is not
    known yet.
    """
    if config.sheet_search.enabled or not config.sheets:
        return []

    warnings: list[str] = []
    for index, panel in enumerate(config.panels):
        fits = any(
            (panel.width <= sheet.width and panel.height <= sheet.height)
            or (
                config.allow_rotation
                and panel.height <= sheet.width
                and panel.width <= sheet.height
            )
            for sheet in config.sheets
            if sheet.quantity > 0
        )
        if not fits:
            label = panel.mark or f"panels[{index}]"
            warnings.append(
                f"{label}: {panel.width:g} x {panel.height:g} does not fit on any "
                "available sheet"
            )
    return warnings


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON job file to validate"),
    ],
) -> None:
    """Validate a nesting job file.

    Exit codes:
        0 - Job file is valid (warnings may be printed)
        1 - Job file has errors

    Example:
        panelnest validate job.json
    """
    typer.echo(f"Validating {config_file}...")

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    total_panels = sum(panel.quantity for panel in config.panels)
    typer.echo(
        f"{len(config.panels)} panel specs ({total_panels} panels), "
        f"{len(config.sheets)} sheet specs"
    )

    warnings = oversized_panel_warnings(config)
    if warnings:
        typer.echo("Warnings:")
        for warning in warnings:
            typer.echo(f"  {warning}")
        typer.echo(f"Validation passed with {len(warnings)} warning(s)")
    else:
        typer.echo("Validation passed. Job file is valid.")
