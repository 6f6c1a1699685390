"""Convert a validated NestingConfiguration into command input."""

from panelnest.application.config.schema import NestingConfiguration, SheetSearchConfig
from panelnest.application.dtos import OptimizationRequest, SheetSearchInput
from panelnest.domain.value_objects import PanelSpec, SheetSpec


def search_config_to_input(search: SheetSearchConfig) -> SheetSearchInput:
    """Map the sheet search block onto its DTO."""
    return SheetSearchInput(
        min_width=search.min_width,
        max_width=search.max_width,
        min_height=search.min_height,
        max_height=search.max_height,
        step_size=search.step_size,
        candidate_quantity=search.candidate_quantity,
    )


def config_to_request(config: NestingConfiguration) -> OptimizationRequest:
    """Build an OptimizationRequest from a job configuration.

    Sheets without an explicit id take their 1-based position in the
    list, the same default the nesting engine applies. The search block
    only reaches the request when it is enabled.

    Example:
        >>> config = load_config(Path("job.json"))
        >>> output = OptimizePanelsCommand().execute(config_to_request(config))
    """
    panels = [
        PanelSpec(
            width=panel.width,
            height=panel.height,
            quantity=panel.quantity,
            mark=panel.mark,
            finish=panel.finish,
            part_no=panel.part_no,
        )
        for panel in config.panels
    ]
    sheets = [
        SheetSpec(
            width=sheet.width,
            height=sheet.height,
            quantity=sheet.quantity,
            sheet_id=sheet.id if sheet.id is not None else index,
        )
        for index, sheet in enumerate(config.sheets, start=1)
    ]

    sheet_search = None
    if config.sheet_search.enabled:
        sheet_search = search_config_to_input(config.sheet_search)

    return OptimizationRequest(
        panels=panels,
        sheets=sheets,
        blade_width=config.blade_width,
        allow_rotation=config.allow_rotation,
        sheet_search=sheet_search,
    )
