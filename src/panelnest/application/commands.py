"""Application commands (use cases) for panel nesting."""

from __future__ import annotations

import logging
from dataclasses import replace

from panelnest.domain import NestingEngine, SheetSizeSearch, SheetSpec

from .dtos import OptimizationOutput, OptimizationRequest

logger = logging.getLogger(__name__)


class OptimizePanelsCommand:
    """Command to nest a job's panels onto stock sheets.

    When the request carries a sheet search, the best stock size is found
    first and the panels are nested onto an ample supply of that size.

    An injected ``engine`` or ``search`` keeps its own blade width and
    rotation setting; the request's ``blade_width`` and ``allow_rotation``
    only configure the collaborators built when none is injected.
    """

    def __init__(
        self,
        engine: NestingEngine | None = None,
        search: SheetSizeSearch | None = None,
    ) -> None:
        self.engine = engine
        self.search = search

    def execute(self, request: OptimizationRequest) -> OptimizationOutput:
        """Execute the nesting command.

        Args:
            request: Panels, stock and cutting parameters.

        Returns:
            OptimizationOutput with the result, or with errors when the
            request is invalid.
        """
        errors = request.validate()
        if errors:
            return OptimizationOutput(errors=errors)

        engine = self.engine or NestingEngine(
            blade_width=request.blade_width,
            allow_rotation=request.allow_rotation,
        )

        sheets = list(request.sheets)
        optimal = None
        if request.sheet_search is not None:
            search_input = request.sheet_search
            search = self.search or SheetSizeSearch(
                blade_width=request.blade_width,
                allow_rotation=request.allow_rotation,
                sheet_quantity=search_input.candidate_quantity,
            )
            optimal = search.find_best(
                request.panels,
                search_input.min_width,
                search_input.max_width,
                search_input.min_height,
                search_input.max_height,
                search_input.step_size,
            )
            sheets = [
                SheetSpec(
                    width=optimal.width,
                    height=optimal.height,
                    quantity=search_input.candidate_quantity,
                    sheet_id=1,
                )
            ]
            logger.info("Using searched sheet size %gx%g", optimal.width, optimal.height)

        result = engine.optimize(request.panels, sheets)
        if optimal is not None:
            result = replace(result, optimal_sheet=optimal)

        return OptimizationOutput(result=result)
