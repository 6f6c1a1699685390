"""Domain layer - panel nesting core."""

from .services import (
    NestingEngine,
    SheetSizeSearch,
    expand_panels,
    find_best_sheet_size,
    optimize,
    verify_result,
)
from .value_objects import (
    FreeRegion,
    OptimizationResult,
    OptimizationSummary,
    PanelSpec,
    Placement,
    SheetSize,
    SheetSpec,
    UnitPanel,
    UsedSheet,
)

__all__ = [
    "FreeRegion",
    "NestingEngine",
    "OptimizationResult",
    "OptimizationSummary",
    "PanelSpec",
    "Placement",
    "SheetSize",
    "SheetSizeSearch",
    "SheetSpec",
    "UnitPanel",
    "UsedSheet",
    "expand_panels",
    "find_best_sheet_size",
    "optimize",
    "verify_result",
]
