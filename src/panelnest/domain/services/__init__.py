"""Domain services for panel nesting.

This package provides the nesting pipeline, leaf-first:
- Panel expansion into unit panels
- Fit selection for a free region
- Recursive guillotine placement on one sheet
- The nesting engine consuming stock sheets
- The sheet size search
- Structural verification of results
"""

from .expansion import expand_panels, total_requested_area
from .fit_selector import PanelFit, find_best_fit, fit_score
from .layout_check import IssueKind, LayoutIssue, verify_result
from .nesting import NestingEngine, optimize
from .placer import (
    CutDirection,
    PlacementOutcome,
    choose_alternative,
    place_on_sheet,
    place_recursive,
    split_regions,
)
from .sheet_search import (
    SheetCandidate,
    SheetSizeSearch,
    dimension_score,
    find_best_sheet_size,
    rank_candidates,
)

__all__ = [
    "CutDirection",
    "IssueKind",
    "LayoutIssue",
    "NestingEngine",
    "PanelFit",
    "PlacementOutcome",
    "SheetCandidate",
    "SheetSizeSearch",
    "choose_alternative",
    "dimension_score",
    "expand_panels",
    "find_best_fit",
    "find_best_sheet_size",
    "fit_score",
    "optimize",
    "place_on_sheet",
    "place_recursive",
    "rank_candidates",
    "split_regions",
    "total_requested_area",
    "verify_result",
]
