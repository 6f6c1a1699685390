"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from panelnest.domain import OptimizationResult, PanelSpec, SheetSpec
from panelnest.domain.services.nesting import DEFAULT_BLADE_WIDTH
from panelnest.domain.services.sheet_search import CANDIDATE_SHEET_QUANTITY


@dataclass
class SheetSearchInput:
    """Input DTO for the sheet size search range."""

    min_width: float = 48.0
    max_width: float = 96.0
    min_height: float = 48.0
    max_height: float = 96.0
    step_size: float = 12.0
    candidate_quantity: int = CANDIDATE_SHEET_QUANTITY

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        if self.min_width <= 0 or self.min_height <= 0:
            errors.append("Search range minimums must be positive")
        if self.min_width > self.max_width:
            errors.append("Search min_width cannot exceed max_width")
        if self.min_height > self.max_height:
            errors.append("Search min_height cannot exceed max_height")
        if self.step_size <= 0:
            errors.append("Search step size must be positive")
        if self.candidate_quantity < 1:
            errors.append("Candidate sheet quantity must be at least 1")
        return errors


@dataclass
class OptimizationRequest:
    """Input DTO for a nesting job.

    Attributes:
        panels: Panel specs to place.
        sheets: Available stock. May be empty when a sheet search is set.
        blade_width: Kerf consumed by every cut.
        allow_rotation: Whether panels may be rotated 90 degrees.
        sheet_search: When set, the stock size is searched for instead of
            taken from ``sheets``.
    """

    panels: list[PanelSpec] = field(default_factory=list)
    sheets: list[SheetSpec] = field(default_factory=list)
    blade_width: float = DEFAULT_BLADE_WIDTH
    allow_rotation: bool = True
    sheet_search: SheetSearchInput | None = None

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        if not self.panels:
            errors.append("At least one panel is required")
        if self.sheet_search is None and not self.sheets:
            errors.append("At least one sheet is required unless a sheet search is requested")
        if self.blade_width < 0:
            errors.append("Blade width cannot be negative")
        if self.sheet_search is not None:
            errors.extend(self.sheet_search.validate())

        # Missing ids resolve to the 1-based position, as in the engine
        resolved = [
            sheet.sheet_id if sheet.sheet_id is not None else index
            for index, sheet in enumerate(self.sheets, start=1)
        ]
        for sheet_id in sorted({i for i in resolved if resolved.count(i) > 1}):
            errors.append(f"Duplicate sheet id {sheet_id}")
        return errors


@dataclass
class OptimizationOutput:
    """Output DTO for a nesting job.

    Attributes:
        result: Nesting result, or None when the request was rejected.
        errors: Error messages if the request was invalid.
    """

    result: OptimizationResult | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the optimization ran."""
        return len(self.errors) == 0

    @property
    def is_complete(self) -> bool:
        """Check if every requested panel was placed."""
        return self.result is not None and self.result.summary.is_complete
