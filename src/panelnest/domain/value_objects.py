"""Value objects for the panel nesting domain.

All dataclasses are frozen (immutable) so results can be shared freely
between the nesting engine, the sheet size search and the exporters.
Dimensions are in sheet units (inches in practice) and areas in square
sheet units.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PanelSpec:
    """A class of identical panels requested by the caller.

    Attributes:
        width: Panel width.
        height: Panel height.
        quantity: Number of identical panels requested.
        mark: Free-form mark/label printed on the cut panel.
        finish: Optional finish tag (e.g. "clear", "bronze").
        part_no: Optional part number.
    """

    width: float
    height: float
    quantity: int = 1
    mark: str = ""
    finish: str | None = None
    part_no: str | None = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Panel dimensions must be positive")
        if self.quantity < 1:
            raise ValueError("Panel quantity must be at least 1")

    @property
    def area(self) -> float:
        """Total area for all panels of this spec."""
        return self.width * self.height * self.quantity


@dataclass(frozen=True)
class UnitPanel:
    """One physical panel derived from a PanelSpec.

    ``panel_id`` is unique across a single expansion even when two units
    share dimensions and mark. Whether a unit has been placed is tracked
    outside the object, in a set of used panel ids.
    """

    panel_id: int
    spec_index: int
    width: float
    height: float
    mark: str = ""
    finish: str | None = None
    part_no: str | None = None

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True)
class SheetSpec:
    """A class of stock material.

    Attributes:
        width: Sheet width.
        height: Sheet height.
        quantity: How many physical sheets of this size are available.
        sheet_id: Identity of the sheet class. Defaults to the 1-based
            position of the SheetSpec in the list handed to the optimizer.
        max_quantity: Original-quantity ceiling used for reporting.
            Defaults to ``quantity``.
    """

    width: float
    height: float
    quantity: int = 1
    sheet_id: int | None = None
    max_quantity: int | None = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Sheet dimensions must be positive")
        if self.quantity < 0:
            raise ValueError("Sheet quantity must be non-negative")

    @property
    def area(self) -> float:
        """Area of a single sheet."""
        return self.width * self.height

    @property
    def quantity_ceiling(self) -> int:
        """Reporting ceiling, falling back to the available quantity."""
        return self.max_quantity if self.max_quantity is not None else self.quantity


@dataclass(frozen=True)
class SheetSize:
    """Stock dimensions recommended by the sheet size search."""

    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True)
class FreeRegion:
    """Unused rectangle on a sheet during recursive placement.

    Regions only live inside one placement attempt on one sheet.
    Width or height may be zero or negative once kerf has been taken,
    which marks the region as exhausted.
    """

    sheet_id: int
    width: float
    height: float
    x: float = 0.0
    y: float = 0.0

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        """True when the region cannot hold anything."""
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True)
class Placement:
    """A unit panel sited on a physical sheet.

    Attributes:
        panel_id: Identity of the placed UnitPanel.
        sheet_id: Sheet class the panel was cut from.
        sheet_no: 1-based instance number within the sheet class.
        x: Left edge, measured from the sheet origin.
        y: Top edge, measured from the sheet origin.
        width: Placed width (after rotation).
        height: Placed height (after rotation).
        rotated: True if the panel was turned 90 degrees.
        mark: Mark copied from the panel.
    """

    panel_id: int
    sheet_id: int
    sheet_no: int
    x: float
    y: float
    width: float
    height: float
    rotated: bool = False
    mark: str = ""

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def right_edge(self) -> float:
        return self.x + self.width

    @property
    def bottom_edge(self) -> float:
        return self.y + self.height

    def overlaps(self, other: Placement, tolerance: float = 1e-9) -> bool:
        """Check whether two placements share any interior area."""
        return (
            self.x < other.right_edge - tolerance
            and other.x < self.right_edge - tolerance
            and self.y < other.bottom_edge - tolerance
            and other.y < self.bottom_edge - tolerance
        )


@dataclass(frozen=True)
class UsedSheet:
    """One physical sheet consumed by the nesting engine."""

    sheet_id: int
    sheet_no: int
    width: float
    height: float
    used_area: float
    waste_percentage: float

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True)
class OptimizationSummary:
    """Totals across every consumed sheet.

    ``total_panels_placed`` below ``total_panels_needed`` means the run
    stopped because no remaining sheet could hold any remaining panel.
    """

    total_sheets: int
    total_area: float
    used_area: float
    waste_percentage: float
    total_panels_placed: int
    total_panels_needed: int
    sheet_types_used: int

    @property
    def is_complete(self) -> bool:
        """True when every requested panel was placed."""
        return self.total_panels_placed >= self.total_panels_needed

    @property
    def panels_missing(self) -> int:
        return max(0, self.total_panels_needed - self.total_panels_placed)


@dataclass(frozen=True)
class OptimizationResult:
    """Complete output of a nesting run.

    Attributes:
        placements: Every placement, in sheet consumption order.
        sheets: Every consumed sheet, in consumption order.
        summary: Aggregate statistics.
        unplaced: Unit panels no sheet could accommodate.
        optimal_sheet: Recommended stock size when the run followed a
            sheet size search.
    """

    placements: tuple[Placement, ...]
    sheets: tuple[UsedSheet, ...]
    summary: OptimizationSummary
    unplaced: tuple[UnitPanel, ...] = field(default_factory=tuple)
    optimal_sheet: SheetSize | None = None

    def placements_for(self, sheet_id: int, sheet_no: int) -> tuple[Placement, ...]:
        """Placements on one physical sheet."""
        return tuple(
            p
            for p in self.placements
            if p.sheet_id == sheet_id and p.sheet_no == sheet_no
        )

    @property
    def total_material(self) -> float:
        """Area of every consumed sheet."""
        return sum(sheet.area for sheet in self.sheets)
