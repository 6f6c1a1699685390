"""Nesting engine: consumes stock sheets until every panel is placed.

Each iteration runs a fresh recursive placement attempt on every sheet
class that still has stock, keeps the attempt that placed the most panels
(ties broken by a utilisation score), consumes one physical sheet of that
class and removes the placed panels from the pool. The loop ends when the
pool is empty, the stock runs out, or no sheet can hold any remaining
panel. The last case is reported on the summary, never raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Sequence

from panelnest.domain.services.expansion import expand_panels
from panelnest.domain.services.placer import PlacementOutcome, place_on_sheet
from panelnest.domain.value_objects import (
    OptimizationResult,
    OptimizationSummary,
    PanelSpec,
    Placement,
    SheetSpec,
    UnitPanel,
    UsedSheet,
)

logger = logging.getLogger(__name__)

AREA_EFFICIENCY_WEIGHT = 0.7
PANEL_EFFICIENCY_WEIGHT = 0.3

DEFAULT_BLADE_WIDTH = 0.25


@dataclass
class _SheetStock:
    """Mutable stock counter for one sheet class during a run."""

    sheet_id: int
    width: float
    height: float
    remaining: int

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True)
class SheetAttempt:
    """Outcome of trying one sheet class against the current pool."""

    stock: _SheetStock
    outcome: PlacementOutcome
    score: float

    @property
    def panels_placed(self) -> int:
        return self.outcome.panels_placed


def attempt_score(used_area: float, sheet_area: float, placed: int, pool_size: int) -> float:
    """Utilisation score used to break ties between sheet attempts."""
    area_efficiency = used_area / sheet_area if sheet_area else 0.0
    panel_efficiency = placed / pool_size if pool_size else 0.0
    return (
        AREA_EFFICIENCY_WEIGHT * area_efficiency
        + PANEL_EFFICIENCY_WEIGHT * panel_efficiency
    )


def sort_by_area(panels: Sequence[UnitPanel]) -> list[UnitPanel]:
    """Sort unit panels largest first, keeping input order among equals."""
    return sorted(panels, key=lambda p: p.area, reverse=True)


class NestingEngine:
    """Packs panels onto stock sheets using recursive guillotine placement.

    Attributes:
        blade_width: Kerf consumed by every cut.
        allow_rotation: Whether panels may be rotated 90 degrees.
    """

    def __init__(
        self,
        blade_width: float = DEFAULT_BLADE_WIDTH,
        allow_rotation: bool = True,
    ) -> None:
        self.blade_width = blade_width
        self.allow_rotation = allow_rotation

    def optimize(
        self,
        panels: Sequence[PanelSpec],
        sheets: Sequence[SheetSpec],
    ) -> OptimizationResult:
        """Nest the requested panels onto the available sheets.

        Args:
            panels: Panel specs to place.
            sheets: Available stock sheets.

        Returns:
            OptimizationResult with placements, consumed sheets and summary.
        """
        remaining = sort_by_area(expand_panels(panels))
        total_needed = len(remaining)
        stocks = self._build_stock(sheets)
        consumed: dict[int, int] = {stock.sheet_id: 0 for stock in stocks}

        placements: list[Placement] = []
        used_sheets: list[UsedSheet] = []

        logger.info(
            "Nesting %d panels across %d sheet types (blade %.4g, rotation %s)",
            total_needed,
            len(stocks),
            self.blade_width,
            "on" if self.allow_rotation else "off",
        )

        while remaining and stocks:
            best = self._best_attempt(remaining, stocks)
            if best is None:
                break

            stock = best.stock
            consumed[stock.sheet_id] += 1
            sheet_no = consumed[stock.sheet_id]

            placements.extend(
                replace(p, sheet_no=sheet_no) for p in best.outcome.placements
            )
            used_sheets.append(
                UsedSheet(
                    sheet_id=stock.sheet_id,
                    sheet_no=sheet_no,
                    width=stock.width,
                    height=stock.height,
                    used_area=best.outcome.used_area,
                    waste_percentage=100 * (1 - best.outcome.used_area / stock.area),
                )
            )

            placed_ids = {p.panel_id for p in best.outcome.placements}
            remaining = [p for p in remaining if p.panel_id not in placed_ids]

            stock.remaining -= 1
            stocks = [s for s in stocks if s.remaining > 0]

            logger.debug(
                "Sheet %d #%d: %d panels, %.1f%% waste, %d panels left",
                stock.sheet_id,
                sheet_no,
                best.panels_placed,
                used_sheets[-1].waste_percentage,
                len(remaining),
            )

        summary = self._summarize(placements, used_sheets, total_needed, consumed)

        if not summary.is_complete:
            logger.warning(
                "Placed %d of %d panels; %d could not fit on any remaining sheet",
                summary.total_panels_placed,
                summary.total_panels_needed,
                summary.panels_missing,
            )
        else:
            logger.info(
                "Placed %d panels on %d sheets (%.1f%% waste)",
                summary.total_panels_placed,
                summary.total_sheets,
                summary.waste_percentage,
            )

        return OptimizationResult(
            placements=tuple(placements),
            sheets=tuple(used_sheets),
            summary=summary,
            unplaced=tuple(remaining),
        )

    def _build_stock(self, sheets: Sequence[SheetSpec]) -> list[_SheetStock]:
        """Create mutable stock counters, resolving default sheet ids.

        A sheet without an id takes its 1-based position. Explicit ids are
        reserved first; a sheet whose resolved id is already claimed is
        renumbered past every id in use and a warning is logged, so two
        sheet classes never share an id.
        """
        explicit = {s.sheet_id for s in sheets if s.sheet_id is not None}
        next_free = max(explicit | {len(sheets)}) + 1 if sheets else 1
        taken: set[int] = set()

        stocks: list[_SheetStock] = []
        for index, sheet in enumerate(sheets, start=1):
            sheet_id = sheet.sheet_id if sheet.sheet_id is not None else index
            if sheet_id in taken or (sheet.sheet_id is None and sheet_id in explicit):
                logger.warning(
                    "Sheet at position %d resolves to id %d, which is already in use; "
                    "renumbered as %d",
                    index,
                    sheet_id,
                    next_free,
                )
                sheet_id = next_free
                next_free += 1
            taken.add(sheet_id)

            if sheet.quantity <= 0:
                continue
            stocks.append(
                _SheetStock(
                    sheet_id=sheet_id,
                    width=sheet.width,
                    height=sheet.height,
                    remaining=sheet.quantity,
                )
            )
        return stocks

    def _best_attempt(
        self,
        remaining: list[UnitPanel],
        stocks: list[_SheetStock],
    ) -> SheetAttempt | None:
        """Try every sheet class and return the most productive attempt.

        Returns None when no sheet class can hold any remaining panel.
        """
        best: SheetAttempt | None = None
        pool_size = len(remaining)

        for stock in stocks:
            outcome = place_on_sheet(
                remaining,
                stock.sheet_id,
                stock.width,
                stock.height,
                self.blade_width,
                self.allow_rotation,
            )
            if outcome.panels_placed == 0:
                continue

            score = attempt_score(
                outcome.used_area, stock.area, outcome.panels_placed, pool_size
            )
            attempt = SheetAttempt(stock=stock, outcome=outcome, score=score)

            if (
                best is None
                or attempt.panels_placed > best.panels_placed
                or (
                    attempt.panels_placed == best.panels_placed
                    and attempt.score > best.score
                )
            ):
                best = attempt

        return best

    def _summarize(
        self,
        placements: list[Placement],
        used_sheets: list[UsedSheet],
        total_needed: int,
        consumed: dict[int, int],
    ) -> OptimizationSummary:
        """Aggregate totals across consumed sheets."""
        total_area = sum(sheet.area for sheet in used_sheets)
        used_area = sum(sheet.used_area for sheet in used_sheets)
        waste = 100 * (1 - used_area / total_area) if total_area else 0.0

        return OptimizationSummary(
            total_sheets=len(used_sheets),
            total_area=total_area,
            used_area=used_area,
            waste_percentage=waste,
            total_panels_placed=len(placements),
            total_panels_needed=total_needed,
            sheet_types_used=sum(1 for count in consumed.values() if count > 0),
        )


def optimize(
    panels: Sequence[PanelSpec],
    sheets: Sequence[SheetSpec],
    blade_width: float = DEFAULT_BLADE_WIDTH,
    allow_rotation: bool = True,
) -> OptimizationResult:
    """Nest panels onto sheets with the default engine.

    Args:
        panels: Panel specs to place.
        sheets: Available stock sheets.
        blade_width: Kerf consumed by every cut.
        allow_rotation: Whether panels may be rotated 90 degrees.

    Returns:
        OptimizationResult; check ``summary.is_complete`` for partial runs.
    """
    engine = NestingEngine(blade_width=blade_width, allow_rotation=allow_rotation)
    return engine.optimize(panels, sheets)
