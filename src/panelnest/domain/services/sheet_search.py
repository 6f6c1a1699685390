"""Search for the stock sheet size that consumes the least material.

A full nesting run is too expensive to repeat over the whole size grid,
so candidates are first ranked with two cheap heuristics (closeness to
the estimated required area, and how evenly panel dimensions tile the
sheet) and only the most promising few are nested for real.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterator, Sequence

from panelnest.domain.services.expansion import total_requested_area
from panelnest.domain.services.nesting import DEFAULT_BLADE_WIDTH, NestingEngine
from panelnest.domain.value_objects import PanelSpec, SheetSize, SheetSpec

logger = logging.getLogger(__name__)

# Allowance added to the raw panel area when estimating required sheet area.
WASTE_ALLOWANCE = 1.15
# Candidates below estimated area / this factor are discarded outright.
MIN_AREA_FACTOR = 1.5
TOP_CANDIDATES = 5
CANDIDATE_SHEET_QUANTITY = 1000

_GRID_TOLERANCE = 1e-9


@dataclass(frozen=True)
class SheetCandidate:
    """A grid point with its heuristic score (lower is better)."""

    width: float
    height: float
    score: float

    @property
    def area(self) -> float:
        return self.width * self.height


def _grid(start: float, stop: float, step: float) -> Iterator[float]:
    """Yield start, start + step, ... up to and including stop."""
    index = 0
    value = start
    while value <= stop + _GRID_TOLERANCE:
        yield value
        index += 1
        value = start + index * step


def dimension_score(
    panels: Sequence[PanelSpec],
    sheet_width: float,
    sheet_height: float,
    allow_rotation: bool,
) -> float:
    """Penalty for panel dimensions that do not tile the sheet evenly.

    For every distinct panel dimension (and its rotated form when rotation
    is allowed), the leftover width and height after tiling that dimension
    across the sheet are added as fractions of the sheet's width and
    height. Lower is better.
    """
    dimensions: dict[tuple[float, float], None] = {}
    for panel in panels:
        dimensions[(panel.width, panel.height)] = None
        if allow_rotation:
            dimensions[(panel.height, panel.width)] = None

    score = 0.0
    for width, height in dimensions:
        across_width = math.floor(sheet_width / width)
        across_height = math.floor(sheet_height / height)
        width_waste = sheet_width - across_width * width
        height_waste = sheet_height - across_height * height
        score += width_waste / sheet_width + height_waste / sheet_height
    return score


def rank_candidates(
    panels: Sequence[PanelSpec],
    min_width: float,
    max_width: float,
    min_height: float,
    max_height: float,
    step_size: float,
    allow_rotation: bool,
) -> list[SheetCandidate]:
    """Score every grid size that is not obviously too small.

    Returns:
        Candidates sorted by score ascending, grid order among equals.

    Raises:
        ValueError: If step_size is not positive.
    """
    if step_size <= 0:
        raise ValueError("Step size must be positive")

    estimated_area = total_requested_area(panels) * WASTE_ALLOWANCE
    candidates: list[SheetCandidate] = []

    for width in _grid(min_width, max_width, step_size):
        for height in _grid(min_height, max_height, step_size):
            sheet_area = width * height
            if sheet_area < estimated_area / MIN_AREA_FACTOR:
                continue

            area_score = abs(sheet_area - estimated_area)
            fit_penalty = dimension_score(panels, width, height, allow_rotation)
            candidates.append(
                SheetCandidate(width=width, height=height, score=area_score + fit_penalty)
            )

    candidates.sort(key=lambda c: c.score)
    return candidates


class SheetSizeSearch:
    """Recommends stock dimensions for a set of panels.

    Attributes:
        blade_width: Kerf used for the confirming nesting runs.
        allow_rotation: Whether panels may be rotated 90 degrees.
        top_candidates: How many ranked candidates get a full nesting run.
        sheet_quantity: Stock quantity assumed for each candidate.
    """

    def __init__(
        self,
        blade_width: float = DEFAULT_BLADE_WIDTH,
        allow_rotation: bool = True,
        top_candidates: int = TOP_CANDIDATES,
        sheet_quantity: int = CANDIDATE_SHEET_QUANTITY,
    ) -> None:
        self.blade_width = blade_width
        self.allow_rotation = allow_rotation
        self.top_candidates = top_candidates
        self.sheet_quantity = sheet_quantity

    def find_best(
        self,
        panels: Sequence[PanelSpec],
        min_width: float,
        max_width: float,
        min_height: float,
        max_height: float,
        step_size: float,
    ) -> SheetSize:
        """Return the candidate size with the lowest consumed material.

        Candidates that cannot place every panel rank behind those that
        can. With no candidate left after filtering, the minimum corner
        of the range is returned.
        """
        ranked = rank_candidates(
            panels,
            min_width,
            max_width,
            min_height,
            max_height,
            step_size,
            self.allow_rotation,
        )
        if not ranked:
            logger.warning(
                "No sheet size in %gx%g..%gx%g is large enough; using minimum",
                min_width,
                min_height,
                max_width,
                max_height,
            )
            return SheetSize(width=min_width, height=min_height)

        engine = NestingEngine(
            blade_width=self.blade_width,
            allow_rotation=self.allow_rotation,
        )

        best = SheetSize(width=min_width, height=min_height)
        best_key: tuple[bool, float] | None = None

        for candidate in ranked[: self.top_candidates]:
            test_sheet = SheetSpec(
                width=candidate.width,
                height=candidate.height,
                quantity=self.sheet_quantity,
                sheet_id=1,
                max_quantity=self.sheet_quantity,
            )
            result = engine.optimize(panels, [test_sheet])
            total_material = len(result.sheets) * candidate.area
            key = (not result.summary.is_complete, total_material)

            logger.debug(
                "Candidate %gx%g: score %.2f, %d sheets, material %.1f%s",
                candidate.width,
                candidate.height,
                candidate.score,
                len(result.sheets),
                total_material,
                "" if result.summary.is_complete else " (incomplete)",
            )

            if best_key is None or key < best_key:
                best_key = key
                best = SheetSize(width=candidate.width, height=candidate.height)

        logger.info("Recommended sheet size %gx%g", best.width, best.height)
        return best


def find_best_sheet_size(
    panels: Sequence[PanelSpec],
    min_width: float = 84,
    max_width: float = 144,
    min_height: float = 48,
    max_height: float = 62,
    step_size: float = 12,
    blade_width: float = DEFAULT_BLADE_WIDTH,
    allow_rotation: bool = True,
) -> SheetSize:
    """Find the stock size that minimizes total material for the panels.

    Shortlisted sizes are ranked by completeness first: a size that leaves
    any panel unplaced loses to every size that places them all, however
    little material it uses. Among equally complete sizes the lowest
    ``sheets used x sheet area`` wins, earlier shortlist position on ties.

    Args:
        panels: Panel specs to nest.
        min_width: Smallest sheet width to consider.
        max_width: Largest sheet width to consider.
        min_height: Smallest sheet height to consider.
        max_height: Largest sheet height to consider.
        step_size: Grid increment for both dimensions.
        blade_width: Kerf used for the confirming nesting runs.
        allow_rotation: Whether panels may be rotated 90 degrees.

    Returns:
        The recommended sheet size.
    """
    search = SheetSizeSearch(blade_width=blade_width, allow_rotation=allow_rotation)
    return search.find_best(
        panels, min_width, max_width, min_height, max_height, step_size
    )
