"""Recursive guillotine placement of panels onto one sheet.

Each step sites the best-fitting panel at the origin of a free region and
then evaluates both guillotine cuts of the leftover space:

    horizontal cut                     vertical cut
    +-------+-----------+              +-------+-----------+
    | panel |   right   |              | panel |           |
    +-------+-----------+              +-------+   right   |
    |                   |              |bottom |           |
    |      bottom       |              |       |           |
    +-------------------+              +-------+-----------+

Both alternatives are filled recursively and the one that places more
panels (then more area) is kept. Exploring both cuts at every step costs
four recursive calls per placement but avoids starving one branch of
space, which a single greedy cut direction tends to do.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from panelnest.domain.services.fit_selector import find_best_fit
from panelnest.domain.value_objects import FreeRegion, Placement, UnitPanel


class CutDirection(str, Enum):
    """Guillotine cut direction applied after a placement."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class PlacementOutcome:
    """Placements achieved inside one free region.

    Attributes:
        placements: Placements in the region's subtree, parent first.
        used_area: Sum of placed panel areas.
        panels_placed: Number of placements.
    """

    placements: tuple[Placement, ...] = ()
    used_area: float = 0.0
    panels_placed: int = 0

    def __add__(self, other: PlacementOutcome) -> PlacementOutcome:
        return PlacementOutcome(
            placements=self.placements + other.placements,
            used_area=self.used_area + other.used_area,
            panels_placed=self.panels_placed + other.panels_placed,
        )


EMPTY_OUTCOME = PlacementOutcome()


@dataclass
class _Alternative:
    """Result of filling both sub-regions of one cut direction."""

    direction: CutDirection
    right: PlacementOutcome
    bottom: PlacementOutcome
    used: set[int] = field(default_factory=set)

    @property
    def panels_placed(self) -> int:
        return self.right.panels_placed + self.bottom.panels_placed

    @property
    def used_area(self) -> float:
        return self.right.used_area + self.bottom.used_area


def split_regions(
    region: FreeRegion,
    placed_width: float,
    placed_height: float,
    blade_width: float,
    direction: CutDirection,
) -> tuple[FreeRegion, FreeRegion]:
    """Compute the (right, bottom) sub-regions left after a placement.

    Both sub-regions are separated from the placed panel by one blade
    width. Either may come out empty or negative in size.

    Args:
        region: Region the panel was placed in (at its origin).
        placed_width: Width of the placed panel.
        placed_height: Height of the placed panel.
        blade_width: Kerf consumed by each cut.
        direction: Which guillotine cut to model.

    Returns:
        Tuple of (right region, bottom region).
    """
    right_width = region.width - placed_width - blade_width
    bottom_height = region.height - placed_height - blade_width

    if direction is CutDirection.HORIZONTAL:
        right_height = placed_height
        bottom_width = region.width
    else:
        right_height = region.height
        bottom_width = placed_width

    right = FreeRegion(
        sheet_id=region.sheet_id,
        width=right_width,
        height=right_height,
        x=region.x + placed_width + blade_width,
        y=region.y,
    )
    bottom = FreeRegion(
        sheet_id=region.sheet_id,
        width=bottom_width,
        height=bottom_height,
        x=region.x,
        y=region.y + placed_height + blade_width,
    )
    return right, bottom


def choose_alternative(
    horizontal: _Alternative,
    vertical: _Alternative,
) -> _Alternative:
    """Pick the better of the two cut alternatives.

    Order of precedence: more panels placed, then more area used, then
    the horizontal cut.
    """
    if horizontal.panels_placed != vertical.panels_placed:
        return horizontal if horizontal.panels_placed > vertical.panels_placed else vertical
    if vertical.used_area > horizontal.used_area:
        return vertical
    return horizontal


def place_recursive(
    pool: Sequence[UnitPanel],
    region: FreeRegion,
    blade_width: float,
    allow_rotation: bool,
    used: set[int],
) -> PlacementOutcome:
    """Fill one free region with panels from the pool.

    ``used`` holds the ids of panels already placed during the current
    sheet attempt. It is updated in place with every panel placed in this
    region's chosen subtree. Each cut alternative works on its own copy of
    the set, so picks made in the discarded alternative do not leak.

    Placements carry ``sheet_no=0``; the nesting engine stamps the real
    instance number once it decides to consume the sheet.

    Args:
        pool: Panels available to this sheet attempt.
        region: The free region to fill.
        blade_width: Kerf between adjacent panels.
        allow_rotation: Whether panels may be rotated 90 degrees.
        used: Ids of panels already placed in this sheet attempt.

    Returns:
        Placements, used area and count for this region's subtree.
    """
    if region.is_empty:
        return EMPTY_OUTCOME

    fit = find_best_fit(pool, region.width, region.height, allow_rotation, used)
    if fit is None:
        return EMPTY_OUTCOME

    used.add(fit.panel.panel_id)
    placement = Placement(
        panel_id=fit.panel.panel_id,
        sheet_id=region.sheet_id,
        sheet_no=0,
        x=region.x,
        y=region.y,
        width=fit.width,
        height=fit.height,
        rotated=fit.rotated,
        mark=fit.panel.mark,
    )

    alternatives: list[_Alternative] = []
    for direction in (CutDirection.HORIZONTAL, CutDirection.VERTICAL):
        right_region, bottom_region = split_regions(
            region, fit.width, fit.height, blade_width, direction
        )
        branch_used = set(used)
        right = place_recursive(
            pool, right_region, blade_width, allow_rotation, branch_used
        )
        bottom = place_recursive(
            pool, bottom_region, blade_width, allow_rotation, branch_used
        )
        alternatives.append(
            _Alternative(direction=direction, right=right, bottom=bottom, used=branch_used)
        )

    chosen = choose_alternative(*alternatives)
    used.update(chosen.used)

    own = PlacementOutcome(
        placements=(placement,),
        used_area=fit.area,
        panels_placed=1,
    )
    return own + chosen.right + chosen.bottom


def place_on_sheet(
    pool: Sequence[UnitPanel],
    sheet_id: int,
    width: float,
    height: float,
    blade_width: float,
    allow_rotation: bool,
) -> PlacementOutcome:
    """Run a fresh placement attempt over a whole sheet.

    Starts at the sheet origin with an empty used-identity set that is
    private to this attempt.
    """
    region = FreeRegion(sheet_id=sheet_id, width=width, height=height)
    return place_recursive(pool, region, blade_width, allow_rotation, set())
