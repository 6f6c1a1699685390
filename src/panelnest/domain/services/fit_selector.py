"""Selection of the best panel for a free rectangle.

The score rewards panels that consume more of the region's area and that
flush-fit at least one of its edges:

    score = AREA_WEIGHT * (placed area / region area)
          + EDGE_WEIGHT * max(width / max_width, height / max_height)

The weights are heuristic constants and may be tuned.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Sequence

from panelnest.domain.value_objects import UnitPanel

AREA_WEIGHT = 0.7
EDGE_WEIGHT = 0.3

# Absorbs float error from kerf arithmetic (e.g. 20.25 - 10 - 0.25).
FIT_TOLERANCE = 1e-9


@dataclass(frozen=True)
class PanelFit:
    """A panel in a chosen orientation, ready to place.

    Attributes:
        panel: The unit panel to place.
        width: Width as placed.
        height: Height as placed.
        rotated: True if width and height are swapped from the panel's.
        score: Fit score (higher is better).
    """

    panel: UnitPanel
    width: float
    height: float
    rotated: bool
    score: float

    @property
    def area(self) -> float:
        return self.width * self.height


def fits_within(
    width: float,
    height: float,
    max_width: float,
    max_height: float,
) -> bool:
    """Check that a width x height rectangle fits inside max_width x max_height."""
    return width <= max_width + FIT_TOLERANCE and height <= max_height + FIT_TOLERANCE


def fit_score(
    width: float,
    height: float,
    max_width: float,
    max_height: float,
) -> float:
    """Score a fitting orientation against its free region."""
    area_ratio = (width * height) / (max_width * max_height)
    edge_fit = max(width / max_width, height / max_height)
    return AREA_WEIGHT * area_ratio + EDGE_WEIGHT * edge_fit


def find_best_fit(
    pool: Sequence[UnitPanel],
    max_width: float,
    max_height: float,
    allow_rotation: bool,
    used: AbstractSet[int] = frozenset(),
) -> PanelFit | None:
    """Pick the single best (panel, orientation) for a free region.

    Panels whose id is in ``used`` are skipped. The direct orientation is
    evaluated before the rotated one and panels are visited in pool order;
    only a strictly higher score replaces the current best, so ties go to
    whichever came first.

    Args:
        pool: Candidate panels.
        max_width: Width of the free region.
        max_height: Height of the free region.
        allow_rotation: Whether 90 degree rotation may be tried.
        used: Ids of panels already placed in this attempt.

    Returns:
        The best fit, or None if no panel fits the region.
    """
    if max_width <= 0 or max_height <= 0:
        return None

    best: PanelFit | None = None

    for panel in pool:
        if panel.panel_id in used:
            continue

        orientations = [(panel.width, panel.height, False)]
        if allow_rotation:
            orientations.append((panel.height, panel.width, True))

        for width, height, rotated in orientations:
            if not fits_within(width, height, max_width, max_height):
                continue
            score = fit_score(width, height, max_width, max_height)
            if best is None or score > best.score:
                best = PanelFit(
                    panel=panel,
                    width=width,
                    height=height,
                    rotated=rotated,
                    score=score,
                )

    return best
