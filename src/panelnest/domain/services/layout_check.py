"""Structural checks over a nesting result.

Verifies the properties every result must hold: placements stay on their
sheet, never overlap, respect the rotation setting, place each panel at
most once, and add up to each sheet's reported used area. Issues are
returned rather than raised so callers can report all of them at once.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from panelnest.domain.value_objects import OptimizationResult, Placement

logger = logging.getLogger(__name__)

AREA_TOLERANCE = 1e-6
EDGE_TOLERANCE = 1e-9


class IssueKind(str, Enum):
    """Kinds of layout problems."""

    OUT_OF_BOUNDS = "out_of_bounds"
    OVERLAP = "overlap"
    DUPLICATE_PANEL = "duplicate_panel"
    ILLEGAL_ROTATION = "illegal_rotation"
    AREA_MISMATCH = "area_mismatch"
    UNKNOWN_SHEET = "unknown_sheet"
    COUNT_MISMATCH = "count_mismatch"


@dataclass(frozen=True)
class LayoutIssue:
    """A single problem found in a result."""

    kind: IssueKind
    message: str
    sheet_id: int | None = None
    sheet_no: int | None = None


def _sheet_key(placement: Placement) -> tuple[int, int]:
    return placement.sheet_id, placement.sheet_no


def verify_result(
    result: OptimizationResult,
    allow_rotation: bool = True,
) -> list[LayoutIssue]:
    """Check a result for structural problems.

    Args:
        result: Result returned by the nesting engine.
        allow_rotation: Rotation setting the result was produced with.

    Returns:
        List of issues; empty when the result is sound.
    """
    issues: list[LayoutIssue] = []
    sheets = {(s.sheet_id, s.sheet_no): s for s in result.sheets}
    by_sheet: dict[tuple[int, int], list[Placement]] = defaultdict(list)
    seen_panels: set[int] = set()

    for placement in result.placements:
        key = _sheet_key(placement)
        by_sheet[key].append(placement)

        if placement.panel_id in seen_panels:
            issues.append(
                LayoutIssue(
                    kind=IssueKind.DUPLICATE_PANEL,
                    message=f"Panel {placement.panel_id} is placed more than once",
                    sheet_id=placement.sheet_id,
                    sheet_no=placement.sheet_no,
                )
            )
        seen_panels.add(placement.panel_id)

        if placement.rotated and not allow_rotation:
            issues.append(
                LayoutIssue(
                    kind=IssueKind.ILLEGAL_ROTATION,
                    message=f"Panel {placement.panel_id} is rotated but rotation is off",
                    sheet_id=placement.sheet_id,
                    sheet_no=placement.sheet_no,
                )
            )

        sheet = sheets.get(key)
        if sheet is None:
            issues.append(
                LayoutIssue(
                    kind=IssueKind.UNKNOWN_SHEET,
                    message=(
                        f"Panel {placement.panel_id} sits on sheet "
                        f"{placement.sheet_id} #{placement.sheet_no}, which was not used"
                    ),
                    sheet_id=placement.sheet_id,
                    sheet_no=placement.sheet_no,
                )
            )
            continue

        if (
            placement.x < -EDGE_TOLERANCE
            or placement.y < -EDGE_TOLERANCE
            or placement.right_edge > sheet.width + EDGE_TOLERANCE
            or placement.bottom_edge > sheet.height + EDGE_TOLERANCE
        ):
            issues.append(
                LayoutIssue(
                    kind=IssueKind.OUT_OF_BOUNDS,
                    message=(
                        f"Panel {placement.panel_id} at ({placement.x:g}, {placement.y:g}) "
                        f"size {placement.width:g}x{placement.height:g} exceeds "
                        f"sheet {sheet.width:g}x{sheet.height:g}"
                    ),
                    sheet_id=placement.sheet_id,
                    sheet_no=placement.sheet_no,
                )
            )

    for key, placed in by_sheet.items():
        issues.extend(_overlaps(key, placed))

    for key, sheet in sheets.items():
        placed_area = sum(p.area for p in by_sheet.get(key, ()))
        if abs(placed_area - sheet.used_area) > AREA_TOLERANCE * max(1.0, sheet.area):
            issues.append(
                LayoutIssue(
                    kind=IssueKind.AREA_MISMATCH,
                    message=(
                        f"Sheet {sheet.sheet_id} #{sheet.sheet_no} reports "
                        f"{sheet.used_area:.3f} used but placements cover {placed_area:.3f}"
                    ),
                    sheet_id=sheet.sheet_id,
                    sheet_no=sheet.sheet_no,
                )
            )

    if result.summary.total_panels_placed != len(result.placements):
        issues.append(
            LayoutIssue(
                kind=IssueKind.COUNT_MISMATCH,
                message=(
                    f"Summary reports {result.summary.total_panels_placed} panels "
                    f"placed but there are {len(result.placements)} placements"
                ),
            )
        )

    for issue in issues:
        logger.debug("Layout issue: %s", issue.message)

    return issues


def _overlaps(key: tuple[int, int], placed: Sequence[Placement]) -> list[LayoutIssue]:
    """Pairwise overlap check for placements on one physical sheet."""
    issues: list[LayoutIssue] = []
    for i, first in enumerate(placed):
        for second in placed[i + 1 :]:
            if first.overlaps(second):
                issues.append(
                    LayoutIssue(
                        kind=IssueKind.OVERLAP,
                        message=(
                            f"Panels {first.panel_id} and {second.panel_id} overlap "
                            f"on sheet {key[0]} #{key[1]}"
                        ),
                        sheet_id=key[0],
                        sheet_no=key[1],
                    )
                )
    return issues
