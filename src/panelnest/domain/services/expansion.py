"""Expansion of panel specs into individually tracked unit panels."""

from __future__ import annotations

from typing import Sequence

from panelnest.domain.value_objects import PanelSpec, UnitPanel


def expand_panels(panels: Sequence[PanelSpec]) -> list[UnitPanel]:
    """Expand panel specs with quantity > 1 into unit panels.

    Each spec with quantity N becomes N unit panels. Identities are
    1-based ordinals in spec order, then unit order, so every unit is
    distinct even when dimensions and marks repeat.

    Args:
        panels: Panel specs, assumed already validated.

    Returns:
        List of unit panels, one per requested physical panel.
    """
    expanded: list[UnitPanel] = []
    for spec_index, spec in enumerate(panels):
        for _ in range(spec.quantity):
            expanded.append(
                UnitPanel(
                    panel_id=len(expanded) + 1,
                    spec_index=spec_index,
                    width=spec.width,
                    height=spec.height,
                    mark=spec.mark,
                    finish=spec.finish,
                    part_no=spec.part_no,
                )
            )
    return expanded


def total_requested_area(panels: Sequence[PanelSpec]) -> float:
    """Sum of area over every requested panel."""
    return sum(spec.area for spec in panels)
