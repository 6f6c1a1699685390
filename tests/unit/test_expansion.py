"""Tests for panel expansion."""

from __future__ import annotations

from panelnest.domain.services.expansion import expand_panels, total_requested_area
from panelnest.domain.value_objects import PanelSpec


class TestExpandPanels:
    """Tests for expand_panels."""

    def test_one_unit_per_requested_panel(self) -> None:
        specs = [
            PanelSpec(width=10, height=20, quantity=3, mark="A"),
            PanelSpec(width=5, height=5, quantity=2, mark="B"),
        ]
        units = expand_panels(specs)

        assert len(units) == 5
        assert [u.mark for u in units] == ["A", "A", "A", "B", "B"]
        assert [u.spec_index for u in units] == [0, 0, 0, 1, 1]

    def test_identities_are_distinct_ordinals(self) -> None:
        """Identical units still get distinct ids."""
        units = expand_panels([PanelSpec(width=10, height=10, quantity=4)])
        assert [u.panel_id for u in units] == [1, 2, 3, 4]

    def test_metadata_is_carried(self) -> None:
        units = expand_panels(
            [PanelSpec(width=10, height=20, mark="M", finish="bronze", part_no="P-1")]
        )
        unit = units[0]
        assert (unit.width, unit.height) == (10, 20)
        assert unit.finish == "bronze"
        assert unit.part_no == "P-1"

    def test_expansion_is_repeatable(self) -> None:
        """Expanding the same input twice gives equal results."""
        specs = [PanelSpec(width=3, height=4, quantity=2), PanelSpec(width=1, height=1)]
        assert expand_panels(specs) == expand_panels(specs)

    def test_empty_input(self) -> None:
        assert expand_panels([]) == []


def test_total_requested_area() -> None:
    specs = [PanelSpec(width=10, height=10, quantity=2), PanelSpec(width=2, height=3)]
    assert total_requested_area(specs) == 206
