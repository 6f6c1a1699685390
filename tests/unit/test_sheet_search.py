"""Tests for the sheet size search."""

import logging

import pytest

from panelnest.domain.services.sheet_search import (
    SheetSizeSearch,
    dimension_score,
    find_best_sheet_size,
    rank_candidates,
)
from panelnest.domain.value_objects import PanelSpec, SheetSize


class TestDimensionScore:
    """Tests for the tiling penalty."""

    def test_even_tiling_scores_zero(self) -> None:
        panels = [PanelSpec(width=24, height=24)]
        assert dimension_score(panels, 48, 48, allow_rotation=True) == 0

    def test_leftover_width_is_a_fraction_of_sheet_width(self) -> None:
        panels = [PanelSpec(width=24, height=24)]
        assert dimension_score(panels, 60, 48, allow_rotation=True) == pytest.approx(0.2)

    def test_rotation_adds_rotated_dimension(self) -> None:
        panels = [PanelSpec(width=20, height=30)]
        upright = dimension_score(panels, 50, 40, allow_rotation=False)
        both = dimension_score(panels, 50, 40, allow_rotation=True)
        # 20x30 leaves 10/50 + 10/40; 30x20 leaves 20/50 + 0/40
        assert upright == pytest.approx(0.45)
        assert both == pytest.approx(0.85)


class TestRankCandidates:
    """Tests for the heuristic candidate ranking."""

    def test_rejects_non_positive_step(self) -> None:
        with pytest.raises(ValueError, match="Step size must be positive"):
            rank_candidates([PanelSpec(width=1, height=1)], 48, 96, 48, 96, 0, True)

    def test_grid_includes_both_ends(self) -> None:
        ranked = rank_candidates([PanelSpec(width=1, height=1)], 48, 96, 48, 48, 12, True)
        assert sorted(c.width for c in ranked) == [48, 60, 72, 84, 96]

    def test_small_candidates_are_discarded(self) -> None:
        panels = [PanelSpec(width=24, height=24, quantity=8)]
        # estimate 4608 * 1.15 = 5299.2; below 3532.8 is discarded
        ranked = rank_candidates(panels, 48, 96, 48, 96, 12, True)
        assert all(c.area >= 5299.2 / 1.5 for c in ranked)
        assert (48, 48) not in {(c.width, c.height) for c in ranked}

    def test_sorted_by_score(self) -> None:
        ranked = rank_candidates([PanelSpec(width=24, height=24, quantity=4)], 48, 96, 48, 96, 12, True)
        scores = [c.score for c in ranked]
        assert scores == sorted(scores)


class TestSheetSizeSearch:
    """Tests for the full search."""

    def test_four_squares_pick_smallest_exact_sheet(self) -> None:
        search = SheetSizeSearch(blade_width=0)
        size = search.find_best([PanelSpec(width=24, height=24, quantity=4)], 48, 96, 48, 96, 12)
        assert size == SheetSize(width=48, height=48)

    @pytest.mark.slow
    def test_eight_squares_pick_single_sheet(self) -> None:
        search = SheetSizeSearch(blade_width=0)
        size = search.find_best([PanelSpec(width=24, height=24, quantity=8)], 48, 96, 48, 96, 12)
        assert size == SheetSize(width=72, height=72)

    def test_incomplete_candidates_rank_last(self) -> None:
        # Only the 96 wide candidate can hold a 90 long panel.
        search = SheetSizeSearch(blade_width=0)
        size = search.find_best([PanelSpec(width=90, height=10)], 48, 96, 48, 48, 12)
        assert size == SheetSize(width=96, height=48)

    def test_nothing_large_enough_returns_minimum(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="panelnest.domain.services.sheet_search"):
            size = SheetSizeSearch().find_best([PanelSpec(width=200, height=200)], 48, 96, 48, 96, 12)

        assert size == SheetSize(width=48, height=48)
        assert "No sheet size" in caplog.text

    def test_module_helper_uses_defaults(self) -> None:
        size = find_best_sheet_size(
            [PanelSpec(width=24, height=24, quantity=4)],
            min_width=48,
            max_width=48,
            min_height=48,
            max_height=48,
            blade_width=0,
        )
        assert size == SheetSize(width=48, height=48)
