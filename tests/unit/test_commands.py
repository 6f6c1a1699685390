"""Unit tests for application DTOs and commands."""

from __future__ import annotations

import pytest

from panelnest.application import (
    OptimizationOutput,
    OptimizationRequest,
    OptimizePanelsCommand,
    SheetSearchInput,
)
from panelnest.domain import NestingEngine, SheetSize
from panelnest.domain.value_objects import PanelSpec, SheetSpec


class TestSheetSearchInput:
    """Tests for SheetSearchInput validation."""

    def test_defaults_are_valid(self) -> None:
        assert SheetSearchInput().validate() == []

    def test_inverted_ranges(self) -> None:
        errors = SheetSearchInput(min_width=100, min_height=100).validate()
        assert "Search min_width cannot exceed max_width" in errors
        assert "Search min_height cannot exceed max_height" in errors

    def test_step_and_quantity(self) -> None:
        errors = SheetSearchInput(step_size=0, candidate_quantity=0).validate()
        assert "Search step size must be positive" in errors
        assert "Candidate sheet quantity must be at least 1" in errors

    def test_non_positive_minimum(self) -> None:
        errors = SheetSearchInput(min_width=0).validate()
        assert "Search range minimums must be positive" in errors


class TestOptimizationRequest:
    """Tests for OptimizationRequest validation."""

    def test_valid_request(self, mixed_panels, stock_sheets) -> None:
        assert OptimizationRequest(panels=mixed_panels, sheets=stock_sheets).validate() == []

    def test_requires_panels(self, stock_sheets) -> None:
        errors = OptimizationRequest(sheets=stock_sheets).validate()
        assert errors == ["At least one panel is required"]

    def test_requires_sheets_without_search(self, mixed_panels) -> None:
        errors = OptimizationRequest(panels=mixed_panels).validate()
        assert errors == ["At least one sheet is required unless a sheet search is requested"]

    def test_search_replaces_sheets(self, mixed_panels) -> None:
        request = OptimizationRequest(panels=mixed_panels, sheet_search=SheetSearchInput())
        assert request.validate() == []

    def test_negative_blade_width(self, mixed_panels, stock_sheets) -> None:
        request = OptimizationRequest(panels=mixed_panels, sheets=stock_sheets, blade_width=-1)
        assert request.validate() == ["Blade width cannot be negative"]

    def test_search_errors_are_included(self, mixed_panels) -> None:
        request = OptimizationRequest(
            panels=mixed_panels, sheet_search=SheetSearchInput(step_size=-1)
        )
        assert request.validate() == ["Search step size must be positive"]

    def test_duplicate_sheet_ids(self, mixed_panels) -> None:
        sheets = [
            SheetSpec(width=48, height=48, sheet_id=3),
            SheetSpec(width=60, height=60, sheet_id=3),
        ]
        errors = OptimizationRequest(panels=mixed_panels, sheets=sheets).validate()
        assert errors == ["Duplicate sheet id 3"]

    def test_default_id_colliding_with_explicit_id(self, mixed_panels) -> None:
        sheets = [
            SheetSpec(width=10, height=10),
            SheetSpec(width=30, height=30, sheet_id=1),
        ]
        errors = OptimizationRequest(panels=mixed_panels, sheets=sheets).validate()
        assert errors == ["Duplicate sheet id 1"]

    def test_default_ids_do_not_collide_with_each_other(self, mixed_panels) -> None:
        sheets = [SheetSpec(width=10, height=10), SheetSpec(width=30, height=30)]
        assert OptimizationRequest(panels=mixed_panels, sheets=sheets).validate() == []

    def test_colliding_ids_rejected_by_command(self, square_pair) -> None:
        request = OptimizationRequest(
            panels=square_pair,
            sheets=[SheetSpec(width=20, height=10), SheetSpec(width=30, height=30, sheet_id=1)],
        )
        output = OptimizePanelsCommand().execute(request)
        assert output.errors == ["Duplicate sheet id 1"]
        assert output.result is None


class TestOptimizationOutput:
    """Tests for OptimizationOutput properties."""

    def test_rejected_output(self) -> None:
        output = OptimizationOutput(errors=["bad"])
        assert not output.is_valid
        assert not output.is_complete


class TestOptimizePanelsCommand:
    """Tests for OptimizePanelsCommand."""

    def test_invalid_request_returns_errors(self) -> None:
        output = OptimizePanelsCommand().execute(OptimizationRequest())

        assert not output.is_valid
        assert output.result is None
        assert len(output.errors) == 2

    def test_runs_with_request_parameters(self, square_pair) -> None:
        request = OptimizationRequest(
            panels=square_pair,
            sheets=[SheetSpec(width=20, height=10)],
            blade_width=0,
        )
        output = OptimizePanelsCommand().execute(request)

        assert output.is_valid
        assert output.is_complete
        assert output.result.summary.total_sheets == 1
        assert output.result.optimal_sheet is None

    def test_injected_engine_is_used(self, square_pair) -> None:
        # A kerf engine cannot fit both squares on an exact-width sheet.
        request = OptimizationRequest(
            panels=square_pair,
            sheets=[SheetSpec(width=20, height=10)],
            blade_width=0,
        )
        output = OptimizePanelsCommand(engine=NestingEngine(blade_width=0.25)).execute(request)

        assert output.is_valid
        assert not output.is_complete

    def test_injected_engine_keeps_its_rotation_setting(self) -> None:
        request = OptimizationRequest(
            panels=[PanelSpec(width=5, height=15)],
            sheets=[SheetSpec(width=15, height=6)],
            allow_rotation=True,
        )
        engine = NestingEngine(allow_rotation=False)
        output = OptimizePanelsCommand(engine=engine).execute(request)

        assert output.is_valid
        assert not output.is_complete

    def test_sheet_search_sets_optimal_sheet(self) -> None:
        request = OptimizationRequest(
            panels=[PanelSpec(width=24, height=24, quantity=4)],
            blade_width=0,
            sheet_search=SheetSearchInput(step_size=12),
        )
        output = OptimizePanelsCommand().execute(request)

        assert output.is_complete
        assert output.result.optimal_sheet == SheetSize(width=48, height=48)
        assert output.result.summary.total_sheets == 1
        assert output.result.sheets[0].sheet_id == 1

    def test_search_ignores_listed_sheets(self) -> None:
        request = OptimizationRequest(
            panels=[PanelSpec(width=24, height=24, quantity=4)],
            sheets=[SheetSpec(width=200, height=200)],
            blade_width=0,
            sheet_search=SheetSearchInput(),
        )
        result = OptimizePanelsCommand().execute(request).result
        assert (result.sheets[0].width, result.sheets[0].height) == (48, 48)

    @pytest.mark.parametrize("allow_rotation", [True, False])
    def test_rotation_setting_reaches_engine(self, allow_rotation: bool) -> None:
        request = OptimizationRequest(
            panels=[PanelSpec(width=5, height=15)],
            sheets=[SheetSpec(width=15, height=6)],
            allow_rotation=allow_rotation,
        )
        output = OptimizePanelsCommand().execute(request)
        assert output.is_complete is allow_rotation
