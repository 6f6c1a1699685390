"""Tests for structural layout checks."""

from __future__ import annotations

from dataclasses import replace

from panelnest.domain import optimize
from panelnest.domain.services.layout_check import IssueKind, verify_result
from panelnest.domain.value_objects import (
    OptimizationResult,
    OptimizationSummary,
    PanelSpec,
    Placement,
    SheetSpec,
    UsedSheet,
)


def _result(placements: list[Placement], used_area: float = 50.0) -> OptimizationResult:
    """One 10x10 sheet holding the given placements."""
    sheet = UsedSheet(
        sheet_id=1,
        sheet_no=1,
        width=10,
        height=10,
        used_area=used_area,
        waste_percentage=100 - used_area,
    )
    summary = OptimizationSummary(
        total_sheets=1,
        total_area=100,
        used_area=used_area,
        waste_percentage=100 - used_area,
        total_panels_placed=len(placements),
        total_panels_needed=len(placements),
        sheet_types_used=1,
    )
    return OptimizationResult(placements=tuple(placements), sheets=(sheet,), summary=summary)


def _placement(panel_id: int = 1, **kwargs) -> Placement:
    values = dict(panel_id=panel_id, sheet_id=1, sheet_no=1, x=0, y=0, width=5, height=5)
    values.update(kwargs)
    return Placement(**values)


def _kinds(result: OptimizationResult, allow_rotation: bool = True) -> list[IssueKind]:
    return [issue.kind for issue in verify_result(result, allow_rotation)]


class TestVerifyResult:
    """Tests for verify_result."""

    def test_engine_output_is_clean(self, mixed_panels, stock_sheets) -> None:
        result = optimize(mixed_panels, stock_sheets)
        assert verify_result(result) == []

    def test_adjacent_panels_do_not_overlap(self) -> None:
        result = _result([_placement(1), _placement(2, x=5)])
        assert _kinds(result) == []

    def test_out_of_bounds(self) -> None:
        result = _result([_placement(1, x=8, width=5, height=10)])
        assert _kinds(result) == [IssueKind.OUT_OF_BOUNDS]

    def test_overlap(self) -> None:
        result = _result([_placement(1), _placement(2, x=3, y=3)], used_area=50)
        issues = verify_result(result)
        assert [i.kind for i in issues] == [IssueKind.OVERLAP]
        assert issues[0].sheet_id == 1
        assert issues[0].sheet_no == 1

    def test_duplicate_panel(self) -> None:
        result = _result([_placement(1), _placement(1, x=5)])
        assert IssueKind.DUPLICATE_PANEL in _kinds(result)

    def test_rotation_when_disallowed(self) -> None:
        result = _result([_placement(1, width=5, height=10, rotated=True)])
        assert _kinds(result, allow_rotation=False) == [IssueKind.ILLEGAL_ROTATION]
        assert _kinds(result, allow_rotation=True) == []

    def test_area_mismatch(self) -> None:
        result = _result([_placement(1)], used_area=50)
        assert _kinds(result) == [IssueKind.AREA_MISMATCH]

    def test_unknown_sheet(self) -> None:
        result = _result([_placement(1, width=10, height=5), _placement(2, sheet_no=2)])
        kinds = _kinds(result)
        assert IssueKind.UNKNOWN_SHEET in kinds

    def test_count_mismatch(self) -> None:
        result = _result([_placement(1, width=10)])
        bad = replace(result, summary=replace(result.summary, total_panels_placed=3))
        assert _kinds(bad) == [IssueKind.COUNT_MISMATCH]

    def test_reports_every_issue(self) -> None:
        result = _result(
            [_placement(1, rotated=True), _placement(1, x=2, y=2, width=10)],
            used_area=10,
        )
        kinds = set(_kinds(result, allow_rotation=False))
        assert {
            IssueKind.DUPLICATE_PANEL,
            IssueKind.ILLEGAL_ROTATION,
            IssueKind.OUT_OF_BOUNDS,
            IssueKind.OVERLAP,
            IssueKind.AREA_MISMATCH,
        } <= kinds

    def test_unplaced_panels_are_not_issues(self) -> None:
        result = optimize([PanelSpec(width=30, height=30)], [SheetSpec(width=20, height=20)])
        assert verify_result(result) == []
