"""Pytest configuration and shared fixtures for panelnest tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from panelnest.domain.value_objects import (
    OptimizationResult,
    OptimizationSummary,
    PanelSpec,
    Placement,
    SheetSize,
    SheetSpec,
    UnitPanel,
    UsedSheet,
)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Domain inputs
# =============================================================================


@pytest.fixture
def square_pair() -> list[PanelSpec]:
    """Two 10x10 panels that exactly fill a 20x10 sheet."""
    return [PanelSpec(width=10, height=10, quantity=2, mark="SQ")]


@pytest.fixture
def mixed_panels() -> list[PanelSpec]:
    """A small job with several sizes and marks."""
    return [
        PanelSpec(width=24, height=36, quantity=2, mark="A1", finish="clear"),
        PanelSpec(width=12, height=30, quantity=3, mark="B2", part_no="GL-200"),
        PanelSpec(width=18, height=18, quantity=2, mark="C3"),
    ]


@pytest.fixture
def stock_sheets() -> list[SheetSpec]:
    """Two classes of stock with ample quantity."""
    return [
        SheetSpec(width=48, height=48, quantity=5, sheet_id=1),
        SheetSpec(width=60, height=40, quantity=5, sheet_id=2),
    ]


# =============================================================================
# Job files
# =============================================================================


@pytest.fixture
def job_data() -> dict[str, Any]:
    """A valid job configuration dictionary."""
    return {
        "schema_version": "1.0",
        "panels": [
            {"width": 24, "height": 36, "quantity": 2, "mark": "A1", "finish": "clear"},
            {"width": 12, "height": 30, "quantity": 3, "mark": "B2", "part_no": "GL-200"},
        ],
        "sheets": [{"id": 1, "width": 48, "height": 48, "quantity": 5}],
        "blade_width": 0.25,
        "allow_rotation": True,
    }


@pytest.fixture
def write_job(tmp_path: Path):
    """Write a job dictionary to a JSON file and return its path."""

    def _write(data: dict[str, Any], name: str = "job.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def job_file(job_data: dict[str, Any], write_job) -> Path:
    """Path to a valid job file."""
    return write_job(job_data)


# =============================================================================
# Results
# =============================================================================


@pytest.fixture
def two_sheet_result() -> OptimizationResult:
    """A hand-built result: two sheets, one rotated panel, one left over."""
    placements = (
        Placement(panel_id=1, sheet_id=1, sheet_no=1, x=0, y=0, width=10, height=10, mark="A1"),
        Placement(
            panel_id=2, sheet_id=1, sheet_no=1, x=10.25, y=0, width=8, height=5,
            rotated=True, mark="B<2>",
        ),
        Placement(panel_id=3, sheet_id=2, sheet_no=1, x=0, y=0, width=10, height=10, mark="A1"),
    )
    sheets = (
        UsedSheet(sheet_id=1, sheet_no=1, width=20, height=10, used_area=140, waste_percentage=30),
        UsedSheet(sheet_id=2, sheet_no=1, width=10, height=20, used_area=100, waste_percentage=50),
    )
    summary = OptimizationSummary(
        total_sheets=2,
        total_area=400,
        used_area=240,
        waste_percentage=40,
        total_panels_placed=3,
        total_panels_needed=5,
        sheet_types_used=2,
    )
    unplaced = (
        UnitPanel(panel_id=4, spec_index=2, width=30, height=30, mark="BIG"),
        UnitPanel(panel_id=5, spec_index=2, width=30, height=30, mark="BIG"),
    )
    return OptimizationResult(
        placements=placements,
        sheets=sheets,
        summary=summary,
        unplaced=unplaced,
        optimal_sheet=SheetSize(width=20, height=10),
    )


@pytest.fixture
def empty_result() -> OptimizationResult:
    """A result where nothing fit."""
    summary = OptimizationSummary(
        total_sheets=0,
        total_area=0,
        used_area=0,
        waste_percentage=0,
        total_panels_placed=0,
        total_panels_needed=1,
        sheet_types_used=0,
    )
    return OptimizationResult(
        placements=(),
        sheets=(),
        summary=summary,
        unplaced=(UnitPanel(panel_id=1, spec_index=0, width=30, height=30),),
    )
