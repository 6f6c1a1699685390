"""Tests for the text report formatters."""

from panelnest.domain import SheetSpec, optimize
from panelnest.infrastructure.formatters import (
    PlacementTableFormatter,
    ResultReportFormatter,
    SheetTableFormatter,
    SummaryFormatter,
    UnplacedFormatter,
)


class TestSummaryFormatter:
    def test_totals(self, two_sheet_result) -> None:
        text = SummaryFormatter().format(two_sheet_result)

        assert text.startswith("NESTING SUMMARY")
        assert "Sheets used:     2 (2 sheet types)" in text
        assert "Waste:           40.0%" in text
        assert "Panels placed:   3 of 5" in text
        assert "Optimal sheet:   20 x 10" in text

    def test_no_optimal_sheet_line_without_search(self, empty_result) -> None:
        text = SummaryFormatter().format(empty_result)
        assert "Optimal sheet" not in text
        assert "(0 sheet types)" in text


class TestSheetTableFormatter:
    def test_one_row_per_sheet(self, two_sheet_result) -> None:
        lines = SheetTableFormatter().format(two_sheet_result).splitlines()

        assert lines[0] == "SHEETS USED"
        assert len(lines) == 4 + 2
        assert lines[4].split()[:5] == ["1", "1", "20", "10", "2"]
        assert lines[5].endswith("50.0%")

    def test_empty(self, empty_result) -> None:
        assert SheetTableFormatter().format(empty_result) == "No sheets used."


class TestPlacementTableFormatter:
    def test_rows(self, two_sheet_result) -> None:
        lines = PlacementTableFormatter().format(two_sheet_result).splitlines()

        assert lines[0] == "PANEL PLACEMENTS"
        assert lines[4].startswith("1#1")
        assert lines[4].endswith("No")
        assert "B<2>" in lines[5]
        assert lines[5].endswith("Yes")

    def test_empty(self, empty_result) -> None:
        assert PlacementTableFormatter().format(empty_result) == "No panels placed."


class TestUnplacedFormatter:
    def test_complete_result_has_no_block(self, square_pair) -> None:
        result = optimize(square_pair, [SheetSpec(width=20, height=10)], blade_width=0)
        assert UnplacedFormatter().format(result) == ""

    def test_groups_identical_panels(self, two_sheet_result) -> None:
        text = UnplacedFormatter().format(two_sheet_result)

        assert text.startswith("INCOMPLETE")
        assert "2 panels could not be placed on the available sheets:" in text
        assert "  BIG: 30 x 30 x 2" in text

    def test_unmarked_panel(self, empty_result) -> None:
        text = UnplacedFormatter().format(empty_result)
        assert "1 panel could not be placed" in text
        assert "(unmarked): 30 x 30 x 1" in text


class TestResultReportFormatter:
    def test_sections_in_order(self, two_sheet_result) -> None:
        text = ResultReportFormatter().format(two_sheet_result)

        order = [
            text.index("NESTING SUMMARY"),
            text.index("SHEETS USED"),
            text.index("PANEL PLACEMENTS"),
            text.index("INCOMPLETE"),
        ]
        assert order == sorted(order)

    def test_placements_can_be_left_out(self, two_sheet_result) -> None:
        text = ResultReportFormatter(include_placements=False).format(two_sheet_result)
        assert "PANEL PLACEMENTS" not in text
