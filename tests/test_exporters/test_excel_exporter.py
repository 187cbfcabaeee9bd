"""Tests for the Excel exporter."""
from datetime import datetime

import openpyxl
import pytest

from comps_extractor.exporters import ExcelExporter, generate_output_filename
from comps_extractor.exporters.excel_exporter import HEADERS
from comps_extractor.models import ExtractionResult


@pytest.fixture
def workbook(sample_result, tmp_path):
    path = ExcelExporter().export(sample_result, tmp_path / "out" / "memo.xlsx")
    return openpyxl.load_workbook(path)


class TestExcelExporter:
    """Test workbook layout."""

    def test_sheets(self, workbook):
        assert workbook.sheetnames == ["Sales Comparables", "Extraction Log"]

    def test_header_row(self, workbook):
        ws = workbook["Sales Comparables"]

        assert [cell.value for cell in ws[1]] == HEADERS

    def test_record_values(self, workbook):
        """Dates become real month cells and numbers stay numeric."""
        ws = workbook["Sales Comparables"]

        assert ws["A2"].value == datetime(2022, 6, 1)
        assert ws["B2"].value == "640 Columbia Street"
        assert ws["E2"].value == 336350
        assert ws["F2"].value == 330000000
        assert ws["H2"].value == 3.5
        assert ws["K3"].value == "Portfolio sale"
        assert ws["L3"].value == 2

    def test_derived_price_per_sf_highlighted(self, workbook):
        ws = workbook["Sales Comparables"]

        assert ws["G3"].fill.start_color.rgb.endswith(ExcelExporter.INFO_COLOR)
        assert not str(ws["G2"].fill.start_color.rgb).endswith(ExcelExporter.INFO_COLOR)

    def test_extraction_log(self, workbook):
        ws = workbook["Extraction Log"]
        values = [cell.value for row in ws.iter_rows() for cell in row if cell.value is not None]

        assert "SUCCESS" in values
        assert "memo.pdf" in values
        assert any(str(v).startswith("Derived Price/SF (1)") for v in values)

    def test_empty_result(self, tmp_path):
        """A result without records still produces a workbook with headers."""
        path = ExcelExporter().export(ExtractionResult(records=[], source="empty.pdf"), tmp_path / "empty.xlsx")

        ws = openpyxl.load_workbook(path)["Sales Comparables"]
        assert ws.max_row == 1


class TestGenerateOutputFilename:
    """Test output file naming."""

    def test_format(self, tmp_path):
        path = generate_output_filename("Offering Memo", "csv", output_dir=tmp_path)

        assert path.parent == tmp_path
        assert path.name.startswith("offering_memo_comparables_")
        assert path.suffix == ".csv"
