"""Tests for CSV and DataFrame export."""
import pandas as pd

from comps_extractor.exporters import CSVExporter, records_to_dataframe
from comps_extractor.exporters.csv_exporter import COLUMNS
from comps_extractor.models import ExtractionResult


class TestRecordsToDataFrame:
    """Test DataFrame conversion."""

    def test_columns_and_values(self, sample_result):
        df = records_to_dataframe(sample_result)

        assert list(df.columns) == COLUMNS
        assert len(df) == 2
        assert df.loc[0, "squareFeet"] == 336350
        assert df.loc[0, "notes"] == ""
        assert df.loc[1, "notes"] == "Portfolio sale"
        assert bool(df.loc[1, "pricePerSFDerived"]) is True

    def test_empty_result(self):
        df = records_to_dataframe(ExtractionResult(records=[]))

        assert df.empty
        assert list(df.columns) == COLUMNS


class TestCSVExporter:
    """Test CSV export."""

    def test_export(self, sample_result, tmp_path):
        path = CSVExporter().export(sample_result, tmp_path / "nested" / "memo.csv")

        df = pd.read_csv(path)
        assert list(df.columns) == COLUMNS
        assert df["date"].tolist() == ["Jun-22", "Mar-23"]
        assert df["price"].tolist() == [330000000, 250000000]
        assert df["capRate"].tolist() == [3.5, 4.25]
