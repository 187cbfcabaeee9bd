"""Tests for data models."""
import pytest

from comps_extractor.models import Document, Fragment, SaleComparable, ExtractionResult


class TestFragment:
    """Test fragment construction."""

    def test_from_dict_str_key(self):
        assert Fragment.from_dict({"str": "Jun-22", "x": "40.5", "y": 100}) == Fragment("Jun-22", 40.5, 100.0)

    def test_from_dict_missing_text(self):
        assert Fragment.from_dict({"x": 1, "y": 2}).text == ""


class TestDocument:
    """Test document construction."""

    def test_from_dict(self):
        document = Document.from_dict({"pages": [{"content": [{"str": "a", "x": 1, "y": 2}]}, {}]}, source="memo.json")

        assert document.page_count == 2
        assert document.pages[0].text == "a"
        assert document.pages[1].content == []


class TestSaleComparable:
    """Test record model."""

    def test_defaults(self):
        record = SaleComparable(date="Jun-22")

        assert record.to_dict() == {
            'date': 'Jun-22',
            'propertyName': '',
            'majorTenant': '',
            'boroughMarket': '',
            'squareFeet': 0,
            'price': 0,
            'pricePerSF': 0,
            'capRate': 0,
            'purchaser': '',
            'seller': '',
        }

    @pytest.mark.parametrize("field", ["square_feet", "price", "price_per_sf", "cap_rate"])
    def test_negative_numbers_rejected(self, field):
        with pytest.raises(ValueError):
            SaleComparable(date="Jun-22", **{field: -1})


class TestExtractionResult:
    """Test result model."""

    def test_derived_records(self, sample_result):
        assert [r.date for r in sample_result.derived_price_per_sf_records] == ["Mar-23"]

    def test_to_dict(self, sample_result):
        data = sample_result.to_dict()

        assert data["record_count"] == 2
        assert data["salesComparables"][1]["notes"] == "Portfolio sale"
        assert "notes" not in data["salesComparables"][0]

    def test_failed_result(self):
        result = ExtractionResult(success=False, error_message="boom")

        assert result.to_dict()["salesComparables"] == []
        assert result.record_count == 0
