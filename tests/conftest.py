"""Pytest configuration and fixtures."""
import json

import pytest

from comps_extractor.models import Fragment, SaleComparable, ExtractionResult


# One comparables row as (cell text, x) pairs, left to right
PRIMARY_CELLS = [
    ("Jun-22", 40.0),
    ("640 Columbia Street", 90.0),
    ("Amazon", 200.0),
    ("Brooklyn", 260.0),
    ("336,350", 320.0),
    ("$330,000,000", 380.0),
    ("981", 450.0),
    ("3.5%", 500.0),
    ("CBREI", 540.0),
    ("DH Property Holdings", 600.0),
]


@pytest.fixture
def primary_cells():
    """Cells of a complete comparables row."""
    return list(PRIMARY_CELLS)


@pytest.fixture
def make_row():
    """Build a row of fragments from (text, x) pairs sharing one y."""
    def _make_row(cells, y=100.0):
        return [Fragment(text, x, y) for text, x in cells]
    return _make_row


@pytest.fixture
def primary_row(make_row, primary_cells):
    """A complete primary row at y=100."""
    return make_row(primary_cells)


@pytest.fixture
def sample_record():
    """Create a sample comparable for testing."""
    return SaleComparable(
        date="Jun-22",
        property_name="640 Columbia Street",
        major_tenant="Amazon",
        borough_market="Brooklyn",
        square_feet=336350,
        price=330000000,
        price_per_sf=981,
        cap_rate=3.5,
        purchaser="CBREI",
        seller="DH Property Holdings",
        page_number=1,
    )


@pytest.fixture
def sample_result(sample_record):
    """Create a sample extraction result with one printed and one derived price/SF."""
    derived = SaleComparable(
        date="Mar-23",
        property_name="25 Kent Avenue",
        major_tenant="Pratt",
        borough_market="Williamsburg",
        square_feet=500000,
        price=250000000,
        price_per_sf=500,
        cap_rate=4.25,
        purchaser="Heritage",
        seller="Rubenstein",
        notes="Portfolio sale",
        page_number=2,
        price_per_sf_derived=True,
    )
    return ExtractionResult(
        records=[sample_record, derived],
        success=True,
        source="memo.pdf",
        page_count=2,
        rows_scanned=6,
        rows_skipped=1,
        warnings=["Record 2 (Mar-23 25 Kent Avenue): example warning"],
        processing_time=0.42,
    )


@pytest.fixture
def write_document(tmp_path):
    """Write pages of rows as a positioned-text JSON dump and return its path."""
    def _write_document(pages, name="memo.json"):
        data = {
            "pages": [
                {"content": [fragment.to_dict() for row in rows for fragment in row]}
                for rows in pages
            ]
        }
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write_document
