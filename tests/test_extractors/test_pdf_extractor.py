"""Tests for the pdfplumber extractor."""
import pytest

from comps_extractor.extractors import PDFExtractor, ExtractionError
from comps_extractor.extractors import pdf_extractor


class FakePage:
    def __init__(self, words):
        self.words = words
        self.calls = []

    def extract_words(self, **kwargs):
        self.calls.append(kwargs)
        return self.words


class FakePDF:
    def __init__(self, pages):
        self.pages = pages

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture
def pdf_file(tmp_path):
    path = tmp_path / "memo.pdf"
    path.write_bytes(b"%PDF-1.4\n")
    return path


class TestPDFExtractor:
    """Test word extraction through pdfplumber."""

    def test_words_become_fragments(self, pdf_file, monkeypatch):
        """Each word's left edge and top edge become x and y."""
        page = FakePage([
            {"text": "Jun-22", "x0": 40.2, "top": 512.0},
            {"text": "640 Columbia Street", "x0": 90.0, "top": 512.4},
        ])
        monkeypatch.setattr(pdf_extractor.pdfplumber, "open", lambda path: FakePDF([page, FakePage([])]))

        document = PDFExtractor().extract(pdf_file)

        assert document.page_count == 2
        assert [f.text for f in document.pages[0].content] == ["Jun-22", "640 Columbia Street"]
        assert document.pages[0].content[0].x == 40.2
        assert document.pages[0].content[1].y == 512.4
        assert document.pages[1].content == []
        assert document.pages[1].page_number == 2

    def test_word_options(self, pdf_file, monkeypatch):
        """Blank characters are kept by default and overrides are applied."""
        page = FakePage([])
        monkeypatch.setattr(pdf_extractor.pdfplumber, "open", lambda path: FakePDF([page]))

        PDFExtractor(word_kwargs={"x_tolerance": 1.5}).extract(pdf_file)

        assert page.calls[0]["keep_blank_chars"] is True
        assert page.calls[0]["x_tolerance"] == 1.5

    def test_unreadable_pdf(self, pdf_file, monkeypatch):
        """pdfplumber failures are wrapped in ExtractionError."""
        def broken_open(path):
            raise OSError("bad xref")

        monkeypatch.setattr(pdf_extractor.pdfplumber, "open", broken_open)

        with pytest.raises(ExtractionError):
            PDFExtractor().extract(pdf_file)

    def test_wrong_suffix(self, tmp_path):
        path = tmp_path / "memo.txt"
        path.write_text("x", encoding="utf-8")

        with pytest.raises(ExtractionError):
            PDFExtractor().extract(path)
