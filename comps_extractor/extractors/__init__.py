"""Extractors for positioned text."""
from .base_extractor import BaseExtractor, ExtractionError
from .pdf_extractor import PDFExtractor
from .json_extractor import JSONExtractor

__all__ = ['BaseExtractor', 'ExtractionError', 'PDFExtractor', 'JSONExtractor']
