"""Data models for sale comparables extraction."""
from .fragment import Fragment, Row, Page, Document
from .sale_comparable import SaleComparable, TEXT_FIELDS, NUMERIC_FIELDS, OUTPUT_KEYS
from .extraction_result import ExtractionResult

__all__ = [
    'Fragment',
    'Row',
    'Page',
    'Document',
    'SaleComparable',
    'TEXT_FIELDS',
    'NUMERIC_FIELDS',
    'OUTPUT_KEYS',
    'ExtractionResult',
]
