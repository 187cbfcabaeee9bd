"""Extraction result model."""
from dataclasses import dataclass, field
from typing import List, Optional
from datetime import datetime

from .sale_comparable import SaleComparable


@dataclass
class ExtractionResult:
    """
    Complete result of a comparables extraction run.

    Attributes:
        records: Sale comparables in page/row order
        success: Whether extraction succeeded
        source: Input file name
        layout_profile: Name of the layout profile used
        page_count: Pages processed
        rows_scanned: Reconstructed rows inspected
        rows_skipped: Primary-row candidates that yielded no record
        error_message: Error message if extraction failed
        warnings: Validation warnings
        processing_time: Time taken to process (seconds)
        extracted_at: Timestamp of extraction
    """
    records: List[SaleComparable] = field(default_factory=list)
    success: bool = True
    source: Optional[str] = None
    layout_profile: str = "default"
    page_count: int = 0
    rows_scanned: int = 0
    rows_skipped: int = 0
    error_message: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    processing_time: float = 0.0
    extracted_at: datetime = field(default_factory=datetime.now)

    @property
    def record_count(self) -> int:
        """Get number of records."""
        return len(self.records)

    @property
    def derived_price_per_sf_records(self) -> List[SaleComparable]:
        """Records whose price per SF was computed rather than read."""
        return [r for r in self.records if r.price_per_sf_derived]

    def to_dict(self) -> dict:
        """Convert extraction result to dictionary."""
        return {
            'salesComparables': [r.to_dict() for r in self.records],
            'success': self.success,
            'source': self.source,
            'layout_profile': self.layout_profile,
            'record_count': self.record_count,
            'page_count': self.page_count,
            'rows_scanned': self.rows_scanned,
            'rows_skipped': self.rows_skipped,
            'processing_time': round(self.processing_time, 2),
            'extracted_at': self.extracted_at.isoformat(),
            'warnings': self.warnings,
            'error_message': self.error_message,
        }
