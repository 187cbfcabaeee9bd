"""Row reconstruction and record extraction."""
from .row_reconstructor import reconstruct_rows, row_text
from .record_extractor import (
    RecordExtractor,
    FieldRule,
    RuleKind,
    ExtractionState,
    ExtractionStats,
    build_field_rules,
    backfill_price_per_sf,
)

__all__ = [
    'reconstruct_rows',
    'row_text',
    'RecordExtractor',
    'FieldRule',
    'RuleKind',
    'ExtractionState',
    'ExtractionStats',
    'build_field_rules',
    'backfill_price_per_sf',
]
