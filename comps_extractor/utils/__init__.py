"""Utility functions."""
from .logger import setup_logger, log_extraction_audit
from .number_parser import (
    parse_integer_amount,
    parse_percentage,
    round_half_up,
    derive_price_per_sf,
    format_currency
)
from .date_parser import SALE_DATE_PATTERN, is_sale_date, parse_sale_month
from .column_alignment import (
    is_aligned,
    find_aligned_column,
    find_nearest_column,
    assign_column_by_position
)

__all__ = [
    'setup_logger',
    'log_extraction_audit',
    'parse_integer_amount',
    'parse_percentage',
    'round_half_up',
    'derive_price_per_sf',
    'format_currency',
    'SALE_DATE_PATTERN',
    'is_sale_date',
    'parse_sale_month',
    'is_aligned',
    'find_aligned_column',
    'find_nearest_column',
    'assign_column_by_position'
]
