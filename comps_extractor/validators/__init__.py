"""Validation modules."""
from .record_validator import RecordValidator, ValidationResult

__all__ = ['RecordValidator', 'ValidationResult']
