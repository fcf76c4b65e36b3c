"""Data validation modules."""

from .quote_validator import QuoteValidator, ValidationResult

__all__ = ['QuoteValidator', 'ValidationResult']
