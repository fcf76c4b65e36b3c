"""Shared utilities."""

from .logging import setup_logger, get_logger, redact_token

__all__ = ['setup_logger', 'get_logger', 'redact_token']
