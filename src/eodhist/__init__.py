"""
eodhist - client for the eodhistoricaldata.com end-of-day and realtime API.

Main exports:
- EodHistConnector: async client (one awaitable per endpoint)
- EodHistClient: blocking client with the same operations
- HistoricQuote, Dividend, Split, RealTimeQuote: response records
- EodHistDataError and its subclasses: TransportError, HttpError,
  ParseError, RequestValidationError
"""

from .client import EodHistConnector, EodHistClient
from .data.models import HistoricQuote, Dividend, Split, RealTimeQuote, records_to_frame
from .data.validators import QuoteValidator, ValidationResult
from .exceptions import (
    EodHistDataError,
    TransportError,
    HttpError,
    ParseError,
    RequestValidationError,
)
from .config import get_settings
from .utils.logging import configure_package_logger

__version__ = '0.1.0'

configure_package_logger()

__all__ = [
    'EodHistConnector',
    'EodHistClient',
    'HistoricQuote',
    'Dividend',
    'Split',
    'RealTimeQuote',
    'records_to_frame',
    'QuoteValidator',
    'ValidationResult',
    'EodHistDataError',
    'TransportError',
    'HttpError',
    'ParseError',
    'RequestValidationError',
    'get_settings',
]
