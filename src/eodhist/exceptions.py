"""Exceptions raised by eodhist."""

from typing import Optional


class EodHistDataError(Exception):
    """Base exception for all eodhistoricaldata client errors."""
    pass


class TransportError(EodHistDataError):
    """Connection to the eodhistoricaldata server failed (network, TLS, timeout)."""
    pass


class HttpError(EodHistDataError):
    """The server answered with a non-success status code."""

    def __init__(self, status_code: int, body: str = '', url: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        self.url = url
        message = f"fetching the data from eodhistoricaldata failed with status code {status_code}"
        if url:
            message += f" ({url})"
        super().__init__(message)


class ParseError(EodHistDataError):
    """The response body could not be deserialized into the expected records."""
    pass


class RequestValidationError(EodHistDataError, ValueError):
    """Arguments were rejected before any request was issued."""
    pass
