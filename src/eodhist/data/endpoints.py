"""
Request construction for the eodhistoricaldata REST endpoints.

Each builder validates its arguments and returns an EndpointRequest holding
the URL path and query parameters. The API token is added by the client at
send time and is never part of an EndpointRequest.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Iterable, Optional, Union

import pandas as pd

from ..exceptions import RequestValidationError

DateLike = Union[date, datetime, str]

VALID_PERIODS = {'d', 'w', 'm'}
VALID_ORDERS = {'a', 'd'}
VALID_FORMATS = {'json', 'csv'}


@dataclass(frozen=True)
class EndpointRequest:
    """A GET request against one endpoint, minus authentication."""

    path: str
    params: Dict[str, str] = field(default_factory=dict)

    @property
    def fmt(self) -> str:
        return self.params.get('fmt', 'json')

    def url(self, base_url: str) -> str:
        """Join the base URL and the endpoint path."""
        return f"{base_url.rstrip('/')}/{self.path}"


def format_ticker(symbol: str, exchange: Optional[str] = None) -> str:
    """
    Build the vendor ticker code.

    Args:
        symbol: Ticker symbol, e.g. 'AAPL' or 'AAPL.US'
        exchange: Optional exchange code appended as '.EXCHANGE'

    Returns:
        Ticker code such as 'AAPL.US'

    Raises:
        RequestValidationError: If symbol is empty or not a string
    """
    if not isinstance(symbol, str) or not symbol.strip():
        raise RequestValidationError("Symbol must be a non-empty string")

    symbol = symbol.strip()

    if exchange is None:
        return symbol

    if not isinstance(exchange, str) or not exchange.strip():
        raise RequestValidationError("Exchange must be a non-empty string")

    return f"{symbol}.{exchange.strip()}"


def format_date(value: DateLike) -> str:
    """
    Render a date as YYYY-MM-DD.

    Raises:
        RequestValidationError: If value is not a date or parseable date string
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        try:
            return pd.to_datetime(value, format='%Y-%m-%d').date().isoformat()
        except (ValueError, TypeError) as e:
            raise RequestValidationError(f"Invalid date format (use YYYY-MM-DD): {value!r}") from e
    raise RequestValidationError(f"Unsupported date value: {value!r}")


def _date_range_params(start: Optional[DateLike], end: Optional[DateLike]) -> Dict[str, str]:
    params = {}
    if start is not None:
        params['from'] = format_date(start)
    if end is not None:
        params['to'] = format_date(end)

    # ISO strings compare chronologically
    if 'from' in params and 'to' in params and params['from'] > params['to']:
        raise RequestValidationError(
            f"Start date {params['from']} is after end date {params['to']}"
        )
    return params


def _check_choice(name: str, value: str, valid: set) -> str:
    if value not in valid:
        raise RequestValidationError(f"Invalid {name} {value!r}. Valid: {sorted(valid)}")
    return value


def realtime_request(ticker: str, extra_tickers: Optional[Iterable[str]] = None) -> EndpointRequest:
    """
    Build a live/realtime quote request.

    Args:
        ticker: Primary ticker code
        extra_tickers: Additional ticker codes fetched in the same call

    Returns:
        EndpointRequest for real-time/{ticker}
    """
    ticker = format_ticker(ticker)
    params = {'fmt': 'json'}

    if extra_tickers:
        extra = [format_ticker(t) for t in extra_tickers]
        params['s'] = ','.join(extra)

    return EndpointRequest(path=f"real-time/{ticker}", params=params)


def eod_request(
    ticker: str,
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
    period: str = 'd',
    order: str = 'a',
    fmt: str = 'json'
) -> EndpointRequest:
    """
    Build an end-of-day history request.

    Args:
        ticker: Ticker code
        start: First date (inclusive)
        end: Last date (inclusive)
        period: 'd' daily, 'w' weekly or 'm' monthly
        order: 'a' ascending or 'd' descending
        fmt: 'json' or 'csv'

    Returns:
        EndpointRequest for eod/{ticker}
    """
    ticker = format_ticker(ticker)
    params = _date_range_params(start, end)
    params['period'] = _check_choice('period', period, VALID_PERIODS)
    params['order'] = _check_choice('order', order, VALID_ORDERS)
    params['fmt'] = _check_choice('fmt', fmt, VALID_FORMATS)
    return EndpointRequest(path=f"eod/{ticker}", params=params)


def dividends_request(
    ticker: str,
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
    fmt: str = 'json'
) -> EndpointRequest:
    """Build a dividend history request for div/{ticker}."""
    ticker = format_ticker(ticker)
    params = _date_range_params(start, end)
    params['fmt'] = _check_choice('fmt', fmt, VALID_FORMATS)
    return EndpointRequest(path=f"div/{ticker}", params=params)


def splits_request(
    ticker: str,
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
    fmt: str = 'json'
) -> EndpointRequest:
    """Build a split history request for splits/{ticker}."""
    ticker = format_ticker(ticker)
    params = _date_range_params(start, end)
    params['fmt'] = _check_choice('fmt', fmt, VALID_FORMATS)
    return EndpointRequest(path=f"splits/{ticker}", params=params)
