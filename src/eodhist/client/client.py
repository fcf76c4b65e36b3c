"""
EodHistClient - blocking client for the eodhistoricaldata API.

Same operations as EodHistConnector, on a requests.Session, for callers
without an event loop.
"""

from typing import Iterable, List, Optional

import requests

from .base import BaseConnector
from ..data import endpoints
from ..data.endpoints import DateLike, EndpointRequest
from ..data.models import HistoricQuote, Dividend, Split, RealTimeQuote
from ..data.parsers import (
    load_json,
    parse_realtime_quote,
    parse_realtime_quotes,
    parse_historic_quotes,
    parse_historic_quotes_csv,
    parse_dividends,
    parse_dividends_csv,
    parse_splits,
    parse_splits_csv,
)
from ..exceptions import TransportError
from ..utils.logging import get_logger, redact_token

logger = get_logger(__name__)


class EodHistClient(BaseConnector):
    """
    Blocking client for eodhistoricaldata.

    Example:
        ```python
        from eodhist import EodHistClient

        with EodHistClient('your-token') as client:
            dividends = client.get_dividend_history('AAPL.US', start='2020-01-01')
        ```
    """

    USER_AGENT = 'eodhist/0.1.0'

    def __init__(
        self,
        api_token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the client.

        Args:
            api_token: API token (defaults to settings)
            base_url: API base URL (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
            session: Optional requests.Session to use. A session passed in is
                     not closed by the client.
        """
        super().__init__(api_token=api_token, base_url=base_url, timeout=timeout)
        self._owns_session = session is None
        self.session = session or requests.Session()
        if self._owns_session:
            self.session.headers.update({'User-Agent': self.USER_AGENT})

    def __enter__(self) -> 'EodHistClient':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP session if the client created it."""
        if self._owns_session:
            self.session.close()

    def _send_request(self, request: EndpointRequest) -> str:
        """
        Send request to the eodhistoricaldata server and return the body.

        Raises:
            TransportError: On connection, TLS or timeout failure
            HttpError: On non-2xx status
        """
        url = request.url(self.base_url)
        self._log_request(request)

        try:
            response = self.session.get(url, params=self._query_params(request), timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Connection to {url} failed: {redact_token(e)}")
            raise TransportError(
                f"connection to eodhistoricaldata server failed: {redact_token(e)}"
            ) from e

        self._check_status(response.status_code, response.text, response.url or url)
        return response.text

    def get_latest_quote(self, ticker: str, exchange: Optional[str] = None) -> RealTimeQuote:
        """
        Retrieve the latest quote for the given ticker.

        Raises:
            RequestValidationError: If ticker is empty (no request is sent)
        """
        request = endpoints.realtime_request(endpoints.format_ticker(ticker, exchange))
        return parse_realtime_quote(load_json(self._send_request(request)))

    def get_latest_quotes(self, tickers: Iterable[str], exchange: Optional[str] = None) -> List[RealTimeQuote]:
        """Retrieve the latest quotes for several tickers in a single request."""
        codes = self._ticker_codes(tickers, exchange)
        request = endpoints.realtime_request(codes[0], codes[1:])
        return parse_realtime_quotes(load_json(self._send_request(request)))

    def get_quote_history(
        self,
        ticker: str,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
        exchange: Optional[str] = None,
        period: str = 'd',
        fmt: str = 'json'
    ) -> List[HistoricQuote]:
        """
        Retrieve the quote history for the given ticker from start to end (inclusive).

        Args:
            ticker: Ticker symbol
            start: First date (YYYY-MM-DD string or date)
            end: Last date (YYYY-MM-DD string or date)
            exchange: Optional exchange code
            period: 'd', 'w' or 'm'
            fmt: Response format requested from the vendor, 'json' or 'csv'

        Returns:
            HistoricQuote list in chronological order
        """
        request = endpoints.eod_request(
            endpoints.format_ticker(ticker, exchange), start=start, end=end, period=period, fmt=fmt
        )
        body = self._send_request(request)
        return self._parse_body(request, body, parse_historic_quotes, parse_historic_quotes_csv)

    def get_dividend_history(
        self,
        ticker: str,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
        exchange: Optional[str] = None,
        fmt: str = 'json'
    ) -> List[Dividend]:
        request = endpoints.dividends_request(
            endpoints.format_ticker(ticker, exchange), start=start, end=end, fmt=fmt
        )
        body = self._send_request(request)
        return self._parse_body(request, body, parse_dividends, parse_dividends_csv)

    def get_split_history(
        self,
        ticker: str,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
        exchange: Optional[str] = None,
        fmt: str = 'json'
    ) -> List[Split]:
        request = endpoints.splits_request(
            endpoints.format_ticker(ticker, exchange), start=start, end=end, fmt=fmt
        )
        body = self._send_request(request)
        return self._parse_body(request, body, parse_splits, parse_splits_csv)
