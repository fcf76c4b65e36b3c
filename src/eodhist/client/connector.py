"""
EodHistConnector - asynchronous client for the eodhistoricaldata API.

One awaitable per endpoint; each call issues exactly one GET through an
httpx.AsyncClient and returns parsed records. Nothing is retried.
"""

from typing import Iterable, List, Optional

import httpx

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


class EodHistConnector(BaseConnector):
    """
    Async client for eodhistoricaldata.

    Example:
        ```python
        import asyncio
        from datetime import date
        from eodhist import EodHistConnector

        async def main():
            async with EodHistConnector('your-token') as connector:
                quote = await connector.get_latest_quote('AAPL', exchange='US')
                history = await connector.get_quote_history(
                    'AAPL.US', start=date(2020, 1, 1), end=date(2020, 1, 31)
                )

        asyncio.run(main())
        ```

    Callers run several requests concurrently with asyncio.gather; the
    connector keeps no state between calls beyond httpx's connection pool.
    """

    def __init__(
        self,
        api_token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize the connector.

        Args:
            api_token: API token (defaults to settings)
            base_url: API base URL (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
            client: Optional httpx.AsyncClient to use. A client passed in is
                    not closed by the connector.
        """
        super().__init__(api_token=api_token, base_url=base_url, timeout=timeout)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=self.timeout)

    async def __aenter__(self) -> 'EodHistConnector':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if the connector created it."""
        if self._owns_client:
            await self._client.aclose()

    async def _send_request(self, request: EndpointRequest) -> str:
        """
        Send request to the eodhistoricaldata server and return the body.

        Raises:
            TransportError: On connection, TLS or timeout failure
            HttpError: On non-2xx status
        """
        url = request.url(self.base_url)
        self._log_request(request)

        try:
            response = await self._client.get(url, params=self._query_params(request))
        except httpx.TransportError as e:
            logger.error(f"Connection to {url} failed: {redact_token(e)}")
            raise TransportError(
                f"connection to eodhistoricaldata server failed: {redact_token(e)}"
            ) from e

        self._check_status(response.status_code, response.text, str(response.request.url))
        return response.text

    async def get_latest_quote(self, ticker: str, exchange: Optional[str] = None) -> RealTimeQuote:
        """
        Retrieve the latest quote for the given ticker.

        Args:
            ticker: Ticker symbol, e.g. 'AAPL.US' or 'AAPL' with exchange='US'
            exchange: Optional exchange code

        Returns:
            RealTimeQuote

        Raises:
            RequestValidationError: If ticker is empty (no request is sent)
        """
        request = endpoints.realtime_request(endpoints.format_ticker(ticker, exchange))
        body = await self._send_request(request)
        return parse_realtime_quote(load_json(body))

    async def get_latest_quotes(self, tickers: Iterable[str], exchange: Optional[str] = None) -> List[RealTimeQuote]:
        """
        Retrieve the latest quotes for several tickers in a single request.

        Args:
            tickers: Ticker symbols
            exchange: Optional exchange code applied to every ticker

        Returns:
            List of RealTimeQuote in the order the vendor returns them
        """
        codes = self._ticker_codes(tickers, exchange)
        request = endpoints.realtime_request(codes[0], codes[1:])
        body = await self._send_request(request)
        return parse_realtime_quotes(load_json(body))

    async def get_quote_history(
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
        body = await self._send_request(request)
        return self._parse_body(request, body, parse_historic_quotes, parse_historic_quotes_csv)

    async def get_dividend_history(
        self,
        ticker: str,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
        exchange: Optional[str] = None,
        fmt: str = 'json'
    ) -> List[Dividend]:
        """Retrieve dividends paid by the ticker, oldest first."""
        request = endpoints.dividends_request(
            endpoints.format_ticker(ticker, exchange), start=start, end=end, fmt=fmt
        )
        body = await self._send_request(request)
        return self._parse_body(request, body, parse_dividends, parse_dividends_csv)

    async def get_split_history(
        self,
        ticker: str,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
        exchange: Optional[str] = None,
        fmt: str = 'json'
    ) -> List[Split]:
        """Retrieve stock splits of the ticker, oldest first."""
        request = endpoints.splits_request(
            endpoints.format_ticker(ticker, exchange), start=start, end=end, fmt=fmt
        )
        body = await self._send_request(request)
        return self._parse_body(request, body, parse_splits, parse_splits_csv)
