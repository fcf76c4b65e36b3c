"""Shared plumbing for the async and blocking eodhistoricaldata clients."""

from typing import Any, Callable, Dict, Iterable, List, Optional

from ..config import get_settings
from ..data.endpoints import EndpointRequest, format_ticker
from ..data.parsers import load_json
from ..exceptions import HttpError, RequestValidationError
from ..utils.logging import get_logger, redact_token

logger = get_logger(__name__)


class BaseConnector:
    """
    Token, base URL and response handling common to both clients.

    Subclasses own the transport and implement the request methods.
    """

    def __init__(
        self,
        api_token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        """
        Args:
            api_token: API token issued by eodhistoricaldata. If None, uses
                       the token from settings (EODHD_API_TOKEN or ~/.eodhistrc).
                       Settings are cached at import, so when they hold no
                       token they are reloaded once to pick up a token set
                       since then
            base_url: API base URL. If None, uses settings
            timeout: Request timeout in seconds. If None, uses settings

        Raises:
            RequestValidationError: If no API token is available
        """
        api_settings = get_settings().api
        if not api_token and not api_settings.token:
            api_settings = get_settings(reload=True).api

        self.api_token = api_token or api_settings.token
        if not self.api_token:
            raise RequestValidationError(
                "An API token is required: pass api_token, set EODHD_API_TOKEN "
                "or store it in ~/.eodhistrc"
            )

        self.base_url = (base_url or api_settings.base_url).rstrip('/')
        self.timeout = timeout if timeout is not None else api_settings.timeout

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r})"

    def _query_params(self, request: EndpointRequest) -> Dict[str, str]:
        params = dict(request.params)
        params['api_token'] = self.api_token
        return params

    def _log_request(self, request: EndpointRequest) -> None:
        logger.debug(f"GET {request.url(self.base_url)} params={request.params}")

    def _check_status(self, status_code: int, body: str, url: str) -> None:
        """
        Raise HttpError for any non-2xx status.

        Raises:
            HttpError: carrying the status code, the body and the redacted URL
        """
        if 200 <= status_code < 300:
            return

        safe_url = redact_token(url)
        logger.warning(f"eodhistoricaldata returned HTTP {status_code} for {safe_url}")
        raise HttpError(status_code, body=body, url=safe_url)

    @staticmethod
    def _parse_body(
        request: EndpointRequest,
        body: str,
        json_parser: Callable[[Any], Any],
        csv_parser: Optional[Callable[[str], Any]] = None
    ) -> Any:
        if request.fmt == 'csv' and csv_parser is not None:
            return csv_parser(body)
        return json_parser(load_json(body))

    @staticmethod
    def _ticker_codes(tickers: Iterable[str], exchange: Optional[str]) -> List[str]:
        if isinstance(tickers, str):
            tickers = [tickers]
        codes = [format_ticker(t, exchange) for t in tickers]
        if not codes:
            raise RequestValidationError("At least one ticker is required")
        return codes
