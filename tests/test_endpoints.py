"""Tests for request construction."""

from datetime import date, datetime

import pytest

from eodhist.data.endpoints import (
    EndpointRequest,
    dividends_request,
    eod_request,
    format_date,
    format_ticker,
    realtime_request,
    splits_request,
)
from eodhist.exceptions import RequestValidationError


class TestFormatTicker:
    """Test ticker code construction."""

    def test_symbol_only(self):
        assert format_ticker('AAPL.US') == 'AAPL.US'

    def test_with_exchange(self):
        assert format_ticker(' AAPL ', exchange='US') == 'AAPL.US'

    @pytest.mark.parametrize('symbol', ['', '  ', None, 42])
    def test_invalid_symbol(self, symbol):
        with pytest.raises(RequestValidationError, match="non-empty"):
            format_ticker(symbol)

    def test_blank_exchange(self):
        with pytest.raises(RequestValidationError):
            format_ticker('AAPL', exchange=' ')

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            format_ticker('')


class TestFormatDate:
    """Test date rendering."""

    @pytest.mark.parametrize('value', [date(2020, 1, 2), datetime(2020, 1, 2, 15, 30), '2020-01-02'])
    def test_valid(self, value):
        assert format_date(value) == '2020-01-02'

    @pytest.mark.parametrize('value', ['2020-13-01', '02/01/2020', 'yesterday', 20200102])
    def test_invalid(self, value):
        with pytest.raises(RequestValidationError):
            format_date(value)


class TestBuilders:
    """Test the per-endpoint builders."""

    def test_realtime(self):
        request = realtime_request('AAPL.US')
        assert request == EndpointRequest(path='real-time/AAPL.US', params={'fmt': 'json'})

    def test_realtime_with_extra_tickers(self):
        request = realtime_request('AAPL.US', ['MSFT.US', 'VTI.US'])
        assert request.params['s'] == 'MSFT.US,VTI.US'

    def test_eod_defaults(self):
        request = eod_request('AAPL.US')
        assert request.path == 'eod/AAPL.US'
        assert request.params == {'period': 'd', 'order': 'a', 'fmt': 'json'}

    def test_eod_with_range(self):
        request = eod_request('AAPL.US', start=date(2020, 1, 1), end=date(2020, 1, 31), period='m', fmt='csv')
        assert request.params['from'] == '2020-01-01'
        assert request.params['to'] == '2020-01-31'
        assert request.params['period'] == 'm'
        assert request.fmt == 'csv'

    def test_same_start_and_end(self):
        request = eod_request('AAPL.US', start='2020-01-02', end='2020-01-02')
        assert request.params['from'] == request.params['to']

    def test_start_after_end(self):
        with pytest.raises(RequestValidationError, match="after end date"):
            eod_request('AAPL.US', start='2020-02-01', end='2020-01-01')

    @pytest.mark.parametrize('kwargs', [{'period': 'y'}, {'order': 'x'}, {'fmt': 'xml'}])
    def test_invalid_choices(self, kwargs):
        with pytest.raises(RequestValidationError):
            eod_request('AAPL.US', **kwargs)

    def test_dividends(self):
        request = dividends_request('AAPL.US', start='2020-01-01')
        assert request.path == 'div/AAPL.US'
        assert request.params == {'from': '2020-01-01', 'fmt': 'json'}

    def test_splits(self):
        request = splits_request('AAPL.US', end='2021-01-01', fmt='csv')
        assert request.path == 'splits/AAPL.US'
        assert request.params == {'to': '2021-01-01', 'fmt': 'csv'}

    def test_request_never_holds_token(self):
        request = eod_request('AAPL.US')
        assert 'api_token' not in request.params

    def test_url_join(self):
        request = eod_request('AAPL.US')
        assert request.url('https://eodhistoricaldata.com/api/') == 'https://eodhistoricaldata.com/api/eod/AAPL.US'
