"""Pytest configuration and shared fixtures."""

import json
from unittest.mock import patch

import httpx
import pytest

from eodhist.config import Settings

BASE_URL = 'https://eodhistoricaldata.test/api'
TOKEN = 'test-token'


@pytest.fixture(autouse=True)
def test_settings():
    """Keep every test offline and independent of ~/.eodhistrc and the environment."""
    settings = Settings.for_testing()
    with patch('eodhist.client.base.get_settings', return_value=settings), \
         patch('eodhist.data.validators.quote_validator.get_settings', return_value=settings):
        yield settings


@pytest.fixture
def eod_payload():
    """Three daily quotes as returned by eod/AAPL.US?fmt=json."""
    return [
        {
            'date': '2020-01-02',
            'open': 296.24,
            'high': 300.6,
            'low': 295.19,
            'close': 300.35,
            'adjusted_close': 73.8485,
            'volume': 33911864
        },
        {
            'date': '2020-01-03',
            'open': 297.15,
            'high': 300.58,
            'low': 296.5,
            'close': 297.43,
            'adjusted_close': 73.1305,
            'volume': 36633878
        },
        {
            'date': '2020-01-06',
            'open': 293.79,
            'high': 299.96,
            'low': 292.75,
            'close': 299.8,
            'adjusted_close': 73.7143,
            'volume': 29644644
        }
    ]


@pytest.fixture
def eod_csv():
    """The same three quotes as eod/AAPL.US?fmt=csv."""
    return (
        "Date,Open,High,Low,Close,Adjusted_close,Volume\n"
        "2020-01-02,296.24,300.6,295.19,300.35,73.8485,33911864\n"
        "2020-01-03,297.15,300.58,296.5,297.43,73.1305,36633878\n"
        "2020-01-06,293.79,299.96,292.75,299.8,73.7143,29644644\n"
    )


@pytest.fixture
def dividend_payload():
    """Dividends as returned by div/AAPL.US?fmt=json."""
    return [
        {
            'date': '2020-02-07',
            'declarationDate': '2020-01-28',
            'recordDate': '2020-02-10',
            'paymentDate': '2020-02-13',
            'period': 'Quarterly',
            'value': 0.1925,
            'unadjustedValue': 0.77,
            'currency': 'USD'
        },
        {
            'date': '2020-05-08',
            'declarationDate': '2020-04-30',
            'recordDate': '2020-05-11',
            'paymentDate': '2020-05-14',
            'period': 'Quarterly',
            'value': 0.205,
            'unadjustedValue': 0.82,
            'currency': 'USD'
        }
    ]


@pytest.fixture
def split_payload():
    """Splits as returned by splits/AAPL.US?fmt=json."""
    return [
        {'date': '2020-08-31', 'split': '4.000000/1.000000'},
        {'date': '2014-06-09', 'split': '7.000000/1.000000'}
    ]


@pytest.fixture
def realtime_payload():
    """Live quote as returned by real-time/AAPL.US?fmt=json."""
    return {
        'code': 'AAPL.US',
        'timestamp': 1609534800,
        'gmtoffset': 0,
        'open': 133.52,
        'high': 133.6116,
        'low': 126.76,
        'close': 129.41,
        'volume': 143301887,
        'previousClose': 132.69,
        'change': -3.28,
        'change_p': -2.4719
    }


class RecordingTransport:
    """httpx.MockTransport handler that records requests and replays canned responses."""

    def __init__(self, status_code=200, body='', json_body=None, exc=None):
        self.status_code = status_code
        self.body = json.dumps(json_body) if json_body is not None else body
        self.exc = exc
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return httpx.Response(self.status_code, text=self.body)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def make_transport():
    """Factory for RecordingTransport instances."""
    return RecordingTransport
