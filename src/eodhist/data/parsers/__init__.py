"""Response parsers for eodhistoricaldata bodies."""

from .response_parser import (
    load_json,
    parse_realtime_quote,
    parse_realtime_quotes,
    parse_historic_quotes,
    parse_dividends,
    parse_splits,
    parse_historic_quotes_csv,
    parse_dividends_csv,
    parse_splits_csv,
)

__all__ = [
    'load_json',
    'parse_realtime_quote',
    'parse_realtime_quotes',
    'parse_historic_quotes',
    'parse_dividends',
    'parse_splits',
    'parse_historic_quotes_csv',
    'parse_dividends_csv',
    'parse_splits_csv',
]
