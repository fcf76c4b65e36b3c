"""
Parsers turning eodhistoricaldata response bodies into records.

JSON payloads are expected to be already decoded (see load_json); CSV
bodies are read with pandas and mapped onto the same row parsers so both
formats produce identical records.
"""

import json
import math
from datetime import date
from io import StringIO
from typing import Any, Callable, Dict, List, Optional

import pandas as pd

from ..models import HistoricQuote, Dividend, Split, RealTimeQuote
from ...exceptions import ParseError
from ...utils.logging import get_logger

logger = get_logger(__name__)

# Placeholder the vendor uses for unavailable values
MISSING_MARKERS = {'NA', 'N/A', ''}


def load_json(text: str) -> Any:
    """
    Decode a JSON response body.

    Raises:
        ParseError: If the body is not valid JSON
    """
    try:
        return json.loads(text)
    except (TypeError, ValueError) as e:
        raise ParseError(f"deserializing response from eodhistoricaldata failed: {e}") from e


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float):
        return value != value  # NaN
    if isinstance(value, str):
        return value.strip() in MISSING_MARKERS
    return False


def _require(row: Dict[str, Any], key: str, record: str) -> Any:
    if key not in row or _is_missing(row[key]):
        raise ParseError(f"{record}: missing required field '{key}'")
    return row[key]


def _to_float(value: Any, key: str, record: str) -> float:
    if isinstance(value, bool):
        raise ParseError(f"{record}: field '{key}' is not numeric: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ParseError(f"{record}: field '{key}' is not numeric: {value!r}") from e
    # float() also accepts "nan" and "inf"
    if not math.isfinite(number):
        raise ParseError(f"{record}: field '{key}' is not numeric: {value!r}")
    return number


def _to_int(value: Any, key: str, record: str) -> int:
    number = _to_float(value, key, record)
    if not number.is_integer():
        raise ParseError(f"{record}: field '{key}' is not an integer: {value!r}")
    return int(number)


def _to_date(value: Any, key: str, record: str) -> date:
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as e:
        raise ParseError(f"{record}: field '{key}' is not a YYYY-MM-DD date: {value!r}") from e


def _opt(row: Dict[str, Any], key: str, convert: Callable, record: str) -> Optional[Any]:
    value = row.get(key)
    if _is_missing(value):
        return None
    return convert(value, key, record)


def _as_row(item: Any, record: str) -> Dict[str, Any]:
    if not isinstance(item, dict):
        raise ParseError(f"{record}: expected a JSON object, got {type(item).__name__}")
    return item


def _as_list(payload: Any, record: str) -> list:
    if not isinstance(payload, list):
        raise ParseError(f"{record}: expected a JSON array, got {type(payload).__name__}")
    return payload


# ============================================================================
# Row parsers
# ============================================================================

def _historic_quote(item: Any) -> HistoricQuote:
    record = 'HistoricQuote'
    row = _as_row(item, record)
    return HistoricQuote(
        date=_to_date(_require(row, 'date', record), 'date', record),
        adjusted_close=_to_float(_require(row, 'adjusted_close', record), 'adjusted_close', record),
        open=_opt(row, 'open', _to_float, record),
        high=_opt(row, 'high', _to_float, record),
        low=_opt(row, 'low', _to_float, record),
        close=_opt(row, 'close', _to_float, record),
        volume=_opt(row, 'volume', _to_int, record),
    )


def _dividend(item: Any) -> Dividend:
    record = 'Dividend'
    row = _as_row(item, record)
    currency = row.get('currency')
    period = row.get('period')
    return Dividend(
        date=_to_date(_require(row, 'date', record), 'date', record),
        value=_to_float(_require(row, 'value', record), 'value', record),
        unadjusted_value=_opt(row, 'unadjustedValue', _to_float, record),
        currency=None if _is_missing(currency) else str(currency),
        declaration_date=_opt(row, 'declarationDate', _to_date, record),
        record_date=_opt(row, 'recordDate', _to_date, record),
        payment_date=_opt(row, 'paymentDate', _to_date, record),
        period=None if _is_missing(period) else str(period),
    )


def _split(item: Any) -> Split:
    record = 'Split'
    row = _as_row(item, record)
    raw = str(_require(row, 'split', record))

    parts = raw.split('/')
    if len(parts) != 2:
        raise ParseError(f"{record}: field 'split' is not of the form N/D: {raw!r}")

    numerator = _to_float(parts[0], 'split', record)
    denominator = _to_float(parts[1], 'split', record)
    if denominator == 0:
        raise ParseError(f"{record}: field 'split' has a zero denominator: {raw!r}")

    return Split(
        date=_to_date(_require(row, 'date', record), 'date', record),
        numerator=numerator,
        denominator=denominator,
    )


def _realtime_quote(item: Any) -> RealTimeQuote:
    record = 'RealTimeQuote'
    row = _as_row(item, record)

    def num(key: str) -> float:
        return _to_float(_require(row, key, record), key, record)

    def integer(key: str) -> int:
        return _to_int(_require(row, key, record), key, record)

    return RealTimeQuote(
        code=str(_require(row, 'code', record)),
        timestamp=integer('timestamp'),
        gmtoffset=integer('gmtoffset'),
        open=num('open'),
        high=num('high'),
        low=num('low'),
        close=num('close'),
        volume=integer('volume'),
        previous_close=num('previousClose'),
        change=num('change'),
        change_p=num('change_p'),
    )


def _chronological(records: list) -> list:
    return sorted(records, key=lambda r: r.date)


# ============================================================================
# JSON payloads
# ============================================================================

def parse_realtime_quote(payload: Any) -> RealTimeQuote:
    """Parse a single realtime quote object."""
    return _realtime_quote(payload)


def parse_realtime_quotes(payload: Any) -> List[RealTimeQuote]:
    """
    Parse a realtime payload holding one or several quotes.

    The vendor returns a bare object when a single ticker is requested and
    an array when extra tickers are passed with 's='.
    """
    if isinstance(payload, dict):
        return [_realtime_quote(payload)]
    return [_realtime_quote(item) for item in _as_list(payload, 'RealTimeQuote')]


def parse_historic_quotes(payload: Any) -> List[HistoricQuote]:
    """Parse an eod payload into chronologically sorted quotes."""
    items = _as_list(payload, 'HistoricQuote')
    return _chronological([_historic_quote(item) for item in items])


def parse_dividends(payload: Any) -> List[Dividend]:
    """Parse a div payload into chronologically sorted dividends."""
    items = _as_list(payload, 'Dividend')
    return _chronological([_dividend(item) for item in items])


def parse_splits(payload: Any) -> List[Split]:
    """Parse a splits payload into chronologically sorted splits."""
    items = _as_list(payload, 'Split')
    return _chronological([_split(item) for item in items])


# ============================================================================
# CSV bodies
# ============================================================================

def _read_csv_rows(text: str, record: str, required: List[str], rename: Optional[Dict[str, str]] = None) -> List[Dict[str, Any]]:
    """
    Read a vendor CSV body into row dicts keyed by normalized column names.

    Column names are lower-cased with spaces replaced by underscores, so
    'Adjusted_close' becomes 'adjusted_close' and 'Stock Splits' becomes
    'stock_splits'.
    """
    if not text or not text.strip():
        raise ParseError(f"{record}: empty CSV body")

    try:
        df = pd.read_csv(StringIO(text), dtype=str, keep_default_na=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, ValueError) as e:
        raise ParseError(f"{record}: malformed CSV body: {e}") from e

    df.columns = [str(c).strip().lower().replace(' ', '_') for c in df.columns]
    if rename:
        df = df.rename(columns=rename)

    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ParseError(f"{record}: CSV body lacks columns {missing}")

    return df.to_dict(orient='records')


def parse_historic_quotes_csv(text: str) -> List[HistoricQuote]:
    """Parse an eod CSV body (Date,Open,High,Low,Close,Adjusted_close,Volume)."""
    rows = _read_csv_rows(text, 'HistoricQuote', ['date', 'adjusted_close'])
    return _chronological([_historic_quote(row) for row in rows])


def parse_dividends_csv(text: str) -> List[Dividend]:
    """Parse a div CSV body (Date,Dividends)."""
    rows = _read_csv_rows(text, 'Dividend', ['date', 'value'], rename={'dividends': 'value'})
    return _chronological([_dividend(row) for row in rows])


def parse_splits_csv(text: str) -> List[Split]:
    """Parse a splits CSV body (Date,Stock Splits)."""
    rows = _read_csv_rows(text, 'Split', ['date', 'split'], rename={'stock_splits': 'split'})
    return _chronological([_split(row) for row in rows])
